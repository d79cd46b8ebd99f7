"""Instructions of the visual-novel virtual machine's binary format.

Each instruction starts with a one-byte opcode. Positions are unsigned
32-bit little-endian integers and strings occupy fixed 64-byte fields that
are NUL-terminated when shorter.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

FIXED_STRING_SIZE = 64
POSITION_SIZE = 4
_MAX_POSITION = 2**32 - 1


class Opcode(IntEnum):
    NOP = 0x00
    START = 0x01
    EXIT = 0x02
    LOAD_BG = 0x10
    CLEAR_BG = 0x11
    LOAD_FG = 0x20
    SET_SPEAKER_NAME = 0x2A
    LOAD_TXT_LINE = 0x30
    PRE_BREAKAGE = 0x31
    TXT_LINE_BREAKAGE = 0x32
    JMP = 0x40


def decode_fixed_string(raw: bytes) -> str:
    """Text of a fixed-size string field: UTF-8 up to the first NUL byte."""
    return bytes(raw).split(b"\0", 1)[0].decode("utf-8", errors="replace")


def _check_position(value: int) -> None:
    if not 0 <= value <= _MAX_POSITION:
        raise ValueError("position must fit in an unsigned 32-bit integer")


def _check_field(raw: bytes) -> None:
    if len(raw) > FIXED_STRING_SIZE:
        raise ValueError(f"string field is longer than {FIXED_STRING_SIZE} bytes")


@dataclass(frozen=True)
class Nop:
    """Do nothing."""


@dataclass(frozen=True)
class Start:
    """Begin execution at byte position ``start_pos``."""

    start_pos: int = 0

    def __post_init__(self) -> None:
        _check_position(self.start_pos)


@dataclass(frozen=True)
class Exit:
    """Stop execution: 0 closes the application, 1 returns to the main menu."""

    err_code: int = 0


@dataclass(frozen=True)
class LoadBg:
    """Load a background image from a path relative to the resource folder."""

    path_bg: bytes = bytes(FIXED_STRING_SIZE)

    def __post_init__(self) -> None:
        _check_field(self.path_bg)

    @property
    def path(self) -> str:
        return decode_fixed_string(self.path_bg)


@dataclass(frozen=True)
class ClearBg:
    """Remove the foreground figures from the scene."""


@dataclass(frozen=True)
class LoadFg:
    """Load a foreground figure image from a path relative to the resource folder."""

    path_fg: bytes = bytes(FIXED_STRING_SIZE)

    def __post_init__(self) -> None:
        _check_field(self.path_fg)

    @property
    def path(self) -> str:
        return decode_fixed_string(self.path_fg)


@dataclass(frozen=True)
class SetSpeakerName:
    """Name of the character who speaks the following text."""

    speaker_name: bytes = bytes(FIXED_STRING_SIZE)

    def __post_init__(self) -> None:
        _check_field(self.speaker_name)

    @property
    def name(self) -> str:
        return decode_fixed_string(self.speaker_name)


@dataclass(frozen=True)
class LoadTxtLine:
    """A piece of dialogue text appended to the text box."""

    txt_line: bytes = bytes(FIXED_STRING_SIZE)

    def __post_init__(self) -> None:
        _check_field(self.txt_line)

    @property
    def text(self) -> str:
        return decode_fixed_string(self.txt_line)


@dataclass(frozen=True)
class PreBreakage:
    """The end of a text line: the next instruction is a line breakage."""


@dataclass(frozen=True)
class TxtLineBreakage:
    """Move the text box on to its next slide."""


@dataclass(frozen=True)
class Jmp:
    """Continue execution at byte position ``where_pos``."""

    where_pos: int = 0

    def __post_init__(self) -> None:
        _check_position(self.where_pos)