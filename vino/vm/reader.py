"""Reading instructions one at a time from a compiled instructions file."""

from __future__ import annotations

import logging
import os
import struct
from typing import BinaryIO

from vino.gui.window import VmError
from vino.vm.atoms import (
    FIXED_STRING_SIZE,
    POSITION_SIZE,
    LoadBg,
    LoadFg,
    LoadTxtLine,
    Opcode,
    SetSpeakerName,
)
from vino.vm.handlers import (
    ClearBgHandler,
    ExitHandler,
    Handler,
    JmpHandler,
    LoadBgHandler,
    LoadFgHandler,
    LoadTxtLineHandler,
    NopHandler,
    PreBreakageHandler,
    StartHandler,
    TxtLineBreakageHandler,
)

logger = logging.getLogger(__name__)

_EXIT_BAD_FILE = 2
_EXIT_STREAM_FAILED = 3


class _ReadFailure(Exception):
    """The file ended in the middle of an instruction."""


class InstructionsReader:
    """Decodes instructions from a binary file into handlers.

    A truncated instruction yields an exit handler with code 2; once the
    file has failed, every later read yields an exit handler with code 3.
    """

    def __init__(self, input_file: str | os.PathLike[str]) -> None:
        try:
            self._file: BinaryIO = open(input_file, "rb")
        except OSError as exc:
            raise VmError(
                "Error:InstructionsReader(): cannot open input file"
            ) from exc
        self._good = True

    def read_instruction(self) -> Handler:
        """Decode the next instruction and return its handler."""
        if not self._good:
            return ExitHandler(_EXIT_STREAM_FAILED)
        try:
            return self._decode(self._read(1)[0])
        except _ReadFailure as exc:
            logger.warning("%s", exc)
            self._good = False
            return ExitHandler(_EXIT_BAD_FILE)

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> InstructionsReader:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _read(self, size: int) -> bytes:
        data = self._file.read(size)
        if len(data) < size:
            raise _ReadFailure(
                f"instructions file ended: wanted {size} bytes, got {len(data)}"
            )
        return data

    def _read_position(self) -> int:
        (position,) = struct.unpack("<I", self._read(POSITION_SIZE))
        return position

    def _decode(self, opcode: int) -> Handler:
        if opcode == Opcode.START:
            start_pos = self._read_position()
            self._file.seek(start_pos)
            return StartHandler(start_pos)
        if opcode == Opcode.EXIT:
            try:
                code = self._read(1)[0]
            except _ReadFailure:
                self._good = False
                code = 0
            return ExitHandler(code)
        if opcode == Opcode.LOAD_BG:
            return LoadBgHandler(LoadBg(self._read(FIXED_STRING_SIZE)))
        if opcode == Opcode.CLEAR_BG:
            return ClearBgHandler()
        if opcode == Opcode.LOAD_FG:
            return LoadFgHandler(LoadFg(self._read(FIXED_STRING_SIZE)))
        if opcode == Opcode.SET_SPEAKER_NAME:
            from vino.vm.handlers import SetSpeakerNameHandler

            return SetSpeakerNameHandler(SetSpeakerName(self._read(FIXED_STRING_SIZE)))
        if opcode == Opcode.LOAD_TXT_LINE:
            return LoadTxtLineHandler(LoadTxtLine(self._read(FIXED_STRING_SIZE)))
        if opcode == Opcode.PRE_BREAKAGE:
            return PreBreakageHandler()
        if opcode == Opcode.TXT_LINE_BREAKAGE:
            return TxtLineBreakageHandler()
        if opcode == Opcode.JMP:
            self._file.seek(self._read_position())
            return JmpHandler()
        return NopHandler()