"""Application windows, input polling and library initialisation."""

from __future__ import annotations

import math
import os
from collections.abc import Sequence
from pathlib import Path

import pygame

_LEFT_MOUSE_BUTTON = 1
_BLACK = (0.0, 0.0, 0.0, 1.0)


class WindowError(RuntimeError):
    """Raised when a window, image, font or other GUI resource fails."""


class VmError(RuntimeError):
    """Raised when the virtual machine or its environment fails."""


def _to_rgba255(color: Sequence[float]) -> tuple[int, ...]:
    """Convert a float colour in [0.0, 1.0] to 8-bit channels."""
    return tuple(max(0, min(255, round(channel * 255))) for channel in color)


def init_vinogui() -> None:
    """Initialise the display subsystem; must run before any GUI component."""
    try:
        pygame.display.init()
    except pygame.error as exc:
        raise WindowError(str(exc)) from exc


class Window:
    """Base window: an off-screen drawing surface with polled input state."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("window dimensions must be positive")
        try:
            pygame.display.init()
        except pygame.error as exc:
            raise VmError("Error:Window(): cannot initialize display") from exc
        self._width = width
        self._height = height
        self._surface = pygame.Surface((width, height), pygame.SRCALPHA)
        self._on_screen = False
        self._closing = False
        self._pressed_keys: set[int] = set()
        self._left_button_down = False
        self._cursor: tuple[float, float] | None = None

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def surface(self) -> pygame.Surface:
        """The surface everything in this window is drawn onto."""
        return self._surface

    def close(self) -> None:
        """Ask the window to close; should_close() becomes true."""
        self._closing = True

    def update(self, color: Sequence[float] = _BLACK) -> None:
        """Present the frame, poll input events and clear to ``color``."""
        if self._on_screen:
            pygame.display.flip()
        for event in pygame.event.get():
            self._handle_event(event)
        self._surface.fill(_to_rgba255(color))

    def set_icon(self, path_to_icon: str | os.PathLike[str]) -> bool:
        """Use the image at ``path_to_icon`` as the window icon."""
        path = Path(path_to_icon)
        if not path.exists():
            return False
        # imported here because the image module depends on this one's errors
        from vino.gui.imgdata import ImgData, configure_texture

        icon = ImgData(path, flipped=False)
        pygame.display.set_icon(configure_texture(icon))
        return True

    def should_close(self) -> bool:
        return self._closing

    def is_pressed(self, key: int) -> bool:
        """Whether the key with the given pygame key code is held down."""
        return key in self._pressed_keys

    def is_clicked(self) -> bool:
        """Whether the left mouse button is held down."""
        return self._left_button_down

    def get_cursor_pos(self) -> tuple[int, int]:
        """Cursor position with the origin at the lower-left corner.

        Both coordinates are negative while the cursor position is unknown.
        """
        if self._cursor is None:
            return (-1, -1)
        x, y = self._cursor
        return (math.floor(x), self._height - math.floor(y))

    def _handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self._closing = True
        elif event.type == pygame.KEYDOWN:
            self._pressed_keys.add(event.key)
        elif event.type == pygame.KEYUP:
            self._pressed_keys.discard(event.key)
        elif event.type == pygame.MOUSEMOTION:
            self._cursor = tuple(event.pos)
        elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            if hasattr(event, "pos"):
                self._cursor = tuple(event.pos)
            if event.button == _LEFT_MOUSE_BUTTON:
                self._left_button_down = event.type == pygame.MOUSEBUTTONDOWN


class NonResizableWindow(Window):
    """A fixed-size on-screen window with a title."""

    def __init__(self, width: int, height: int, title: str) -> None:
        super().__init__(width, height)
        try:
            surface = pygame.display.set_mode((width, height))
        except pygame.error as exc:
            pygame.display.quit()
            raise WindowError("Window wasn't successfully initialized") from exc
        pygame.display.set_caption(title)
        self.title = title
        self._surface = surface
        self._on_screen = True