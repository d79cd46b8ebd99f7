"""Rectangular GUI elements: textured, tinted boxes that can be drawn,
hit-tested, moved and resized inside a window.

Coordinates have their origin at the window's lower-left corner, with y
growing upwards.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pygame

from vino.gui.imgdata import ImgData, configure_texture

WHITE = (1.0, 1.0, 1.0, 1.0)

Vec2 = tuple[int, int]
Color = tuple[float, float, float, float]


def _vec2(value: Sequence[float]) -> Vec2:
    x, y = value
    return (int(x), int(y))


def _color4(color: Sequence[float]) -> Color:
    channels = tuple(float(channel) for channel in color)
    if len(channels) != 4:
        raise ValueError("box colour must have 4 channels (RGBA)")
    return (channels[0], channels[1], channels[2], channels[3])


def _rgba255(color: Sequence[float]) -> tuple[int, int, int, int]:
    r, g, b, a = (max(0, min(255, round(channel * 255))) for channel in color)
    return (r, g, b, a)


class Box:
    """A rectangle in a window that knows whether the cursor is over it."""

    def __init__(
        self, low_left_pos: Sequence[int], width: int, height: int, window: Any
    ) -> None:
        self._win = window
        self._ll_pos = _vec2(low_left_pos)
        self._width = int(width)
        self._height = int(height)

    @property
    def low_left_pos(self) -> Vec2:
        return self._ll_pos

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def window(self) -> Any:
        return self._win

    def is_cursor_in(self) -> bool:
        """Whether the cursor lies inside the box, edges included."""
        x, y = self._win.get_cursor_pos()
        if x < 0 or y < 0:
            return False
        left, bottom = self._ll_pos
        return (
            left <= x <= left + self._width and bottom <= y <= bottom + self._height
        )

    def is_clicked(self) -> bool:
        """Whether the left mouse button is held with the cursor in the box."""
        return self.is_cursor_in() and self._win.is_clicked()


class TextureColorBox(Box):
    """A box drawn as a texture stretched over it and tinted by a colour.

    Without an image the texture is plain white, so the box shows its colour.
    """

    def __init__(
        self,
        low_left_pos: Sequence[int],
        width: int,
        height: int,
        window: Any,
        img: ImgData | None = None,
        color: Sequence[float] = WHITE,
    ) -> None:
        super().__init__(low_left_pos, width, height, window)
        self._color = _color4(color)
        self._texture = configure_texture(img if img is not None else ImgData())
        self._scaled: pygame.Surface | None = None

    @property
    def color(self) -> Color:
        return self._color

    @property
    def texture(self) -> pygame.Surface:
        return self._texture

    @property
    def corners(self) -> tuple[tuple[int, int, int, int, int], ...]:
        """Corners as (x, y, z, u, v): lower-left, upper-left, upper-right, lower-right."""
        x, y = self._ll_pos
        w, h = self._width, self._height
        return (
            (x, y, 0, 0, 0),
            (x, y + h, 0, 0, 1),
            (x + w, y + h, 0, 1, 1),
            (x + w, y, 0, 1, 0),
        )

    def render(self, uniform_alpha: float = -1.0) -> None:
        """Draw the box onto its window.

        A non-negative ``uniform_alpha`` scales the final opacity; a negative
        one leaves it as the colour gives it.
        """
        if self._width <= 0 or self._height <= 0:
            return
        image = self._scaled_texture().copy()
        r, g, b, a = self._color
        if uniform_alpha >= 0:
            a *= min(uniform_alpha, 1.0)
        image.fill(_rgba255((r, g, b, a)), special_flags=pygame.BLEND_RGBA_MULT)
        surface = self._win.surface
        left, bottom = self._ll_pos
        top = surface.get_height() - bottom - self._height
        surface.blit(image, (left, top))

    def change_texture(self, new_img: ImgData) -> None:
        self._texture = configure_texture(new_img)
        self._scaled = None

    def change_color(self, new_color: Sequence[float]) -> None:
        self._color = _color4(new_color)

    def _scaled_texture(self) -> pygame.Surface:
        size = (self._width, self._height)
        if self._scaled is None or self._scaled.get_size() != size:
            self._scaled = pygame.transform.scale(self._texture, size)
        return self._scaled


class StaticBox(TextureColorBox):
    """A box whose position and size stay fixed."""


class DynamicBox(TextureColorBox):
    """A box that can be moved and resized."""

    def move_no_clip(self, direction: Sequence[int]) -> Vec2:
        """Shift the box freely; returns the new lower-left corner."""
        dx, dy = _vec2(direction)
        self._ll_pos = (self._ll_pos[0] + dx, self._ll_pos[1] + dy)
        return self._ll_pos

    def move_with_clip(self, direction: Sequence[int]) -> Vec2:
        """Shift the box, keeping it inside the window; returns the new corner."""
        dx, dy = _vec2(direction)
        x = self._ll_pos[0] + dx
        y = self._ll_pos[1] + dy
        win_width, win_height = self._win.width, self._win.height
        if x < 0:
            x = 0
        elif x + self._width > win_width:
            x = win_width - self._width
        if y < 0:
            y = 0
        elif y + self._height > win_height:
            y = win_height - self._height
        self._ll_pos = (x, y)
        return self._ll_pos

    def resize_no_clip(self, new_dimension: Sequence[int]) -> Vec2:
        """Set width and height freely; returns them."""
        width, height = _vec2(new_dimension)
        if width < 0 or height < 0:
            raise ValueError("box dimensions must not be negative")
        self._width = width
        self._height = height
        return (width, height)

    def resize_with_clip(self, new_dimension: Sequence[int]) -> Vec2:
        """Set width and height, cut at the window's edges; returns them."""
        width, height = _vec2(new_dimension)
        left, bottom = self._ll_pos
        if left + width > self._win.width:
            width = self._win.width - left
        if bottom + height > self._win.height:
            height = self._win.height - bottom
        self._width = width
        self._height = height
        return (width, height)


class SimpleBox(StaticBox):
    """A plain static box of a colour, an image, or both."""


class FullscreenTexture(StaticBox):
    """A static box covering its whole window."""

    def __init__(
        self,
        window: Any,
        img: ImgData | None = None,
        color: Sequence[float] = WHITE,
    ) -> None:
        super().__init__((0, 0), window.width, window.height, window, img, color)


class ForegroundFigure(DynamicBox):
    """A movable picture, such as a character standing in front of a scene."""

    def __init__(
        self,
        low_left_pos: Sequence[int],
        width: int,
        height: int,
        window: Any,
        img: ImgData,
        color: Sequence[float] = WHITE,
    ) -> None:
        super().__init__(low_left_pos, width, height, window, img, color)