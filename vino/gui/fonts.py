"""Glyph loading, text measurement and text drawing with TrueType fonts."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pygame
import pygame.freetype

from vino.gui.window import WindowError

_WHITE = (1.0, 1.0, 1.0)
_ASCII_END = 127


def _color_to_rgba(color: Sequence[float]) -> tuple[int, int, int, int]:
    """Convert an RGB or RGBA colour in [0.0, 1.0] to 8-bit RGBA."""
    channels = [max(0, min(255, round(channel * 255))) for channel in color]
    if len(channels) == 3:
        channels.append(255)
    if len(channels) != 4:
        raise ValueError("colour must have 3 or 4 channels")
    return (channels[0], channels[1], channels[2], channels[3])


def _target_surface(target: Any) -> pygame.Surface:
    """Accept either a surface or anything that exposes one as ``surface``."""
    return getattr(target, "surface", target)


@dataclass(frozen=True)
class Character:
    """A rasterised glyph and the metrics needed to place it.

    ``bearing`` is the offset from the pen position on the baseline to the
    glyph's left and top edges; ``advance`` is in whole pixels.
    """

    texture: pygame.Surface
    size: tuple[int, int]
    bearing: tuple[int, int]
    advance: int


class FontFace:
    """One font file at one pixel size, with a cache of loaded glyphs."""

    def __init__(self, font_path: str | os.PathLike[str], pxl_size: int) -> None:
        if pxl_size <= 0:
            raise ValueError("pixel size must be positive")
        self.font_path = os.fspath(font_path)
        if not self.font_path:
            raise WindowError("ERROR::FREETYPE::Empty path to font")
        if not pygame.freetype.get_init():
            pygame.freetype.init()
        try:
            self._native = pygame.freetype.Font(self.font_path, size=pxl_size)
        except (pygame.error, OSError) as exc:
            raise WindowError(
                f"ERROR::FREETYPE {exc}::Couldn't init FreeTypeFace"
            ) from exc
        self.pxl_size = pxl_size
        self._chars: dict[str, Character] = {}

    def get_char(self, ch: str) -> Character:
        """Return the glyph for ``ch``, loading it on first use."""
        if len(ch) != 1:
            raise ValueError("expected a single character")
        cached = self._chars.get(ch)
        if cached is None:
            cached = self._load_symbol(ch)
        return cached

    def set_pixel_size(self, pixel_width: int, pixel_height: int = 0) -> None:
        """Change the glyph size; a height of 0 means the same as the width."""
        if pixel_width <= 0 or pixel_height < 0:
            raise ValueError("pixel sizes must be positive")
        height = pixel_height or pixel_width
        try:
            self._native.size = (pixel_width, height)
        except (pygame.error, ValueError) as exc:
            raise WindowError(
                f"ERROR::FREETYPE {exc}::Couldn't set pixel size"
            ) from exc
        self.pxl_size = height
        self._chars.clear()

    def load_ascii(self) -> None:
        """Load every character with a code below 127 into the cache."""
        for code in range(_ASCII_END):
            self._load_symbol(chr(code))

    def _load_symbol(self, ch: str) -> Character:
        try:
            texture, rect = self._native.render(ch, fgcolor=(255, 255, 255, 255))
            metrics = self._native.get_metrics(ch)
        except ValueError:
            # characters the rasteriser refuses (such as NUL) take no space
            character = Character(
                pygame.Surface((0, 0), pygame.SRCALPHA), (0, 0), (0, 0), 0
            )
        except pygame.error as exc:
            raise WindowError(f"ERROR::FREETYPE {exc}::Failed to load Glyph") from exc
        else:
            glyph_metrics = metrics[0] if metrics else None
            advance = int(glyph_metrics[4]) if glyph_metrics else rect.width
            character = Character(
                texture,
                (texture.get_width(), texture.get_height()),
                (rect.x, rect.y),
                advance,
            )
        self._chars[ch] = character
        return character


class Font:
    """Measures and draws text with a face from a FontsCollection."""

    def __init__(self, face: FontFace) -> None:
        self.face = face

    def render_str(
        self,
        text: str,
        target: Any,
        ll_pos: Sequence[float],
        scale: float = 1.0,
        color: Sequence[float] = _WHITE,
    ) -> None:
        """Draw ``text`` with its baseline starting at ``ll_pos``.

        Coordinates have their origin at the target's lower-left corner.
        Carriage returns and line feeds are skipped.
        """
        if not text:
            return
        surface = _target_surface(target)
        rgba = _color_to_rgba(color)
        x, y = float(ll_pos[0]), float(ll_pos[1])
        for c in text:
            if c in "\r\n":
                continue
            ch = self.face.get_char(c)
            self._draw_glyph(surface, ch, x, y, scale, rgba)
            x += ch.advance * scale

    def render_str_inbound(
        self,
        text: str,
        target: Any,
        ll_pos: Sequence[float],
        scale: float,
        x_bound: int,
        color: Sequence[float] = _WHITE,
    ) -> int:
        """Draw ``text`` until a line feed or until a glyph would reach ``x_bound``.

        Returns how many characters were consumed; the character that
        stopped drawing is counted too.
        """
        if not text:
            return 0
        surface = _target_surface(target)
        rgba = _color_to_rgba(color)
        x, y = float(ll_pos[0]), float(ll_pos[1])
        count = 0
        for c in text:
            if c == "\r":
                count += 1
                continue
            ch = self.face.get_char(c)
            if c == "\n" or x + ch.advance * scale >= x_bound:
                return count + 1
            self._draw_glyph(surface, ch, x, y, scale, rgba)
            x += ch.advance * scale
            count += 1
        return count

    def size(self) -> int:
        """Maximum glyph height of the font in pixels."""
        return self.face.pxl_size

    def get_dimensions_of(self, text: str, scale: float = 1.0) -> tuple[int, int]:
        """Width of ``text`` when drawn, and the font's height."""
        width = sum(int(self.face.get_char(c).advance * scale) for c in text)
        return (width, self.size())

    @staticmethod
    def _draw_glyph(
        surface: pygame.Surface,
        ch: Character,
        x: float,
        y: float,
        scale: float,
        rgba: tuple[int, int, int, int],
    ) -> None:
        width = round(ch.size[0] * scale)
        height = round(ch.size[1] * scale)
        if width <= 0 or height <= 0:
            return
        xpos = x + ch.bearing[0] * scale
        ypos = y - (ch.size[1] - ch.bearing[1]) * scale
        if (width, height) == ch.size:
            glyph = ch.texture.copy()
        else:
            glyph = pygame.transform.smoothscale(ch.texture, (width, height))
        glyph.fill(rgba, special_flags=pygame.BLEND_RGBA_MULT)
        top = surface.get_height() - ypos - height
        surface.blit(glyph, (round(xpos), round(top)))


class FontsCollection:
    """Fonts loaded from .ttf files, looked up by file stem."""

    def __init__(self) -> None:
        self._faces: dict[str, FontFace] = {}

    def add_font_with_ascii(
        self, font_path: str | os.PathLike[str], size: int
    ) -> bool:
        """Load a font and its ASCII glyphs; False if the name is already taken."""
        if size <= 0:
            raise ValueError("font size must be positive")
        path = Path(font_path)
        if not path.exists() or path.suffix != ".ttf":
            raise WindowError(
                f'No file "{os.fspath(font_path)}" or it doesn\'t have .ttf extension'
            )
        face = FontFace(path, size)
        if path.stem in self._faces:
            return False
        self._faces[path.stem] = face
        face.load_ascii()
        return True

    def __getitem__(self, font_name: str) -> Font:
        face = self._faces.get(font_name)
        if face is None:
            raise WindowError(f'No font with name "{font_name}" found')
        return Font(face)