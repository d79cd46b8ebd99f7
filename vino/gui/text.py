"""Text drawing and text-holding boxes: plain text runs, word-wrapped text
boxes, titled buttons and the dialogue box with a speaker name and slides.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from vino.gui.boxes import WHITE, StaticBox, Vec2
from vino.gui.fonts import Font
from vino.gui.imgdata import ImgData

_WHITE_SPACES = " \n"


def _cdiv(a: int, b: int) -> int:
    """Integer division that truncates toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _find_first_of(text: str, chars: str, start: int = 0) -> int:
    """Index of the first character of ``chars`` at or after ``start``, or len."""
    for index in range(start, len(text)):
        if text[index] in chars:
            return index
    return len(text)


def _skip_chars(text: str, chars: str) -> int:
    """Length of the leading run of ``text`` made of characters in ``chars``."""
    return len(text) - len(text.lstrip(chars))


def _rgb(color: Sequence[float]) -> tuple[float, float, float]:
    r, g, b = (float(channel) for channel in tuple(color)[:3])
    return (r, g, b)


class TextRenderer:
    """Draws runs of text onto a window."""

    def render_text(
        self,
        text: str,
        font: Font,
        color: Sequence[float],
        ll_pos: Sequence[float],
        window: Any,
    ) -> None:
        """Draw ``text`` with no bounds; line feeds are skipped."""
        if not text:
            return
        font.render_str(text, window, ll_pos, 1.0, _rgb(color))

    def render_text_inbound(
        self,
        text: str,
        font: Font,
        color: Sequence[float],
        ll_pos: Sequence[float],
        x_bound: int,
        window: Any,
    ) -> int:
        """Draw ``text`` within [ll_pos.x, x_bound]; returns characters consumed."""
        if not text:
            return 0
        return font.render_str_inbound(
            text, window, ll_pos, 1.0, x_bound, _rgb(color)
        )


class StaticTextBox(StaticBox):
    """A static box that word-wraps text inside its bounds."""

    def __init__(
        self,
        low_left_pos: Sequence[int],
        width: int,
        height: int,
        window: Any,
        img: ImgData | None = None,
        color: Sequence[float] = WHITE,
    ) -> None:
        super().__init__(low_left_pos, width, height, window, img, color)
        self._text = TextRenderer()

    def render_text(self, text: str, font: Font, color: Sequence[float]) -> int:
        """Draw as much of ``text`` as fits; returns how far it got."""
        glyph_max_height = font.size()
        left, bottom = self._ll_pos
        line_step = _cdiv(glyph_max_height * 7, 5)

        y_cur = bottom + max(
            self._height - line_step, _cdiv(self._height - glyph_max_height, 2)
        )
        x_cur = left + font.size()

        word = text[: _find_first_of(text, _WHITE_SPACES)]
        rendered = self._text.render_text_inbound(
            word,
            font,
            color,
            (left + font.size(), y_cur),
            left + self._width - 10,
            self._win,
        )
        x_cur += font.get_dimensions_of(word, 1.0)[0]

        while rendered < len(text):
            end = _find_first_of(text, _WHITE_SPACES, rendered + 1)
            word = text[rendered:end]
            word_length = font.get_dimensions_of(word, 1.0)[0]

            if word.startswith("\n") or (
                x_cur + word_length > left + self._width - font.size()
                and word_length < self._width
            ):
                y_cur -= line_step
                if y_cur < bottom + _cdiv(glyph_max_height, 4):
                    break
                x_cur = left + font.size()
                skipped = _skip_chars(word, _WHITE_SPACES)
                rendered += skipped
                word = word[skipped:]
                word_length = font.get_dimensions_of(word, 1.0)[0]

            rendered += self._text.render_text_inbound(
                word,
                font,
                color,
                (x_cur, y_cur),
                left + self._width - font.size(),
                self._win,
            )
            x_cur += word_length
        return rendered


class Button(StaticBox):
    """A static box with a title drawn over it."""

    def __init__(
        self,
        low_left_pos: Sequence[int],
        width: int,
        height: int,
        window: Any,
        font_color: Sequence[float],
        title: str,
        font: Font,
        img: ImgData | None = None,
        box_color: Sequence[float] = WHITE,
    ) -> None:
        super().__init__(low_left_pos, width, height, window, img, box_color)
        self.title = title
        self.font = font
        self.title_color = tuple(float(channel) for channel in font_color)
        self._text = TextRenderer()

    def render(self, uniform_alpha: float = -1.0) -> None:
        """Draw the box, then its title."""
        super().render(uniform_alpha)
        left, bottom = self._ll_pos
        self._text.render_text(
            self.title,
            self.font,
            self.title_color,
            (left + 10, bottom + _cdiv(self._height - self.font.size(), 2)),
            self._win,
        )


def _inverted(color: Sequence[float]) -> tuple[float, float, float, float]:
    r, g, b = _rgb(color)
    return (1.0 - r, 1.0 - g, 1.0 - b, 1.0)


class LowBox:
    """Dialogue box: a text area with a name plate on top, shown in slides."""

    def __init__(
        self,
        window: Any,
        box_ll_pos: Sequence[int],
        box_dimensions: Sequence[int],
        box_color: Sequence[float],
        title_color: Sequence[float],
        font: Font,
    ) -> None:
        x, y = (int(v) for v in box_ll_pos)
        width, height = (int(v) for v in box_dimensions)
        self._window = window
        self._font = font
        self._text_box = StaticTextBox(
            (x, y), width, height, window, color=box_color
        )
        self._name_box = StaticTextBox(
            (x + 10, height + y),
            _cdiv(width, 4),
            font.size() * 2,
            window,
            color=title_color,
        )
        self._box_ll_pos: Vec2 = (x, y)
        self._box_dimensions: Vec2 = (width, height)
        self._title_color = self._name_box.color
        self._text = ""
        self._text_pos = 0
        self._name = ""

    @property
    def box_ll_pos(self) -> Vec2:
        return self._box_ll_pos

    @property
    def box_dimensions(self) -> Vec2:
        return self._box_dimensions

    @property
    def box_color(self) -> tuple[float, ...]:
        return self._text_box.color

    @property
    def title_color(self) -> tuple[float, ...]:
        return self._title_color

    @property
    def title_ll_pos(self) -> Vec2:
        return self._name_box.low_left_pos

    @property
    def title_dimensions(self) -> Vec2:
        return (self._name_box.width, self._name_box.height)

    @property
    def text(self) -> str:
        return self._text

    @property
    def name(self) -> str:
        return self._name

    def copy(self) -> LowBox:
        """A new box with the same look; text and name are not copied."""
        return LowBox(
            self._window,
            self._box_ll_pos,
            self._box_dimensions,
            self.box_color,
            self._title_color,
            self._font,
        )

    def render(self, name: str | None = None, text: str | None = None) -> None:
        """Draw the box with its current slide, optionally setting name and text first."""
        if text is not None:
            self.update_text(text)
        if name is not None:
            self.update_name(name)
        self._text_box.render()
        self._name_box.render()
        self._text_pos = self._text_box.render_text(
            self._text, self._font, _inverted(self._text_box.color)
        )
        self._name_box.render_text(
            self._name, self._font, _inverted(self._name_box.color)
        )

    def update_text(self, text: str) -> None:
        self._text = text

    def add_text(self, text: str) -> None:
        self._text += text

    def update_name(self, name: str) -> None:
        self._name = name

    def next_slide(self) -> bool:
        """Drop the part already shown; False when nothing is left."""
        if self._text_pos == len(self._text):
            self._text = ""
            return False
        self._text = self._text[self._text_pos:]
        self._text_pos = 0
        return True