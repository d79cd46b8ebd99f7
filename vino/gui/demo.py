"""A small demonstration of the GUI: a fading title, then a scene with a
dialogue box, a movable figure and an exit button.
"""

from __future__ import annotations

import argparse
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pygame

from vino.gui.boxes import ForegroundFigure, FullscreenTexture
from vino.gui.fonts import FontsCollection
from vino.gui.imgdata import ImgData
from vino.gui.text import Button, LowBox, StaticTextBox
from vino.gui.window import NonResizableWindow, init_vinogui

TITLE_IMAGE = Path("res/title_screen.png")
BACKGROUND_IMAGES = (Path("res/olegus.png"), Path("res/fs_new.jpg"))
FIGURE_IMAGE = Path("res/rin.png")
ITALIC_FONT = Path("fonts/ARIALBI.ttf")
BOLD_FONT = Path("fonts/ARIALBD.ttf")
REGULAR_FONT = Path("fonts/ARIAL.ttf")

TITLE_DURATION = 6.0
SLIDE_INTERVAL = 0.5
SPEAKER = "Олегус"

_BLACK = (0.0, 0.0, 0.0, 1.0)
_WHITE = (1.0, 1.0, 1.0, 1.0)

_TEXTS = (
    "Теперь на самом деле даже толку нет бить глебуса молотком по голове.",
    "ffffffffffffffffffffffffffffffffffffffffffffffffffffsdafdsafsda"
    "ffdsfsdafasdfffffffffffffffffffffffffffffffffffffffffffffffffffsd"
    "afasdfasdfiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiii"
    "iiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiiii",
    "A church.... To-day, no incense to\n"
    "Its round dome coils, nor do a prayer \n"
    "The humble monks chant, hoarse-voiced, there. \n"
    "Alone, forgot by death and men, \n"
    "A bent old greybeard, denizen \n"
    "Of these remote and desolate hills, \n"
    "Over the ruins watches still ",
    "And daily wipes the dust that clings \n"
    "To tombs, of which the letterings \n"
    "Of glories past speak and of things \n"
    "Of like note. Of a tsar one such \n"
    "Tells who by his gold crown was much \n"
    "Weighed down, and did of Russia gain \n"
    "The patronage o'er his domain. \n"
    "Twas then God's love descended on \n"
    "The land, and Georgia bloomed, and gone \n"
    "Her old fears were and old suspense: \n"
    "Of friendly bayonets a fence \n"
    "Did, bristling, rise in her defence.",
)


def _fade_alpha(elapsed: float) -> float:
    phase = (elapsed - 2.5) / 2.5
    return -phase * phase + 1


def title_screen(window: Any) -> None:
    """Fade the title image in and out; space skips it."""
    title_tex = FullscreenTexture(window, ImgData(TITLE_IMAGE))
    start = time.monotonic()
    while not window.should_close():
        elapsed = time.monotonic() - start
        if elapsed > TITLE_DURATION or window.is_pressed(pygame.K_SPACE):
            return
        title_tex.render(_fade_alpha(elapsed))
        window.update(_BLACK)


def main_menu(window: Any) -> None:
    """Show the demo scene until the window closes; space changes the slide."""
    backgrounds = [ImgData(path) for path in BACKGROUND_IMAGES]
    fs_texture = FullscreenTexture(window, backgrounds[0])

    fonts = FontsCollection()
    font_size = 22 * window.width // 800
    fonts.add_font_with_ascii(ITALIC_FONT, font_size)
    fonts.add_font_with_ascii(BOLD_FONT, font_size)

    exit_button = Button(
        (10, window.height - 60),
        100,
        50,
        window,
        (1.0, 1.0, 1.0, 0.8),
        "Exit",
        fonts["ARIALBD"],
        None,
        (0.2, 0.2, 0.2, 0.8),
    )
    low_box = LowBox(
        window,
        (10, 10),
        (window.width - 20, window.height // 3),
        (0.9, 0.8, 0.8, 0.6),
        (0.9, 0.8, 0.8, 0.8),
        fonts["ARIALBI"],
    )
    figure = ForegroundFigure((100, 50), 300, 500, window, ImgData(FIGURE_IMAGE))

    cur_text = 0
    cur_fs = 0
    slide_time = time.monotonic()

    while not window.should_close():
        if exit_button.is_clicked():
            window.close()
        if (
            time.monotonic() - slide_time >= SLIDE_INTERVAL
            and window.is_pressed(pygame.K_SPACE)
        ):
            cur_fs += 1
            fs_texture.change_texture(backgrounds[cur_fs % len(backgrounds)])
            cur_text = (cur_text + 1) % len(_TEXTS)
            figure.move_with_clip((-50, 0))
            slide_time = time.monotonic()

        fs_texture.render()
        figure.render()
        low_box.render(SPEAKER, _TEXTS[cur_text])
        exit_button.render()

        window.update()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the demo; the final error is shown in its own window until Escape."""
    parser = argparse.ArgumentParser(prog="vino-demo", description="GUI demo.")
    parser.parse_args(argv)

    init_vinogui()
    print(Path.cwd())
    main_window = NonResizableWindow(800, 600, "ViNo")

    try:
        title_screen(main_window)
        main_menu(main_window)
        raise RuntimeError("ОЛЕГУС BOM BOM BOM!")
    except Exception as exc:  # every failure ends up in the error window
        err_window = NonResizableWindow(500, 200, "ViNo Error")
        err_box = StaticTextBox((0, 0), 500, 200, err_window, color=_WHITE)

        fonts = FontsCollection()
        fonts.add_font_with_ascii(REGULAR_FONT, 22)
        while not err_window.should_close():
            if err_window.is_pressed(pygame.K_ESCAPE):
                err_window.close()
            err_box.render()
            err_box.render_text(f"Error: {exc}", fonts["ARIAL"], _BLACK)
            err_window.update()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())