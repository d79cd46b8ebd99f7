"""The visual-novel player: title screen, main menu and the game loop."""

from __future__ import annotations

import argparse
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pygame

from vino.gui.boxes import FullscreenTexture, SimpleBox
from vino.gui.fonts import FontsCollection
from vino.gui.imgdata import ImgData
from vino.gui.text import Button, LowBox, StaticTextBox, TextRenderer
from vino.gui.window import NonResizableWindow, VmError, init_vinogui
from vino.vm.handlers import GameStatus, GuiInterface
from vino.vm.reader import InstructionsReader

TITLE_IMAGE = Path("sys/title.png")
MENU_IMAGE = Path("sys/menu_tex.jpg")
LOGO_IMAGE = Path("sys/vinovm.png")
ERROR_SYMBOL_IMAGE = Path("sys/error_symbol.png")
ICON_IMAGE = Path("vinovm.png")
BOLD_FONT = Path("fonts/ARIALBD.ttf")
REGULAR_FONT = Path("fonts/ARIAL.ttf")
INSTRUCTIONS_FILE = Path("m_vm_inst.bin")

TITLE_DURATION = 6.0
DOT_INTERVAL = 0.3
SLIDE_INTERVAL = 0.5

_BLACK = (0.0, 0.0, 0.0, 1.0)
_WHITE = (1.0, 1.0, 1.0, 1.0)


def _fade_alpha(elapsed: float) -> float:
    """Opacity of the title: rises to 1 at 2.5 s and falls back after."""
    phase = (elapsed - 2.5) / 2.5
    return -phase * phase + 1


def open_screen(window: Any) -> None:
    """Fade the title image in and out; space skips it."""
    title_tex = FullscreenTexture(window, ImgData(TITLE_IMAGE))
    start = time.monotonic()
    while not window.should_close():
        elapsed = time.monotonic() - start
        if elapsed > TITLE_DURATION or window.is_pressed(pygame.K_SPACE):
            return
        title_tex.render(_fade_alpha(elapsed))
        window.update(_BLACK)


def main_menu_screen(window: Any) -> GameStatus:
    """Show the main menu until a button is clicked or the window closes."""
    title_screen = FullscreenTexture(window, ImgData(MENU_IMAGE))
    width_1_16 = window.width // 16
    height_1_9 = window.height // 9

    fonts = FontsCollection()
    fonts.add_font_with_ascii(BOLD_FONT, int(width_1_16 * 0.5))
    fonts.add_font_with_ascii(REGULAR_FONT, int(width_1_16 * 0.25))

    bottom_up_rectangle = SimpleBox(
        (width_1_16 * 2, 0),
        width_1_16 * 5,
        window.height,
        window,
        color=(1.0, 1.0, 1.0, 0.5),
    )
    vino_title = TextRenderer()
    vino_letter = SimpleBox(
        (width_1_16 * 13, int(height_1_9 * 0.2)),
        int(width_1_16 * 0.5),
        int(height_1_9 * 0.5),
        window,
        ImgData(LOGO_IMAGE),
    )
    but_new_game = Button(
        (width_1_16 * 3, height_1_9 * 5),
        width_1_16 * 3,
        height_1_9,
        window,
        _WHITE,
        "New game",
        fonts["ARIALBD"],
        None,
        _BLACK,
    )
    but_exit = Button(
        (width_1_16 * 3, height_1_9),
        width_1_16 * 3,
        height_1_9,
        window,
        _WHITE,
        "Exit",
        fonts["ARIALBD"],
        None,
        _BLACK,
    )

    while not window.should_close():
        if but_exit.is_clicked():
            return GameStatus.CLOSE_APP
        if but_new_game.is_clicked():
            return GameStatus.NEW_GAME

        title_screen.render()
        bottom_up_rectangle.render()
        vino_letter.render()
        vino_title.render_text(
            "iNo version 0.1a",
            fonts["ARIAL"],
            (0.9, 0.9, 0.9),
            (
                vino_letter.low_left_pos[0] + vino_letter.width * 0.9,
                height_1_9 * 0.27,
            ),
            window,
        )
        but_new_game.render()
        but_exit.render()

        window.update()
    return GameStatus.CLOSE_APP


def main_loop(window: Any) -> GameStatus:
    """Run the game from the instructions file until it exits or the window closes."""
    if not INSTRUCTIONS_FILE.exists():
        raise VmError(f"No input {INSTRUCTIONS_FILE}")

    fonts = FontsCollection()
    fonts.add_font_with_ascii(REGULAR_FONT, 30)

    gui = GuiInterface(window)
    gui.fullscreen_textures.append(FullscreenTexture(window, ImgData(TITLE_IMAGE)))
    gui.low_boxes.append(
        LowBox(
            window,
            (10, 10),
            (window.width - 20, window.height // 3),
            (0.8, 0.7, 0.7, 0.8),
            (0.7, 0.7, 0.7, 0.9),
            fonts["ARIAL"],
        )
    )

    with InstructionsReader(INSTRUCTIONS_FILE) as reader:
        # the first instruction should be START; it is not checked
        reader.read_instruction().handle_instruction(gui)

        slide_time = time.monotonic()
        dot_time = time.monotonic()
        dot_counter = 0

        while gui.exit_flag is GameStatus.NOT_SET and not window.should_close():
            now = time.monotonic()
            if now - dot_time >= DOT_INTERVAL:
                low_box = gui.low_boxes[0]
                if dot_counter >= 5:
                    low_box.update_text(low_box.text[:-4])
                    dot_counter = 1
                low_box.add_text(".")
                dot_counter += 1
                dot_time = time.monotonic()

            if window.is_pressed(pygame.K_LCTRL) or (
                window.is_pressed(pygame.K_SPACE)
                and time.monotonic() - slide_time >= SLIDE_INTERVAL
            ):
                if not gui.low_boxes[-1].next_slide():
                    while reader.read_instruction().handle_instruction(gui):
                        pass
                slide_time = time.monotonic()

            gui.smart_render()
            window.update()

    if window.should_close():
        gui.exit_flag = GameStatus.CLOSE_APP
    return gui.exit_flag


def _show_error(exc: Exception) -> None:
    err_window = NonResizableWindow(500, 200, "ViNo Error")
    err_bg = FullscreenTexture(err_window, color=_WHITE)
    err_box = StaticTextBox((50, 0), 450, 185, err_window, color=_WHITE)
    err_symbol = SimpleBox((10, 150), 30, 30, err_window, ImgData(ERROR_SYMBOL_IMAGE))

    fonts = FontsCollection()
    fonts.add_font_with_ascii(REGULAR_FONT, 22)

    while not err_window.should_close():
        err_bg.render()
        err_symbol.render()
        err_box.render_text(f"Error: {exc}", fonts["ARIAL"], _BLACK)
        err_window.update()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the player; errors are shown in a separate window."""
    parser = argparse.ArgumentParser(prog="vino", description="Visual novel player.")
    parser.parse_args(argv)

    screens = {
        GameStatus.MAIN_MENU: main_menu_screen,
        GameStatus.NEW_GAME: main_loop,
    }
    try:
        init_vinogui()
        main_window = NonResizableWindow(1280, 720, "ViNo")
        main_window.set_icon(ICON_IMAGE)
        open_screen(main_window)
        status = GameStatus.MAIN_MENU
        while status is not GameStatus.CLOSE_APP:
            screen = screens.get(status)
            if screen is None:
                raise VmError(f"Unsupported game status: {status.name}")
            status = screen(main_window)
        main_window.close()
    except Exception as exc:  # every failure ends up in the error window
        _show_error(exc)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())