import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import shutil
import struct
from pathlib import Path

import pygame
import pytest

from vino.gui.window import VmError, Window, WindowError
from vino.vm import app
from vino.vm.handlers import GameStatus

FONT_SOURCE = Path(pygame.__file__).parent / pygame.font.get_default_font()


def _image(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    surface = pygame.Surface((4, 4))
    surface.fill((255, 255, 255))
    pygame.image.save(surface, str(path))


def _font(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy(FONT_SOURCE, path)


@pytest.fixture
def window():
    win = Window(1280, 720)
    pygame.event.clear()
    return win


@pytest.fixture
def assets(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _image(tmp_path / "sys" / "title.png")
    _image(tmp_path / "sys" / "menu_tex.jpg")
    _image(tmp_path / "sys" / "vinovm.png")
    _font(tmp_path / "fonts" / "ARIAL.ttf")
    _font(tmp_path / "fonts" / "ARIALBD.ttf")
    return tmp_path


def _press(window, key):
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=key))
    window.update()


def _click(window, screen_pos):
    pygame.event.post(
        pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=screen_pos)
    )
    window.update()


def test_open_screen_without_title_image_raises(window, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(WindowError):
        app.open_screen(window)


def test_open_screen_skipped_by_space_draws_nothing(window, assets):
    _press(window, pygame.K_SPACE)
    app.open_screen(window)
    assert tuple(window.surface.get_at((0, 0))) == (0, 0, 0, 255)
    assert window.should_close() is False


def test_main_menu_closed_window_returns_close_app(window, assets):
    window.close()
    assert app.main_menu_screen(window) is GameStatus.CLOSE_APP


def test_main_menu_new_game_button(window, assets):
    # new game button spans x 240..480, y 400..480 from the bottom
    _click(window, (300, 720 - 440))
    assert app.main_menu_screen(window) is GameStatus.NEW_GAME


def test_main_menu_exit_button(window, assets):
    # exit button spans x 240..480, y 80..160 from the bottom
    _click(window, (300, 720 - 120))
    assert app.main_menu_screen(window) is GameStatus.CLOSE_APP


def test_main_menu_without_fonts_raises(window, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _image(tmp_path / "sys" / "menu_tex.jpg")
    with pytest.raises(WindowError):
        app.main_menu_screen(window)


def test_main_loop_without_instructions_file_raises(window, assets):
    with pytest.raises(VmError):
        app.main_loop(window)


def test_main_loop_exit_to_main_menu(window, assets):
    (assets / "m_vm_inst.bin").write_bytes(bytes([0x02, 0x01]))
    assert app.main_loop(window) is GameStatus.MAIN_MENU


def test_main_loop_exit_closes_app(window, assets):
    (assets / "m_vm_inst.bin").write_bytes(bytes([0x02, 0x00]))
    assert app.main_loop(window) is GameStatus.CLOSE_APP


def test_main_loop_bad_exit_code_raises(window, assets):
    (assets / "m_vm_inst.bin").write_bytes(bytes([0x02, 0x05]))
    with pytest.raises(VmError):
        app.main_loop(window)


def test_main_loop_closed_window_returns_close_app(window, assets):
    (assets / "m_vm_inst.bin").write_bytes(bytes([0x01]) + struct.pack("<I", 5))
    window.close()
    assert app.main_loop(window) is GameStatus.CLOSE_APP


def test_main_loop_control_advances_to_exit(window, assets):
    program = bytes([0x01]) + struct.pack("<I", 5) + bytes([0x02, 0x01])
    (assets / "m_vm_inst.bin").write_bytes(program)
    _press(window, pygame.K_LCTRL)
    assert app.main_loop(window) is GameStatus.MAIN_MENU


def test_main_without_resources_fails_in_error_window(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(WindowError):
        app.main([])