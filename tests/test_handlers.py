import pygame
import pytest

from vino.gui.window import VmError
from vino.vm.atoms import FIXED_STRING_SIZE, LoadBg, LoadFg, LoadTxtLine, SetSpeakerName
from vino.vm.handlers import (
    ClearBgHandler,
    ExitHandler,
    GameStatus,
    GuiInterface,
    JmpHandler,
    LoadBgHandler,
    LoadFgHandler,
    LoadTxtLineHandler,
    NopHandler,
    PreBreakageHandler,
    SetSpeakerNameHandler,
    StartHandler,
    TxtLineBreakageHandler,
)


def _field(text: str) -> bytes:
    raw = text.encode("utf-8")
    return raw + bytes(FIXED_STRING_SIZE - len(raw))


class FakeWindow:
    def __init__(self, width=100, height=50):
        self.width = width
        self.height = height
        self.surface = pygame.Surface((width, height), pygame.SRCALPHA)


class FakeLowBox:
    def __init__(self):
        self.text = ""
        self.slides = 0

    def update_text(self, text):
        self.text = text

    def add_text(self, text):
        self.text += text

    def next_slide(self):
        self.slides += 1
        return True


class Recorder:
    def __init__(self, log, name):
        self.log = log
        self.name = name

    def render(self):
        self.log.append(self.name)


def _save_image(path, size):
    surface = pygame.Surface(size, pygame.SRCALPHA)
    surface.fill((10, 20, 30, 255))
    pygame.image.save(surface, str(path))


@pytest.fixture
def gui(tmp_path):
    interface = GuiInterface(FakeWindow(), resource_dir=tmp_path)
    interface.low_boxes.append(FakeLowBox())
    return interface


def test_nop_sets_text(gui):
    assert NopHandler().handle_instruction(gui) is True
    assert gui.low_boxes[-1].text == "NOP"


def test_start_sets_text(gui):
    handler = StartHandler(7)
    assert handler.handle_instruction(gui) is True
    assert handler.instruction.start_pos == 7
    assert gui.low_boxes[-1].text == "START"


def test_jmp_sets_text(gui):
    assert JmpHandler().handle_instruction(gui) is True
    assert gui.low_boxes[-1].text == "JMP"


@pytest.mark.parametrize(
    "code, status",
    [(0, GameStatus.CLOSE_APP), (1, GameStatus.MAIN_MENU)],
)
def test_exit_codes(gui, code, status):
    assert ExitHandler(code).handle_instruction(gui) is False
    assert gui.exit_flag is status


@pytest.mark.parametrize("code", [2, 3])
def test_exit_bad_file(gui, code):
    with pytest.raises(VmError):
        ExitHandler(code).handle_instruction(gui)
    assert gui.exit_flag is GameStatus.NOT_SET


def test_load_txt_line_appends(gui):
    gui.low_boxes[-1].update_text("Hi ")
    assert LoadTxtLineHandler(LoadTxtLine(_field("there"))).handle_instruction(gui)
    assert gui.low_boxes[-1].text == "Hi there"


def test_speaker_name_continues(gui):
    handler = SetSpeakerNameHandler(SetSpeakerName(_field("Rin")))
    assert handler.handle_instruction(gui) is True
    assert handler.instruction.name == "Rin"


def test_pre_breakage_stops(gui):
    assert PreBreakageHandler().handle_instruction(gui) is False


def test_breakage_advances_slide(gui):
    assert TxtLineBreakageHandler().handle_instruction(gui) is True
    assert gui.low_boxes[-1].slides == 1


def test_clear_bg_removes_figures(gui):
    gui.fg_figures.extend(["a", "b"])
    assert ClearBgHandler().handle_instruction(gui) is False
    assert gui.fg_figures == []


def test_load_bg_creates_then_replaces(gui, tmp_path):
    _save_image(tmp_path / "one.png", (4, 4))
    _save_image(tmp_path / "two.png", (6, 3))

    assert LoadBgHandler(LoadBg(_field("one.png"))).handle_instruction(gui) is False
    assert len(gui.fullscreen_textures) == 1
    texture = gui.fullscreen_textures[0]
    assert (texture.width, texture.height) == (
        gui.parent_window.width,
        gui.parent_window.height,
    )
    assert texture.texture.get_size() == (4, 4)
    assert gui.low_boxes[-1].text == "LOADBG: one.png"

    LoadBgHandler(LoadBg(_field("two.png"))).handle_instruction(gui)
    assert len(gui.fullscreen_textures) == 1
    assert gui.fullscreen_textures[0].texture.get_size() == (6, 3)


def test_load_fg_places_figure(gui, tmp_path):
    _save_image(tmp_path / "rin.png", (5, 5))
    assert LoadFgHandler(LoadFg(_field("rin.png"))).handle_instruction(gui) is False
    figure = gui.fg_figures[0]
    assert figure.low_left_pos == (40, 0)
    assert figure.width == 20
    assert figure.height == 40
    assert gui.low_boxes[-1].text == "LOADFG: rin.png"


def test_load_fg_missing_image(gui):
    with pytest.raises(RuntimeError):
        LoadFgHandler(LoadFg(_field("absent.png"))).handle_instruction(gui)
    assert gui.fg_figures == []


def test_smart_render_order():
    log = []
    gui = GuiInterface(FakeWindow())
    gui.fullscreen_textures.extend([Recorder(log, "bg0"), Recorder(log, "bg1")])
    gui.stat_text_boxes.extend([Recorder(log, "st0"), Recorder(log, "st1")])
    gui.fg_figures.append(Recorder(log, "fg"))
    gui.simple_boxes.append(Recorder(log, "simple"))
    gui.low_boxes.extend([Recorder(log, "low0"), Recorder(log, "low1")])
    gui.buttons.append(Recorder(log, "button"))
    gui.smart_render()
    assert log == [
        "bg1",
        "st1",
        "fg",
        "simple",
        "low1",
        "st0",
        "st1",
        "button",
    ]


def test_smart_render_empty_draws_nothing():
    gui = GuiInterface(FakeWindow())
    gui.smart_render()
    assert gui.exit_flag is GameStatus.NOT_SET
    assert gui.fullscreen_textures == []