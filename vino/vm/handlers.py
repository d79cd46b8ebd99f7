"""Handlers that apply decoded instructions to the game's GUI state."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any

from vino.gui.boxes import ForegroundFigure, FullscreenTexture
from vino.gui.imgdata import ImgData
from vino.gui.window import VmError
from vino.vm.atoms import Exit, LoadBg, LoadFg, LoadTxtLine, SetSpeakerName, Start


class GameStatus(Enum):
    NOT_SET = auto()
    CLOSE_APP = auto()
    MAIN_MENU = auto()
    NEW_GAME = auto()
    LOAD_GAME = auto()
    INFO = auto()


@dataclass
class GuiInterface:
    """Everything on screen during a game, plus the requested exit status."""

    parent_window: Any
    fullscreen_textures: list = field(default_factory=list)
    fg_figures: list = field(default_factory=list)
    simple_boxes: list = field(default_factory=list)
    low_boxes: list = field(default_factory=list)
    stat_text_boxes: list = field(default_factory=list)
    buttons: list = field(default_factory=list)
    exit_flag: GameStatus = GameStatus.NOT_SET
    resource_dir: Path = Path("res")

    def smart_render(self) -> None:
        """Draw the scene from back to front."""
        if self.fullscreen_textures:
            self.fullscreen_textures[-1].render()
        if self.stat_text_boxes:
            self.stat_text_boxes[-1].render()
        for figure in self.fg_figures:
            figure.render()
        for box in self.simple_boxes:
            box.render()
        if self.low_boxes:
            self.low_boxes[-1].render()
        for box in self.stat_text_boxes:
            box.render()
        for button in self.buttons:
            button.render()


class Handler(ABC):
    """Applies one instruction to the GUI."""

    @abstractmethod
    def handle_instruction(self, gui: GuiInterface) -> bool:
        """Apply the instruction; True if the next one should be handled at once."""


class NopHandler(Handler):
    def handle_instruction(self, gui: GuiInterface) -> bool:
        gui.low_boxes[-1].update_text("NOP")
        return True


class StartHandler(Handler):
    def __init__(self, start_pos: int) -> None:
        self.instruction = Start(start_pos)

    def handle_instruction(self, gui: GuiInterface) -> bool:
        gui.low_boxes[-1].update_text("START")
        return True


class ExitHandler(Handler):
    """Ends the game: code 0 closes the application, 1 goes to the main menu."""

    def __init__(self, exit_code: int) -> None:
        self.instruction = Exit(exit_code)

    def handle_instruction(self, gui: GuiInterface) -> bool:
        code = self.instruction.err_code
        if code == 0:
            gui.exit_flag = GameStatus.CLOSE_APP
        elif code == 1:
            gui.exit_flag = GameStatus.MAIN_MENU
        else:
            raise VmError("Exit instruction error: Bad file")
        return False


class LoadBgHandler(Handler):
    def __init__(self, loadbg: LoadBg) -> None:
        self.instruction = loadbg

    def handle_instruction(self, gui: GuiInterface) -> bool:
        path = self.instruction.path
        image = ImgData(gui.resource_dir / path)
        if not gui.fullscreen_textures:
            gui.fullscreen_textures.append(
                FullscreenTexture(gui.parent_window, image)
            )
        else:
            gui.fullscreen_textures[-1].change_texture(image)
        gui.low_boxes[-1].update_text("LOADBG: " + path)
        return False


class ClearBgHandler(Handler):
    def handle_instruction(self, gui: GuiInterface) -> bool:
        gui.fg_figures.clear()
        return False


class LoadFgHandler(Handler):
    def __init__(self, loadfg: LoadFg) -> None:
        self.instruction = loadfg

    def handle_instruction(self, gui: GuiInterface) -> bool:
        path = self.instruction.path
        image = ImgData(gui.resource_dir / path)
        if not gui.fg_figures:
            window = gui.parent_window
            gui.fg_figures.append(
                ForegroundFigure(
                    (int(window.width * 0.4), 0),
                    int(window.width * 0.2),
                    int(window.height * 0.8),
                    window,
                    image,
                )
            )
        else:
            gui.fg_figures[0].change_texture(image)
        gui.low_boxes[-1].update_text("LOADFG: " + path)
        return False


class SetSpeakerNameHandler(Handler):
    """Carries the speaker's name; the text that follows is handled right away."""

    def __init__(self, speakername: SetSpeakerName) -> None:
        self.instruction = speakername

    def handle_instruction(self, gui: GuiInterface) -> bool:
        return True


class LoadTxtLineHandler(Handler):
    def __init__(self, loadtxtline: LoadTxtLine) -> None:
        self.instruction = loadtxtline

    def handle_instruction(self, gui: GuiInterface) -> bool:
        gui.low_boxes[-1].add_text(self.instruction.text)
        return True


class PreBreakageHandler(Handler):
    def handle_instruction(self, gui: GuiInterface) -> bool:
        return False


class TxtLineBreakageHandler(Handler):
    def handle_instruction(self, gui: GuiInterface) -> bool:
        gui.low_boxes[-1].next_slide()
        return True


class JmpHandler(Handler):
    def handle_instruction(self, gui: GuiInterface) -> bool:
        gui.low_boxes[-1].update_text("JMP")
        return True