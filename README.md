# vino

A small visual novel engine. A story is stored as a compact binary
instruction file that is read one instruction at a time; instructions change
what is on screen: the background, a foreground figure and the text in the
dialogue box at the bottom. The screens are drawn with a small box-and-text
GUI toolkit built on pygame.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running a story

Run `vino` from a directory laid out like this:

```
m_vm_inst.bin        the compiled story
vinovm.png           window icon (optional)
sys/title.png        title image shown at start-up
sys/menu_tex.jpg     main menu background
sys/vinovm.png       logo in the main menu
sys/error_symbol.png icon for the error window
fonts/ARIAL.ttf      text font
fonts/ARIALBD.ttf    bold font for buttons
res/                 backgrounds and figures named by the story
```

```
vino
```

The title fades in and out over six seconds (press Space to skip), then the
main menu offers *New game* and *Exit*. In the game, press Space to move on
to the next page of text (at most every half second), or hold Left Ctrl to
move on every frame. While waiting, dots are appended to the dialogue text.
When the story exits with code 1 the main menu is shown again; code 0 or
closing the window ends the program. If anything goes wrong, a small window
shows the error message.

## The instruction format

Each instruction is one opcode byte followed by its operand, if it has one.
Numbers are 32-bit little-endian; strings are 64-byte fields, cut at the
first zero byte and read as UTF-8.

| Opcode | Instruction       | Operand                                  | Effect                                          |
|--------|-------------------|------------------------------------------|-------------------------------------------------|
| 0x00   | NOP               | none                                     | dialogue text becomes `NOP`                     |
| 0x01   | START             | uint32 position to start from            | seeks there; dialogue text becomes `START`      |
| 0x02   | EXIT              | one byte: 0 close the app, 1 main menu   | ends the story                                  |
| 0x10   | LOADBG            | 64-byte path under `res/`                | sets the background                             |
| 0x11   | CLEARBG           | none                                     | removes the foreground figures                  |
| 0x20   | LOADFG            | 64-byte path under `res/`                | shows or replaces the foreground figure         |
| 0x2A   | SETSPEAKERNAME    | 64-byte name                             | read, but not shown                             |
| 0x30   | LOADTXTLINE       | 64-byte chunk of UTF-8 text              | appends to the dialogue text                    |
| 0x31   | PREBREAKAGE       | none                                     | stops until the next key press                  |
| 0x32   | TXTLINEBREAKAGE   | none                                     | moves the dialogue box to its next page         |
| 0x40   | JMP               | uint32 position to jump to               | seeks there; dialogue text becomes `JMP`        |

LOADBG and LOADFG also replace the dialogue text with `LOADBG: <path>` or
`LOADFG: <path>`. Unknown opcodes behave like NOP. An EXIT code other than
0 or 1 raises `VmError`. A file that ends in the middle of an instruction
gives an exit with code 2 (and so a `VmError` when handled); every read
after that gives code 3. An EXIT at the very end of the file with no code
byte counts as code 0.

The opcodes are the `Opcode` enum in `vino.vm.atoms`, alongside a frozen
dataclass for each instruction and `decode_fixed_string()`.

Reading a file in your own code:

```python
from vino.vm.reader import InstructionsReader

with InstructionsReader("m_vm_inst.bin") as reader:
    handler = reader.read_instruction()
```

Each call returns a handler (`NopHandler`, `LoadBgHandler`, `ExitHandler`
and so on from `vino.vm.handlers`) whose `handle_instruction(gui)` applies
the instruction to a `GuiInterface` and returns whether the next
instruction should be handled straight away. `GuiInterface` holds the lists
of boxes on screen, the `exit_flag` (a `GameStatus`) and the `resource_dir`
images are loaded from; `smart_render()` draws it all back to front.

## The GUI toolkit

`vino.gui` holds the pieces the engine is built from and can be used on
their own. Coordinates have their origin at the lower-left corner of the
window, with y growing upwards; colours are floats in [0.0, 1.0].

- `vino.gui.window`: `Window` (an off-screen surface with polled input),
  `NonResizableWindow` (an on-screen window with a title), `init_vinogui()`,
  and the errors `WindowError` and `VmError`
- `vino.gui.imgdata`: `ImgData` loads .png, .jpg, .jpeg, .bmp and .psd
  files as RGBA bytes; `configure_texture()` turns one into a pygame surface
  (an empty `ImgData` gives one white pixel)
- `vino.gui.fonts`: `FontsCollection` of .ttf fonts looked up by file stem
  (`fonts["ARIAL"]`), `Font` for measuring and drawing text, `FontFace` and
  `Character` for glyphs
- `vino.gui.boxes`: textured, tinted rectangles: `SimpleBox`,
  `FullscreenTexture`, and the movable, resizable `ForegroundFigure`
  (`move_no_clip`, `move_with_clip`, `resize_no_clip`, `resize_with_clip`);
  every box has `is_cursor_in()` and `is_clicked()`
- `vino.gui.text`: `TextRenderer`, the word-wrapping `StaticTextBox`,
  `Button`, and the paged dialogue box `LowBox` (`update_text`, `add_text`,
  `update_name`, `next_slide`, `copy`)

A small demonstration of the toolkit, which expects `res/title_screen.png`,
`res/olegus.png`, `res/fs_new.jpg`, `res/rin.png` and
`fonts/ARIALBI.ttf`, `fonts/ARIALBD.ttf`, `fonts/ARIAL.ttf` in the working
directory:

```
vino-demo
```

It prints the working directory, fades in the title, then shows a scene
where Space changes the background and text and moves the figure left.
When the scene is closed, a second window shows a closing message until it
is closed or Escape is pressed.

## What it does not do

- There is no saving or loading of games and no information screen; the
  `GameStatus` values `LOAD_GAME` and `INFO` exist, but reaching them ends
  the program with a `VmError` shown in the error window.
- The speaker's name from SETSPEAKERNAME is read but never displayed; the
  name plate of the dialogue box stays empty.
- There is no compiler for story files; `m_vm_inst.bin` has to be produced
  by other means.