# luminoveau

A small toolkit for the pieces of a 2D game that sit around the main loop:
settings files, events, screens, input state, assets, text and drawing onto
an in-memory RGBA canvas. Drawing is done with Pillow.

## Modules

- `luminoveau.ini`: an order-preserving INI reader and writer. Section and
  key names are case-insensitive and trimmed. `parse_ini(text)` returns an
  `IniMap` of sections, and `generate_ini(data, pretty)` renders one back to
  text. `IniFile(filename)` has `read()`, `generate(data, pretty)`, which
  overwrites the file, and `write(data, pretty)`. When the file already
  exists, `write` changes only the values, keys and sections that differ and
  leaves comments and layout as they were. `parse_line(line)` classifies a
  single line as a `LineKind`.
- `luminoveau.eventbus`: `EventBus` with `register(event, callback,
  with_data)` and `fire(event, data)` for named events and `SystemEvent`
  members. If a named event is fired and no callback of the matching kind
  is registered, `EventNotRegistered` is raised.
- `luminoveau.state`: subclass `BaseState` (`load`, `unload`, `draw`) and
  manage your states with `StateManager` (`add_state`, `init`, `set_state`,
  `draw`, `load`, `unload`). Adding a name twice raises `ValueError`.
  Switching to an unknown name raises `KeyError`.
- `luminoveau.settings`: the `Settings` dataclass holds vsync, fullscreen,
  resolution and master, sound and music volumes. Volumes are clamped to the
  range 0 to 1. `resolutions()` lists 1280x720, 1920x1080 and 2560x1440.
- `luminoveau.log`: `Log` collects (header, detail) lines and records the
  widest entry in each column. Widths come from `len` unless you pass your
  own `measure` function. `dump(stream)` prints the lines as `[LOG]: ...`.
- `luminoveau.input`: `Input` tracks keys, mouse buttons (`MouseButton`)
  and gamepads, and it detects changes from one frame to the next. Each
  `InputDevice` maps the logical `Buttons` onto keys or gamepad buttons.
  Query a device with `check(button, Action.HELD | Action.PRESSED)`.
- `luminoveau.assets`: `AssetManager` loads and caches textures
  (`TextureAsset`) and TrueType fonts (`FontAsset`). It can also create
  empty textures, save textures as PNG, provide a built-in default font and
  `delete` cached assets. Deleting an asset it does not hold raises
  `AssetNotFound`. `ScaleMode` selects the resampling filter.
- `luminoveau.text`: `rendered_text_size`, `measure_text`, `render_text`,
  `text_to_texture`, `draw_text`, `wrap_lines` and `draw_wrapped_text`.
- `luminoveau.canvas`: `Canvas(width, height)` provides:
  - `clear`, pixels, rectangle outlines and filled rectangles;
  - tinted textures with `draw_texture`;
  - texture parts, which flip when the size is negative, with `draw_texture_part`;
  - Mode 7 drawing with `draw_texture_mode7`, `Mode7Parameters` and `mode7_rects`;
  - blending a Pillow image onto the canvas with `draw_image`;
  - scissor areas with `begin_scissor_mode`/`end_scissor_mode`, or the `scissored` context manager.
- `luminoveau.shapes`: lines, thick lines, triangles, circles, ellipses and
  rounded rectangles, both outlined and filled. All of them draw onto a
  `Canvas`.

## Installation

```
pip install .
```

## Example

```python
from luminoveau.ini import IniFile, parse_ini
from luminoveau.eventbus import EventBus
from luminoveau.state import BaseState, StateManager
from luminoveau.input import Input, Buttons, Action

ini = parse_ini("")
ini["Video"]["Width"] = "1280"
IniFile("settings.ini").write(ini, True)

bus = EventBus()
bus.register("scored", lambda data: print(data["points"]), True)
bus.fire("scored", {"points": 10})


class Title(BaseState):
    def load(self):
        print("title loaded")

    def unload(self):
        print("title unloaded")

    def draw(self):
        pass


states = StateManager()
states.add_state("title", Title())
states.init("title")
states.draw()

inp = Input()
inp.update(1 / 60)              # close the previous frame
inp.set_keys(["space"], True)   # a backend reports a key going down
print(inp.controller(0).check(Buttons.ACCEPT, Action.PRESSED))  # True
```

## Drawing

```python
from luminoveau.canvas import Canvas
from luminoveau.shapes import draw_circle_filled

canvas = Canvas(320, 240)
canvas.clear((0, 0, 0, 255))
canvas.draw_rectangle_filled((10, 10), (50, 20), (255, 0, 0, 255))
draw_circle_filled(canvas, (100, 100), 16, (0, 255, 0, 255))
canvas.image.save("frame.png")
```

## What it does not do

The package opens no window and does not display anything. Drawing goes
into `Canvas.image`, and it is up to you to show that image.

It does not read devices. Keyboard, mouse and gamepad state must be fed in
through `Input.set_keys`, `set_mouse_buttons`, `set_gamepad_button` and
`set_gamepad_axis`.

There is no audio playback and no main loop.

`Settings` is not saved anywhere on its own. Store it with `IniFile` if you
need to keep it.

## Tests

```
pip install .[test]
pytest
```