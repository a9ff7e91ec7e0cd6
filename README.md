# mlx42

A small graphics library built around RGBA images placed in a window.
You create images, draw pixels or textures into them, put instances of
them on screen at a position and depth, and run a loop that calls your
hooks once per frame and then draws everything from the lowest depth up.

Two backends live in `mlx42.backend`:

- `HeadlessBackend` keeps all window state in memory and is driven by
  events you push into it with `push_event`. It needs no display, which
  makes it suitable for tests and batch rendering. Every presented frame
  is kept in `last_frame` and counted in `frames`.
- `PygameBackend` opens a real window through pygame.

`Mlx` uses the headless backend when the `Setting.HEADLESS` setting is
on, the pygame backend otherwise; you can also pass one yourself with
`Mlx(width, height, title, resize=False, backend=...)`.

## Installation

```
pip install .
```

Install the test extra to run the test suite:

```
pip install ".[test]"
pytest
```

## A first program

```python
from mlx42.core import Mlx, Setting, set_setting

set_setting(Setting.HEADLESS, True)

with Mlx(128, 64, "Demo") as mlx:
    image = mlx.new_image(32, 32)
    image.put_pixel(0, 0, 0xFF0000FF)   # RGBA: opaque red
    mlx.image_to_window(image, 10, 10)

    counter = {"frames": 0}

    def tick(state):
        state["frames"] += 1
        if state["frames"] >= 60:
            mlx.close_window()

    mlx.loop_hook(tick, counter)
    mlx.loop()
```

Leaving the `with` block calls `Mlx.terminate`, which closes the backend
and drops every image and hook.

Colours are 32-bit `0xRRGGBBAA` values, stored in the pixel buffer as
the bytes R, G, B, A. `Image.put_pixel` and `Image.get_pixel` raise
`IndexError` when the coordinates fall outside the image.

## Images and the render queue

- `Mlx.new_image(width, height)` creates a blank image; both sides must be
  between 1 and 32767, or `MlxError` with `MlxErrno.INVDIM` is raised.
- `Mlx.image_to_window(image, x, y)` adds an `Instance` of the image and
  returns its index in `image.instances`. Every new instance gets a
  greater depth than the one before, so later instances are drawn on top.
- `Mlx.set_instance_depth(instance, zdepth)` changes that order; the
  `RenderQueue` is sorted again before the next frame.
- `Mlx.resize_image(image, width, height)` changes an image's size,
  keeping the leading bytes of its buffer.
- `Mlx.delete_image(image)` removes an image and all of its instances.
- Setting `enabled` to `False` on an `Image` or an `Instance` keeps it
  out of the drawn frames.
- `Mlx.render_frame()` runs one frame by hand: the loop hooks, drawing,
  then delivery of pending input events. `Mlx.loop()` repeats it until
  the window is asked to close.
- `Mlx.projection_matrix()` returns the column-major projection that
  places images; with `Setting.STRETCH_IMAGE` on it uses the window's
  initial size.

## Textures and XPM42 files

`mlx42.textures` provides `Texture(width, height, pixels=None)`,
`texture_to_image`, `texture_area_to_image` and `draw_texture` for
copying pixel data between textures and images. `Mlx.texture_to_image`
and `Mlx.texture_area_to_image` do the same and register the new image
with the window.

`mlx42.xpm42` reads the XPM42 format: a `!XPM42` line, a header line
`width height colors chars-per-pixel mode` (mode `c` for colour or `m`
for monochrome), one line per colour (`<chars> #RRGGBBAA`) and then
the pixel rows. `parse_xpm42(lines)` decodes lines of text;
`load_xpm42(path)` reads a file whose name contains `.xpm42`. Both
return an `Xpm` whose `texture` holds the pixels.

```python
from mlx42.xpm42 import load_xpm42

xpm = load_xpm42("sprite.xpm42")
image = mlx.texture_to_image(xpm.texture)
```

## Input and window hooks

`Mlx.key_hook`, `Mlx.mouse_hook`, `Mlx.scroll_hook`, `Mlx.cursor_hook`,
`Mlx.resize_hook` and `Mlx.close_hook` register one callback each:

- key: `func(event, param)` with a `KeyEvent`
- mouse: `func(button, action, mods, param)`
- scroll: `func(xoffset, yoffset, param)`
- cursor: `func(x, y, param)`
- resize: `func(width, height, param)`
- close: `func(param)`

`Mlx.is_key_down`, `Mlx.is_mouse_down` and `Mlx.get_mouse_pos` poll the
current input state. Key codes are whatever the backend reports; the
pygame backend uses pygame's key constants. Window state is reached
through `get_window_pos`, `set_window_pos`, `set_window_size`,
`set_window_limit`, `set_window_title`, `set_cursor_mode` (a
`CursorMode`), `get_monitor_size`, `focus` and `get_time`.

With the headless backend, input is simulated:

```python
from mlx42.backend import HeadlessBackend, KeyEvent

backend = HeadlessBackend()
mlx = Mlx(64, 64, "Test", backend=backend)
backend.push_event(KeyEvent(87, KeyEvent.PRESS))
mlx.render_frame()
assert mlx.is_key_down(87)
```

## Errors

Failures raise `mlx42.errors.MlxError`, which carries an `MlxErrno`
value in its `errno` attribute; `mlx42.errors.strerror` turns a code
into its description. Invalid arguments such as a non-positive window
size raise `ValueError`.

## What is not included

The package has no PNG loader, no text drawing, and no custom cursor
images or window icons. Textures come from XPM42 files or from pixel
buffers you build yourself.