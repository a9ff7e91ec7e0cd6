"""The window context: set-up, the frame loop, hooks and tear-down."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable

from .backend import (
    CloseEvent,
    CursorEvent,
    CursorMode,
    HeadlessBackend,
    KeyEvent,
    MouseEvent,
    PygameBackend,
    ResizeEvent,
    ScrollEvent,
)
from .errors import MlxErrno, MlxError
from .images import DrawCall, Image, Instance, RenderQueue
from .textures import Texture
from .textures import texture_area_to_image as _texture_area_to_image


class Setting(IntEnum):
    """Global settings read when a window is created or drawn."""

    STRETCH_IMAGE = 0
    FULLSCREEN = 1
    MAXIMIZED = 2
    DECORATED = 3
    HEADLESS = 4


_settings: dict[Setting, int] = {
    Setting.STRETCH_IMAGE: False,
    Setting.FULLSCREEN: False,
    Setting.MAXIMIZED: False,
    Setting.DECORATED: True,
    Setting.HEADLESS: False,
}


def _as_setting(setting: int) -> Setting:
    try:
        return Setting(setting)
    except ValueError:
        raise ValueError("Invalid settings value") from None


def set_setting(setting: int, value: int) -> None:
    """Change a global setting; it applies to windows created afterwards."""
    _settings[_as_setting(setting)] = value


def get_setting(setting: int) -> int:
    """Return the current value of a global setting."""
    return _settings[_as_setting(setting)]


def _div(a: float, b: float) -> float:
    """Divide the way IEEE floats do, giving infinities or NaN for zero divisors."""
    if b:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


@dataclass
class _Hook:
    func: Callable[..., Any]
    param: Any = None


class Mlx:
    """A window together with its images, render queue and input hooks."""

    def __init__(self, width: int, height: int, title: str, resize: bool = False,
                 backend: Any = None) -> None:
        if width <= 0:
            raise ValueError("Window width must be positive")
        if height <= 0:
            raise ValueError("Window height must be positive")
        if title is None:
            raise ValueError("Window title can't be null")

        if backend is None:
            backend = HeadlessBackend() if get_setting(Setting.HEADLESS) else PygameBackend()
        self.backend = backend
        self.width = width
        self.height = height
        self.initial_width = width
        self.initial_height = height
        self.delta_time = 0.0
        self.zdepth = 0
        self.render_queue = RenderQueue()
        self._images: list[Image] = []
        self._hooks: list[_Hook] = []
        self._key_hook: _Hook | None = None
        self._mouse_hook: _Hook | None = None
        self._scroll_hook: _Hook | None = None
        self._cursor_hook: _Hook | None = None
        self._close_hook: _Hook | None = None
        self._resize_hook: _Hook | None = None
        self._sort_queue = False
        self._old_start = 0.0
        self._terminated = False

        try:
            backend.open(width, height, title, resize, bool(get_setting(Setting.FULLSCREEN)))
        except Exception as exc:
            self.terminate()
            raise MlxError(MlxErrno.WINFAIL) from exc

    # -- lifetime -----------------------------------------------------------

    def __enter__(self) -> "Mlx":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.terminate()

    def close_window(self) -> None:
        """Ask the loop to stop after the current frame."""
        self.backend.request_close()

    def terminate(self) -> None:
        """Close the window and release every image and hook."""
        if self._terminated:
            return
        self._terminated = True
        self.backend.close()
        self._hooks.clear()
        for call in list(self.render_queue):
            self.render_queue.remove_image(call.image)
        self._images.clear()

    # -- images -------------------------------------------------------------

    @property
    def images(self) -> list[Image]:
        """Images owned by this window, most recently created first."""
        return list(self._images)

    def _register(self, image: Image) -> Image:
        self._images.insert(0, image)
        return image

    def new_image(self, width: int, height: int) -> Image:
        """Create a blank image owned by this window."""
        return self._register(Image(width, height))

    def delete_image(self, image: Image) -> None:
        """Remove an image and every one of its instances from the window."""
        self.render_queue.remove_image(image)
        for index, owned in enumerate(self._images):
            if owned is image:
                del self._images[index]
                break

    def image_to_window(self, image: Image, x: int, y: int) -> int:
        """Show a new instance of ``image`` at ``(x, y)``; return its index."""
        if image is None:
            raise ValueError("Parameter can't be null")
        index = len(image.instances)
        image.instances.append(Instance(x, y, self.zdepth, True))
        self.zdepth += 1
        self._sort_queue = True
        self.render_queue.add(image, index)
        return index

    def set_instance_depth(self, instance: Instance, zdepth: int) -> None:
        """Move an instance to a new depth; the queue is re-sorted before drawing."""
        if instance is None:
            raise ValueError("Parameter can't be null")
        if instance.z == zdepth:
            return
        instance.z = zdepth
        self._sort_queue = True

    def resize_image(self, image: Image, width: int, height: int) -> None:
        """Change an image's size."""
        image.resize(width, height)

    def texture_to_image(self, texture: Texture) -> Image:
        """Copy a whole texture into a new image owned by this window."""
        return self.texture_area_to_image(texture, (0, 0), (texture.width, texture.height))

    def texture_area_to_image(self, texture: Texture, xy: tuple[int, int],
                              wh: tuple[int, int]) -> Image:
        """Copy part of a texture into a new image owned by this window."""
        return self._register(_texture_area_to_image(texture, xy, wh))

    # -- loop ---------------------------------------------------------------

    def loop_hook(self, func: Callable[[Any], Any], param: Any = None) -> None:
        """Run ``func(param)`` once per frame, after earlier hooks."""
        if func is None:
            raise ValueError("Parameter can't be null")
        self._hooks.append(_Hook(func, param))

    def loop(self) -> None:
        """Draw frames until the window is asked to close."""
        while not self.backend.should_close():
            self.render_frame()

    def _exec_hooks(self) -> None:
        for hook in self._hooks:
            if self.backend.should_close():
                break
            hook.func(hook.param)

    def _draws(self) -> list[DrawCall]:
        if self._sort_queue:
            self._sort_queue = False
            self.render_queue.sort()
        return [call for call in self.render_queue
                if call.image.enabled and call.instance.enabled]

    def _dispatch(self, event: object) -> None:
        if isinstance(event, KeyEvent) and self._key_hook:
            self._key_hook.func(event, self._key_hook.param)
        elif isinstance(event, MouseEvent) and self._mouse_hook:
            hook = self._mouse_hook
            hook.func(event.button, event.action, event.mods, hook.param)
        elif isinstance(event, ScrollEvent) and self._scroll_hook:
            hook = self._scroll_hook
            hook.func(event.xoffset, event.yoffset, hook.param)
        elif isinstance(event, CursorEvent) and self._cursor_hook:
            hook = self._cursor_hook
            hook.func(event.x, event.y, hook.param)
        elif isinstance(event, ResizeEvent) and self._resize_hook:
            hook = self._resize_hook
            hook.func(event.width, event.height, hook.param)
        elif isinstance(event, CloseEvent) and self._close_hook:
            self._close_hook.func(self._close_hook.param)

    def render_frame(self) -> None:
        """Run the hooks, draw one frame and deliver pending input events."""
        start = self.backend.get_time()
        self.delta_time = start - self._old_start
        self._old_start = start
        self.width, self.height = self.backend.get_window_size()
        self._exec_hooks()
        self.backend.present(self._draws())
        for event in self.backend.poll_events():
            self._dispatch(event)

    def projection_matrix(self) -> tuple[float, ...]:
        """Return the column-major view projection used to place images."""
        depth = float(self.zdepth)
        stretch = get_setting(Setting.STRETCH_IMAGE)
        width = self.initial_width if stretch else self.width
        height = self.initial_height if stretch else self.height
        span = depth - -depth
        flip = 1.0 if height else math.nan
        return (
            _div(2.0, width), 0.0, 0.0, 0.0,
            0.0, _div(2.0, -height), 0.0, 0.0,
            0.0, 0.0, _div(-2.0, span), 0.0,
            -1.0, flip, -_div(depth + -depth, span), 1.0,
        )

    # -- hooks --------------------------------------------------------------

    @staticmethod
    def _make_hook(func: Callable[..., Any], param: Any) -> _Hook:
        if func is None:
            raise ValueError("Parameter can't be null")
        return _Hook(func, param)

    def key_hook(self, func: Callable[[KeyEvent, Any], Any], param: Any = None) -> None:
        """Call ``func(event, param)`` for every key event."""
        self._key_hook = self._make_hook(func, param)

    def scroll_hook(self, func: Callable[[float, float, Any], Any], param: Any = None) -> None:
        """Call ``func(xoffset, yoffset, param)`` when the wheel moves."""
        self._scroll_hook = self._make_hook(func, param)

    def mouse_hook(self, func: Callable[[int, int, int, Any], Any], param: Any = None) -> None:
        """Call ``func(button, action, mods, param)`` for mouse button events."""
        self._mouse_hook = self._make_hook(func, param)

    def cursor_hook(self, func: Callable[[float, float, Any], Any], param: Any = None) -> None:
        """Call ``func(x, y, param)`` when the cursor moves."""
        self._cursor_hook = self._make_hook(func, param)

    def close_hook(self, func: Callable[[Any], Any], param: Any = None) -> None:
        """Call ``func(param)`` when the user asks to close the window."""
        self._close_hook = self._make_hook(func, param)

    def resize_hook(self, func: Callable[[int, int, Any], Any], param: Any = None) -> None:
        """Call ``func(width, height, param)`` when the window is resized."""
        self._resize_hook = self._make_hook(func, param)

    # -- input and window state ---------------------------------------------

    def is_key_down(self, key: int) -> bool:
        return self.backend.is_key_down(key)

    def is_mouse_down(self, button: int) -> bool:
        return self.backend.is_mouse_down(button)

    def get_mouse_pos(self) -> tuple[int, int]:
        return self.backend.get_mouse_pos()

    def set_mouse_pos(self, x: int, y: int) -> None:
        self.backend.set_mouse_pos(x, y)

    def get_window_pos(self) -> tuple[int, int]:
        return self.backend.get_window_pos()

    def set_window_pos(self, x: int, y: int) -> None:
        self.backend.set_window_pos(x, y)

    def set_window_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.backend.set_window_size(width, height)

    def set_window_limit(self, min_w: int, min_h: int, max_w: int, max_h: int) -> None:
        self.backend.set_window_limit(min_w, min_h, max_w, max_h)

    def set_window_title(self, title: str) -> None:
        if title is None:
            raise ValueError("Parameter can't be null")
        self.backend.set_title(title)

    def set_cursor_mode(self, mode: CursorMode) -> None:
        self.backend.set_cursor_mode(mode)

    def get_monitor_size(self, index: int) -> tuple[int, int]:
        return self.backend.monitor_size(index)

    def focus(self) -> None:
        self.backend.focus()

    def get_time(self) -> float:
        return self.backend.get_time()