"""Window backends: input events, window state and presenting frames."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Iterable

from .images import DrawCall


class _Actions:
    RELEASE: ClassVar[int] = 0
    PRESS: ClassVar[int] = 1
    REPEAT: ClassVar[int] = 2


@dataclass(frozen=True)
class KeyEvent(_Actions):
    """A key was pressed, released or repeated."""

    key: int
    action: int
    scancode: int = 0
    mods: int = 0


@dataclass(frozen=True)
class MouseEvent(_Actions):
    """A mouse button was pressed or released."""

    button: int
    action: int
    mods: int = 0


@dataclass(frozen=True)
class ScrollEvent:
    """The scroll wheel moved."""

    xoffset: float
    yoffset: float


@dataclass(frozen=True)
class CursorEvent:
    """The cursor moved to a new position in the window."""

    x: float
    y: float


@dataclass(frozen=True)
class ResizeEvent:
    """The window was resized."""

    width: int
    height: int


@dataclass(frozen=True)
class CloseEvent:
    """The user asked for the window to close."""


class CursorMode(Enum):
    """How the cursor behaves over the window."""

    NORMAL = "normal"
    HIDDEN = "hidden"
    DISABLED = "disabled"


def _check_monitor_index(index: int) -> None:
    if index < 0:
        raise ValueError("Index out of bounds")


def _clamp(value: int, low: int, high: int) -> int:
    if low >= 0:
        value = max(value, low)
    if high >= 0:
        value = min(value, high)
    return value


class HeadlessBackend:
    """A backend with no real window; events are fed in by hand."""

    def __init__(self, monitors: Iterable[tuple[int, int]] = ((1920, 1080),)) -> None:
        self.monitors = list(monitors)
        self.width = 0
        self.height = 0
        self.title = ""
        self.resizable = False
        self.fullscreen = False
        self.is_open = False
        self.focused = False
        self.cursor_mode = CursorMode.NORMAL
        self.frames = 0
        self.last_frame: list[DrawCall] = []
        self._closing = False
        self._queue: list[object] = []
        self._keys: set[int] = set()
        self._buttons: set[int] = set()
        self._mouse = (0.0, 0.0)
        self._position = (0, 0)
        self._limits = (-1, -1, -1, -1)
        self._start = time.monotonic()

    def open(self, width: int, height: int, title: str, resize: bool, fullscreen: bool) -> None:
        self.width, self.height = width, height
        self.title = title
        self.resizable = resize
        self.fullscreen = fullscreen
        self.is_open = True
        self._closing = False
        self._start = time.monotonic()

    def should_close(self) -> bool:
        return self._closing

    def request_close(self) -> None:
        self._closing = True

    def push_event(self, event: object) -> None:
        """Queue an event to be delivered by the next ``poll_events``."""
        self._queue.append(event)

    def poll_events(self) -> list[object]:
        events, self._queue = self._queue, []
        for event in events:
            if isinstance(event, KeyEvent):
                if event.action == KeyEvent.RELEASE:
                    self._keys.discard(event.key)
                else:
                    self._keys.add(event.key)
            elif isinstance(event, MouseEvent):
                if event.action == MouseEvent.RELEASE:
                    self._buttons.discard(event.button)
                else:
                    self._buttons.add(event.button)
            elif isinstance(event, CursorEvent):
                self._mouse = (event.x, event.y)
            elif isinstance(event, ResizeEvent):
                self._apply_size(event.width, event.height)
            elif isinstance(event, CloseEvent):
                self._closing = True
        return events

    def present(self, draws: Iterable[DrawCall]) -> None:
        self.last_frame = list(draws)
        self.frames += 1

    def get_time(self) -> float:
        return time.monotonic() - self._start

    def is_key_down(self, key: int) -> bool:
        return key in self._keys

    def is_mouse_down(self, button: int) -> bool:
        return button in self._buttons

    def get_mouse_pos(self) -> tuple[int, int]:
        return int(self._mouse[0]), int(self._mouse[1])

    def set_mouse_pos(self, x: int, y: int) -> None:
        self._mouse = (float(x), float(y))

    def get_window_pos(self) -> tuple[int, int]:
        return self._position

    def set_window_pos(self, x: int, y: int) -> None:
        self._position = (x, y)

    def get_window_size(self) -> tuple[int, int]:
        return self.width, self.height

    def _apply_size(self, width: int, height: int) -> None:
        min_w, min_h, max_w, max_h = self._limits
        self.width = _clamp(width, min_w, max_w)
        self.height = _clamp(height, min_h, max_h)

    def set_window_size(self, width: int, height: int) -> None:
        self._apply_size(width, height)

    def set_window_limit(self, min_w: int, min_h: int, max_w: int, max_h: int) -> None:
        self._limits = (min_w, min_h, max_w, max_h)
        self._apply_size(self.width, self.height)

    def set_title(self, title: str) -> None:
        self.title = title

    def set_cursor_mode(self, mode: CursorMode) -> None:
        self.cursor_mode = CursorMode(mode)

    def monitor_size(self, index: int) -> tuple[int, int]:
        _check_monitor_index(index)
        if index >= len(self.monitors):
            return 0, 0
        return self.monitors[index]

    def focus(self) -> None:
        self.focused = True

    def close(self) -> None:
        self.is_open = False
        self._queue.clear()
        self._keys.clear()
        self._buttons.clear()


class PygameBackend:
    """A backend drawing into a pygame window."""

    _BACKGROUND = (51, 51, 51)

    def __init__(self) -> None:
        self._screen = None
        self._flags = 0
        self._closing = False
        self._position = (0, 0)
        self._limits = (-1, -1, -1, -1)

    @staticmethod
    def _pygame():
        import pygame

        return pygame

    def _window(self):
        try:
            from pygame._sdl2.video import Window

            return Window.from_display_module()
        except (ImportError, AttributeError, Exception):
            return None

    def open(self, width: int, height: int, title: str, resize: bool, fullscreen: bool) -> None:
        pygame = self._pygame()
        pygame.init()
        self._flags = 0
        if resize:
            self._flags |= pygame.RESIZABLE
        if fullscreen:
            self._flags |= pygame.FULLSCREEN
        self._screen = pygame.display.set_mode((width, height), self._flags)
        pygame.display.set_caption(title)
        self._closing = False

    def should_close(self) -> bool:
        return self._closing

    def request_close(self) -> None:
        self._closing = True

    def poll_events(self) -> list[object]:
        pygame = self._pygame()
        events: list[object] = []
        for raw in pygame.event.get():
            if raw.type == pygame.QUIT:
                self._closing = True
                events.append(CloseEvent())
            elif raw.type in (pygame.KEYDOWN, pygame.KEYUP):
                action = KeyEvent.PRESS if raw.type == pygame.KEYDOWN else KeyEvent.RELEASE
                events.append(KeyEvent(raw.key, action, getattr(raw, "scancode", 0), raw.mod))
            elif raw.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
                if raw.button in (4, 5):
                    continue
                action = MouseEvent.PRESS if raw.type == pygame.MOUSEBUTTONDOWN else MouseEvent.RELEASE
                events.append(MouseEvent(raw.button - 1, action, pygame.key.get_mods()))
            elif raw.type == pygame.MOUSEWHEEL:
                events.append(ScrollEvent(float(raw.x), float(raw.y)))
            elif raw.type == pygame.MOUSEMOTION:
                events.append(CursorEvent(float(raw.pos[0]), float(raw.pos[1])))
            elif raw.type == pygame.VIDEORESIZE:
                self.set_window_size(raw.w, raw.h)
                width, height = self.get_window_size()
                events.append(ResizeEvent(width, height))
        return events

    def present(self, draws: Iterable[DrawCall]) -> None:
        pygame = self._pygame()
        self._screen.fill(self._BACKGROUND)
        for call in draws:
            image = call.image
            surface = pygame.image.frombuffer(bytes(image.pixels), (image.width, image.height), "RGBA")
            self._screen.blit(surface, (call.instance.x, call.instance.y))
        pygame.display.flip()

    def get_time(self) -> float:
        return self._pygame().time.get_ticks() / 1000.0

    def is_key_down(self, key: int) -> bool:
        try:
            return bool(self._pygame().key.get_pressed()[key])
        except IndexError:
            return False

    def is_mouse_down(self, button: int) -> bool:
        pressed = self._pygame().mouse.get_pressed(num_buttons=5)
        return 0 <= button < len(pressed) and bool(pressed[button])

    def get_mouse_pos(self) -> tuple[int, int]:
        x, y = self._pygame().mouse.get_pos()
        return int(x), int(y)

    def set_mouse_pos(self, x: int, y: int) -> None:
        self._pygame().mouse.set_pos((x, y))

    def get_window_pos(self) -> tuple[int, int]:
        window = self._window()
        if window is not None:
            self._position = tuple(window.position)
        return self._position

    def set_window_pos(self, x: int, y: int) -> None:
        self._position = (x, y)
        window = self._window()
        if window is not None:
            window.position = (x, y)

    def get_window_size(self) -> tuple[int, int]:
        return self._pygame().display.get_surface().get_size()

    def set_window_size(self, width: int, height: int) -> None:
        min_w, min_h, max_w, max_h = self._limits
        size = (_clamp(width, min_w, max_w), _clamp(height, min_h, max_h))
        self._screen = self._pygame().display.set_mode(size, self._flags)

    def set_window_limit(self, min_w: int, min_h: int, max_w: int, max_h: int) -> None:
        self._limits = (min_w, min_h, max_w, max_h)
        if self._screen is not None:
            self.set_window_size(*self.get_window_size())

    def set_title(self, title: str) -> None:
        self._pygame().display.set_caption(title)

    def set_cursor_mode(self, mode: CursorMode) -> None:
        pygame = self._pygame()
        mode = CursorMode(mode)
        pygame.mouse.set_visible(mode is CursorMode.NORMAL)
        pygame.event.set_grab(mode is CursorMode.DISABLED)

    def monitor_size(self, index: int) -> tuple[int, int]:
        _check_monitor_index(index)
        sizes = self._pygame().display.get_desktop_sizes()
        if index >= len(sizes):
            return 0, 0
        return tuple(sizes[index])

    def focus(self) -> None:
        window = self._window()
        if window is not None:
            window.focus()

    def close(self) -> None:
        pygame = self._pygame()
        pygame.display.quit()
        pygame.quit()
        self._screen = None