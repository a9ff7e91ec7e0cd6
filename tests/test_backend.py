import pytest

from mlx42.backend import (
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
from mlx42.images import Image, Instance, RenderQueue


@pytest.fixture
def backend():
    b = HeadlessBackend(monitors=[(800, 600), (1024, 768)])
    b.open(32, 24, "TEST", False, False)
    return b


def test_open_sets_window_state(backend):
    assert backend.get_window_size() == (32, 24)
    assert backend.title == "TEST"
    assert backend.should_close() is False


def test_key_press_and_release(backend):
    backend.push_event(KeyEvent(87, KeyEvent.PRESS))
    events = backend.poll_events()
    assert events == [KeyEvent(87, KeyEvent.PRESS)]
    assert backend.is_key_down(87) is True
    backend.push_event(KeyEvent(87, KeyEvent.RELEASE))
    backend.poll_events()
    assert backend.is_key_down(87) is False


def test_poll_drains_queue(backend):
    backend.push_event(ScrollEvent(0.0, 1.0))
    assert len(backend.poll_events()) == 1
    assert backend.poll_events() == []


def test_mouse_buttons(backend):
    backend.push_event(MouseEvent(0, MouseEvent.PRESS))
    backend.poll_events()
    assert backend.is_mouse_down(0) is True
    assert backend.is_mouse_down(1) is False
    backend.push_event(MouseEvent(0, MouseEvent.RELEASE))
    backend.poll_events()
    assert backend.is_mouse_down(0) is False


def test_cursor_event_moves_mouse(backend):
    backend.push_event(CursorEvent(10.7, 5.2))
    backend.poll_events()
    assert backend.get_mouse_pos() == (10, 5)
    backend.set_mouse_pos(3, 4)
    assert backend.get_mouse_pos() == (3, 4)


def test_close_event_and_request(backend):
    backend.push_event(CloseEvent())
    backend.poll_events()
    assert backend.should_close() is True
    other = HeadlessBackend()
    other.open(8, 8, "x", False, False)
    other.request_close()
    assert other.should_close() is True


def test_resize_respects_limits(backend):
    backend.set_window_limit(16, 16, 40, 40)
    backend.push_event(ResizeEvent(100, 10))
    backend.poll_events()
    assert backend.get_window_size() == (40, 16)
    backend.set_window_size(20, 30)
    assert backend.get_window_size() == (20, 30)


def test_window_position_and_title(backend):
    backend.set_window_pos(7, 9)
    assert backend.get_window_pos() == (7, 9)
    backend.set_title("renamed")
    assert backend.title == "renamed"


def test_cursor_mode_and_focus(backend):
    backend.set_cursor_mode(CursorMode.DISABLED)
    assert backend.cursor_mode is CursorMode.DISABLED
    backend.focus()
    assert backend.focused is True


def test_monitor_sizes(backend):
    assert backend.monitor_size(1) == (1024, 768)
    assert backend.monitor_size(5) == (0, 0)
    with pytest.raises(ValueError):
        backend.monitor_size(-1)


def test_present_records_frame(backend):
    image = Image(2, 2)
    image.instances.append(Instance(1, 1))
    queue = RenderQueue()
    call = queue.add(image, 0)
    backend.present(queue)
    assert backend.frames == 1
    assert backend.last_frame == [call]


def test_time_is_monotonic(backend):
    first = backend.get_time()
    second = backend.get_time()
    assert 0.0 <= first <= second


def test_close_clears_input(backend):
    backend.push_event(KeyEvent(1, KeyEvent.PRESS))
    backend.poll_events()
    backend.close()
    assert backend.is_open is False
    assert backend.is_key_down(1) is False


def test_pygame_monitor_index_must_be_positive():
    with pytest.raises(ValueError):
        PygameBackend().monitor_size(-1)