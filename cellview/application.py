"""The top node of a program: owns the screen, the focus and the event loop."""

from __future__ import annotations

import dataclasses
import queue
import threading
import time
from collections.abc import Callable
from typing import Any, Optional

from cellview.events import (
    ButtonMask,
    ErrorEvent,
    Key,
    KeyEvent,
    MouseAction,
    MouseEvent,
    ResizeEvent,
)
from cellview.screen import Screen

QUEUE_SIZE = 100
"""How many events and updates may wait in the queue."""

REDRAW_PAUSE = 0.05
"""The minimum time in seconds between two redraws caused by resizing."""

DOUBLE_CLICK_INTERVAL = 0.5
"""The longest time in seconds between two clicks that makes a double click."""

KeyCapture = Callable[[KeyEvent], Optional[KeyEvent]]
MouseCapture = Callable[
    [Optional[MouseEvent], MouseAction], "tuple[Optional[MouseEvent], MouseAction]"
]

_MOUSE_DOWN_ACTIONS = frozenset(
    {MouseAction.LEFT_DOWN, MouseAction.MIDDLE_DOWN, MouseAction.RIGHT_DOWN}
)

_BUTTON_ACTIONS = (
    (
        ButtonMask.PRIMARY,
        MouseAction.LEFT_DOWN,
        MouseAction.LEFT_UP,
        MouseAction.LEFT_CLICK,
        MouseAction.LEFT_DOUBLE_CLICK,
    ),
    (
        ButtonMask.MIDDLE,
        MouseAction.MIDDLE_DOWN,
        MouseAction.MIDDLE_UP,
        MouseAction.MIDDLE_CLICK,
        MouseAction.MIDDLE_DOUBLE_CLICK,
    ),
    (
        ButtonMask.SECONDARY,
        MouseAction.RIGHT_DOWN,
        MouseAction.RIGHT_UP,
        MouseAction.RIGHT_CLICK,
        MouseAction.RIGHT_DOUBLE_CLICK,
    ),
)

_WHEEL_ACTIONS = (
    (ButtonMask.WHEEL_UP, MouseAction.SCROLL_UP),
    (ButtonMask.WHEEL_DOWN, MouseAction.SCROLL_DOWN),
    (ButtonMask.WHEEL_LEFT, MouseAction.SCROLL_LEFT),
    (ButtonMask.WHEEL_RIGHT, MouseAction.SCROLL_RIGHT),
)


@dataclasses.dataclass
class _QueuedUpdate:
    func: Callable[[], None]
    done: threading.Event | None = None


class Application:
    """Polls the screen for events, routes them to primitives and redraws.

    Attributes ``input_capture``, ``mouse_capture``, ``before_draw_func`` and
    ``after_draw_func`` are optional callbacks that may be set at any time.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._screen: Screen | None = None
        self._focus: Any = None
        self._root: Any = None
        self._root_fullscreen = False
        self._enable_mouse = False
        self.input_capture: KeyCapture | None = None
        self.mouse_capture: MouseCapture | None = None
        self.before_draw_func: Callable[[Screen], bool] | None = None
        self.after_draw_func: Callable[[Screen], None] | None = None
        self._queue: queue.Queue[Any] = queue.Queue(maxsize=QUEUE_SIZE)
        self._screen_replacement: queue.Queue[Screen | None] = queue.Queue(maxsize=1)
        self._loop_thread: threading.Thread | None = None
        self._mouse_capturing: Any = None
        self._last_mouse = (0, 0)
        self._mouse_down = (0, 0)
        self._last_mouse_click: float | None = None
        self._last_mouse_buttons = ButtonMask.NONE

    def set_screen(self, screen: Screen | None) -> Application:
        """Use ``screen``; while running, the current screen is replaced."""
        if screen is None:
            return self
        with self._lock:
            if self._screen is None:
                self._screen = screen
                return self
            old = self._screen
        old.fini()
        self._screen_replacement.put(screen)
        return self

    def enable_mouse(self, enable: bool) -> Application:
        """Switch mouse events on or off."""
        with self._lock:
            if enable != self._enable_mouse and self._screen is not None:
                if enable:
                    self._screen.enable_mouse()
                else:
                    self._screen.disable_mouse()
            self._enable_mouse = enable
        return self

    def run(self) -> None:
        """Run the event loop until ``stop`` is called.

        Raises RuntimeError when no screen was set and re-raises an
        ErrorEvent reported by the screen.
        """
        with self._lock:
            screen = self._screen
            if screen is None:
                raise RuntimeError("no screen has been set")
            screen.init()
            if self._enable_mouse:
                screen.enable_mouse()
        self._loop_thread = threading.current_thread()

        app_error: ErrorEvent | None = None
        poller = threading.Thread(target=self._poll_events, daemon=True)
        redraw_timer: threading.Timer | None = None
        try:
            self._draw()
            poller.start()
            last_redraw: float | None = None
            while True:
                item = self._queue.get()
                if isinstance(item, _QueuedUpdate):
                    try:
                        item.func()
                    finally:
                        if item.done is not None:
                            item.done.set()
                    continue
                event = item
                if event is None:
                    break
                if isinstance(event, KeyEvent):
                    self._handle_key(event)
                elif isinstance(event, ResizeEvent):
                    now = time.monotonic()
                    if last_redraw is not None and now - last_redraw < REDRAW_PAUSE:
                        if redraw_timer is not None:
                            redraw_timer.cancel()
                        redraw_timer = threading.Timer(
                            REDRAW_PAUSE, self._queue.put, args=(event,)
                        )
                        redraw_timer.daemon = True
                        redraw_timer.start()
                    with self._lock:
                        current = self._screen
                    if current is None:
                        continue
                    last_redraw = now
                    current.clear()
                    self._draw()
                elif isinstance(event, MouseEvent):
                    consumed, mouse_down = self._fire_mouse_actions(event)
                    if consumed:
                        self._draw()
                    self._last_mouse_buttons = event.buttons
                    if mouse_down:
                        self._mouse_down = event.position()
                elif isinstance(event, ErrorEvent):
                    app_error = event
                    self.stop()
        except BaseException:
            with self._lock:
                if self._screen is not None:
                    self._screen.fini()
            try:
                self._screen_replacement.put_nowait(None)
            except queue.Full:
                pass
            raise
        finally:
            if redraw_timer is not None:
                redraw_timer.cancel()
            self._loop_thread = None

        poller.join()
        with self._lock:
            self._screen = None
        while not self._screen_replacement.empty():
            self._screen_replacement.get_nowait()
        if app_error is not None:
            raise app_error

    def _poll_events(self) -> None:
        while True:
            with self._lock:
                screen = self._screen
            if screen is None:
                self.queue_event(None)
                return

            event = screen.poll_event()
            if event is not None:
                self.queue_event(event)
                continue

            # The screen was finalised; wait for its successor.
            screen = self._screen_replacement.get()
            if screen is None:
                self.queue_event(None)
                return

            with self._lock:
                self._screen = screen
                enable = self._enable_mouse
            try:
                screen.init()
            except Exception as exc:  # reported through the event loop
                self.queue_event(ErrorEvent(str(exc)))
                continue
            if enable:
                screen.enable_mouse()
            self._draw()

    def _handle_key(self, event: KeyEvent) -> None:
        with self._lock:
            root = self._root
            capture = self.input_capture

        redraw = False
        if capture is not None:
            captured = capture(event)
            if captured is None:
                self._draw()
                return
            event = captured
            redraw = True

        if event.key is Key.CTRL_C:
            self.stop()
            return

        if root is not None and root.has_focus():
            handler = root.input_handler()
            if handler is not None:
                handler(event, self.set_focus)
                redraw = True

        if redraw:
            self._draw()

    def _fire_mouse_actions(self, event: MouseEvent) -> tuple[bool, bool]:
        """Derive mouse actions from ``event`` and hand them to primitives.

        Returns whether any action was consumed and whether a button went down.
        """
        consumed = False
        mouse_down = False
        target: Any = None
        current: MouseEvent | None = event

        def fire(action: MouseAction) -> None:
            nonlocal consumed, mouse_down, target, current
            if action in _MOUSE_DOWN_ACTIONS:
                mouse_down = True

            if self.mouse_capture is not None:
                current, action = self.mouse_capture(current, action)
                if current is None:
                    consumed = True
                    return

            if self._mouse_capturing is not None:
                primitive = self._mouse_capturing
                target = self._mouse_capturing
            elif target is not None:
                primitive = target
            else:
                primitive = self._root

            capturing = None
            if primitive is not None:
                handler = primitive.mouse_handler()
                if handler is not None:
                    was_consumed, capturing = handler(action, current, self.set_focus)
                    if was_consumed:
                        consumed = True
            self._mouse_capturing = capturing

        position = event.position()
        buttons = event.buttons
        click_moved = position != self._mouse_down
        changes = buttons ^ self._last_mouse_buttons

        if position != self._last_mouse:
            fire(MouseAction.MOVE)
            self._last_mouse = position

        for button, down, up, click, double_click in _BUTTON_ACTIONS:
            if not changes & button:
                continue
            if buttons & button:
                fire(down)
                continue
            fire(up)
            if click_moved:
                continue
            now = time.monotonic()
            last = self._last_mouse_click
            if last is None or last + DOUBLE_CLICK_INTERVAL < now:
                fire(click)
                self._last_mouse_click = time.monotonic()
            else:
                fire(double_click)
                self._last_mouse_click = None

        for button, action in _WHEEL_ACTIONS:
            if buttons & button:
                fire(action)

        return consumed, mouse_down

    def stop(self) -> None:
        """Stop the application, making ``run`` return."""
        with self._lock:
            screen = self._screen
            if screen is None:
                return
            self._screen = None
            screen.fini()
            self._screen_replacement.put(None)

    def suspend(self, func: Callable[[], None]) -> bool:
        """Leave the screen, call ``func`` and come back.

        Returns False, without calling ``func``, when there is no screen or it
        cannot be suspended.
        """
        with self._lock:
            screen = self._screen
        if screen is None:
            return False
        try:
            screen.suspend()
        except Exception:
            return False

        func()

        with self._lock:
            if self._screen is not screen:
                screen.fini()
                if self._screen is None:
                    return True
            else:
                try:
                    screen.resume()
                except Exception:
                    pass
        return True

    def draw(self) -> Application:
        """Redraw the screen during the next update cycle and wait for it."""
        self.queue_update(self._draw)
        return self

    def force_draw(self) -> Application:
        """Redraw the screen immediately."""
        return self._draw()

    def _draw(self) -> Application:
        with self._lock:
            screen = self._screen
            root = self._root
            if screen is None or root is None:
                return self
            if self._root_fullscreen:
                width, height = screen.size()
                root.set_rect(0, 0, width, height)
            before = self.before_draw_func
            if before is not None and before(screen):
                screen.show()
                return self
            root.draw(screen)
            after = self.after_draw_func
            if after is not None:
                after(screen)
            screen.show()
        return self

    def sync(self) -> Application:
        """Resynchronise the whole screen during the next update cycle."""

        def resync() -> None:
            with self._lock:
                screen = self._screen
            if screen is not None:
                screen.sync()

        self._queue.put(_QueuedUpdate(resync))
        return self

    def set_root(self, root: Any, fullscreen: bool) -> Application:
        """Make ``root`` the primitive shown on screen and give it focus."""
        with self._lock:
            self._root = root
            self._root_fullscreen = fullscreen
            if self._screen is not None:
                self._screen.clear()
        self.set_focus(root)
        return self

    def resize_to_full_screen(self, primitive: Any) -> Application:
        """Make ``primitive`` fill the whole screen."""
        with self._lock:
            if self._screen is None:
                raise RuntimeError("no screen has been set")
            width, height = self._screen.size()
        primitive.set_rect(0, 0, width, height)
        return self

    def set_focus(self, primitive: Any) -> Application:
        """Move the keyboard focus to ``primitive``, blurring the previous one."""
        with self._lock:
            if self._focus is not None:
                self._focus.blur()
            self._focus = primitive
            if self._screen is not None:
                self._screen.hide_cursor()
        if primitive is not None:
            primitive.focus(self.set_focus)
        return self

    def get_focus(self) -> Any:
        """Return the primitive that has focus, or None."""
        with self._lock:
            return self._focus

    def queue_update(self, func: Callable[[], None]) -> Application:
        """Run ``func`` in the event loop and wait until it has run.

        Raises RuntimeError when called from the event loop itself, where
        waiting could never end.
        """
        if threading.current_thread() is self._loop_thread:
            raise RuntimeError("queue_update cannot wait inside the event loop")
        done = threading.Event()
        self._queue.put(_QueuedUpdate(func, done))
        done.wait()
        return self

    def queue_update_draw(self, func: Callable[[], None]) -> Application:
        """Like ``queue_update`` but redraw the screen after ``func``."""

        def update() -> None:
            func()
            self._draw()

        return self.queue_update(update)

    def queue_event(self, event: Any) -> Application:
        """Hand ``event`` to the event loop; None ends the loop."""
        self._queue.put(event)
        return self