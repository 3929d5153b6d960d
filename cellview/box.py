"""The basic rectangular primitive with optional border and title."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import Any, Optional

from cellview.events import KeyEvent, MouseAction, MouseEvent
from cellview.screen import Align, AttrMask, Screen, Style, print_text

SetFocus = Callable[[Any], None]
InputHandler = Callable[[KeyEvent, SetFocus], None]
MouseHandler = Callable[[MouseAction, MouseEvent, SetFocus], "tuple[bool, Any]"]
InputCapture = Callable[[KeyEvent], Optional[KeyEvent]]
MouseCapture = Callable[
    [MouseAction, MouseEvent], "tuple[MouseAction, Optional[MouseEvent]]"
]
DrawFunc = Callable[[Screen, int, int, int, int], "tuple[int, int, int, int]"]

_BACKGROUND_COLOR = "black"
_BORDER_COLOR = "white"
_TITLE_COLOR = "white"
_ELLIPSIS = "\u2026"


@dataclasses.dataclass
class BorderSet:
    """The characters used to draw borders, plain and with focus."""

    horizontal: str = "\u2500"
    vertical: str = "\u2502"
    top_left: str = "\u250c"
    top_right: str = "\u2510"
    bottom_left: str = "\u2514"
    bottom_right: str = "\u2518"

    left_t: str = "\u251c"
    right_t: str = "\u2524"
    top_t: str = "\u252c"
    bottom_t: str = "\u2534"
    cross: str = "\u253c"

    horizontal_focus: str = "\u2550"
    vertical_focus: str = "\u2551"
    top_left_focus: str = "\u2554"
    top_right_focus: str = "\u2557"
    bottom_left_focus: str = "\u255a"
    bottom_right_focus: str = "\u255d"


BORDERS = BorderSet()


class Box:
    """An empty rectangle with an optional border and title.

    Every other primitive builds on it.
    """

    def __init__(self) -> None:
        self._x, self._y, self._width, self._height = 0, 0, 15, 10
        self._inner: tuple[int, int, int, int] | None = None
        self._padding = (0, 0, 0, 0)  # top, bottom, left, right
        self._background_color: str | None = _BACKGROUND_COLOR
        self.border_style = Style(
            foreground=_BORDER_COLOR, background=_BACKGROUND_COLOR
        )
        self.dont_clear = False
        self.border = False
        self.title = ""
        self.title_color: str | None = _TITLE_COLOR
        self.title_align = Align.CENTER
        self._has_focus = False
        self.focus_func: Callable[[], None] | None = None
        self.blur_func: Callable[[], None] | None = None
        self.input_capture: InputCapture | None = None
        self.mouse_capture: MouseCapture | None = None
        self.draw_func: DrawFunc | None = None

    @property
    def background_color(self) -> str | None:
        return self._background_color

    @background_color.setter
    def background_color(self, color: str | None) -> None:
        self._background_color = color
        self.border_style = self.border_style.with_background(color)

    @property
    def border_color(self) -> str | None:
        return self.border_style.foreground

    @border_color.setter
    def border_color(self, color: str | None) -> None:
        self.border_style = self.border_style.with_foreground(color)

    @property
    def border_attributes(self) -> AttrMask:
        return self.border_style.attributes

    @border_attributes.setter
    def border_attributes(self, attributes: AttrMask) -> None:
        self.border_style = self.border_style.with_attributes(attributes)

    def set_border_padding(self, top: int, bottom: int, left: int, right: int) -> Box:
        """Set the space between the border and the content."""
        self._padding = (top, bottom, left, right)
        return self

    def set_rect(self, x: int, y: int, width: int, height: int) -> None:
        """Move and resize the box."""
        self._x, self._y, self._width, self._height = x, y, width, height
        self._inner = None

    def get_rect(self) -> tuple[int, int, int, int]:
        """Return (x, y, width, height) of the box."""
        return self._x, self._y, self._width, self._height

    def inner_rect(self) -> tuple[int, int, int, int]:
        """Return the content area without border and padding; never negative."""
        if self._inner is not None:
            return self._inner
        x, y, width, height = self.get_rect()
        if self.border:
            x, y, width, height = x + 1, y + 1, width - 2, height - 2
        top, bottom, left, right = self._padding
        x += left
        y += top
        width = max(width - left - right, 0)
        height = max(height - top - bottom, 0)
        return x, y, width, height

    def in_rect(self, x: int, y: int) -> bool:
        """Tell whether the cell (x, y) lies inside the box."""
        rx, ry, width, height = self.get_rect()
        return rx <= x < rx + width and ry <= y < ry + height

    def wrap_input_handler(self, handler: InputHandler | None) -> InputHandler:
        """Wrap ``handler`` so the input capture sees events first."""

        def wrapped(event: KeyEvent, set_focus: SetFocus) -> None:
            if self.input_capture is not None:
                event = self.input_capture(event)
            if event is not None and handler is not None:
                handler(event, set_focus)

        return wrapped

    def input_handler(self) -> InputHandler:
        """Return a handler that only applies the input capture."""
        return self.wrap_input_handler(None)

    def wrap_mouse_handler(self, handler: MouseHandler | None) -> MouseHandler:
        """Wrap ``handler`` so the mouse capture sees events first."""

        def wrapped(
            action: MouseAction, event: MouseEvent, set_focus: SetFocus
        ) -> tuple[bool, Any]:
            if self.mouse_capture is not None:
                action, event = self.mouse_capture(action, event)
            if event is not None and handler is not None:
                return handler(action, event, set_focus)
            return False, None

        return wrapped

    def mouse_handler(self) -> MouseHandler:
        """Return a handler that focuses the box on a left click inside it."""

        def handle(
            action: MouseAction, event: MouseEvent, set_focus: SetFocus
        ) -> tuple[bool, Any]:
            if action == MouseAction.LEFT_CLICK and self.in_rect(*event.position()):
                set_focus(self)
                return True, None
            return False, None

        return self.wrap_mouse_handler(handle)

    def draw(self, screen: Screen) -> None:
        """Draw the box onto ``screen``."""
        self.draw_for_subclass(screen, self)

    def draw_for_subclass(self, screen: Screen, primitive: Any) -> None:
        """Draw the box frame, taking focus from ``primitive``."""
        x, y, width, height = self.get_rect()
        if width <= 0 or height <= 0:
            return

        if not self.dont_clear:
            background = Style(background=self._background_color)
            for row in range(y, y + height):
                for column in range(x, x + width):
                    screen.set_content(column, row, " ", background)

        if self.border and width >= 2 and height >= 2:
            self._draw_border(screen, primitive.has_focus())

        if self.draw_func is not None:
            self._inner = tuple(self.draw_func(screen, x, y, width, height))
        else:
            self._inner = None
            self._inner = self.inner_rect()

    def _draw_border(self, screen: Screen, focused: bool) -> None:
        x, y, width, height = self.get_rect()
        b = BORDERS
        if focused:
            chars = (
                b.horizontal_focus,
                b.vertical_focus,
                b.top_left_focus,
                b.top_right_focus,
                b.bottom_left_focus,
                b.bottom_right_focus,
            )
        else:
            chars = (
                b.horizontal,
                b.vertical,
                b.top_left,
                b.top_right,
                b.bottom_left,
                b.bottom_right,
            )
        horizontal, vertical, top_left, top_right, bottom_left, bottom_right = chars
        style = self.border_style
        right, bottom = x + width - 1, y + height - 1
        for column in range(x + 1, right):
            screen.set_content(column, y, horizontal, style)
            screen.set_content(column, bottom, horizontal, style)
        for row in range(y + 1, bottom):
            screen.set_content(x, row, vertical, style)
            screen.set_content(right, row, vertical, style)
        screen.set_content(x, y, top_left, style)
        screen.set_content(right, y, top_right, style)
        screen.set_content(x, bottom, bottom_left, style)
        screen.set_content(right, bottom, bottom_right, style)

        if self.title and width >= 4:
            printed, _ = print_text(
                screen, self.title, x + 1, y, width - 2, self.title_align, self.title_color
            )
            if 0 < printed < len(self.title):
                _, cell_style = screen.get_content(x + width - 2, y)
                print_text(
                    screen, _ELLIPSIS, x + width - 2, y, 1, Align.LEFT, cell_style.foreground
                )

    def focus(self, delegate: SetFocus) -> None:
        """Called when the box receives focus."""
        self._has_focus = True
        if self.focus_func is not None:
            self.focus_func()

    def blur(self) -> None:
        """Called when the box loses focus."""
        if self.blur_func is not None:
            self.blur_func()
        self._has_focus = False

    def has_focus(self) -> bool:
        """Tell whether the box has focus."""
        return self._has_focus