"""Screen abstraction, cell styles and text printing."""

from __future__ import annotations

import abc
import dataclasses
import enum
import queue
from typing import Any

import wcwidth


class Align(enum.IntEnum):
    """Horizontal text alignment."""

    LEFT = 0
    CENTER = 1
    RIGHT = 2


class AttrMask(enum.IntFlag):
    """Text attributes of a screen cell."""

    NONE = 0
    BOLD = enum.auto()
    BLINK = enum.auto()
    REVERSE = enum.auto()
    UNDERLINE = enum.auto()
    DIM = enum.auto()
    ITALIC = enum.auto()
    STRIKETHROUGH = enum.auto()


@dataclasses.dataclass(frozen=True)
class Style:
    """The look of a cell. Colours are names or "#rrggbb"; None is default."""

    foreground: str | None = None
    background: str | None = None
    attributes: AttrMask = AttrMask.NONE

    def with_foreground(self, color: str | None) -> Style:
        return dataclasses.replace(self, foreground=color)

    def with_background(self, color: str | None) -> Style:
        return dataclasses.replace(self, background=color)

    def with_attributes(self, attributes: AttrMask) -> Style:
        return dataclasses.replace(self, attributes=AttrMask(attributes))


class Screen(abc.ABC):
    """A grid of character cells that primitives draw on."""

    @abc.abstractmethod
    def init(self) -> None: ...

    @abc.abstractmethod
    def fini(self) -> None: ...

    @abc.abstractmethod
    def size(self) -> tuple[int, int]: ...

    @abc.abstractmethod
    def set_content(self, x: int, y: int, char: str, style: Style) -> None: ...

    @abc.abstractmethod
    def get_content(self, x: int, y: int) -> tuple[str, Style]: ...

    @abc.abstractmethod
    def clear(self) -> None: ...

    @abc.abstractmethod
    def show(self) -> None: ...

    @abc.abstractmethod
    def sync(self) -> None: ...

    @abc.abstractmethod
    def post_event(self, event: Any) -> None: ...

    @abc.abstractmethod
    def poll_event(self) -> Any: ...

    @abc.abstractmethod
    def enable_mouse(self) -> None: ...

    @abc.abstractmethod
    def disable_mouse(self) -> None: ...

    @abc.abstractmethod
    def hide_cursor(self) -> None: ...

    @abc.abstractmethod
    def suspend(self) -> None: ...

    @abc.abstractmethod
    def resume(self) -> None: ...


_BLANK = (" ", Style())


class MemoryScreen(Screen):
    """A screen kept in memory, fed with events through ``post_event``."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("screen dimensions must not be negative")
        self._width = width
        self._height = height
        self._cells: list[list[tuple[str, Style]]] = []
        self._events: queue.Queue[Any] = queue.Queue()
        self.initialized = False
        self.finalized = False
        self.mouse_enabled = False
        self.cursor_visible = True
        self.suspended = False
        self.show_count = 0
        self.sync_count = 0
        self.clear()

    def init(self) -> None:
        self.initialized = True
        self.finalized = False
        self.clear()

    def fini(self) -> None:
        self.finalized = True
        self._events.put(None)

    def size(self) -> tuple[int, int]:
        return self._width, self._height

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def set_content(self, x: int, y: int, char: str, style: Style) -> None:
        """Set one cell; coordinates outside the screen are ignored."""
        if self._inside(x, y):
            self._cells[y][x] = (char, style)

    def get_content(self, x: int, y: int) -> tuple[str, Style]:
        if self._inside(x, y):
            return self._cells[y][x]
        return _BLANK

    def clear(self) -> None:
        self._cells = [[_BLANK] * self._width for _ in range(self._height)]

    def show(self) -> None:
        self.show_count += 1

    def sync(self) -> None:
        self.sync_count += 1

    def post_event(self, event: Any) -> None:
        self._events.put(event)

    def poll_event(self) -> Any:
        """Wait for the next event; None once the screen is finalised."""
        return self._events.get()

    def enable_mouse(self) -> None:
        self.mouse_enabled = True

    def disable_mouse(self) -> None:
        self.mouse_enabled = False

    def hide_cursor(self) -> None:
        self.cursor_visible = False

    def suspend(self) -> None:
        if self.suspended:
            raise RuntimeError("screen is already suspended")
        self.suspended = True

    def resume(self) -> None:
        if not self.suspended:
            raise RuntimeError("screen is not suspended")
        self.suspended = False

    def row_text(self, y: int) -> str:
        """Return the characters of row ``y`` joined into one string."""
        if not 0 <= y < self._height:
            raise IndexError(f"row {y} is outside the screen")
        return "".join(char for char, _ in self._cells[y])


def _char_width(char: str) -> int:
    return max(wcwidth.wcwidth(char), 0)


def text_width(text: str) -> int:
    """Return the number of screen cells ``text`` occupies."""
    return sum(_char_width(char) for char in text)


def print_text(
    screen: Screen,
    text: str,
    x: int,
    y: int,
    width: int,
    align: Align = Align.LEFT,
    color: str | None = None,
) -> tuple[int, int]:
    """Print ``text`` into at most ``width`` cells at (x, y).

    Text that does not fit is cut at the end (left alignment), at the start
    (right alignment) or on both sides (centred). The cell backgrounds are
    kept. Returns the number of characters printed and the width used.
    """
    if width <= 0 or not text:
        return 0, 0

    chars = [(char, _char_width(char)) for char in text]
    total = sum(w for _, w in chars)
    start, end = 0, len(chars)
    if align == Align.RIGHT:
        while total > width:
            total -= chars[start][1]
            start += 1
    elif align == Align.CENTER:
        from_end = True
        while total > width:
            if from_end:
                end -= 1
                total -= chars[end][1]
            else:
                total -= chars[start][1]
                start += 1
            from_end = not from_end
    else:
        while total > width:
            end -= 1
            total -= chars[end][1]

    if align == Align.RIGHT:
        position = x + width - total
    elif align == Align.CENTER:
        position = x + (width - total) // 2
    else:
        position = x

    last_cell: tuple[int, int] | None = None
    for char, char_width in chars[start:end]:
        if char_width == 0:
            if last_cell is not None:
                previous, style = screen.get_content(*last_cell)
                screen.set_content(*last_cell, previous + char, style)
            continue
        _, existing = screen.get_content(position, y)
        style = Style(foreground=color, background=existing.background)
        screen.set_content(position, y, char, style)
        for extra in range(1, char_width):
            screen.set_content(position + extra, y, "", style)
        last_cell = (position, y)
        position += char_width

    return end - start, total