"""Input events delivered by a screen and the mouse actions derived from them."""

from __future__ import annotations

import dataclasses
import enum


class MouseAction(enum.IntEnum):
    """What the mouse is logically doing."""

    MOVE = 0
    LEFT_DOWN = enum.auto()
    LEFT_UP = enum.auto()
    LEFT_CLICK = enum.auto()
    LEFT_DOUBLE_CLICK = enum.auto()
    MIDDLE_DOWN = enum.auto()
    MIDDLE_UP = enum.auto()
    MIDDLE_CLICK = enum.auto()
    MIDDLE_DOUBLE_CLICK = enum.auto()
    RIGHT_DOWN = enum.auto()
    RIGHT_UP = enum.auto()
    RIGHT_CLICK = enum.auto()
    RIGHT_DOUBLE_CLICK = enum.auto()
    SCROLL_UP = enum.auto()
    SCROLL_DOWN = enum.auto()
    SCROLL_LEFT = enum.auto()
    SCROLL_RIGHT = enum.auto()


class Key(enum.IntEnum):
    """Keys a key event may carry. Control keys use their ASCII codes."""

    CTRL_C = 3
    BACKSPACE = 8
    TAB = 9
    ENTER = 13
    CTRL_N = 14
    CTRL_P = 16
    ESCAPE = 27
    BACKSPACE2 = 127
    RUNE = 256
    UP = enum.auto()
    DOWN = enum.auto()
    RIGHT = enum.auto()
    LEFT = enum.auto()
    HOME = enum.auto()
    END = enum.auto()
    PAGE_UP = enum.auto()
    PAGE_DOWN = enum.auto()
    INSERT = enum.auto()
    DELETE = enum.auto()
    BACKTAB = enum.auto()


class ButtonMask(enum.IntFlag):
    """The mouse buttons and wheel directions active in a mouse event."""

    NONE = 0
    PRIMARY = 1 << 0
    SECONDARY = 1 << 1
    MIDDLE = 1 << 2
    WHEEL_UP = 1 << 8
    WHEEL_DOWN = 1 << 9
    WHEEL_LEFT = 1 << 10
    WHEEL_RIGHT = 1 << 11


@dataclasses.dataclass(frozen=True)
class KeyEvent:
    """A key press. ``char`` holds the typed character for ``Key.RUNE``."""

    key: Key
    char: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", Key(self.key))
        if self.key is Key.RUNE:
            if len(self.char) != 1:
                raise ValueError("a rune key event needs exactly one character")
        elif self.char:
            raise ValueError("only rune key events carry a character")


@dataclasses.dataclass(frozen=True)
class MouseEvent:
    """The mouse position and the buttons held at that moment."""

    x: int
    y: int
    buttons: ButtonMask = ButtonMask.NONE

    def __post_init__(self) -> None:
        object.__setattr__(self, "buttons", ButtonMask(self.buttons))

    def position(self) -> tuple[int, int]:
        """Return the (x, y) cell the mouse is on."""
        return self.x, self.y


@dataclasses.dataclass(frozen=True)
class ResizeEvent:
    """The screen changed its size."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("screen dimensions must not be negative")


class ErrorEvent(Exception):
    """An error reported by the screen; it stops the application."""