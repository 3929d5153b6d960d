"""A box holding a boolean value that can be checked and unchecked."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from cellview.box import Box, InputHandler, MouseHandler, SetFocus
from cellview.events import Key, KeyEvent, MouseAction, MouseEvent
from cellview.screen import Align, Screen, Style, print_text, text_width

_SECONDARY_TEXT_COLOR = "yellow"
_CONTRAST_BACKGROUND_COLOR = "blue"
_PRIMARY_TEXT_COLOR = "white"


def _print_with_style(
    screen: Screen, text: str, x: int, y: int, width: int, style: Style
) -> int:
    """Print ``text`` left-aligned in ``style`` into at most ``width`` cells.

    Returns the number of cells used.
    """
    position = x
    limit = x + width
    last_cell: tuple[int, int] | None = None
    for char in text:
        char_width = text_width(char)
        if char_width == 0:
            if last_cell is not None:
                previous, cell_style = screen.get_content(*last_cell)
                screen.set_content(*last_cell, previous + char, cell_style)
            continue
        if position + char_width > limit:
            break
        screen.set_content(position, y, char, style)
        for extra in range(1, char_width):
            screen.set_content(position + extra, y, "", style)
        last_cell = (position, y)
        position += char_width
    return position - x


class Checkbox(Box):
    """A labelled field showing ``checked_string`` when checked."""

    def __init__(self) -> None:
        super().__init__()
        self.checked = False
        self.label = ""
        self.label_width = 0
        self.label_color: str | None = _SECONDARY_TEXT_COLOR
        self.field_background_color: str | None = _CONTRAST_BACKGROUND_COLOR
        self.field_text_color: str | None = _PRIMARY_TEXT_COLOR
        self.checked_string = "X"
        self.changed_func: Callable[[bool], None] | None = None
        self.done_func: Callable[[Key], None] | None = None
        self.finished_func: Callable[[Key], None] | None = None

    def set_form_attributes(
        self,
        label_width: int,
        label_color: str | None,
        bg_color: str | None,
        field_text_color: str | None,
        field_bg_color: str | None,
    ) -> Checkbox:
        """Apply the attributes a form shares between its items."""
        self.label_width = label_width
        self.label_color = label_color
        self._background_color = bg_color
        self.field_text_color = field_text_color
        self.field_background_color = field_bg_color
        return self

    def field_width(self) -> int:
        """Return the width of the input area."""
        return 1

    def _toggle(self) -> None:
        self.checked = not self.checked
        if self.changed_func is not None:
            self.changed_func(self.checked)

    def draw(self, screen: Screen) -> None:
        """Draw the label and the check field."""
        self.draw_for_subclass(screen, self)

        x, y, width, height = self.inner_rect()
        right_limit = x + width
        if height < 1 or right_limit <= x:
            return

        if self.label_width > 0:
            label_width = min(self.label_width, right_limit - x)
            print_text(screen, self.label, x, y, label_width, Align.LEFT, self.label_color)
            x += label_width
        else:
            _, drawn = print_text(
                screen, self.label, x, y, right_limit - x, Align.LEFT, self.label_color
            )
            x += drawn

        if self.has_focus():
            style = Style(
                foreground=self.field_background_color,
                background=self.field_text_color,
            )
        else:
            style = Style(
                foreground=self.field_text_color,
                background=self.field_background_color,
            )
        box_width = text_width(self.checked_string)
        shown = self.checked_string if self.checked else " " * box_width
        _print_with_style(screen, shown, x, y, box_width, style)

    def input_handler(self) -> InputHandler:
        """Space and Enter toggle; Tab, Backtab and Escape finish."""

        def handle(event: KeyEvent, set_focus: SetFocus) -> None:
            key = event.key
            if key in (Key.RUNE, Key.ENTER):
                if key is Key.RUNE and event.char != " ":
                    return
                self._toggle()
            elif key in (Key.TAB, Key.BACKTAB, Key.ESCAPE):
                if self.done_func is not None:
                    self.done_func(key)
                if self.finished_func is not None:
                    self.finished_func(key)

        return self.wrap_input_handler(handle)

    def mouse_handler(self) -> MouseHandler:
        """A left click on the first content row focuses and toggles."""

        def handle(
            action: MouseAction, event: MouseEvent, set_focus: SetFocus
        ) -> tuple[bool, Any]:
            x, y = event.position()
            _, rect_y, _, _ = self.inner_rect()
            if not self.in_rect(x, y):
                return False, None
            if action == MouseAction.LEFT_CLICK and y == rect_y:
                set_focus(self)
                self._toggle()
                return True, None
            return False, None

        return self.wrap_mouse_handler(handle)