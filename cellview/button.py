"""A labelled button that triggers an action when selected."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from cellview.box import Box, InputHandler, MouseHandler, SetFocus
from cellview.events import Key, KeyEvent, MouseAction, MouseEvent
from cellview.screen import Align, Screen, print_text, text_width

_CONTRAST_BACKGROUND_COLOR = "blue"
_PRIMARY_TEXT_COLOR = "white"
_INVERSE_TEXT_COLOR = "blue"


class Button(Box):
    """A labelled box that calls ``selected_func`` when chosen."""

    def __init__(self, label: str) -> None:
        super().__init__()
        self.background_color = _CONTRAST_BACKGROUND_COLOR
        self.set_rect(0, 0, text_width(label) + 4, 1)
        self.label = label
        self.label_color: str | None = _PRIMARY_TEXT_COLOR
        self.label_color_activated: str | None = _INVERSE_TEXT_COLOR
        self.background_color_activated: str | None = _PRIMARY_TEXT_COLOR
        self.selected_func: Callable[[], None] | None = None
        self.exit_func: Callable[[Key], None] | None = None

    def draw(self, screen: Screen) -> None:
        """Draw the button, highlighted when it has focus."""
        border_color = self.border_color
        background_color = self.background_color
        focused = self.has_focus()
        if focused:
            self.background_color = self.background_color_activated
            self.border_color = self.label_color_activated
        try:
            self.draw_for_subclass(screen, self)
        finally:
            # Only the plain background is restored; the border keeps its
            # activated background, as the border colour alone is reset.
            self._background_color = background_color
            if focused:
                self.border_color = border_color

        x, y, width, height = self.inner_rect()
        if width > 0 and height > 0:
            color = self.label_color_activated if focused else self.label_color
            print_text(screen, self.label, x, y + height // 2, width, Align.CENTER, color)

    def input_handler(self) -> InputHandler:
        """Enter selects; Tab, Backtab and Escape leave the button."""

        def handle(event: KeyEvent, set_focus: SetFocus) -> None:
            if event.key is Key.ENTER:
                if self.selected_func is not None:
                    self.selected_func()
            elif event.key in (Key.BACKTAB, Key.TAB, Key.ESCAPE):
                if self.exit_func is not None:
                    self.exit_func(event.key)

        return self.wrap_input_handler(handle)

    def mouse_handler(self) -> MouseHandler:
        """A left click inside focuses and selects the button."""

        def handle(
            action: MouseAction, event: MouseEvent, set_focus: SetFocus
        ) -> tuple[bool, Any]:
            if not self.in_rect(*event.position()):
                return False, None
            if action == MouseAction.LEFT_CLICK:
                set_focus(self)
                if self.selected_func is not None:
                    self.selected_func()
                return True, None
            return False, None

        return self.wrap_mouse_handler(handle)