import pytest

from cellview.button import Button
from cellview.events import Key, KeyEvent, MouseAction, MouseEvent
from cellview.screen import MemoryScreen, text_width


def _no_focus(_primitive):
    pass


def test_default_rect_fits_label():
    button = Button("Save")
    assert button.get_rect() == (0, 0, text_width("Save") + 4, 1)
    assert button.label == "Save"


def test_enter_selects():
    button = Button("Go")
    calls = []
    button.selected_func = lambda: calls.append("selected")
    button.input_handler()(KeyEvent(Key.ENTER), _no_focus)
    assert calls == ["selected"]


@pytest.mark.parametrize("key", [Key.TAB, Key.BACKTAB, Key.ESCAPE])
def test_leaving_keys_call_exit(key):
    button = Button("Go")
    exits = []
    button.exit_func = exits.append
    button.input_handler()(KeyEvent(key), _no_focus)
    assert exits == [key]


def test_other_keys_do_nothing():
    button = Button("Go")
    calls = []
    button.selected_func = lambda: calls.append("selected")
    button.exit_func = calls.append
    button.input_handler()(KeyEvent(Key.RUNE, "x"), _no_focus)
    button.input_handler()(KeyEvent(Key.DOWN), _no_focus)
    assert calls == []


def test_input_capture_blocks_enter():
    button = Button("Go")
    calls = []
    button.selected_func = lambda: calls.append("selected")
    button.input_capture = lambda event: None
    button.input_handler()(KeyEvent(Key.ENTER), _no_focus)
    assert calls == []


def test_click_inside_focuses_and_selects():
    button = Button("Go")
    calls = []
    focused = []
    button.selected_func = lambda: calls.append("selected")
    result = button.mouse_handler()(MouseAction.LEFT_CLICK, MouseEvent(1, 0), focused.append)
    assert result == (True, None)
    assert focused == [button]
    assert calls == ["selected"]


def test_mouse_outside_or_other_action_ignored():
    button = Button("Go")
    calls = []
    button.selected_func = lambda: calls.append("selected")
    handler = button.mouse_handler()
    assert handler(MouseAction.LEFT_CLICK, MouseEvent(1, 5), _no_focus) == (False, None)
    assert handler(MouseAction.MOVE, MouseEvent(1, 0), _no_focus) == (False, None)
    assert calls == []


def test_draw_centres_label():
    screen = MemoryScreen(10, 1)
    button = Button("OK")
    button.set_rect(0, 0, 10, 1)
    button.draw(screen)
    row = screen.row_text(0)
    assert row.strip() == "OK"
    assert row.index("OK") == (10 - 2) // 2
    _, style = screen.get_content(row.index("O"), 0)
    assert style.foreground == button.label_color
    assert style.background == button.background_color


def test_focused_draw_uses_activated_colors_and_restores():
    screen = MemoryScreen(10, 3)
    button = Button("OK")
    button.set_rect(0, 0, 10, 3)
    button.border = True
    original_background = button.background_color
    original_border = button.border_color
    button.focus(_no_focus)
    button.draw(screen)
    column = screen.row_text(1).index("O")
    _, style = screen.get_content(column, 1)
    assert style.foreground == button.label_color_activated
    assert style.background == button.background_color_activated
    _, corner = screen.get_content(0, 0)
    assert corner.foreground == button.label_color_activated
    assert button.background_color == original_background
    assert button.border_color == original_border