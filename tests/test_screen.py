import pytest

from cellview.screen import (
    Align,
    AttrMask,
    MemoryScreen,
    Style,
    print_text,
    text_width,
)


@pytest.fixture
def screen():
    s = MemoryScreen(10, 3)
    s.init()
    return s


def test_size(screen):
    assert screen.size() == (10, 3)


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        MemoryScreen(-1, 2)


def test_set_and_get_content(screen):
    style = Style(foreground="red", background="blue", attributes=AttrMask.BOLD)
    screen.set_content(2, 1, "Q", style)
    assert screen.get_content(2, 1) == ("Q", style)


def test_out_of_bounds_is_ignored(screen):
    screen.set_content(50, 50, "Z", Style(foreground="red"))
    assert screen.get_content(50, 50) == (" ", Style())
    assert "Z" not in "".join(screen.row_text(row) for row in range(3))


def test_clear_resets_cells(screen):
    screen.set_content(0, 0, "A", Style(foreground="red"))
    screen.clear()
    assert screen.get_content(0, 0) == (" ", Style())


def test_row_text_out_of_range(screen):
    with pytest.raises(IndexError):
        screen.row_text(3)


def test_style_updates_are_copies():
    base = Style()
    changed = base.with_foreground("red").with_background("navy")
    changed = changed.with_attributes(AttrMask.BOLD | AttrMask.UNDERLINE)
    assert base == Style()
    assert changed.foreground == "red"
    assert changed.background == "navy"
    assert changed.attributes & AttrMask.UNDERLINE


def test_text_width_ascii():
    assert text_width("abc") == len("abc")


def test_text_width_wide():
    assert text_width("日本") == 4


def test_print_left(screen):
    assert print_text(screen, "hello", 0, 0, 10) == (5, 5)
    assert screen.row_text(0) == "hello".ljust(10)


def test_print_right(screen):
    print_text(screen, "hello", 0, 0, 10, Align.RIGHT)
    assert screen.row_text(0) == "hello".rjust(10)


def test_print_center_is_balanced(screen):
    print_text(screen, "hello", 0, 0, 10, Align.CENTER)
    row = screen.row_text(0)
    left = len(row) - len(row.lstrip())
    right = len(row) - len(row.rstrip())
    assert row.strip() == "hello"
    assert abs(left - right) <= 1


def test_print_truncates_left_aligned(screen):
    assert print_text(screen, "abcdef", 0, 0, 3) == (3, 3)
    assert screen.row_text(0)[:3] == "abc"


def test_print_truncates_right_aligned(screen):
    assert print_text(screen, "abcdef", 0, 0, 3, Align.RIGHT) == (3, 3)
    assert screen.row_text(0)[:3] == "def"


def test_print_truncates_centered(screen):
    printed, drawn = print_text(screen, "abcdef", 0, 0, 3, Align.CENTER)
    assert (printed, drawn) == (3, 3)
    assert screen.row_text(0)[:3] in "abcdef"


def test_print_zero_width(screen):
    assert print_text(screen, "abc", 0, 0, 0) == (0, 0)
    assert screen.row_text(0).strip() == ""


def test_print_wide_characters(screen):
    printed, drawn = print_text(screen, "日本", 1, 2, 10)
    assert (printed, drawn) == (2, text_width("日本"))
    assert screen.row_text(2).strip() == "日本"


def test_print_sets_color_and_keeps_background(screen):
    screen.set_content(0, 1, " ", Style(background="navy"))
    print_text(screen, "x", 0, 1, 5, Align.LEFT, "yellow")
    char, style = screen.get_content(0, 1)
    assert char == "x"
    assert style.foreground == "yellow"
    assert style.background == "navy"


def test_events_are_polled_in_order(screen):
    screen.post_event("first")
    screen.post_event("second")
    assert screen.poll_event() == "first"
    assert screen.poll_event() == "second"


def test_fini_ends_polling(screen):
    screen.fini()
    assert screen.finalized
    assert screen.poll_event() is None


def test_mouse_toggle(screen):
    screen.enable_mouse()
    assert screen.mouse_enabled
    screen.disable_mouse()
    assert not screen.mouse_enabled


def test_hide_cursor(screen):
    screen.hide_cursor()
    assert screen.cursor_visible is False


def test_show_and_sync_are_counted(screen):
    screen.show()
    screen.show()
    screen.sync()
    assert (screen.show_count, screen.sync_count) == (2, 1)


def test_suspend_twice_fails(screen):
    screen.suspend()
    with pytest.raises(RuntimeError):
        screen.suspend()
    screen.resume()
    assert screen.suspended is False


def test_resume_without_suspend_fails(screen):
    with pytest.raises(RuntimeError):
        screen.resume()