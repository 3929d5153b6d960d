import dataclasses

import pytest

from cellview.events import (
    ButtonMask,
    ErrorEvent,
    Key,
    KeyEvent,
    MouseAction,
    MouseEvent,
    ResizeEvent,
)


def test_mouse_actions_follow_declared_order():
    expected = [
        "MOVE",
        "LEFT_DOWN",
        "LEFT_UP",
        "LEFT_CLICK",
        "LEFT_DOUBLE_CLICK",
        "MIDDLE_DOWN",
        "MIDDLE_UP",
        "MIDDLE_CLICK",
        "MIDDLE_DOUBLE_CLICK",
        "RIGHT_DOWN",
        "RIGHT_UP",
        "RIGHT_CLICK",
        "RIGHT_DOUBLE_CLICK",
        "SCROLL_UP",
        "SCROLL_DOWN",
        "SCROLL_LEFT",
        "SCROLL_RIGHT",
    ]
    looked_up = [MouseAction(value).name for value in range(len(expected))]
    assert looked_up == expected
    assert MouseAction(3) is MouseAction.LEFT_CLICK
    with pytest.raises(ValueError):
        MouseAction(len(expected))


def test_button_masks_are_distinct_bits():
    flags = [flag for flag in ButtonMask if flag is not ButtonMask.NONE]
    combined = ButtonMask.NONE
    for flag in flags:
        assert combined & flag == ButtonMask.NONE
        combined |= flag
    event = MouseEvent(0, 0, int(combined))
    assert event.buttons == combined
    assert bin(int(event.buttons)).count("1") == len(flags)
    for flag in flags:
        assert event.buttons & flag == flag


def test_mouse_event_position_and_buttons():
    event = MouseEvent(4, 7, ButtonMask.PRIMARY | ButtonMask.WHEEL_UP)
    assert event.position() == (4, 7)
    assert event.buttons & ButtonMask.PRIMARY
    assert not event.buttons & ButtonMask.SECONDARY


def test_mouse_event_button_changes_by_xor():
    before = MouseEvent(0, 0, ButtonMask.PRIMARY)
    after = MouseEvent(0, 0, ButtonMask.PRIMARY | ButtonMask.MIDDLE)
    assert before.buttons ^ after.buttons == ButtonMask.MIDDLE


def test_mouse_event_default_buttons_and_coercion():
    assert MouseEvent(1, 2).buttons == ButtonMask.NONE
    event = MouseEvent(1, 2, int(ButtonMask.SECONDARY))
    assert event.buttons is ButtonMask.SECONDARY


def test_rune_key_event_holds_character():
    event = KeyEvent(Key.RUNE, "q")
    assert event.key is Key.RUNE
    assert event.char == "q"


def test_rune_key_event_requires_single_character():
    with pytest.raises(ValueError):
        KeyEvent(Key.RUNE)
    with pytest.raises(ValueError):
        KeyEvent(Key.RUNE, "ab")


def test_non_rune_key_event_rejects_character():
    with pytest.raises(ValueError):
        KeyEvent(Key.ENTER, "x")
    assert KeyEvent(Key.ENTER).char == ""


def test_key_event_coerces_integer_key():
    event = KeyEvent(int(Key.TAB))
    assert event.key is Key.TAB
    assert event == KeyEvent(Key.TAB)


def test_events_are_immutable():
    event = KeyEvent(Key.ESCAPE)
    with pytest.raises(dataclasses.FrozenInstanceError):
        event.key = Key.ENTER  # type: ignore[misc]
    assert event.key is Key.ESCAPE
    assert event == KeyEvent(Key.ESCAPE)


def test_resize_event_rejects_negative_size():
    assert ResizeEvent(80, 24).width == 80
    with pytest.raises(ValueError):
        ResizeEvent(-1, 5)


def test_error_event_is_raisable():
    error = ErrorEvent("terminal gone")
    assert str(error) == "terminal gone"
    with pytest.raises(ErrorEvent) as caught:
        raise error
    assert caught.value is error
    assert str(caught.value) == "terminal gone"