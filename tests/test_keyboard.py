import pytest

from novex.keyboard import KeyboardDecoder, Layout


def test_default_layout_is_qwerty():
    kb = KeyboardDecoder()
    assert kb.layout() is Layout.QWERTY
    assert kb.feed(0x1E) == "a"
    assert kb.feed(0x10) == "q"


def test_shift_press_and_release():
    kb = KeyboardDecoder()
    assert kb.feed(0x2A) is None
    assert kb.feed(0x1E) == "A"
    assert kb.feed(0x02) == "!"
    assert kb.feed(0xAA) is None
    assert kb.feed(0x1E) == "a"


def test_right_shift():
    kb = KeyboardDecoder()
    kb.feed(0x36)
    assert kb.feed(0x10) == "Q"
    kb.feed(0xB6)
    assert kb.feed(0x10) == "q"


def test_azerty_layout():
    kb = KeyboardDecoder()
    kb.set_layout(1)
    assert kb.layout() is Layout.AZERTY
    assert kb.feed(0x10) == "a"
    assert kb.feed(0x02) == "&"
    kb.feed(0x2A)
    assert kb.feed(0x02) == "1"


@pytest.mark.parametrize("value", [0, 2, 7])
def test_other_layout_values_select_qwerty(value):
    kb = KeyboardDecoder(Layout.AZERTY)
    kb.set_layout(value)
    assert kb.layout() is Layout.QWERTY


def test_release_events_ignored():
    kb = KeyboardDecoder()
    assert kb.feed(0x1E | 0x80) is None


def test_escape():
    kb = KeyboardDecoder()
    assert kb.feed(0x01) == "\x1b"


def test_ctrl_s_and_other_ctrl_combos():
    kb = KeyboardDecoder(Layout.AZERTY)
    kb.feed(0x1D)
    assert kb.feed(0x1F) == "\x13"
    assert kb.feed(0x1E) is None
    kb.feed(0x9D)
    assert kb.feed(0x1F) == "s"


def test_special_keys():
    kb = KeyboardDecoder()
    assert kb.feed(0x1C) == "\n"
    assert kb.feed(0x0E) == "\b"
    assert kb.feed(0x39) == " "


def test_unmapped_scancode():
    kb = KeyboardDecoder()
    assert kb.feed(0x3B) is None


@pytest.mark.parametrize("bad", [-1, 256])
def test_out_of_range_scancode(bad):
    with pytest.raises(ValueError):
        KeyboardDecoder().feed(bad)