"""PS/2 scancode set 1 decoding for QWERTY and AZERTY layouts."""

from __future__ import annotations

from enum import IntEnum

ESCAPE = "\x1b"
CTRL_S = "\x13"

_CTRL = 0x1D
_LSHIFT = 0x2A
_RSHIFT = 0x36
_RELEASE = 0x80
_ESC = 0x01


def _table(text: str) -> str:
    return text.ljust(128, "\0")[:128]


_QWERTY = _table(
    "\0\x1b1234567890-"
    "=\b\tqwertyuiop"
    "[]\n\0asdfghjkl"
    ";'`\0\\zxcvbnm,"
    "./\0*\0 \0\0\0\0\0\0\0"
    "\0\0\0\0\0\0789-456"
    "+1230.\0\0\0\0\0\0\0"
)
_QWERTY_SHIFT = _table(
    "\0\x1b!@#$%^&*()_"
    "+\b\tQWERTYUIOP"
    "{}\n\0ASDFGHJKL"
    ':"~\0|ZXCVBNM<'
    ">?\0*\0 \0\0\0\0\0\0\0"
)
_AZERTY = _table(
    "\0\x1b&e\"'(-e_ca)"
    "=\b\tazertyuiop"
    "^$\n\0qsdfghjkl"
    "mu*\0<wxcvbn,;"
    ":!\0*\0 \0\0\0\0\0\0\0"
)
_AZERTY_SHIFT = _table(
    "\0\x1b1234567890_"
    "+\b\tAZERTYUIOP"
    "^$\n\0QSDFGHJKL"
    "M%*\0>WXCVBN?."
    "/!\0*\0 \0\0\0\0\0\0\0"
)


class Layout(IntEnum):
    """Keyboard layouts."""

    QWERTY = 0
    AZERTY = 1


_TABLES = {
    Layout.QWERTY: (_QWERTY, _QWERTY_SHIFT),
    Layout.AZERTY: (_AZERTY, _AZERTY_SHIFT),
}


class KeyboardDecoder:
    """Turns raw scancodes into characters, tracking Ctrl and Shift."""

    def __init__(self, layout: Layout | int = Layout.QWERTY) -> None:
        self._layout = Layout.QWERTY
        self.ctrl_held = False
        self.shift_held = False
        self.set_layout(layout)

    def set_layout(self, layout: Layout | int) -> None:
        """Select AZERTY for 1, QWERTY for anything else."""
        self._layout = Layout.AZERTY if layout == Layout.AZERTY else Layout.QWERTY

    def layout(self) -> Layout:
        return self._layout

    def feed(self, scancode: int) -> str | None:
        """Process one scancode; return the character it produces, if any.

        Escape yields "\\x1b" and Ctrl+S yields "\\x13".
        """
        if not 0 <= scancode <= 0xFF:
            raise ValueError(f"scancode out of range: {scancode}")

        if scancode == _CTRL:
            self.ctrl_held = True
            return None
        if scancode == _CTRL | _RELEASE:
            self.ctrl_held = False
            return None
        if scancode in (_LSHIFT, _RSHIFT):
            self.shift_held = True
            return None
        if scancode in (_LSHIFT | _RELEASE, _RSHIFT | _RELEASE):
            self.shift_held = False
            return None
        if scancode & _RELEASE:
            return None
        if scancode == _ESC:
            return ESCAPE
        if self.ctrl_held:
            return CTRL_S if _QWERTY[scancode] == "s" else None

        normal, shifted = _TABLES[self._layout]
        char = (shifted if self.shift_held else normal)[scancode]
        return None if char == "\0" else char