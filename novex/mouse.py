"""Decoding of 3-byte PS/2 mouse packets into a clamped pointer position."""

from __future__ import annotations

DEFAULT_WIDTH = 1024
DEFAULT_HEIGHT = 768

_STATUS_MOUSE_DATA = 0x20
_HEADER_ALWAYS_SET = 0x08
_HEADER_X_SIGN = 0x10
_HEADER_Y_SIGN = 0x20
_BUTTON_MASK = 0x07
_SPEED = 2


def _int8(value: int) -> int:
    return value - 0x100 if value & 0x80 else value


def _int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _delta(raw: int, negative: bool) -> int:
    delta = _int8(raw)
    if negative:
        delta = _int32(delta | 0xFFFFFF00)
    return delta


class MouseDecoder:
    """Assembles packets byte by byte and tracks position and buttons."""

    def __init__(self, max_x: int = DEFAULT_WIDTH, max_y: int = DEFAULT_HEIGHT) -> None:
        self._cycle = 0
        self._packet = [0, 0, 0]
        self._buttons = 0
        self._bound_x = max_x
        self._bound_y = max_y
        self._x = max_x // 2
        self._y = max_y // 2

    def set_bounds(self, max_x: int, max_y: int) -> None:
        """Set the screen size and move the pointer to its centre."""
        self._bound_x = max_x
        self._bound_y = max_y
        self._x = max_x // 2
        self._y = max_y // 2

    def feed(self, status: int, data: int) -> bool:
        """Take one byte read from the controller; True when a packet completed.

        Bytes whose status lacks the mouse-data bit are ignored.
        """
        if not 0 <= data <= 0xFF:
            raise ValueError(f"byte out of range: {data}")
        if not status & _STATUS_MOUSE_DATA:
            return False

        if self._cycle == 0:
            self._packet[0] = data
            if data & _HEADER_ALWAYS_SET:
                self._cycle = 1
            return False
        if self._cycle == 1:
            self._packet[1] = data
            self._cycle = 2
            return False

        self._packet[2] = data
        self._cycle = 0
        self._apply_packet()
        return True

    def _apply_packet(self) -> None:
        header, raw_dx, raw_dy = self._packet
        self._buttons = header & _BUTTON_MASK
        dx = _delta(raw_dx, bool(header & _HEADER_X_SIGN)) * _SPEED
        dy = _delta(raw_dy, bool(header & _HEADER_Y_SIGN)) * _SPEED

        self._x += dx
        self._y -= dy

        self._x = max(self._x, 0)
        self._y = max(self._y, 0)
        if self._x >= self._bound_x:
            self._x = self._bound_x - 1
        if self._y >= self._bound_y:
            self._y = self._bound_y - 1

    def x(self) -> int:
        return self._x

    def y(self) -> int:
        return self._y

    def buttons(self) -> int:
        return self._buttons