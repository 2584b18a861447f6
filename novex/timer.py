"""Programmable interval timer: divisor computation and tick counting."""

from __future__ import annotations

PIT_FREQUENCY = 1193182
PIT_CHANNEL0 = 0x40
PIT_COMMAND = 0x43
_RATE_GENERATOR = 0x36
_U32 = 0xFFFFFFFF


def pit_divisor(frequency: int) -> int:
    """Divisor that makes channel 0 fire ``frequency`` times per second."""
    if frequency <= 0:
        raise ValueError(f"frequency must be positive: {frequency}")
    return PIT_FREQUENCY // frequency


class PitTimer:
    """Counts timer interrupts at a fixed frequency."""

    def __init__(self, frequency: int) -> None:
        self.divisor = pit_divisor(frequency)
        self.frequency = frequency
        self._ticks = 0

    def tick(self) -> None:
        """Record one timer interrupt."""
        self._ticks = (self._ticks + 1) & _U32

    def ticks(self) -> int:
        return self._ticks

    def uptime_seconds(self) -> int:
        return self._ticks // self.frequency

    def command_bytes(self) -> bytes:
        """Mode byte for the command port, then the divisor low and high bytes."""
        return bytes(
            [_RATE_GENERATOR, self.divisor & 0xFF, (self.divisor >> 8) & 0xFF]
        )