"""Interrupt dispatch: PIC remapping, end-of-interrupt and handler table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

PIC1_COMMAND = 0x20
PIC1_DATA = 0x21
PIC2_COMMAND = 0xA0
PIC2_DATA = 0xA1
EOI = 0x20
IRQ_BASE = 32
IRQ_LAST = 47
SLAVE_IRQ_BASE = 40
EXCEPTION_COUNT = 32
VECTOR_COUNT = 256

# Vectors that receive an IDT gate: CPU exceptions, remapped IRQs, vector 118.
GATE_VECTORS = tuple(range(IRQ_LAST + 1)) + (118,)


@dataclass
class Registers:
    """CPU state saved by the interrupt entry stub."""

    rdi: int = 0
    rsi: int = 0
    rbp: int = 0
    rbx: int = 0
    rdx: int = 0
    rcx: int = 0
    rax: int = 0
    r8: int = 0
    r9: int = 0
    r10: int = 0
    r11: int = 0
    r12: int = 0
    r13: int = 0
    r14: int = 0
    r15: int = 0
    int_no: int = 0
    err_code: int = 0
    rip: int = 0
    cs: int = 0
    rflags: int = 0
    rsp: int = 0
    ss: int = 0


Handler = Callable[[Registers], None]


class CriticalException(Exception):
    """An unhandled CPU exception; the machine would halt."""

    def __init__(self, regs: Registers) -> None:
        self.int_no = regs.int_no
        self.rip = regs.rip
        self.err_code = regs.err_code
        super().__init__(
            f"CRITICAL EXCEPTION: {regs.int_no} "
            f"(RIP: 0x{regs.rip:X} ERR: 0x{regs.err_code:X})"
        )


def pic_remap_sequence() -> list[tuple[int, int]]:
    """Port writes that move IRQ 0-15 to vectors 32-47 and unmask them all."""
    return [
        (PIC1_COMMAND, 0x11),
        (PIC2_COMMAND, 0x11),
        (PIC1_DATA, IRQ_BASE),
        (PIC2_DATA, SLAVE_IRQ_BASE),
        (PIC1_DATA, 0x04),
        (PIC2_DATA, 0x02),
        (PIC1_DATA, 0x01),
        (PIC2_DATA, 0x01),
        (PIC1_DATA, 0x00),
        (PIC2_DATA, 0x00),
    ]


def _check_vector(n: int) -> None:
    if not 0 <= n < VECTOR_COUNT:
        raise ValueError(f"interrupt vector out of range: {n}")


class InterruptController:
    """Table of per-vector handlers with PIC acknowledgement."""

    def __init__(self) -> None:
        self._handlers: dict[int, Handler] = {}

    def register_handler(self, n: int, handler: Handler) -> None:
        """Install ``handler`` for vector ``n``, replacing any previous one."""
        _check_vector(n)
        self._handlers[n] = handler

    def dispatch(self, regs: Registers) -> list[tuple[int, int]]:
        """Handle one interrupt; return the end-of-interrupt port writes made.

        Raises CriticalException for a CPU exception with no handler.
        """
        n = regs.int_no
        _check_vector(n)
        acks: list[tuple[int, int]] = []
        if IRQ_BASE <= n <= IRQ_LAST:
            if n >= SLAVE_IRQ_BASE:
                acks.append((PIC2_COMMAND, EOI))
            acks.append((PIC1_COMMAND, EOI))

        handler = self._handlers.get(n)
        if handler is not None:
            handler(regs)
        elif n < EXCEPTION_COUNT:
            raise CriticalException(regs)
        return acks