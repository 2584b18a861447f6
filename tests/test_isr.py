import pytest

from novex.isr import (
    EOI,
    PIC1_COMMAND,
    PIC2_COMMAND,
    CriticalException,
    InterruptController,
    Registers,
    pic_remap_sequence,
)


def test_remap_starts_with_init_command():
    seq = pic_remap_sequence()
    assert seq[0] == (0x20, 0x11)
    assert seq[1] == (0xA0, 0x11)


def test_remap_sets_vector_offsets():
    seq = pic_remap_sequence()
    assert (0x21, 0x20) in seq
    assert (0xA1, 0x28) in seq


def test_remap_unmasks_all_lines_last():
    seq = pic_remap_sequence()
    assert seq[-2:] == [(0x21, 0x00), (0xA1, 0x00)]


@pytest.mark.parametrize("vector", range(32, 40))
def test_every_master_irq_acks_master(vector):
    ctl = InterruptController()
    assert ctl.dispatch(Registers(int_no=vector)) == [(PIC1_COMMAND, EOI)]


@pytest.mark.parametrize("vector", range(40, 48))
def test_every_slave_irq_acks_both(vector):
    ctl = InterruptController()
    assert ctl.dispatch(Registers(int_no=vector)) == [
        (PIC2_COMMAND, EOI),
        (PIC1_COMMAND, EOI),
    ]


def test_master_irq_acks_master_only():
    ctl = InterruptController()
    assert ctl.dispatch(Registers(int_no=33)) == [(PIC1_COMMAND, EOI)]


def test_slave_irq_acks_both():
    ctl = InterruptController()
    assert ctl.dispatch(Registers(int_no=44)) == [
        (PIC2_COMMAND, EOI),
        (PIC1_COMMAND, EOI),
    ]


def test_registered_handler_receives_registers():
    ctl = InterruptController()
    seen = []
    ctl.register_handler(32, seen.append)
    regs = Registers(int_no=32, rip=0x1234)
    ctl.dispatch(regs)
    assert seen == [regs]


def test_handler_replaced():
    ctl = InterruptController()
    calls = []
    ctl.register_handler(33, lambda r: calls.append("old"))
    ctl.register_handler(33, lambda r: calls.append("new"))
    ctl.dispatch(Registers(int_no=33))
    assert calls == ["new"]


def test_unhandled_exception_raises():
    ctl = InterruptController()
    with pytest.raises(CriticalException) as info:
        ctl.dispatch(Registers(int_no=13, rip=0xDEAD, err_code=0x10))
    assert info.value.int_no == 13
    assert info.value.rip == 0xDEAD
    assert info.value.err_code == 0x10
    assert "CRITICAL EXCEPTION: 13" in str(info.value)


def test_handled_exception_does_not_raise():
    ctl = InterruptController()
    seen = []
    ctl.register_handler(3, seen.append)
    assert ctl.dispatch(Registers(int_no=3)) == []
    assert len(seen) == 1


def test_unhandled_non_exception_vector_is_ignored():
    ctl = InterruptController()
    assert ctl.dispatch(Registers(int_no=118)) == []


@pytest.mark.parametrize("vector", [-1, 256])
def test_register_rejects_bad_vector(vector):
    ctl = InterruptController()
    with pytest.raises(ValueError):
        ctl.register_handler(vector, lambda r: None)


def test_dispatch_rejects_bad_vector():
    ctl = InterruptController()
    with pytest.raises(ValueError):
        ctl.dispatch(Registers(int_no=300))