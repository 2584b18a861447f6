"""Bochs VBE (BGA) display setup: mode choice, PCI addressing, page mapping."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

VBE_DISPI_IOPORT_INDEX = 0x01CE
VBE_DISPI_IOPORT_DATA = 0x01CF
VBE_DISPI_ID_MIN = 0xB0C0
VBE_DISPI_ID_MAX = 0xB0C5
VBE_DISPI_LFB_ENABLED = 0x40

PCI_CONFIG_ADDRESS = 0xCF8
PCI_CONFIG_DATA = 0xCFC
PCI_ENABLE = 0x80000000
BGA_PCI_IDS = frozenset({0x11111234, 0x040515AD})
FALLBACK_FRAMEBUFFER = 0xFD000000

BYTES_PER_PIXEL = 4
LARGE_PAGE_SIZE = 0x200000
ENTRIES_PER_TABLE = 512
LARGE_PAGE_FLAGS = 0x83


@dataclass(frozen=True)
class DisplayMode:
    """A linear framebuffer mode at 32 bits per pixel."""

    width: int
    height: int
    bpp: int = 32

    @property
    def pitch(self) -> int:
        """Bytes per scan line."""
        return self.width * BYTES_PER_PIXEL

    @property
    def size(self) -> int:
        """Bytes taken by the whole framebuffer."""
        return self.pitch * self.height


_MODES = (
    DisplayMode(1920, 1080),
    DisplayMode(1600, 900),
    DisplayMode(1280, 720),
    DisplayMode(1024, 768),
)
FALLBACK_MODE = DisplayMode(1024, 768)


def pci_config_address(bus: int, slot: int, func: int, offset: int) -> int:
    """Value written to the PCI configuration address port."""
    for name, value, limit in (
        ("bus", bus, 256),
        ("slot", slot, 32),
        ("func", func, 8),
        ("offset", offset, 256),
    ):
        if not 0 <= value < limit:
            raise ValueError(f"{name} out of range: {value}")
    return (bus << 16) | (slot << 11) | (func << 8) | (offset & 0xFC) | PCI_ENABLE


def resolution_candidates(chosen_res_id: int) -> list[DisplayMode]:
    """Modes to try, best first: 1 = Normal, 2 = HD, anything else = FHD."""
    if chosen_res_id == 1:
        start = 3
    elif chosen_res_id == 2:
        start = 2
    else:
        start = 0
    return list(_MODES[start:])


def select_mode(
    chosen_res_id: int, try_mode: Callable[[int, int], tuple[int, int]]
) -> DisplayMode:
    """Program candidate modes until the adapter accepts one.

    ``try_mode(width, height)`` sets a mode and returns the resolution the
    adapter reports back. If none is accepted, 1024x768 is set regardless.
    """
    for mode in resolution_candidates(chosen_res_id):
        if tuple(try_mode(mode.width, mode.height)) == (mode.width, mode.height):
            return mode
    try_mode(FALLBACK_MODE.width, FALLBACK_MODE.height)
    return FALLBACK_MODE


def framebuffer_page_entries(phys_addr: int, size: int) -> tuple[int, list[tuple[int, int]]]:
    """Identity-map a framebuffer with 2 MiB pages.

    Returns the PDPT index and the (page-directory index, entry) pairs to
    write; entries past the end of the directory are dropped.
    """
    if phys_addr < 0 or size < 0:
        raise ValueError("address and size must be non-negative")
    pdpt_index = (phys_addr >> 30) & 0x1FF
    pd_start = (phys_addr >> 21) & 0x1FF
    num_pages = (size + LARGE_PAGE_SIZE - 1) >> 21
    base = phys_addr & ~(LARGE_PAGE_SIZE - 1)
    count = min(num_pages, ENTRIES_PER_TABLE - pd_start)
    entries = [
        (pd_start + i, (base + i * LARGE_PAGE_SIZE) | LARGE_PAGE_FLAGS)
        for i in range(count)
    ]
    return pdpt_index, entries