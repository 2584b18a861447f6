"""Bitmap-based physical page allocator fed by the Multiboot memory map."""

from __future__ import annotations

from dataclasses import dataclass, field

PAGE_SIZE = 4096
MAX_PAGES = 32768
_LOW_RESERVED_PAGES = 256
_KERNEL_RESERVED_PAGES = 512
_DEFAULT_MEMORY_KB = 16 * 1024
_FLAG_MEMORY = 1 << 0
_FLAG_MMAP = 1 << 6
_U32 = 0xFFFFFFFF


class OutOfMemoryError(MemoryError):
    """Raised when no free page is left."""


@dataclass(frozen=True)
class MemoryMapEntry:
    """One region of the Multiboot memory map; type 1 is available RAM."""

    addr: int
    length: int
    type: int = 1


@dataclass(frozen=True)
class MultibootInfo:
    """The Multiboot information fields the allocator uses."""

    flags: int = 0
    mem_lower: int = 0
    mem_upper: int = 0
    memory_map: tuple[MemoryMapEntry, ...] = field(default_factory=tuple)


class PhysicalMemoryManager:
    """Tracks used and free 4 KiB pages."""

    def __init__(self, mbi: MultibootInfo | None = None) -> None:
        self._used = bytearray(b"\x01") * MAX_PAGES

        if mbi is not None and mbi.flags & _FLAG_MEMORY:
            self._total_mem_kb = mbi.mem_upper + 1024
        else:
            self._total_mem_kb = _DEFAULT_MEMORY_KB

        self._total_pages = min(self._total_mem_kb // (PAGE_SIZE // 1024), MAX_PAGES)

        if mbi is not None and mbi.flags & _FLAG_MMAP:
            for entry in mbi.memory_map:
                self._release_region(entry)
        else:
            for page in range(_KERNEL_RESERVED_PAGES, self._total_pages):
                self._used[page] = 0

        self._used_count = sum(self._used[: self._total_pages])

    def _release_region(self, entry: MemoryMapEntry) -> None:
        if entry.type != 1 or entry.addr >> 32:
            return
        start = entry.addr & _U32
        end = (start + (entry.length & _U32)) & _U32
        if start & (PAGE_SIZE - 1):
            start = (start + PAGE_SIZE - 1) & ~(PAGE_SIZE - 1) & _U32
        first = max(start // PAGE_SIZE, _LOW_RESERVED_PAGES)
        last = min(end // PAGE_SIZE, self._total_pages)
        for page in range(first, last):
            self._used[page] = 0

    def alloc_page(self) -> int:
        """Mark the lowest free page used and return its physical address."""
        page = self._used.find(0, 0, self._total_pages)
        if page < 0:
            raise OutOfMemoryError("no free physical page")
        self._used[page] = 1
        self._used_count += 1
        return page * PAGE_SIZE

    def free_page(self, addr: int) -> None:
        """Release the page holding ``addr``; unknown or free pages are ignored."""
        page = addr // PAGE_SIZE
        if 0 <= page < self._total_pages and self._used[page]:
            self._used[page] = 0
            self._used_count -= 1

    def total_pages(self) -> int:
        return self._total_pages

    def used_pages(self) -> int:
        return self._used_count

    def free_pages(self) -> int:
        return self._total_pages - self._used_count

    def total_memory_kb(self) -> int:
        return self._total_mem_kb