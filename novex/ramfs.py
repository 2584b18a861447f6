"""A flat in-memory filesystem with a fixed number of slots."""

from __future__ import annotations

from dataclasses import dataclass

MAX_FILES = 32
MAX_NAME = 32
MAX_FILESIZE = 4096


class RamFSError(Exception):
    """Raised when a RAM filesystem operation cannot be performed."""


@dataclass
class RamFile:
    """One entry of the RAM filesystem: a file or a directory."""

    name: str
    data: bytes = b""
    is_dir: bool = False

    @property
    def size(self) -> int:
        return len(self.data)


class RamFS:
    """Fixed-size table of named files; no nesting."""

    def __init__(self) -> None:
        self._slots: list[RamFile | None] = [None] * MAX_FILES

    def _find(self, name: str) -> int | None:
        for index, entry in enumerate(self._slots):
            if entry is not None and entry.name == name:
                return index
        return None

    def _find_free(self) -> int | None:
        try:
            return self._slots.index(None)
        except ValueError:
            return None

    def write(self, name: str, data: bytes | str) -> None:
        """Create or overwrite a file."""
        payload = data.encode() if isinstance(data, str) else bytes(data)
        if len(payload) > MAX_FILESIZE:
            raise RamFSError(f"file too large: {len(payload)} bytes")
        index = self._find(name)
        if index is None:
            index = self._find_free()
            if index is None:
                raise RamFSError("no free slot")
        self._slots[index] = RamFile(name[: MAX_NAME - 1], payload, False)

    def mkdir(self, name: str) -> None:
        """Create a directory entry."""
        if self._find(name) is not None:
            raise RamFSError(f"already exists: {name}")
        index = self._find_free()
        if index is None:
            raise RamFSError("no free slot")
        self._slots[index] = RamFile(name[: MAX_NAME - 1], b"", True)

    def read(self, name: str) -> bytes:
        """Return the contents of a file."""
        index = self._find(name)
        if index is None:
            raise RamFSError(f"not found: {name}")
        entry = self._slots[index]
        assert entry is not None
        if entry.is_dir:
            raise RamFSError(f"is a directory: {name}")
        return entry.data

    def delete(self, name: str) -> None:
        """Remove a file or directory."""
        index = self._find(name)
        if index is None:
            raise RamFSError(f"not found: {name}")
        self._slots[index] = None

    def list(self) -> list[RamFile]:
        """Return the entries in slot order."""
        return [entry for entry in self._slots if entry is not None]

    def __len__(self) -> int:
        return sum(1 for entry in self._slots if entry is not None)