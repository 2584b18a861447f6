"""Master Boot Record parsing and creation."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

MBR_SIZE = 512
BOOTSTRAP_SIZE = 446
SIGNATURE = 0xAA55
FAT_PARTITION_TYPES = frozenset({0x04, 0x06, 0x0E, 0x0B, 0x0C})
FAT32_LBA = 0x0B
BOOTABLE = 0x80
PARTITION_START_LBA = 2048

_ENTRY = struct.Struct("<B3sB3sII")

# Stage 1: load stage 2 (LBA 1, 8 sectors) to 0x1000:0000 via INT 13h extensions.
_STAGE1_CODE = bytes([
    0xFA,
    0x31, 0xC0, 0x8E, 0xD8,
    0x8E, 0xD0,
    0xBC, 0x00, 0x7C,
    0xFB, 0xFC,
    0x88, 0x16, 0xAC, 0x7D,
    0xB4, 0x0E, 0xB0, ord("1"), 0xCD, 0x10,
    0xBB, 0xAA, 0x55,
    0xB4, 0x41,
    0xCD, 0x13,
    0x72, 0x14,
    0xB4, 0x42,
    0x8A, 0x16, 0xAC, 0x7D,
    0xBE, 0xAE, 0x7D,
    0xCD, 0x13,
    0x72, 0x05,
    0xB4, 0x0E, 0xB0, ord("2"), 0xCD, 0x10,
    0xEA, 0x00, 0x00, 0x00, 0x10,
    0xB4, 0x0E, 0xB0, ord("E"), 0xCD, 0x10,
    0xFB, 0xF4, 0xEB, 0xFD,
])

_DAP_OFFSET = 430
_DAP = bytes([
    0x10, 0x00,
    0x08, 0x00,
    0x00, 0x00,
    0x00, 0x10,
    0x01, 0x00, 0x00, 0x00,
    0x00, 0x00, 0x00, 0x00,
])


@dataclass
class PartitionEntry:
    """A 16-byte partition table entry."""

    status: int = 0
    chs_start: bytes = bytes(3)
    partition_type: int = 0
    chs_end: bytes = bytes(3)
    lba_start: int = 0
    sector_count: int = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> PartitionEntry:
        if len(data) < _ENTRY.size:
            raise ValueError("partition entry needs 16 bytes")
        status, chs_start, ptype, chs_end, lba, count = _ENTRY.unpack_from(data)
        return cls(status, chs_start, ptype, chs_end, lba, count)

    def to_bytes(self) -> bytes:
        return _ENTRY.pack(
            self.status,
            bytes(self.chs_start),
            self.partition_type,
            bytes(self.chs_end),
            self.lba_start & 0xFFFFFFFF,
            self.sector_count & 0xFFFFFFFF,
        )


def _empty_partitions() -> tuple[PartitionEntry, ...]:
    return tuple(PartitionEntry() for _ in range(4))


@dataclass
class MasterBootRecord:
    """The 512-byte sector 0 of a disk."""

    bootstrap: bytes = bytes(BOOTSTRAP_SIZE)
    partitions: tuple[PartitionEntry, ...] = field(default_factory=_empty_partitions)
    signature: int = 0

    def __post_init__(self) -> None:
        self.partitions = tuple(self.partitions)
        if len(self.partitions) != 4:
            raise ValueError("an MBR holds exactly four partition entries")
        if len(self.bootstrap) > BOOTSTRAP_SIZE:
            raise ValueError("bootstrap code exceeds 446 bytes")

    @classmethod
    def from_bytes(cls, data: bytes) -> MasterBootRecord:
        if len(data) < MBR_SIZE:
            raise ValueError("an MBR needs 512 bytes")
        table = data[BOOTSTRAP_SIZE:BOOTSTRAP_SIZE + 64]
        partitions = tuple(
            PartitionEntry.from_bytes(table[i:i + 16]) for i in range(0, 64, 16)
        )
        (signature,) = struct.unpack_from("<H", data, 510)
        return cls(bytes(data[:BOOTSTRAP_SIZE]), partitions, signature)

    def to_bytes(self) -> bytes:
        return (
            bytes(self.bootstrap).ljust(BOOTSTRAP_SIZE, b"\x00")
            + b"".join(entry.to_bytes() for entry in self.partitions)
            + struct.pack("<H", self.signature & 0xFFFF)
        )

    def is_valid(self) -> bool:
        return self.signature == SIGNATURE

    def find_fat_partition(self) -> int | None:
        """Start LBA of the first FAT16/FAT32 partition, or None."""
        if not self.is_valid():
            return None
        for entry in self.partitions:
            if entry.partition_type in FAT_PARTITION_TYPES:
                return entry.lba_start
        return None

    def has_foreign_partitions(self) -> bool:
        """True when a valid table holds a used partition that is not FAT32 LBA."""
        return self.is_valid() and any(
            entry.partition_type not in (0, FAT32_LBA) for entry in self.partitions
        )


def create_partition_table(sector_count: int) -> MasterBootRecord:
    """Build a bootable MBR with one FAT32 partition starting at LBA 2048."""
    code = bytearray(BOOTSTRAP_SIZE)
    code[: len(_STAGE1_CODE)] = _STAGE1_CODE
    code[_DAP_OFFSET:_DAP_OFFSET + len(_DAP)] = _DAP
    first = PartitionEntry(
        status=BOOTABLE,
        partition_type=FAT32_LBA,
        lba_start=PARTITION_START_LBA,
        sector_count=(sector_count - PARTITION_START_LBA) & 0xFFFFFFFF,
    )
    partitions = (first, PartitionEntry(), PartitionEntry(), PartitionEntry())
    return MasterBootRecord(bytes(code), partitions, SIGNATURE)