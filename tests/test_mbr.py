import struct

import pytest

from novex.mbr import MasterBootRecord, PartitionEntry, create_partition_table


def test_created_table_layout():
    raw = create_partition_table(20480).to_bytes()
    assert len(raw) == 512
    assert raw[510:512] == b"\x55\xaa"
    assert raw[446] == 0x80
    assert raw[450] == 0x0B
    assert struct.unpack_from("<I", raw, 454)[0] == 2048
    assert struct.unpack_from("<I", raw, 458)[0] == 20480 - 2048
    assert raw[462:510] == bytes(48)


def test_bootstrap_code_and_dap():
    raw = create_partition_table(20480).to_bytes()
    assert raw[0] == 0xFA
    assert raw[430:446] == bytes(
        [0x10, 0, 0x08, 0, 0, 0, 0x00, 0x10, 0x01, 0, 0, 0, 0, 0, 0, 0]
    )


def test_round_trip():
    mbr = create_partition_table(40960)
    again = MasterBootRecord.from_bytes(mbr.to_bytes())
    assert again == mbr
    assert again.to_bytes() == mbr.to_bytes()


def test_find_fat_partition():
    mbr = create_partition_table(20480)
    assert mbr.is_valid()
    assert mbr.find_fat_partition() == 2048


def test_find_fat_partition_invalid_signature():
    mbr = MasterBootRecord.from_bytes(bytes(512))
    assert not mbr.is_valid()
    assert mbr.find_fat_partition() is None


@pytest.mark.parametrize("ptype", [0x04, 0x06, 0x0E, 0x0B, 0x0C])
def test_fat_types_recognised(ptype):
    parts = (
        PartitionEntry(partition_type=0x07, lba_start=63),
        PartitionEntry(partition_type=ptype, lba_start=4096),
        PartitionEntry(),
        PartitionEntry(),
    )
    mbr = MasterBootRecord(partitions=parts, signature=0xAA55)
    assert mbr.find_fat_partition() == 4096


def test_foreign_partitions():
    assert not create_partition_table(20480).has_foreign_partitions()
    parts = (PartitionEntry(partition_type=0x07), PartitionEntry(),
             PartitionEntry(), PartitionEntry())
    assert MasterBootRecord(partitions=parts, signature=0xAA55).has_foreign_partitions()
    assert not MasterBootRecord(partitions=parts, signature=0).has_foreign_partitions()


def test_partition_entry_round_trip():
    entry = PartitionEntry(0x80, b"\x01\x02\x03", 0x0C, b"\x04\x05\x06", 123, 456)
    raw = entry.to_bytes()
    assert len(raw) == 16
    assert PartitionEntry.from_bytes(raw) == entry


def test_short_input_rejected():
    with pytest.raises(ValueError):
        MasterBootRecord.from_bytes(bytes(100))
    with pytest.raises(ValueError):
        PartitionEntry.from_bytes(bytes(4))


def test_wrong_partition_count_rejected():
    with pytest.raises(ValueError):
        MasterBootRecord(partitions=(PartitionEntry(),))