import struct

import pytest

from wcecabinfo.parser import decode
from wcecabinfo.parser.errors import RecordOverrun
from wcecabinfo.parser.header import parse_header
from wcecabinfo.parser.tables import (
    DIRECTORY_SHAPE,
    FILE_SHAPE,
    LINK_SHAPE,
    REGHIVE_SHAPE,
    REGKEY_SHAPE,
    STRING_SHAPE,
    walk_table,
)

from tests.builder import build_descriptor, directory_entry, file_entry, string_entry


def test_prefix_sizes():
    assert STRING_SHAPE.prefix_size == 4
    assert DIRECTORY_SHAPE.prefix_size == 4
    assert FILE_SHAPE.prefix_size == 12
    assert REGHIVE_SHAPE.prefix_size == 8
    assert REGKEY_SHAPE.prefix_size == 12
    assert LINK_SHAPE.prefix_size == 12


def test_walk_strings():
    data = build_descriptor(strings=[string_entry(7, b"abc"), string_entry(3, b"de")])
    header = parse_header(data)

    records = list(walk_table(data, STRING_SHAPE, header.strings.offset, header.strings.count))

    assert [r.prefix.Id for r in records] == [7, 3]
    assert [r.tail for r in records] == [b"abc\x00", b"de\x00"]
    assert records[1].offset == records[0].offset + 4 + 4


def test_walk_is_lazy():
    data = build_descriptor(strings=[string_entry(1, b"a")])
    header = parse_header(data)
    walker = walk_table(data, STRING_SHAPE, header.strings.offset, header.strings.count)
    assert next(walker).prefix.Id == 1
    with pytest.raises(StopIteration):
        next(walker)


def test_spec_length_is_consumed_exactly():
    data = build_descriptor(directories=[directory_entry(10, [5]), directory_entry(11, [5, 6])])
    header = parse_header(data)

    first, second = walk_table(data, DIRECTORY_SHAPE, header.directories.offset, 2)

    # [5, 0] is 4 bytes, [5, 6, 0] is 6 bytes
    assert first.prefix.SpecLength == 4
    assert second.offset == first.offset + 4 + 4
    assert second.prefix.SpecLength == 6
    assert second.tail == struct.pack("<3H", 5, 6, 0)


def test_file_record_fields():
    data = build_descriptor(files=[file_entry(1, 2, b"a.dll", flags_lower=0x10, flags_upper=0x8000, unknown=9)])
    header = parse_header(data)

    (record,) = walk_table(data, FILE_SHAPE, header.files.offset, 1)

    assert record.prefix.DirectoryId == 2
    assert record.prefix.Unknown == 9
    assert record.prefix.FlagsLower == 0x10
    assert record.prefix.FlagsUpper == 0x8000
    assert record.tail == b"a.dll\x00"


def test_record_tail_past_buffer():
    data = bytearray(build_descriptor(strings=[string_entry(1, b"abc")]))
    header = parse_header(bytes(data))
    struct.pack_into("<H", data, header.strings.offset + 2, 0xFFF0)

    with pytest.raises(RecordOverrun, match=r"strings\[0\]"):
        list(walk_table(bytes(data), STRING_SHAPE, header.strings.offset, 1))
    with pytest.raises(RecordOverrun):
        decode(bytes(data))


def test_count_larger_than_table():
    data = bytearray(build_descriptor(strings=[string_entry(1, b"abc")]))
    # NumEntriesString, the string table is the last non empty table
    struct.pack_into("<H", data, 48, 2)

    with pytest.raises(RecordOverrun, match=r"strings\[1\]"):
        decode(bytes(data))
