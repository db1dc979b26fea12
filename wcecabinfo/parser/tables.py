"""
Generic walker for the six variable length record tables.

Every record is a fixed prefix followed by a tail whose byte length is a
uint16 stored inside the prefix. The shapes below describe where that field
sits and how the total size is derived from it; the walking itself is the
same for all tables.
"""

import logging
from collections import namedtuple

from wcecabinfo.parser.errors import RecordOverrun
from wcecabinfo.parser.primitives import check_bounds, read_uint16
from wcecabinfo.parser.structure import cab000_structure

Record = namedtuple('Record', ['offset', 'prefix', 'tail'])


class RecordShape:
    def __init__(self, name, struct, length_field, overlap=0):
        self.name = name
        self.struct = struct
        self.prefix_size = len(struct)
        self.length_field = length_field
        # the tail length is always the last uint16 of the prefix
        self.length_offset = self.prefix_size - 2
        # bytes of the tail already counted by prefix_size
        self.overlap = overlap

    def record_size(self, variable_length):
        return self.prefix_size + variable_length - self.overlap

    def __repr__(self):
        return f"<RecordShape {self.name} prefix={self.prefix_size}>"


STRING_SHAPE = RecordShape('strings', cab000_structure.CE_CAB_000_STRING_ENTRY, 'StringLength')
DIRECTORY_SHAPE = RecordShape('directories', cab000_structure.CE_CAB_000_DIRECTORY_ENTRY, 'SpecLength')
FILE_SHAPE = RecordShape('files', cab000_structure.CE_CAB_000_FILE_ENTRY, 'FileNameLength')
REGHIVE_SHAPE = RecordShape('reg_hives', cab000_structure.CE_CAB_000_REGHIVE_ENTRY, 'SpecLength')
REGKEY_SHAPE = RecordShape('reg_keys', cab000_structure.CE_CAB_000_REGKEY_ENTRY, 'DataLength')
LINK_SHAPE = RecordShape('links', cab000_structure.CE_CAB_000_LINK_ENTRY, 'SpecLength')


def walk_table(data, shape, offset, count):
    """
    Yield `count` Records of `shape` starting at `offset`.

    The generator is lazy and single pass. Any record whose prefix or tail
    would run past the end of the buffer raises RecordOverrun before it is
    yielded.
    """
    cursor = offset
    for index in range(count):
        field = f"{shape.name}[{index}]"
        check_bounds(data, cursor, shape.prefix_size, field, RecordOverrun)
        variable_length = read_uint16(
            data, cursor + shape.length_offset, f"{field}.{shape.length_field}", RecordOverrun
        )
        size = shape.record_size(variable_length)
        check_bounds(data, cursor, size, field, RecordOverrun)

        prefix = shape.struct(bytes(data[cursor:cursor + shape.prefix_size]))
        tail = bytes(data[cursor + shape.prefix_size - shape.overlap:cursor + size])
        yield Record(offset=cursor, prefix=prefix, tail=tail)

        cursor += size

    logging.debug(f"Walked {count} {shape.name} records from 0x{offset:x} to 0x{cursor:x}")
