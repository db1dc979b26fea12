"""
Little-endian integer and string readers over an immutable buffer.

Every reader checks its slice against the buffer length before touching it
and raises the given FormatError subclass (Truncated by default) naming the
field that could not be read.
"""

import struct

from wcecabinfo.parser.errors import Truncated


def check_bounds(data, offset, length, field, error=Truncated):
    if offset < 0 or length < 0 or offset + length > len(data):
        raise error(
            f"{field}: {length} bytes at offset 0x{offset:x} exceed buffer of {len(data)} bytes"
        )


def read_uint16(data, offset, field="uint16", error=Truncated):
    check_bounds(data, offset, 2, field, error)
    return struct.unpack_from("<H", data, offset)[0]


def read_uint32(data, offset, field="uint32", error=Truncated):
    check_bounds(data, offset, 4, field, error)
    return struct.unpack_from("<I", data, offset)[0]


def read_bytes(data, offset, length, field="bytes", error=Truncated):
    check_bounds(data, offset, length, field, error)
    return bytes(data[offset:offset + length])


def cstring(raw):
    """Cut a byte string at its first NUL, or return it whole if there is none."""
    end = raw.find(b'\x00')
    return raw if end == -1 else raw[:end]


def read_uint16_array(raw):
    """
    Read a zero terminated array of uint16 values.

    The terminator is not included. A missing terminator ends the array at
    the end of the slice; a trailing odd byte is ignored.
    """
    values = []
    for (value,) in struct.iter_unpack("<H", raw[:len(raw) & ~1]):
        if value == 0:
            break
        values.append(value)
    return values


def split_multi_string(raw):
    """Split a NUL separated multi string, dropping empty members."""
    return [part for part in raw.split(b'\x00') if part]
