"""Decoding of the typed value bytes carried by registry key records."""

import struct
from dataclasses import dataclass
from typing import Any

from wcecabinfo.parser.errors import BadValueLength, UnknownRegType
from wcecabinfo.parser.primitives import cstring, split_multi_string
from wcecabinfo.parser.structure import (
    TYPE_REG_BINARY,
    TYPE_REG_DWORD,
    TYPE_REG_MASK,
    TYPE_REG_MULTI_SZ,
    TYPE_REG_SZ,
)

REG_DWORD = 'REG_DWORD'
REG_SZ = 'REG_SZ'
REG_MULTI_SZ = 'REG_MULTI_SZ'
REG_BINARY = 'REG_BINARY'

REG_TYPES = {
    TYPE_REG_DWORD: REG_DWORD,
    TYPE_REG_SZ: REG_SZ,
    TYPE_REG_MULTI_SZ: REG_MULTI_SZ,
    TYPE_REG_BINARY: REG_BINARY,
}


def combine_type_flags(lower, upper):
    return (upper << 16) | lower


def hex_bytes(raw):
    return ",".join(f"{b:02X}" for b in raw)


def escape_reg_string(text):
    return text.replace("\\", "\\\\").replace('"', '\\"')


@dataclass(frozen=True)
class RegistryValue:
    data_type: str
    # int for REG_DWORD, str for REG_SZ, tuple of str for REG_MULTI_SZ, bytes for REG_BINARY
    value: Any
    raw: bytes

    def reg_text(self):
        """Right hand side of a value line in a .reg file."""
        if self.data_type == REG_DWORD:
            return f"dword:{self.value:08X}"
        if self.data_type == REG_SZ:
            return f'"{escape_reg_string(self.value)}"'
        if self.data_type == REG_MULTI_SZ:
            return f"hex(7):{hex_bytes(self.raw)}"
        return f"hex:{hex_bytes(self.raw)}"

    def json_value(self):
        if self.data_type == REG_MULTI_SZ:
            return list(self.value)
        if self.data_type == REG_BINARY:
            return hex_bytes(self.value)
        return self.value

    def __str__(self):
        if self.data_type == REG_DWORD:
            return str(self.value)
        if self.data_type == REG_SZ:
            return self.value
        return hex_bytes(self.raw)


def decode_value(type_flags, raw, normalizer, field="value"):
    """
    Decode `raw` according to the type bits of `type_flags`.

    Raises:
        UnknownRegType: the masked type is none of the four known codes
        BadValueLength: a REG_DWORD payload that is not 4 bytes long
    """
    data_type = REG_TYPES.get(type_flags & TYPE_REG_MASK)
    if data_type is None:
        raise UnknownRegType(f"{field}: type flags 0x{type_flags:08X} match no registry type")

    if data_type == REG_DWORD:
        if len(raw) != 4:
            raise BadValueLength(f"{field}: REG_DWORD needs 4 bytes, got {len(raw)}")
        value = struct.unpack("<I", raw)[0]
    elif data_type == REG_SZ:
        value = normalizer(cstring(raw))
    elif data_type == REG_MULTI_SZ:
        value = tuple(normalizer(part) for part in split_multi_string(raw))
    else:
        value = bytes(raw)

    return RegistryValue(data_type=data_type, value=value, raw=bytes(raw))
