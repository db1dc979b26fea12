import logging

from wcecabinfo.parser.errors import BadSignature, LengthMismatch, Truncated
from wcecabinfo.parser.model import CabHeader, Section, StringSlice
from wcecabinfo.parser.primitives import check_bounds, read_uint32
from wcecabinfo.parser.structure import (
    CE_CAB_000_HEADER_SIGNATURE,
    HEADER_SIZE,
    cab000_structure,
)

SECTION_FIELDS = [
    ('strings', 'NumEntriesString', 'OffsetStrings'),
    ('directories', 'NumEntriesDirs', 'OffsetDirs'),
    ('files', 'NumEntriesFiles', 'OffsetFiles'),
    ('reg_hives', 'NumEntriesRegHives', 'OffsetRegHives'),
    ('reg_keys', 'NumEntriesRegKeys', 'OffsetRegKeys'),
    ('links', 'NumEntriesLinks', 'OffsetLinks'),
]

STRING_FIELDS = [
    ('app_name', 'OffsetAppname', 'LengthAppname'),
    ('provider', 'OffsetProvider', 'LengthProvider'),
    ('unsupported', 'OffsetUnsupported', 'LengthUnsupported'),
]


def parse_header(data):
    """
    Validate the fixed header of a .000 descriptor.

    Args:
        data: the complete descriptor buffer

    Returns:
        CabHeader with all section and string slice descriptors checked
        against the buffer length.

    Raises:
        Truncated: buffer shorter than the header, or a section/string
            offset pointing outside the buffer
        BadSignature: first four bytes are not "MSCE"
        LengthMismatch: declared file length differs from len(data)
    """
    size = len(data)
    if size < HEADER_SIZE:
        raise Truncated(f"header: need {HEADER_SIZE} bytes, buffer has {size}")

    signature = read_uint32(data, 0, "AsciiSignature")
    if signature != CE_CAB_000_HEADER_SIGNATURE:
        raise BadSignature(
            f"AsciiSignature: expected 0x{CE_CAB_000_HEADER_SIGNATURE:08X}, got 0x{signature:08X}"
        )

    raw = cab000_structure.CE_CAB_000_HEADER(bytes(data[:HEADER_SIZE]))

    if raw.FileLength != size:
        raise LengthMismatch(f"FileLength: header declares {raw.FileLength} bytes, buffer has {size}")

    sections = {}
    for name, count_field, offset_field in SECTION_FIELDS:
        offset = getattr(raw, offset_field)
        count = getattr(raw, count_field)
        # an empty table may carry any offset, a populated one must start inside the buffer
        if count and offset >= size:
            raise Truncated(f"{offset_field}: table start 0x{offset:x} is at or past end of buffer")
        sections[name] = Section(offset=offset, count=count)
        logging.debug(f"Section {name}: offset 0x{offset:x}, {count} entries")

    strings = {}
    for name, offset_field, length_field in STRING_FIELDS:
        offset = getattr(raw, offset_field)
        length = getattr(raw, length_field)
        check_bounds(data, offset, length, f"{offset_field}/{length_field}")
        strings[name] = StringSlice(offset=offset, length=length)

    return CabHeader(
        signature=signature,
        file_length=raw.FileLength,
        architecture=raw.TargetArchitecture,
        min_ce_version_major=raw.MinCEVersionMajor,
        min_ce_version_minor=raw.MinCEVersionMinor,
        max_ce_version_major=raw.MaxCEVersionMajor,
        max_ce_version_minor=raw.MaxCEVersionMinor,
        min_ce_build_number=raw.MinCEBuildNumber,
        max_ce_build_number=raw.MaxCEBuildNumber,
        unknown=(raw.Unknown1, raw.Unknown2, raw.Unknown3, raw.Unknown4, raw.Unknown5),
        **sections,
        **strings,
    )
