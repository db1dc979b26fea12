import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from wcecabinfo.parser.basedirs import PLATFORMS
from wcecabinfo.parser.header import parse_header
from wcecabinfo.parser.model import (
    Descriptor,
    DirectoryEntry,
    FileEntry,
    LinkEntry,
    RegHiveEntry,
    RegKeyEntry,
    StringEntry,
)
from wcecabinfo.parser.primitives import cstring, read_bytes, split_multi_string
from wcecabinfo.parser.regvalue import combine_type_flags, decode_value
from wcecabinfo.parser.resolver import DescriptorContext, join_path
from wcecabinfo.parser.text import TextNormalizer


@dataclass(frozen=True)
class DecodeOptions:
    separator: str = "\\"
    strict_strings: bool = True
    normalizer: Callable[[bytes], str] = field(default_factory=TextNormalizer)
    platform: Optional[str] = None
    max_depth: int = 16

    def __post_init__(self):
        if self.platform is not None and self.platform not in PLATFORMS:
            raise ValueError(f"Unknown platform {self.platform!r}, expected one of {sorted(PLATFORMS)}")


def read_header_string(data, slice_, normalizer, field):
    raw = read_bytes(data, slice_.offset, slice_.length, field)
    return normalizer(cstring(raw))


def decode(data, options=None):
    """
    Decode a complete .000 descriptor into a Descriptor.

    Args:
        data: bytes-like object holding exactly one descriptor
        options: DecodeOptions, defaults apply when omitted

    Raises:
        FormatError: on any structural problem; no partial model is returned
    """
    options = options or DecodeOptions()
    data = bytes(data)
    normalizer = options.normalizer

    header = parse_header(data)
    ctx = DescriptorContext(data, header, options)

    app_name = read_header_string(data, header.app_name, normalizer, "app name")
    provider = read_header_string(data, header.provider, normalizer, "provider")
    unsupported_raw = read_bytes(data, header.unsupported.offset, header.unsupported.length, "unsupported")
    unsupported = tuple(normalizer(part) for part in split_multi_string(unsupported_raw))

    logging.info(f"Application: {app_name}")
    logging.info(f"Provider: {provider}")
    logging.debug(f"Target architecture code: {header.architecture}")

    strings = tuple(
        StringEntry(id=r.prefix.Id, text=normalizer(cstring(r.tail)))
        for r in ctx.strings
    )

    directories = tuple(
        DirectoryEntry(id=r.prefix.Id, spec=ctx.spec_of(r), path=ctx.resolve_directory(r.prefix.Id))
        for r in ctx.directories
    )

    files = []
    for r in ctx.files:
        name = normalizer(cstring(r.tail))
        directory = ctx.resolve_directory(r.prefix.DirectoryId)
        files.append(FileEntry(
            id=r.prefix.Id,
            directory_id=r.prefix.DirectoryId,
            unknown=r.prefix.Unknown,
            flags_lower=r.prefix.FlagsLower,
            flags_upper=r.prefix.FlagsUpper,
            name=name,
            directory=directory,
            path=join_path(options.separator, directory, name),
        ))

    reg_hives = tuple(
        RegHiveEntry(
            id=r.prefix.Id,
            root=r.prefix.HiveRoot,
            unknown=r.prefix.Unknown,
            spec=ctx.spec_of(r),
            path=ctx.resolve_reg_path(r.prefix.Id),
        )
        for r in ctx.reg_hives
    )

    reg_keys = []
    for index, r in enumerate(ctx.reg_keys):
        raw_name = cstring(r.tail)
        # the value follows the NUL that ends the key name
        value_bytes = r.tail[len(raw_name) + 1:]
        type_flags = combine_type_flags(r.prefix.TypeFlagsLower, r.prefix.TypeFlagsUpper)
        reg_keys.append(RegKeyEntry(
            id=r.prefix.Id,
            hive_id=r.prefix.HiveId,
            variable_substitution=r.prefix.VariableSubstitution,
            type_flags=type_flags,
            name=normalizer(raw_name) if raw_name else None,
            value=decode_value(type_flags, value_bytes, normalizer, f"reg_keys[{index}]"),
            path=ctx.resolve_reg_path(r.prefix.HiveId),
        ))

    links = tuple(
        LinkEntry(
            id=r.prefix.Id,
            unknown=r.prefix.Unknown,
            base_directory=r.prefix.BaseDirectory,
            target_id=r.prefix.TargetId,
            kind=ctx.link_kind(r),
            spec=ctx.spec_of(r),
            link_path=ctx.resolve_link_path(r),
            target_path=ctx.resolve_link_target(r),
        )
        for r in ctx.links
    )

    logging.debug(
        f"Decoded {len(strings)} strings, {len(directories)} directories, {len(files)} files, "
        f"{len(reg_hives)} hives, {len(reg_keys)} registry keys, {len(links)} links"
    )

    return Descriptor(
        header=header,
        app_name=app_name,
        provider=provider,
        unsupported=unsupported,
        strings=strings,
        directories=directories,
        files=tuple(files),
        reg_hives=reg_hives,
        reg_keys=tuple(reg_keys),
        links=links,
    )
