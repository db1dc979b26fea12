"""
Immutable Descriptor Model produced by a single decode pass.
"""

import enum
from dataclasses import dataclass
from typing import Optional, Tuple

from wcecabinfo.parser.basedirs import architecture_name


@dataclass(frozen=True)
class Section:
    offset: int
    count: int


@dataclass(frozen=True)
class StringSlice:
    offset: int
    length: int


@dataclass(frozen=True)
class CabHeader:
    signature: int
    file_length: int
    architecture: int
    min_ce_version_major: int
    min_ce_version_minor: int
    max_ce_version_major: int
    max_ce_version_minor: int
    min_ce_build_number: int
    max_ce_build_number: int
    strings: Section
    directories: Section
    files: Section
    reg_hives: Section
    reg_keys: Section
    links: Section
    app_name: StringSlice
    provider: StringSlice
    unsupported: StringSlice
    unknown: Tuple[int, ...] = ()


class FileFlag(enum.IntFlag):
    """File flag word, FlagsUpper << 16 | FlagsLower."""
    REFERENCE_COUNTING_SHARED_FILE = 0x80000000
    IGNORE_CAB_FILE_DATE = 0x40000000
    DO_NOT_OVERWRITE_IF_TARGET_IS_NEWER = 0x20000000
    SELF_REGISTER_DLL = 0x10000000
    DO_NOT_COPY_UNLESS_TARGET_EXISTS = 0x00000400
    OVERWRITE_TARGET_IF_EXISTS = 0x00000010
    DO_NOT_SKIP = 0x00000002
    WARN_IF_SKIPPED = 0x00000001


FILE_FLAG_MASK = 0xF0000413

FILE_FLAG_NAMES = {
    FileFlag.REFERENCE_COUNTING_SHARED_FILE: 'isReferenceCountingSharedFile',
    FileFlag.IGNORE_CAB_FILE_DATE: 'ignoreCabFileDate',
    FileFlag.DO_NOT_OVERWRITE_IF_TARGET_IS_NEWER: 'doNotOverWriteIfTargetIsNewer',
    FileFlag.SELF_REGISTER_DLL: 'selfRegisterDll',
    FileFlag.DO_NOT_COPY_UNLESS_TARGET_EXISTS: 'doNotCopyUnlessTargetExists',
    FileFlag.OVERWRITE_TARGET_IF_EXISTS: 'overWriteTargetIfExists',
    FileFlag.DO_NOT_SKIP: 'doNotSkip',
    FileFlag.WARN_IF_SKIPPED: 'warnIfSkipped',
}


class LinkKind(enum.IntEnum):
    Directory = 0
    File = 1


@dataclass(frozen=True)
class StringEntry:
    id: int
    text: str


@dataclass(frozen=True)
class DirectoryEntry:
    id: int
    spec: Tuple[int, ...]
    path: str


@dataclass(frozen=True)
class FileEntry:
    id: int
    directory_id: int
    unknown: int
    flags_lower: int
    flags_upper: int
    name: str
    directory: str
    path: str

    @property
    def flags(self):
        return FileFlag((self.flags_upper << 16 | self.flags_lower) & FILE_FLAG_MASK)

    def flag_names(self):
        """camelCase names of the set flag bits, in declaration order."""
        return [name for flag, name in FILE_FLAG_NAMES.items() if flag in self.flags]


@dataclass(frozen=True)
class RegHiveEntry:
    id: int
    root: int
    unknown: int
    spec: Tuple[int, ...]
    path: str


@dataclass(frozen=True)
class RegKeyEntry:
    id: int
    hive_id: int
    variable_substitution: int
    type_flags: int
    # None for the hive's default value
    name: Optional[str]
    value: 'RegistryValue'
    path: str


@dataclass(frozen=True)
class LinkEntry:
    id: int
    unknown: int
    base_directory: int
    target_id: int
    kind: LinkKind
    spec: Tuple[int, ...]
    link_path: str
    target_path: str

    @property
    def is_file(self):
        return self.kind == LinkKind.File


@dataclass(frozen=True)
class CeVersion:
    major: int
    minor: int

    def __str__(self):
        return f"{self.major}.{self.minor}"


@dataclass(frozen=True)
class Descriptor:
    header: CabHeader
    app_name: str
    provider: str
    unsupported: Tuple[str, ...] = ()
    strings: Tuple[StringEntry, ...] = ()
    directories: Tuple[DirectoryEntry, ...] = ()
    files: Tuple[FileEntry, ...] = ()
    reg_hives: Tuple[RegHiveEntry, ...] = ()
    reg_keys: Tuple[RegKeyEntry, ...] = ()
    links: Tuple[LinkEntry, ...] = ()

    @property
    def architecture(self):
        return architecture_name(self.header.architecture)

    @property
    def min_ce_version(self):
        if not self.header.min_ce_version_major:
            return None
        return CeVersion(self.header.min_ce_version_major, self.header.min_ce_version_minor)

    @property
    def max_ce_version(self):
        if not self.header.max_ce_version_major:
            return None
        return CeVersion(self.header.max_ce_version_major, self.header.max_ce_version_minor)

    @property
    def min_ce_build_number(self):
        return self.header.min_ce_build_number or None

    @property
    def max_ce_build_number(self):
        return self.header.max_ce_build_number or None

