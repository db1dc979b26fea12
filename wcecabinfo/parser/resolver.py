"""
Resolution of the id cross references between the descriptor tables.

A DescriptorContext is bound to one buffer and its validated header. It
walks every table once, keeps an id -> record index per table and answers
the resolve_* queries from those. Ids that appear more than once resolve to
their first occurrence in table order.
"""

import logging
from contextlib import contextmanager

from wcecabinfo.parser.basedirs import BASE_DIRS, HIVE_ROOTS, INSTALL_DIR, expand_placeholders
from wcecabinfo.parser.errors import (
    CyclicReference,
    UnknownBaseDirectory,
    UnknownDirectoryId,
    UnknownFileId,
    UnknownHiveId,
    UnknownHiveRoot,
    UnknownStringId,
)
from wcecabinfo.parser.model import LinkKind
from wcecabinfo.parser.primitives import cstring, read_uint16_array
from wcecabinfo.parser.structure import LINK_TYPE_DIRECTORY
from wcecabinfo.parser.tables import (
    DIRECTORY_SHAPE,
    FILE_SHAPE,
    LINK_SHAPE,
    REGHIVE_SHAPE,
    REGKEY_SHAPE,
    STRING_SHAPE,
    walk_table,
)

REG_SEPARATOR = "\\"


def join_path(separator, *parts):
    return separator.join(part for part in parts if part)


class DescriptorContext:

    def __init__(self, data, header, options):
        self.data = data
        self.header = header
        self.options = options
        self._resolving = []

        self.strings = self._load(STRING_SHAPE, header.strings)
        self.directories = self._load(DIRECTORY_SHAPE, header.directories)
        self.files = self._load(FILE_SHAPE, header.files)
        self.reg_hives = self._load(REGHIVE_SHAPE, header.reg_hives)
        self.reg_keys = self._load(REGKEY_SHAPE, header.reg_keys)
        self.links = self._load(LINK_SHAPE, header.links)

        self._string_index = self._index(self.strings)
        self._directory_index = self._index(self.directories)
        self._file_index = self._index(self.files)
        self._hive_index = self._index(self.reg_hives)

    def _load(self, shape, section):
        return list(walk_table(self.data, shape, section.offset, section.count))

    @staticmethod
    def _index(records):
        index = {}
        for record in records:
            index.setdefault(record.prefix.Id, record)
        return index

    @contextmanager
    def _guard(self, kind, entity_id):
        key = (kind, entity_id)
        if key in self._resolving:
            chain = " -> ".join(f"{k} {i}" for k, i in self._resolving + [key])
            raise CyclicReference(f"{kind} {entity_id} refers back to itself: {chain}")
        if len(self._resolving) >= self.options.max_depth:
            raise CyclicReference(
                f"{kind} {entity_id}: resolution deeper than {self.options.max_depth} levels"
            )
        self._resolving.append(key)
        try:
            yield
        finally:
            self._resolving.pop()

    def _expand(self, path):
        return expand_placeholders(path, self.options.platform)

    @staticmethod
    def spec_of(record):
        return tuple(read_uint16_array(record.tail))

    def find_string(self, string_id):
        return self._string_index.get(string_id)

    def find_directory(self, directory_id):
        return self._directory_index.get(directory_id)

    def find_file(self, file_id):
        return self._file_index.get(file_id)

    def find_hive(self, hive_id):
        return self._hive_index.get(hive_id)

    def resolve_string(self, string_id, strict=None):
        """
        Text of string `string_id`.

        With strict (the default from DecodeOptions.strict_strings) an
        unknown id raises UnknownStringId, otherwise it becomes "".
        """
        if strict is None:
            strict = self.options.strict_strings

        record = self.find_string(string_id)
        if record is None:
            if strict:
                raise UnknownStringId(f"string id {string_id} is not in the string table")
            logging.warning(f"String id {string_id} is not in the string table, using empty string")
            return ""
        return self.options.normalizer(cstring(record.tail))

    def resolve_spec(self, spec_ids, separator=None):
        """Join the strings named by a zero terminated id list."""
        if separator is None:
            separator = self.options.separator

        parts = []
        for string_id in spec_ids:
            if string_id == 0:
                break
            parts.append(self.resolve_string(string_id))
        return separator.join(parts)

    def resolve_base_directory(self, code):
        if not 0 <= code < len(BASE_DIRS):
            raise UnknownBaseDirectory(
                f"base directory code {code} is outside 0..{len(BASE_DIRS) - 1}"
            )
        return self._expand(BASE_DIRS[code])

    def resolve_directory(self, directory_id):
        with self._guard('directory', directory_id):
            record = self.find_directory(directory_id)
            if record is None:
                if directory_id == 0:
                    return self._expand(INSTALL_DIR)
                raise UnknownDirectoryId(f"directory id {directory_id} is not in the directory table")
            return self._expand(self.resolve_spec(self.spec_of(record)))

    def resolve_file_path(self, file_id):
        with self._guard('file', file_id):
            record = self.find_file(file_id)
            if record is None:
                raise UnknownFileId(f"file id {file_id} is not in the file table")
            directory = self.resolve_directory(record.prefix.DirectoryId)
            name = self.options.normalizer(cstring(record.tail))
            return join_path(self.options.separator, directory, name)

    def resolve_hive_root(self, root):
        try:
            return HIVE_ROOTS[root]
        except KeyError:
            raise UnknownHiveRoot(f"hive root code {root} is outside 1..4") from None

    def resolve_reg_path(self, hive_id):
        with self._guard('hive', hive_id):
            record = self.find_hive(hive_id)
            if record is None:
                raise UnknownHiveId(f"registry hive id {hive_id} is not in the hive table")
            root = self.resolve_hive_root(record.prefix.HiveRoot)
            return join_path(REG_SEPARATOR, root, self.resolve_spec(self.spec_of(record), REG_SEPARATOR))

    @staticmethod
    def link_kind(record):
        # any non zero link type is treated as a file link
        if record.prefix.LinkType == LINK_TYPE_DIRECTORY:
            return LinkKind.Directory
        return LinkKind.File

    def resolve_link_path(self, record):
        base = self.resolve_base_directory(record.prefix.BaseDirectory)
        return join_path(self.options.separator, base, self._expand(self.resolve_spec(self.spec_of(record))))

    def resolve_link_target(self, record):
        with self._guard('link', record.prefix.Id):
            if self.link_kind(record) == LinkKind.File:
                return self.resolve_file_path(record.prefix.TargetId)
            return self.resolve_directory(record.prefix.TargetId)
