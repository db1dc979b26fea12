"""
Text normalization for strings stored in legacy code pages.

Descriptors built on Japanese or Cyrillic systems store their strings in
the ANSI code page of the build machine. Plain ASCII is passed through;
anything else is tried against a chain of code pages.
"""

import logging

from wcecabinfo.parser.errors import EncodingError

DEFAULT_CODEPAGES = ('cp932', 'cp1251')


def is_ascii(raw):
    return all(0x20 <= b < 0x7f or b in (0x09, 0x0a, 0x0d) for b in raw)


class TextNormalizer:
    """Callable turning descriptor bytes into str."""

    def __init__(self, codepages=DEFAULT_CODEPAGES):
        self.codepages = tuple(codepages)

    def convert(self, raw, codepage):
        try:
            return raw.decode(codepage)
        except (UnicodeDecodeError, LookupError) as e:
            raise EncodingError(f"{codepage}: {e}") from e

    def __call__(self, raw):
        raw = bytes(raw)
        if is_ascii(raw):
            return raw.decode('ascii')

        for codepage in self.codepages:
            try:
                return self.convert(raw, codepage)
            except EncodingError as e:
                logging.debug(f"Could not decode {raw!r} as {e}")

        logging.warning(f"Keeping undecodable string {raw!r} as escaped bytes")
        return raw.decode('ascii', 'backslashreplace')
