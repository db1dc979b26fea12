"""Exceptions raised while decoding a .000 descriptor."""


class FormatError(Exception):
    """
    Structural problem with the descriptor. Always fatal for the decode of
    the buffer it was raised for.
    """


class BadSignature(FormatError):
    pass


class LengthMismatch(FormatError):
    pass


class Truncated(FormatError):
    pass


class RecordOverrun(FormatError):
    pass


class UnknownStringId(FormatError):
    pass


class UnknownDirectoryId(FormatError):
    pass


class UnknownFileId(FormatError):
    pass


class UnknownHiveId(FormatError):
    pass


class UnknownHiveRoot(FormatError):
    pass


class UnknownRegType(FormatError):
    pass


class BadValueLength(FormatError):
    pass


class UnknownBaseDirectory(FormatError):
    pass


class CyclicReference(FormatError):
    pass


class EncodingError(Exception):
    """A byte string could not be converted with any configured code page."""
