from wcecabinfo.parser.classes import DecodeOptions, decode
from wcecabinfo.parser.errors import EncodingError, FormatError
from wcecabinfo.parser.model import Descriptor

__all__ = ['DecodeOptions', 'Descriptor', 'EncodingError', 'FormatError', 'decode']
