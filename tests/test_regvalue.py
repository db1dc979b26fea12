import pytest

from wcecabinfo.parser.errors import BadValueLength
from wcecabinfo.parser.regvalue import (
    REG_BINARY,
    REG_DWORD,
    REG_MULTI_SZ,
    REG_SZ,
    combine_type_flags,
    decode_value,
)
from wcecabinfo.parser.text import TextNormalizer

normalizer = TextNormalizer()


def test_combine_type_flags():
    assert combine_type_flags(0x0001, 0x0001) == 0x00010001
    assert combine_type_flags(0x0000, 0x0001) == 0x00010000


def test_dword():
    value = decode_value(0x00010001, b"\x01\x00\x00\x00", normalizer)
    assert value.data_type == REG_DWORD
    assert value.value == 1
    assert value.reg_text() == "dword:00000001"
    assert value.json_value() == 1


def test_dword_uppercase_hex():
    value = decode_value(0x00010001, b"\xef\xbe\xad\xde", normalizer)
    assert value.reg_text() == "dword:DEADBEEF"
    assert str(value) == str(0xDEADBEEF)


@pytest.mark.parametrize("raw", [b"", b"\x01\x00", b"\x01\x00\x00\x00\x00"])
def test_dword_needs_four_bytes(raw):
    with pytest.raises(BadValueLength, match="REG_DWORD"):
        decode_value(0x00010001, raw, normalizer)


def test_sz_with_and_without_terminator():
    assert decode_value(0, b"hello\x00", normalizer).value == "hello"
    assert decode_value(0, b"hello", normalizer).value == "hello"


def test_sz_reg_text_is_escaped():
    value = decode_value(0, b'C:\\a "b"\x00', normalizer)
    assert value.data_type == REG_SZ
    assert value.reg_text() == '"C:\\\\a \\"b\\""'


def test_sz_legacy_codepage():
    value = decode_value(0, b"\x93\xfa\x96\x7b\x00", normalizer)
    assert value.value == "日本"


def test_multi_sz():
    value = decode_value(0x00010000, b"A\x00B\x00\x00", normalizer)
    assert value.data_type == REG_MULTI_SZ
    assert value.value == ("A", "B")
    assert value.reg_text() == "hex(7):41,00,42,00,00"
    assert value.json_value() == ["A", "B"]


def test_binary():
    value = decode_value(0x00000001, b"\xde\xad\x0f", normalizer)
    assert value.data_type == REG_BINARY
    assert value.reg_text() == "hex:DE,AD,0F"
    assert value.json_value() == "DE,AD,0F"


def test_extra_flag_bits_are_masked():
    # 0x00000002 is the no-clobber flag
    value = decode_value(0x00000002, b"x\x00", normalizer)
    assert value.data_type == REG_SZ
    value = decode_value(0x00010003, b"\x02\x00\x00\x00", normalizer)
    assert value.data_type == REG_DWORD
