from wcecabinfo.parser.text import TextNormalizer, is_ascii


def test_is_ascii():
    assert is_ascii(b"Program Files\\App")
    assert is_ascii(b"")
    assert not is_ascii(b"\x93\xfa")
    assert not is_ascii(b"\x01")


def test_ascii_passthrough():
    assert TextNormalizer()(b"Hello") == "Hello"


def test_first_codepage():
    assert TextNormalizer()(b"\x93\xfa\x96\x7b") == "日本"


def test_second_codepage_when_first_fails():
    # a lone Shift-JIS lead byte, Cyrillic GJE in cp1251
    assert TextNormalizer()(b"\x81") == "\u0403"


def test_undecodable_bytes_are_kept_escaped():
    # 0x98 is unassigned in cp1251 and an incomplete lead byte in cp932
    assert TextNormalizer()(b"a\x98") == "a\\x98"


def test_codepage_chain_is_configurable():
    normalizer = TextNormalizer(codepages=("utf-8",))
    assert normalizer("Привет".encode("utf-8")) == "Привет"
    assert normalizer(b"\xff") == "\\xff"


def test_unknown_codepage_is_skipped():
    assert TextNormalizer(codepages=("no-such-codec", "cp1251"))(b"\xcf") == "П"
