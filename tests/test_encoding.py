import os

import base58
import pytest

from solsigner.encoding import (
    BASE58_ALPHABET,
    OutputFormat,
    b58decode,
    b58encode,
    b64decode,
    b64encode,
    decode_bytes,
    encode_bytes,
    hex_decode,
)
from solsigner.errors import InvalidEncoding


@pytest.mark.parametrize(
    "raw, text",
    [
        (b"", ""),
        (b"\x00", "1"),
        (b"\x00\x00\x01", "112"),
        (b"Hello World", "JxF12TrwUP45BMd"),
        (b"\x00\x00\x28\x7f\xb4\xcd", "11233QC4"),
        (bytes(32), "1" * 32),
    ],
)
def test_base58_known_vectors(raw, text):
    assert b58encode(raw) == text
    assert b58decode(text) == raw


def test_base58_matches_reference_library():
    for size in (1, 5, 31, 32, 33, 64, 100):
        data = os.urandom(size)
        for prefix in (b"", b"\x00", b"\x00\x00\x00"):
            sample = prefix + data
            assert b58encode(sample) == base58.b58encode(sample).decode("ascii")
            assert b58decode(b58encode(sample)) == sample


def test_base58_decode_is_canonical():
    for text in ("1", "11", "z", "1z", "2NEpo7TZRRrLZSi2U", BASE58_ALPHABET):
        assert b58encode(b58decode(text)) == text


@pytest.mark.parametrize("text", ["0abc", "Oops", "Il", "abc def", "ab+c"])
def test_base58_rejects_foreign_characters(text):
    with pytest.raises(InvalidEncoding):
        b58decode(text)


def test_hex_decode_rules():
    assert hex_decode("AbCd") == b"\xab\xcd"
    for bad in ("abc", "0x00", "zz", "ab cd"):
        with pytest.raises(InvalidEncoding):
            hex_decode(bad)


def test_base64_decode_is_strict():
    assert b64decode("QQ==") == b"A"
    # same bytes but non-zero trailing bits
    with pytest.raises(InvalidEncoding):
        b64decode("QR==")
    for bad in ("QQ", "QQ=", "Q Q==", "@@@@"):
        with pytest.raises(InvalidEncoding):
            b64decode(bad)


@pytest.mark.parametrize("fmt", list(OutputFormat))
def test_encode_decode_dispatch(fmt):
    data = os.urandom(64)
    text = encode_bytes(data, fmt)
    assert decode_bytes(text, fmt.value) == data


def test_output_format_parse():
    assert OutputFormat.parse(" HEX ") is OutputFormat.HEX
    assert OutputFormat.parse(OutputFormat.BASE64) is OutputFormat.BASE64
    assert str(OutputFormat.BASE58) == "base58"
    with pytest.raises(ValueError, match="Unsupported format"):
        OutputFormat.parse("base32")


def test_b64encode_standard_alphabet():
    assert b64encode(b"\xfb\xff") == "+/8="
