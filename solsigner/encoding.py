"""Byte/text codecs used for keys and signatures.

The base58 codec follows the Bitcoin/Solana alphabet and treats the input as
a big-endian unsigned integer.  Leading zero bytes are carried as leading
``"1"`` characters so that every byte string has exactly one encoding.
Hex and base64 decoding are strict: anything the canonical encoder would not
have produced is rejected.
"""

from __future__ import annotations

import base64
import binascii
import re
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .errors import InvalidEncoding

__all__ = [
    "BASE58_ALPHABET",
    "OutputFormat",
    "b58encode",
    "b58decode",
    "hex_encode",
    "hex_decode",
    "b64encode",
    "b64decode",
    "encode_bytes",
    "decode_bytes",
]

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_BASE58_ZERO = BASE58_ALPHABET[0]
_BASE58_INDEX: Mapping[str, int] = MappingProxyType(
    {char: idx for idx, char in enumerate(BASE58_ALPHABET)}
)

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


class OutputFormat(str, Enum):
    """Text renderings supported for signatures."""

    HEX = "hex"
    BASE58 = "base58"
    BASE64 = "base64"

    @classmethod
    def parse(cls, value: "OutputFormat | str") -> "OutputFormat":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(fmt.value for fmt in cls)
            raise ValueError(
                f"Unsupported format {value!r}; expected one of {choices}"
            ) from None

    def __str__(self) -> str:
        return self.value


def b58encode(data: bytes) -> str:
    """Encode ``data`` as base58 text."""

    data = bytes(data)
    stripped = data.lstrip(b"\0")
    leading = len(data) - len(stripped)

    num = int.from_bytes(stripped, "big")
    chars: list[str] = []
    while num:
        num, rem = divmod(num, 58)
        chars.append(BASE58_ALPHABET[rem])
    chars.reverse()
    return _BASE58_ZERO * leading + "".join(chars)


def b58decode(text: str) -> bytes:
    """Decode base58 ``text`` into bytes.

    Raises :class:`InvalidEncoding` when ``text`` contains a character
    outside :data:`BASE58_ALPHABET`.
    """

    num = 0
    for pos, char in enumerate(text):
        digit = _BASE58_INDEX.get(char)
        if digit is None:
            raise InvalidEncoding(
                f"Invalid base58 character {char!r} at position {pos}"
            )
        num = num * 58 + digit

    leading = len(text) - len(text.lstrip(_BASE58_ZERO))
    body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
    return b"\0" * leading + body


def hex_encode(data: bytes) -> str:
    return bytes(data).hex()


def hex_decode(text: str) -> bytes:
    """Decode hex ``text``; whitespace, prefixes and odd lengths are rejected."""

    if not _HEX_RE.fullmatch(text):
        raise InvalidEncoding("Hex text contains non-hex characters")
    if len(text) % 2:
        raise InvalidEncoding("Hex text must have an even number of digits")
    return bytes.fromhex(text)


def b64encode(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")


def b64decode(text: str) -> bytes:
    """Decode standard base64 ``text``.

    The decoded bytes must re-encode to exactly ``text``; alternate padding
    and non-canonical trailing bits are rejected.
    """

    try:
        raw = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidEncoding(f"Invalid base64 text: {exc}") from exc
    if b64encode(raw) != text:
        raise InvalidEncoding("Base64 text is not in canonical form")
    return raw


def encode_bytes(data: bytes, fmt: OutputFormat | str) -> str:
    """Render ``data`` in the requested output format."""

    fmt = OutputFormat.parse(fmt)
    if fmt is OutputFormat.HEX:
        return hex_encode(data)
    if fmt is OutputFormat.BASE64:
        return b64encode(data)
    return b58encode(data)


def decode_bytes(text: str, fmt: OutputFormat | str) -> bytes:
    """Decode ``text`` under the stated output format."""

    fmt = OutputFormat.parse(fmt)
    if fmt is OutputFormat.HEX:
        return hex_decode(text)
    if fmt is OutputFormat.BASE64:
        return b64decode(text)
    return b58decode(text)
