from __future__ import annotations

"""Resolve key and signature text of unknown encoding into raw bytes."""

import json
import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from . import encoding
from .encoding import OutputFormat
from .errors import (
    InvalidEncoding,
    InvalidKeyFormat,
    InvalidPublicKey,
    InvalidSignatureFormat,
)

__all__ = [
    "KEYPAIR_LENGTH",
    "SEED_LENGTH",
    "PUBLIC_KEY_LENGTH",
    "SIGNATURE_LENGTH",
    "KeyFormat",
    "Base58Format",
    "HexFormat",
    "Base64Format",
    "JsonArrayFormat",
    "KeyDecoder",
    "PRIVATE_KEY_DECODER",
    "parse_byte_array",
    "decode_private_key",
    "decode_public_key",
    "decode_signature",
]

KEYPAIR_LENGTH = 64
SEED_LENGTH = 32
PUBLIC_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64

PRIVATE_KEY_LENGTHS = frozenset({SEED_LENGTH, KEYPAIR_LENGTH})

log = logging.getLogger(__name__)


def parse_byte_array(text: str, *, length: int | None = None) -> bytes:
    """Parse a JSON array of integers in ``[0, 255]`` into bytes.

    Raises ``ValueError`` describing the first violation found.
    """

    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise ValueError(f"not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array, got {type(data).__name__}")
    for idx, value in enumerate(data):
        # bool is an int subclass; JSON true/false are not bytes
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"element {idx} is not an integer: {value!r}")
        if not 0 <= value <= 255:
            raise ValueError(f"element {idx} out of byte range: {value}")
    if length is not None and len(data) != length:
        raise ValueError(f"expected {length} elements, got {len(data)}")
    return bytes(data)


class KeyFormat:
    """One candidate interpretation of key text."""

    name = "unknown"

    def try_decode(self, text: str) -> bytes | None:
        raise NotImplementedError


class _CodecFormat(KeyFormat):
    fmt: OutputFormat

    def try_decode(self, text: str) -> bytes | None:
        try:
            return encoding.decode_bytes(text, self.fmt)
        except InvalidEncoding as exc:
            log.debug("%s candidate rejected: %s", self.name, exc)
            return None


class Base58Format(_CodecFormat):
    name = "base58"
    fmt = OutputFormat.BASE58


class HexFormat(_CodecFormat):
    name = "hex"
    fmt = OutputFormat.HEX


class Base64Format(_CodecFormat):
    name = "base64"
    fmt = OutputFormat.BASE64


class JsonArrayFormat(KeyFormat):
    name = "json-byte-array"

    def try_decode(self, text: str) -> bytes | None:
        try:
            return parse_byte_array(text)
        except ValueError as exc:
            log.debug("%s candidate rejected: %s", self.name, exc)
            return None


@dataclass(frozen=True)
class KeyDecoder:
    """Try each format in order and keep the first acceptable result.

    A result is acceptable when the format parses the text and, if
    ``lengths`` is given, the decoded length is one of them.  Formats are not
    cross-checked against each other.
    """

    formats: tuple[KeyFormat, ...]

    @property
    def format_names(self) -> list[str]:
        return [fmt.name for fmt in self.formats]

    def attempt(self, text: str, lengths: Iterable[int] | None = None) -> bytes | None:
        allowed = frozenset(lengths) if lengths is not None else None
        for fmt in self.formats:
            raw = fmt.try_decode(text)
            if raw is None:
                continue
            if allowed is not None and len(raw) not in allowed:
                log.debug(
                    "%s candidate decoded to %d bytes; need one of %s",
                    fmt.name,
                    len(raw),
                    sorted(allowed),
                )
                continue
            log.debug("Key text decoded as %s (%d bytes)", fmt.name, len(raw))
            return raw
        return None

    def decode(self, text: str, lengths: Iterable[int] | None = None) -> bytes:
        if not isinstance(text, str) or not text.strip():
            raise InvalidKeyFormat("Key text is empty")
        raw = self.attempt(text.strip(), lengths)
        if raw is None:
            tried = ", ".join(self.format_names)
            raise InvalidKeyFormat(
                f"Key text is not a valid {tried} encoding of "
                f"{_describe_lengths(lengths)}"
            )
        return raw


def _describe_lengths(lengths: Iterable[int] | None) -> str:
    if lengths is None:
        return "any bytes"
    return " or ".join(f"{n} bytes" for n in sorted(lengths))


PRIVATE_KEY_DECODER = KeyDecoder(
    (Base58Format(), HexFormat(), Base64Format(), JsonArrayFormat())
)


def decode_private_key(
    text: str,
    *,
    decoder: KeyDecoder = PRIVATE_KEY_DECODER,
    lengths: Sequence[int] = tuple(PRIVATE_KEY_LENGTHS),
) -> bytes:
    """Return the 32-byte seed or 64-byte keypair encoded in ``text``."""

    return decoder.decode(text, lengths)


def decode_public_key(text: str) -> bytes:
    """Decode a base58 public key into its 32 raw bytes."""

    if not isinstance(text, str) or not text:
        raise InvalidPublicKey("Public key is empty")
    try:
        raw = encoding.b58decode(text.strip())
    except InvalidEncoding as exc:
        raise InvalidPublicKey(f"Public key is not valid base58: {exc}") from exc
    if len(raw) != PUBLIC_KEY_LENGTH:
        raise InvalidPublicKey(
            f"Public key must decode to {PUBLIC_KEY_LENGTH} bytes, got {len(raw)}"
        )
    return raw


def decode_signature(text: str, fmt: OutputFormat | str) -> bytes:
    """Decode ``text`` as a 64-byte signature in the stated format."""

    try:
        fmt = OutputFormat.parse(fmt)
    except ValueError as exc:
        raise InvalidSignatureFormat(str(exc)) from exc
    if not isinstance(text, str) or not text:
        raise InvalidSignatureFormat("Signature is empty")
    try:
        raw = encoding.decode_bytes(text.strip(), fmt)
    except InvalidEncoding as exc:
        raise InvalidSignatureFormat(
            f"Signature is not valid {fmt.value}: {exc}"
        ) from exc
    if len(raw) != SIGNATURE_LENGTH:
        raise InvalidSignatureFormat(
            f"Signature must decode to {SIGNATURE_LENGTH} bytes, got {len(raw)}"
        )
    return raw
