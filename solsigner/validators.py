from __future__ import annotations

"""Advisory format checks used before calling the signer.

None of these raise and none perform cryptographic checks; the decoder is
the authority on what is accepted.
"""

import os
import re
from pathlib import Path

from .decoder import KEYPAIR_LENGTH, parse_byte_array
from .encoding import BASE58_ALPHABET, OutputFormat, b64decode
from .errors import InvalidEncoding

__all__ = [
    "looks_like_base58",
    "looks_like_hex",
    "looks_like_base64",
    "looks_like_valid_public_key",
    "looks_like_valid_signature",
    "looks_like_private_key",
    "looks_like_keypair_file",
]

_BASE58_RE = re.compile(f"[{BASE58_ALPHABET}]+")
_HEX_RE = re.compile(r"[0-9a-fA-F]+")

PUBLIC_KEY_BASE58_LENGTH = 44
SIGNATURE_HEX_LENGTH = 128
SIGNATURE_BASE58_LENGTHS = range(87, 89)
SIGNATURE_BASE64_LENGTH = 88


def _is_text(value: object) -> bool:
    return isinstance(value, str) and bool(value)


def looks_like_base58(value: str) -> bool:
    return _is_text(value) and len(value) >= 32 and bool(_BASE58_RE.fullmatch(value))


def looks_like_hex(value: str) -> bool:
    return (
        _is_text(value)
        and len(value) >= 64
        and len(value) % 2 == 0
        and bool(_HEX_RE.fullmatch(value))
    )


def looks_like_base64(value: str) -> bool:
    if not _is_text(value):
        return False
    try:
        b64decode(value)
    except InvalidEncoding:
        return False
    return True


def looks_like_valid_public_key(value: str) -> bool:
    # 32 bytes usually render as 44 base58 chars; leading zero bytes shorten it
    return looks_like_base58(value) and len(value) == PUBLIC_KEY_BASE58_LENGTH


def looks_like_valid_signature(value: str, fmt: OutputFormat | str) -> bool:
    if not _is_text(value):
        return False
    try:
        fmt = OutputFormat.parse(fmt)
    except ValueError:
        return False
    if fmt is OutputFormat.HEX:
        return looks_like_hex(value) and len(value) == SIGNATURE_HEX_LENGTH
    if fmt is OutputFormat.BASE58:
        return looks_like_base58(value) and len(value) in SIGNATURE_BASE58_LENGTHS
    return looks_like_base64(value) and len(value) == SIGNATURE_BASE64_LENGTH


def looks_like_private_key(value: str) -> bool:
    """Return ``True`` for a 64-byte JSON array or plausible base58/hex/base64."""

    if not _is_text(value):
        return False
    try:
        parse_byte_array(value, length=KEYPAIR_LENGTH)
        return True
    except ValueError:
        pass
    return looks_like_base58(value) or looks_like_hex(value) or looks_like_base64(value)


def looks_like_keypair_file(path: str | os.PathLike[str]) -> bool:
    """Return ``True`` when ``path`` is a readable 64-byte keypair JSON file."""

    try:
        text = Path(path).expanduser().read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError, TypeError):
        return False
    try:
        parse_byte_array(text, length=KEYPAIR_LENGTH)
    except ValueError:
        return False
    return True
