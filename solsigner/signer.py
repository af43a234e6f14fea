"""Ed25519 detached signing and verification over raw byte buffers.

:class:`MessageSigner` is the entry point used by the CLI.  It resolves key
material through :mod:`solsigner.decoder` and :mod:`solsigner.keypair`,
signs or verifies, and renders signatures with :mod:`solsigner.encoding`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature

from . import keypair as keypair_io
from .decoder import (
    PUBLIC_KEY_LENGTH,
    SIGNATURE_LENGTH,
    decode_private_key,
    decode_public_key,
    decode_signature,
)
from .encoding import OutputFormat, b58encode, encode_bytes
from .errors import MalformedInput

__all__ = [
    "SignResult",
    "MessageSigner",
    "sign",
    "verify",
    "generate_keypair",
]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignResult:
    signature: str
    public_key: str


def sign(message: bytes, keypair: Keypair) -> bytes:
    """Return the 64-byte detached signature of ``message``."""

    return bytes(keypair.sign_message(bytes(message)))


def verify(message: bytes, signature: bytes, public_key: bytes) -> bool:
    """Check a detached signature.

    Returns ``False`` for a well-formed signature that does not match.
    Raises :class:`MalformedInput` when the signature or public key has the
    wrong length or the public key is not a point on the curve.
    """

    signature = bytes(signature)
    public_key = bytes(public_key)
    if len(signature) != SIGNATURE_LENGTH:
        raise MalformedInput(
            f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}"
        )
    if len(public_key) != PUBLIC_KEY_LENGTH:
        raise MalformedInput(
            f"Public key must be {PUBLIC_KEY_LENGTH} bytes, got {len(public_key)}"
        )
    pubkey = Pubkey.from_bytes(public_key)
    if not pubkey.is_on_curve():
        raise MalformedInput(f"Public key {pubkey} is not a valid curve point")
    return Signature.from_bytes(signature).verify(pubkey, bytes(message))


def generate_keypair() -> Keypair:
    return keypair_io.generate_keypair()


def _message_bytes(message: str | bytes) -> bytes:
    if isinstance(message, bytes):
        return message
    return message.encode("utf-8")


class MessageSigner:
    """Sign and verify text messages with Solana keypairs."""

    def __init__(self, default_format: OutputFormat | str = OutputFormat.BASE58) -> None:
        self.default_format = OutputFormat.parse(default_format)

    def _format(self, fmt: OutputFormat | str | None) -> OutputFormat:
        return self.default_format if fmt is None else OutputFormat.parse(fmt)

    def sign_message(
        self,
        message: str | bytes,
        keypair: Keypair,
        fmt: OutputFormat | str | None = None,
    ) -> SignResult:
        signature = sign(_message_bytes(message), keypair)
        return SignResult(
            signature=encode_bytes(signature, self._format(fmt)),
            public_key=b58encode(bytes(keypair.pubkey())),
        )

    def sign_with_keypair_file(
        self,
        message: str | bytes,
        path: str | os.PathLike[str],
        fmt: OutputFormat | str | None = None,
    ) -> SignResult:
        """Sign ``message`` with the keypair stored at ``path``."""

        keypair = keypair_io.load_keypair(path)
        return self.sign_message(message, keypair, fmt)

    def sign_with_private_key(
        self,
        message: str | bytes,
        private_key: str,
        fmt: OutputFormat | str | None = None,
    ) -> SignResult:
        """Sign ``message`` with a private key given as text.

        The key may be base58, hex, base64 or a JSON byte array and must hold
        either a 32-byte seed or a 64-byte keypair.
        """

        raw = decode_private_key(private_key)
        return self.sign_message(message, keypair_io.keypair_from_bytes(raw), fmt)

    def verify_signature(
        self,
        message: str | bytes,
        signature: str,
        public_key: str,
        fmt: OutputFormat | str | None = None,
    ) -> bool:
        pubkey_bytes = decode_public_key(public_key)
        signature_bytes = decode_signature(signature, self._format(fmt))
        valid = verify(_message_bytes(message), signature_bytes, pubkey_bytes)
        log.debug("Signature check for %s: %s", public_key, valid)
        return valid

    def generate_keypair(self) -> Keypair:
        return generate_keypair()
