from __future__ import annotations

"""Exception types raised by :mod:`solsigner`."""

__all__ = [
    "SolsignerError",
    "InvalidEncoding",
    "InvalidKeyFormat",
    "KeypairFileError",
    "InvalidKeypairFile",
    "KeypairFileNotFound",
    "InvalidPublicKey",
    "InvalidSignatureFormat",
    "MalformedInput",
    "ConfigError",
]


class SolsignerError(Exception):
    """Base class for every error surfaced by the signer."""


class InvalidEncoding(SolsignerError, ValueError):
    """Raised when text cannot be decoded under a specific encoding."""


class InvalidKeyFormat(SolsignerError, ValueError):
    """Raised when no supported encoding yields a usable private key."""


class KeypairFileError(SolsignerError):
    """Raised when a keypair file cannot be read or used."""


class InvalidKeypairFile(KeypairFileError, ValueError):
    """Raised when keypair JSON is not an array of exactly 64 bytes."""


class KeypairFileNotFound(KeypairFileError, FileNotFoundError):
    """Raised when the keypair path does not exist."""


class InvalidPublicKey(SolsignerError, ValueError):
    """Raised when a public key is not base58 or not 32 bytes long."""


class InvalidSignatureFormat(SolsignerError, ValueError):
    """Raised when a signature cannot be decoded under its stated format."""


class MalformedInput(SolsignerError, ValueError):
    """Raised for byte-length or curve-point violations at the crypto boundary."""


class ConfigError(SolsignerError):
    """Raised when configuration cannot be loaded or validated."""
