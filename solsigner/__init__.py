"""Sign and verify messages with Solana Ed25519 keypairs."""

from .encoding import OutputFormat, b58decode, b58encode
from .errors import (
    ConfigError,
    InvalidEncoding,
    InvalidKeyFormat,
    InvalidKeypairFile,
    InvalidPublicKey,
    InvalidSignatureFormat,
    KeypairFileError,
    KeypairFileNotFound,
    MalformedInput,
    SolsignerError,
)
from .signer import MessageSigner, SignResult, generate_keypair, sign, verify

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "OutputFormat",
    "b58encode",
    "b58decode",
    "MessageSigner",
    "SignResult",
    "sign",
    "verify",
    "generate_keypair",
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
