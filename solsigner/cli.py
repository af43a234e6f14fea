from __future__ import annotations

import logging
from argparse import ArgumentParser
from typing import Sequence

from . import __version__
from .config import SignerConfig, load_config
from .console_utils import (
    console_error,
    console_field,
    console_info,
    console_success,
    console_warning,
)
from .encoding import OutputFormat, b58encode, b64encode
from .errors import SolsignerError
from .keypair import default_keypair_path, save_keypair
from .logging_utils import setup_stdout_logging
from .signer import MessageSigner
from .validators import looks_like_keypair_file, looks_like_private_key

log = logging.getLogger(__name__)

_FORMATS = [fmt.value for fmt in OutputFormat]


def _build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="solsigner", description="Sign messages with Solana keypairs")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Path to a TOML config file")
    parser.add_argument("--log-level", help="Logging level (default from config)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sign_p = subparsers.add_parser("sign", help="Sign a message with a Solana keypair")
    sign_p.add_argument("-m", "--message", required=True, help="Message to sign")
    source = sign_p.add_mutually_exclusive_group()
    source.add_argument("-k", "--keypair", help="Path to Solana keypair JSON file")
    source.add_argument(
        "-p",
        "--private-key",
        help="Private key as base58, hex, base64 or a JSON array of bytes",
    )
    sign_p.add_argument("-o", "--output", choices=_FORMATS, help="Signature format")
    sign_p.add_argument(
        "--verify", action="store_true", help="Verify the signature after signing"
    )

    verify_p = subparsers.add_parser("verify", help="Verify a signature for a message")
    verify_p.add_argument("-m", "--message", required=True, help="Original message")
    verify_p.add_argument("-s", "--signature", required=True, help="Signature to verify")
    verify_p.add_argument(
        "-p", "--public-key", required=True, help="Base58 public key to verify against"
    )
    verify_p.add_argument("-f", "--format", choices=_FORMATS, help="Signature format")

    keypair_p = subparsers.add_parser("keypair", help="Generate a new Solana keypair")
    keypair_p.add_argument("-o", "--output", help="Output file path for the keypair")
    keypair_p.add_argument(
        "--public-key-only", action="store_true", help="Only display the public key"
    )
    keypair_p.add_argument(
        "--force", action="store_true", help="Overwrite an existing output file"
    )
    return parser


def _cmd_sign(args, cfg: SignerConfig, signer: MessageSigner) -> int:
    console_info("Solsigner - Solana Message Signer\n")
    fmt = OutputFormat.parse(args.output or cfg.output_format)

    if args.private_key:
        if not looks_like_private_key(args.private_key):
            console_error("Error: Invalid private key format")
            return 1
        console_warning("Using provided private key")
        result = signer.sign_with_private_key(args.message, args.private_key, fmt)
    else:
        path = args.keypair or default_keypair_path(cfg.as_mapping())
        if not looks_like_keypair_file(path):
            console_error(f"Error: Invalid keypair file {path}")
            return 1
        console_warning(f"Using keypair file: {path}")
        result = signer.sign_with_keypair_file(args.message, path, fmt)

    console_success("\nMessage signed successfully!\n")
    console_field("Message", args.message)
    console_field("Public Key", result.public_key)
    console_field(f"Signature ({fmt.value})", result.signature)

    if args.verify:
        console_warning("\nVerifying signature...")
        if not signer.verify_signature(
            args.message, result.signature, result.public_key, fmt
        ):
            console_error("Signature verification: INVALID")
            return 1
        console_success("Signature verification: VALID")
    return 0


def _cmd_verify(args, cfg: SignerConfig, signer: MessageSigner) -> int:
    console_info("Solsigner - Signature Verification\n")
    fmt = OutputFormat.parse(args.format or cfg.output_format)
    valid = signer.verify_signature(args.message, args.signature, args.public_key, fmt)

    console_field("Message", args.message)
    console_field("Signature", args.signature)
    console_field("Public Key", args.public_key)
    if not valid:
        console_error("\nSignature verification: INVALID")
        return 1
    console_success("\nSignature verification: VALID")
    return 0


def _cmd_keypair(args, cfg: SignerConfig, signer: MessageSigner) -> int:
    console_info("Solsigner - Keypair Generator\n")
    keypair = signer.generate_keypair()
    console_field("Public Key", b58encode(bytes(keypair.pubkey())))
    if args.public_key_only:
        return 0

    console_field("Private Key", b64encode(keypair.to_bytes()))
    if args.output:
        path = save_keypair(args.output, keypair, overwrite=args.force)
        console_success(f"Keypair saved to: {path}")
    else:
        console_warning("\nTip: Use --output <path> to save the keypair to a file")
    return 0


_COMMANDS = {
    "sign": _cmd_sign,
    "verify": _cmd_verify,
    "keypair": _cmd_keypair,
}


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        cfg = load_config(args.config)
        setup_stdout_logging(level=args.log_level or cfg.log_level)
        signer = MessageSigner(cfg.output_format)
        return _COMMANDS[args.command](args, cfg, signer)
    except (SolsignerError, ValueError) as exc:
        log.debug("Command %s failed", args.command, exc_info=True)
        console_error(f"Error: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
