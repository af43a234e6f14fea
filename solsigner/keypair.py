"""Keypair construction plus the Solana keypair file adapters."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Mapping

from solders.keypair import Keypair

from .decoder import KEYPAIR_LENGTH, SEED_LENGTH, parse_byte_array
from .errors import (
    InvalidKeypairFile,
    KeypairFileError,
    KeypairFileNotFound,
    MalformedInput,
)

__all__ = [
    "keypair_from_bytes",
    "parse_keypair_json",
    "load_keypair_from_string",
    "load_keypair",
    "save_keypair",
    "generate_keypair",
    "default_keypair_path",
]

log = logging.getLogger(__name__)


def _home_default_keypair() -> Path:
    return Path.home() / ".config" / "solana" / "id.json"


def _normalise_path(path: str | os.PathLike[str]) -> Path:
    expanded = Path(path).expanduser()
    if not expanded.is_absolute():
        return Path(os.getcwd()) / expanded
    return expanded


def keypair_from_bytes(raw: bytes) -> Keypair:
    """Build a keypair from a 32-byte seed or a 64-byte seed+pubkey buffer.

    A 64-byte buffer is signed with the keypair derived from its first 32
    bytes.  If the trailing 32 bytes disagree with the derived public key a
    warning is logged and the derived key wins.
    """

    raw = bytes(raw)
    if len(raw) not in (SEED_LENGTH, KEYPAIR_LENGTH):
        raise MalformedInput(
            f"Private key must be {SEED_LENGTH} or {KEYPAIR_LENGTH} bytes, got {len(raw)}"
        )
    keypair = Keypair.from_seed(raw[:SEED_LENGTH])
    if len(raw) == KEYPAIR_LENGTH and bytes(keypair.pubkey()) != raw[SEED_LENGTH:]:
        log.warning(
            "Keypair public half does not match its seed; using derived key %s",
            keypair.pubkey(),
        )
    return keypair


def parse_keypair_json(text: str) -> bytes:
    """Return the 64 raw bytes of a Solana keypair JSON array."""

    try:
        return parse_byte_array(text, length=KEYPAIR_LENGTH)
    except ValueError as exc:
        raise InvalidKeypairFile(f"Invalid keypair data: {exc}") from exc


def load_keypair_from_string(text: str) -> Keypair:
    return keypair_from_bytes(parse_keypair_json(text))


def load_keypair(path: str | os.PathLike[str]) -> Keypair:
    """Read a Solana keypair JSON file from ``path``."""

    resolved = _normalise_path(path)
    try:
        text = resolved.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise KeypairFileNotFound(f"Keypair file {resolved} not found") from exc
    except IsADirectoryError as exc:
        raise KeypairFileError(f"Keypair {resolved} is not a file") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise KeypairFileError(f"Keypair {resolved} not readable: {exc}") from exc

    try:
        keypair = load_keypair_from_string(text)
    except InvalidKeypairFile as exc:
        raise InvalidKeypairFile(f"Keypair file {resolved}: {exc}") from exc
    log.info("Loaded keypair %s from %s", keypair.pubkey(), resolved)
    return keypair


def save_keypair(
    path: str | os.PathLike[str],
    keypair: Keypair,
    *,
    overwrite: bool = False,
) -> Path:
    """Write ``keypair`` as a 64-integer JSON array with mode ``0600``."""

    resolved = _normalise_path(path)
    if resolved.exists() and not overwrite:
        raise KeypairFileError(f"Keypair {resolved} already exists")
    payload = json.dumps(list(keypair.to_bytes()))
    try:
        resolved.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(resolved, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
        os.chmod(resolved, 0o600)
    except OSError as exc:
        raise KeypairFileError(f"Failed to write keypair {resolved}: {exc}") from exc
    log.info("Saved keypair %s to %s", keypair.pubkey(), resolved)
    return resolved


def generate_keypair() -> Keypair:
    """Return a fresh keypair drawn from the OS random source."""

    return Keypair()


def default_keypair_path(cfg: Mapping[str, object] | None = None) -> Path:
    """Resolve the keypair file used when the caller names none.

    The search order is:

    1. ``SOLANA_KEYPAIR`` when present.
    2. ``keypair_path`` from the loaded configuration.
    3. ``$HOME/.config/solana/id.json``.
    """

    alt = os.getenv("SOLANA_KEYPAIR")
    if alt:
        return _normalise_path(alt)
    if cfg and isinstance(cfg.get("keypair_path"), str):
        cfg_path = str(cfg["keypair_path"]).strip()
        if cfg_path:
            return _normalise_path(cfg_path)
    return _home_default_keypair()
