from __future__ import annotations

"""Configuration defaults for the signer CLI.

Values come from, in order of precedence, environment variables, an optional
TOML file and built-in defaults.
"""

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .config_schema import validate_config
from .encoding import OutputFormat
from .errors import ConfigError

__all__ = ["SignerConfig", "load_config_file", "load_config"]

CONFIG_ENV = "SOLSIGNER_CONFIG"

log = logging.getLogger(__name__)


@dataclass
class SignerConfig:
    """Runtime configuration values populated from environment or file settings."""

    output_format: OutputFormat = OutputFormat.BASE58
    keypair_path: Optional[str] = None
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, cfg: Mapping[str, object] | None = None) -> "SignerConfig":
        """Create a config using environment variables and an optional dict."""
        cfg = dict(cfg or {})
        env = os.getenv
        overrides = {
            "output_format": env("SOLSIGNER_OUTPUT_FORMAT"),
            "keypair_path": env("SOLSIGNER_KEYPAIR"),
            "log_level": env("SOLSIGNER_LOG_LEVEL"),
        }
        for key, value in overrides.items():
            if value:
                cfg[key] = value
        try:
            data = validate_config(cfg)
        except ValueError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc
        return cls(
            output_format=OutputFormat.parse(data["output_format"]),
            keypair_path=data.get("keypair_path"),
            log_level=str(data["log_level"]),
        )

    def as_mapping(self) -> dict[str, object]:
        return {
            "output_format": self.output_format.value,
            "keypair_path": self.keypair_path,
            "log_level": self.log_level,
        }


def load_config_file(path: str | os.PathLike[str]) -> dict[str, object]:
    """Read a TOML config file into a dict; the ``[solsigner]`` table is used when present."""

    cfg_path = Path(path).expanduser()
    try:
        with cfg_path.open("rb") as fh:
            data = tomllib.load(fh)
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file {cfg_path} not found") from exc
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to read config {cfg_path}: {exc}") from exc
    section = data.get("solsigner", data)
    if not isinstance(section, dict):
        raise ConfigError(f"Config {cfg_path}: [solsigner] must be a table")
    log.debug("Loaded config from %s", cfg_path)
    return section


def load_config(path: str | os.PathLike[str] | None = None) -> SignerConfig:
    """Build the effective configuration.

    ``path`` falls back to ``$SOLSIGNER_CONFIG``; without either only the
    environment and defaults apply.
    """

    path = path or os.getenv(CONFIG_ENV)
    cfg = load_config_file(path) if path else {}
    return SignerConfig.from_env(cfg)
