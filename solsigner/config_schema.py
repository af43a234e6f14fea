from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .encoding import OutputFormat

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigModel(BaseModel):
    """Schema for solsigner TOML configuration files."""

    model_config = ConfigDict(extra="forbid")

    output_format: OutputFormat = OutputFormat.BASE58
    keypair_path: Optional[str] = None
    log_level: str = "WARNING"

    @field_validator("output_format", mode="before")
    @classmethod
    def _normalise_format(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}"
            )
        return level


def validate_config(data: Dict[str, object]) -> Dict[str, object]:
    """Validate ``data`` against :class:`ConfigModel`.

    Returns the validated data with type normalization applied.
    Raises ``ValueError`` on validation errors.
    """
    try:
        model = ConfigModel(**data)
    except ValidationError as exc:
        raise ValueError(str(exc)) from exc
    return model.model_dump()
