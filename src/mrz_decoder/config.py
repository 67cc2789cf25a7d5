"""
Configuration for the MRZ parser.

Values can be given directly, read from the environment or loaded from a YAML file.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from mrz_decoder.exceptions import ConfigurationError
from mrz_decoder.logging_config import LOG_FORMATS, LOG_LEVELS, LOG_OFF_LEVEL

TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
FALSE_VALUES = frozenset({"0", "false", "no", "off"})

YAML_SECTION = "mrz_parser"


def parse_bool(value: str, name: str) -> bool:
    """Interpret an environment flag."""
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    msg = f"Invalid boolean value for {name}: {value!r}"
    raise ConfigurationError(msg)


class ParserConfig(BaseModel):
    """Immutable options of an MRZParser."""

    ocr_correction_enabled: bool = Field(
        default=True, description="Remap confusable characters during field extraction"
    )
    debug_logging: bool = Field(
        default=False, description="Emit a check digit comparison report for every parse"
    )
    reference_year: Optional[int] = Field(
        default=None, description="Year anchoring two-digit year windowing, today's year if unset"
    )
    log_level: Optional[str] = Field(
        default=None, description="Console log level for the decoder, host logging untouched if unset"
    )
    log_format: str = Field(default="text", description="Console log format: text or json")

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("reference_year")
    @classmethod
    def validate_reference_year(cls, v):
        if v is not None and not 1900 <= v <= 9999:
            msg = "Reference year must be a four-digit year from 1900"
            raise ValueError(msg)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: Optional[str]) -> Optional[str]:
        """Validate log level setting."""
        if v is None:
            return v
        valid_levels = {*LOG_LEVELS, LOG_OFF_LEVEL}
        if v.upper() not in valid_levels:
            msg = f"Log level must be one of {sorted(valid_levels)}"
            raise ValueError(msg)
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in LOG_FORMATS:
            msg = f"Log format must be one of {sorted(LOG_FORMATS)}"
            raise ValueError(msg)
        return v.lower()

    @classmethod
    def from_env(cls, prefix: str = "MRZ_", environ: Optional[dict[str, str]] = None) -> ParserConfig:
        """
        Build a configuration from environment variables.

        Reads ``<prefix>OCR_CORRECTION``, ``<prefix>DEBUG``, ``<prefix>REFERENCE_YEAR``,
        ``<prefix>LOG_LEVEL`` and ``<prefix>LOG_FORMAT``;
        unset variables keep their defaults.

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        ocr_name = f"{prefix}OCR_CORRECTION"
        if ocr_name in env:
            values["ocr_correction_enabled"] = parse_bool(env[ocr_name], ocr_name)

        debug_name = f"{prefix}DEBUG"
        if debug_name in env:
            values["debug_logging"] = parse_bool(env[debug_name], debug_name)

        year_name = f"{prefix}REFERENCE_YEAR"
        if env.get(year_name):
            try:
                values["reference_year"] = int(env[year_name])
            except ValueError as exc:
                msg = f"Invalid integer value for {year_name}: {env[year_name]!r}"
                raise ConfigurationError(msg) from exc

        for option, suffix in (("log_level", "LOG_LEVEL"), ("log_format", "LOG_FORMAT")):
            if env.get(f"{prefix}{suffix}"):
                values[option] = env[f"{prefix}{suffix}"]

        return cls._build(values)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> ParserConfig:
        """
        Load a configuration from a YAML file.

        The options may sit at the top level or under an ``mrz_parser`` section.

        Raises:
            ConfigurationError: If the file is missing or malformed
        """
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Configuration file not found: {config_path}"
            raise ConfigurationError(msg)

        try:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            msg = f"Invalid YAML in {config_path}: {exc}"
            raise ConfigurationError(msg) from exc

        if not isinstance(data, dict):
            msg = f"Configuration in {config_path} must be a mapping"
            raise ConfigurationError(msg)

        section = data.get(YAML_SECTION, data)
        if not isinstance(section, dict):
            msg = f"Section '{YAML_SECTION}' in {config_path} must be a mapping"
            raise ConfigurationError(msg)
        return cls._build(section)

    @classmethod
    def _build(cls, values: dict[str, Any]) -> ParserConfig:
        try:
            return cls(**values)
        except ValidationError as exc:
            msg = f"Invalid parser configuration: {exc}"
            raise ConfigurationError(msg) from exc
