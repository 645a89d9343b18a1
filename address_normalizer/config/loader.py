from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    ComponentDefaults,
    DictionaryExtensions,
    FuzzySettings,
    NormalizerConfig,
    ReaderSettings,
    ValidationMode,
    ValidationSettings,
)

"""Config loader.

Responsibilities:
- Locate the YAML config (--config > ADDRESS_NORMALIZER_CONFIG > config/normalizer.yml)
- Validate it against the packaged JSON schema (unknown keys rejected)
- Apply defaults for every missing key
"""

__all__ = [
    "ConfigError",
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
    "resolve_config_path",
    "load_config_or_default",
]

CONFIG_ENV_VAR = "ADDRESS_NORMALIZER_CONFIG"
DEFAULT_CONFIG_PATH = Path("config/normalizer.yml")
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or unreadable, or data fails validation
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _build_config(data: dict[str, Any]) -> NormalizerConfig:
    validation_raw = data.get("validation", {})
    fuzzy_raw = data.get("fuzzy", {})
    reader_raw = data.get("reader", {})
    dictionary_raw = data.get("dictionary", {})
    base = NormalizerConfig()

    validation = ValidationSettings(
        mode=ValidationMode(validation_raw.get("mode", base.validation.mode.value)),
        min_length=validation_raw.get("min_length", base.validation.min_length),
    )
    fuzzy = FuzzySettings(
        min_token_length=fuzzy_raw.get("min_token_length", base.fuzzy.min_token_length),
        max_distance=float(fuzzy_raw.get("max_distance", base.fuzzy.max_distance)),
        confidence_floor=fuzzy_raw.get("confidence_floor", base.fuzzy.confidence_floor),
    )
    # unspecified components keep the built-in placeholders
    defaults = ComponentDefaults(**data.get("defaults", {}))
    reader = ReaderSettings(
        sheet=reader_raw.get("sheet", base.reader.sheet),
        csv_encoding=reader_raw.get("csv_encoding", base.reader.csv_encoding),
        csv_delimiter=reader_raw.get("csv_delimiter", base.reader.csv_delimiter),
    )
    dictionary = DictionaryExtensions(
        canonical_entries=tuple(dictionary_raw.get("canonical_entries", ())),
        city_abbreviations=dict(dictionary_raw.get("city_abbreviations", {})),
        region_names=dict(dictionary_raw.get("region_names", {})),
        spelling_corrections=dict(dictionary_raw.get("spelling_corrections", {})),
    )
    return NormalizerConfig(
        validation=validation,
        fuzzy=fuzzy,
        defaults=defaults,
        reader=reader,
        dictionary=dictionary,
        strict_defaults=data.get("strict_defaults", base.strict_defaults),
        confidence_sentinel=data.get("confidence_sentinel", base.confidence_sentinel),
        logs_dir=data.get("logs_dir", base.logs_dir),
    )


def load_config(path: Path) -> NormalizerConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)
    return _build_config(data)


def resolve_config_path(explicit: str | Path | None = None) -> Path | None:
    """Pick the config file: explicit path, then the environment variable,
    then config/normalizer.yml when it exists.

    Only the default location is optional; a missing explicit or environment
    path surfaces as ConfigError from load_config().
    """
    if explicit:
        return Path(explicit)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


def load_config_or_default(explicit: str | Path | None = None) -> NormalizerConfig:
    path = resolve_config_path(explicit)
    if path is None:
        return NormalizerConfig()
    return load_config(path)
