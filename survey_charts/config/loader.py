from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.category import Category, Vocabulary
from ..models.config_models import AppConfig, ChartConfig

"""Config loader.

Responsibilities:
- Load the packaged defaults (defaults.yml) and an optional user YAML file
- Validate both against config_schema.json
- Merge user values over the defaults (synonyms / categories / colors key by key)
- Build the typed AppConfig
"""

__all__ = [
    "ConfigError",
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "resolve_config_path",
    "default_config",
    "default_vocabulary",
]

_config_dir = Path(__file__).parent
SCHEMA_PATH = _config_dir / "config_schema.json"
DEFAULTS_PATH = _config_dir / "defaults.yml"

CONFIG_ENV_VAR = "SURVEY_CHARTS_CONFIG"
DEFAULT_CONFIG_PATH = Path("config/charts.yml")

_MERGED_MAPPINGS = ("categories", "synonyms")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the data
            fails validation (unknown keys, wrong types, unknown category keys).
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


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")
    # YAML は数値キー等も許すので文字列化しておく
    if isinstance(data.get("synonyms"), dict):
        data["synonyms"] = {str(k): v for k, v in data["synonyms"].items()}
    return data


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if key in _MERGED_MAPPINGS:
            merged[key] = {**base.get(key, {}), **value}
        elif key == "chart":
            chart = {**base.get("chart", {}), **value}
            if "colors" in value:
                chart["colors"] = {**base.get("chart", {}).get("colors", {}), **value["colors"]}
            merged["chart"] = chart
        else:
            merged[key] = value
    return merged


def _build(data: dict[str, Any]) -> AppConfig:
    labels = {Category.from_key(k): v for k, v in data["categories"].items()}
    synonyms = {phrase: Category.from_key(key) for phrase, key in data.get("synonyms", {}).items()}
    try:
        vocabulary = Vocabulary.build(labels, synonyms)
    except ValueError as e:
        raise ConfigError(f"invalid vocabulary: {e}") from e

    chart_raw = data.get("chart", {})
    chart = ChartConfig(
        max_label_length=chart_raw.get("max_label_length", 30),
        fallback_label=chart_raw.get("fallback_label", "Question {index}"),
        bar_title=chart_raw.get("bar_title", "Employee Motivation Factors"),
        pie_title=chart_raw.get("pie_title", "Overall Response Distribution"),
        min_label_percentage=float(chart_raw.get("min_label_percentage", 5)),
        colors={Category.from_key(k): v for k, v in chart_raw.get("colors", {}).items()},
    )
    return AppConfig(
        vocabulary=vocabulary,
        chart=chart,
        delimiter=data.get("delimiter", ","),
        source_directory=data.get("source_directory", "./data"),
        output_directory=data.get("output_directory", "./charts"),
    )


def load_config(path: Path | None = None) -> AppConfig:
    """Load packaged defaults, optionally overlaid with a user YAML file."""
    defaults = _read_yaml(DEFAULTS_PATH)
    _validate_config_schema(defaults)
    data = defaults
    if path is not None:
        if not path.exists():
            raise ConfigError(f"config file not found: {path}")
        user = _read_yaml(path)
        _validate_config_schema(user)
        data = _merge(defaults, user)
    return _build(data)


def resolve_config_path(explicit: Path | None = None) -> Path | None:
    """Pick the user config: --config > $SURVEY_CHARTS_CONFIG > config/charts.yml.

    Returns None when nothing is configured and the default file is absent
    (packaged defaults only).
    """
    if explicit is not None:
        return explicit
    env_value = os.getenv(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


@lru_cache(maxsize=1)
def default_config() -> AppConfig:
    return load_config(None)


def default_vocabulary() -> Vocabulary:
    return default_config().vocabulary
