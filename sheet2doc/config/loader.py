from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import ExportConfig

"""Config loader.

Responsibilities:
- Load YAML config (default ``config/sheet2doc.yml``)
- Validate against the bundled JSON schema
- Apply defaults for missing keys
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/sheet2doc.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: if the schema file is missing or unreadable, or the data
            violates it (unknown keys, wrong types, out of range values).
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


def _check_timezone(name: str) -> None:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown timezone: {name}") from e


def load_config(path: Path | None = None) -> ExportConfig:
    """Load and validate the config file.

    ``path=None`` means the default location; a missing default file yields
    ``ExportConfig()``. An explicitly requested file must exist.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return ExportConfig()
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    defaults = ExportConfig()
    tz = data.get("timezone", defaults.timezone)
    _check_timezone(tz)
    return ExportConfig(
        folder_name=data.get("folder_name", defaults.folder_name),
        header_row=data.get("header_row", defaults.header_row),
        heading_level=data.get("heading_level", defaults.heading_level),
        timezone=tz,
        sheet=data.get("sheet", defaults.sheet),
        drafts_directory=data.get("drafts_directory", defaults.drafts_directory),
        logs_directory=data.get("logs_directory", defaults.logs_directory),
    )
