# semrange/settings.py
from __future__ import annotations
import json5, os
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, JsonValue, ValidationError
from pydantic.alias_generators import to_camel

import logging
logger = logging.getLogger(__name__)

__all__ = [
    "SETTINGS_ENV_VAR", "SETTINGS_DEFAULTS", "LoggingSettings", "SemrangeSettings",
    "settingsPath", "loadUserSettings", "loadSettings", "deepMerge", "setting",
]



SETTINGS_ENV_VAR = "SEMRANGE_SETTINGS"
SETTINGS_DEFAULT_PATH = Path("~/.semrange/semrange.json5")
SETTINGS_DEFAULTS: dict[str, JsonValue] = {
    "__source": "SEMRANGE_DEFAULTS",
    "logging": {"level": "WARNING", "format": "dev"},
}



class LoggingSettings(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["dev", "json"] = "dev"



class SemrangeSettings(BaseModel):
    """Validated view of the merged settings."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )
    source: str | None = Field(default=None, alias="__source")
    logging: LoggingSettings = Field(default_factory=LoggingSettings)



def settingsPath() -> Path:
    override = os.environ.get(SETTINGS_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return SETTINGS_DEFAULT_PATH.expanduser()



def loadUserSettings(path: Path | None = None) -> dict[str, JsonValue]:
    filePath = path if path is not None else settingsPath()
    if not filePath.exists():
        return {}
    try:
        parsed = json5.loads(filePath.read_text("utf-8"))
    except Exception as err:
        logger.error("Failed to parse '%s': %s", filePath, err)
        return {}
    if not isinstance(parsed, Mapping):
        logger.error("Settings file '%s' must contain an object, got %s", filePath, type(parsed).__name__)
        return {}
    return dict(parsed)



@lru_cache(maxsize=1)
def loadSettings() -> SemrangeSettings:
    merged = deepMerge(SETTINGS_DEFAULTS, loadUserSettings())
    try:
        return SemrangeSettings.model_validate(merged)
    except ValidationError as err:
        logger.error("Ignoring invalid settings from '%s': %s", settingsPath(), err)
        return SemrangeSettings.model_validate(SETTINGS_DEFAULTS)



def deepMerge(first: JsonValue, second: JsonValue) -> JsonValue:
    """
    Returns a new JsonValue where keys from `second` override/extend `first`.
    Only merges recursively when BOTH sides are JSON objects (dicts).
    For all other JSON types (lists, strings, numbers, booleans, null),
    the right-hand value `second` replaces `first`.
    """
    if isinstance(first, dict) and isinstance(second, dict):
        out: dict[str, JsonValue] = dict(first)
        for key, value in second.items():
            out[key] = deepMerge(first[key], value) if key in first else value
        return out
    return second



def setting(path: str, default: Any = None) -> Any:
    """Dotted-path lookup over the validated settings, e.g. setting("logging.level")."""
    node: Any = loadSettings().model_dump()
    for part in path.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return default
        node = node[part]
    return node
