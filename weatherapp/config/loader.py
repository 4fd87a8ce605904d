"""YAML config loader and dotted-key lookup."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from weatherapp.config.schema import AppConfig


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate config from a YAML file.

    A missing path or an empty file yields the defaults. The returned config
    is frozen and meant to be resolved once at process start.
    """
    if path is None:
        return AppConfig()
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return AppConfig(**raw)


def with_overrides(config: AppConfig, **api_overrides: Any) -> AppConfig:
    """Return a copy of the config with non-None api fields replaced."""
    updates = {k: v for k, v in api_overrides.items() if v is not None}
    if not updates:
        return config
    data = config.model_dump()
    data["api"].update(updates)
    return AppConfig(**data)


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'api.timeout_ms'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif isinstance(obj, BaseModel) and part in type(obj).model_fields:
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
