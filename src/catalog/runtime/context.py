"""Current configuration for the running process.

``config.yaml`` (or the file named by ``CATALOG_CONFIG_FILE``) is loaded once
at import. Scripts and tests layer partial overrides on top with
``with_context``; request handlers get their copy through
``ApplicationDependencies`` instead.
"""

import os
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.config.config_template import load_config

PROJECT_ROOT = Path(__file__).resolve().parents[3]
CONFIG_FILE = Path(os.getenv("CATALOG_CONFIG_FILE", PROJECT_ROOT / "config.yaml"))


@dataclass
class AppContext:
    config: ConfigData


_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=AppContext(config=load_config(CONFIG_FILE))
)


def get_context() -> AppContext:
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    return _app_context.set(context)


def get_config() -> ConfigData:
    return get_context().config


def set_config(config: ConfigData) -> None:
    """Use ``config`` for the rest of the current context."""
    set_context(replace(get_context(), config=config))


def _assigned_values(model: BaseModel) -> dict[str, Any]:
    """Nested dict of the leaf values passed to or assigned on ``model``."""
    assigned: dict[str, Any] = {}
    for name in type(model).model_fields:
        value = getattr(model, name)
        if isinstance(value, BaseModel):
            nested = _assigned_values(value)
            if nested:
                assigned[name] = nested
        elif name in model.model_fields_set:
            assigned[name] = value
    return assigned


def _overlay(base: dict[str, Any], changes: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in changes.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _overlay(merged[key], value)
        else:
            merged[key] = value
    return merged


@contextmanager
def with_context(config_override: ConfigData | None = None) -> Iterator[None]:
    """Apply the values assigned on ``config_override`` until the block exits.

    Unassigned values keep whatever the enclosing context has, so overrides
    nest::

        override = ConfigData()
        override.app.not_found_policy = "escalate"
        with with_context(override):
            assert get_config().app.not_found_policy == "escalate"
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    current = get_context()
    merged = ConfigData.model_validate(
        _overlay(current.config.model_dump(), _assigned_values(config_override))
    )
    token = set_context(replace(current, config=merged))
    try:
        yield
    finally:
        _app_context.reset(token)
