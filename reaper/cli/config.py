"""Run configuration loading.

The environment is read here and only here; every other component receives
an immutable RunConfig.
"""

from __future__ import annotations

import os
from datetime import date
from typing import Any, Mapping, Optional

from ..models.run_config import RunConfig, default_delete_before

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off", ""}

REQUIRED_VARIABLES = ("API_BASE", "API_TOKEN")


class ConfigurationError(Exception):
    """Raised when the run configuration is missing or invalid."""


def parse_bool(name: str, value: Optional[str]) -> bool:
    """Parse a boolean environment value.

    Raises:
        ConfigurationError: If the value is not a recognized boolean
    """
    if value is None:
        return False

    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False

    raise ConfigurationError(f"Invalid boolean for {name}: {value!r}")


def parse_cutoff(value: Optional[str]) -> date:
    """Parse the DELETE_BEFORE cutoff (YYYY-MM-DD), defaulting to yesterday.

    Raises:
        ConfigurationError: If the value is not a valid date
    """
    if not value:
        return default_delete_before()

    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ConfigurationError(f"Invalid DELETE_BEFORE date: {value!r}. Use YYYY-MM-DD") from None


def load_run_config(environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> RunConfig:
    """Build the run configuration from environment variables.

    Overrides with a value of None are ignored, so unset CLI options fall back
    to the environment.

    Args:
        environ: Environment mapping (default: os.environ)
        **overrides: Explicit RunConfig field values (e.g. dry_run=True)

    Returns:
        Validated RunConfig

    Raises:
        ConfigurationError: If credentials are missing or a value is invalid
    """
    env = os.environ if environ is None else environ

    for var in REQUIRED_VARIABLES:
        if not env.get(var):
            raise ConfigurationError(f"Please provide {var} environment variable")

    values: dict[str, Any] = {
        "api_base": env["API_BASE"],
        "api_token": env["API_TOKEN"],
        "delete_before": parse_cutoff(env.get("DELETE_BEFORE")),
        "dry_run": parse_bool("DRY_RUN", env.get("DRY_RUN")),
        "permanently_delete": parse_bool("PERMANENTLY_DELETE", env.get("PERMANENTLY_DELETE")),
    }
    values.update({key: value for key, value in overrides.items() if value is not None})

    try:
        config = RunConfig(**values)
        config.validate()
    except (TypeError, ValueError) as e:
        raise ConfigurationError(str(e)) from e

    return config
