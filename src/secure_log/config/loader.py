"""Load SecureLogOptions from YAML files and environment variables.

Example YAML configuration:

    secure_log:
      warn_only: false
      disable_on: test
      disable_console_on: production
      environment_variable: APP_ENV
      min_secret_length: 6
      ignore_secrets: [PATH, HOME, APP_ENV]

The top-level ``secure_log`` key is optional; a bare mapping of options
is accepted as well.
"""

import os
from collections.abc import Mapping
from dataclasses import fields
from pathlib import Path
from typing import Any, Optional

import yaml

from secure_log.config.options import SecureLogOptions
from secure_log.errors import OptionsError

ENV_PREFIX = "SECURE_LOG_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}

_BOOL_FIELDS = {"warn_only", "strict_surface"}
_INT_FIELDS = {"max_depth", "min_secret_length"}


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise OptionsError(f"Invalid boolean for {name}: {value!r}")


def _parse_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise OptionsError(f"Invalid integer for {name}: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise OptionsError(f"Invalid integer for {name}: {value!r}") from e


def _parse_names(name: str, value: Any) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        return frozenset(part.strip() for part in value.split(",") if part.strip())
    if isinstance(value, (list, tuple, set, frozenset)):
        return frozenset(str(item) for item in value)
    raise OptionsError(f"Invalid name list for {name}: {value!r}")


def options_from_mapping(data: Mapping[str, Any]) -> SecureLogOptions:
    """Build options from a plain mapping.

    Args:
        data: Option names mapped to values. Unknown keys are rejected.

    Returns:
        Validated SecureLogOptions.

    Raises:
        OptionsError: If a key is unknown or a value has the wrong type.
    """
    known = {f.name for f in fields(SecureLogOptions)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise OptionsError(f"Unknown option(s): {', '.join(unknown)}")

    kwargs: dict[str, Any] = {}
    for name, value in data.items():
        if name in _BOOL_FIELDS:
            kwargs[name] = _parse_bool(name, value)
        elif name in _INT_FIELDS:
            kwargs[name] = _parse_int(name, value)
        elif name == "ignore_secrets":
            kwargs[name] = _parse_names(name, value)
        else:
            kwargs[name] = None if value is None else str(value)

    return SecureLogOptions(**kwargs)


def load_options_from_yaml(path: Path | str) -> SecureLogOptions:
    """Load options from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Validated SecureLogOptions. An empty file yields the defaults.

    Raises:
        FileNotFoundError: If the configuration file doesn't exist.
        OptionsError: If the YAML structure or a value is invalid.
        yaml.YAMLError: If the YAML is malformed.
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return SecureLogOptions()

    if not isinstance(data, dict):
        raise OptionsError(f"Invalid YAML structure: expected dict, got {type(data).__name__}")

    if "secure_log" in data:
        data = data["secure_log"] or {}
        if not isinstance(data, dict):
            raise OptionsError(
                f"Invalid secure_log section: expected dict, got {type(data).__name__}"
            )

    return options_from_mapping(data)


def options_from_env(environ: Optional[Mapping[str, str]] = None) -> SecureLogOptions:
    """Build options from ``SECURE_LOG_*`` environment variables.

    Each option maps to the upper-cased variable name with the
    ``SECURE_LOG_`` prefix, e.g. ``SECURE_LOG_WARN_ONLY=true``.
    ``SECURE_LOG_IGNORE_SECRETS`` is a comma separated list.

    Args:
        environ: Environment store, defaults to ``os.environ``.

    Returns:
        Validated SecureLogOptions.
    """
    source = os.environ if environ is None else environ
    data = {}
    for f in fields(SecureLogOptions):
        key = ENV_PREFIX + f.name.upper()
        if key in source:
            data[f.name] = source[key]
    return options_from_mapping(data)
