from __future__ import annotations

from typing import Any, List, Tuple

from jsonschema import Draft202012Validator

from .defaults import CONFIG_SCHEMA
from .exceptions import ConfigValidationError

_validator = Draft202012Validator(CONFIG_SCHEMA)


def validate_toml_config(data: Any) -> List[Tuple[str, str]]:
    """Check ``data`` against :data:`CONFIG_SCHEMA`.

    Structural damage (a missing group, a group that is not a table) raises
    :class:`ConfigValidationError`. Violations inside a group are returned as
    ``(group, key)`` pairs so the caller can replace just those fields.
    """
    errors = sorted(_validator.iter_errors(data), key=lambda e: [str(part) for part in e.path])

    structural = [error for error in errors if len(error.path) < 2]
    if structural:
        first = structural[0]
        location = ".".join(str(part) for part in first.path)
        message = f"{location}: {first.message}" if location else first.message
        raise ConfigValidationError(message)

    invalid: List[Tuple[str, str]] = []
    for error in errors:
        field = (str(error.path[0]), str(error.path[1]))
        if field not in invalid:
            invalid.append(field)
    return invalid


__all__ = ["validate_toml_config"]
