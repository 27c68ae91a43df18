"""Parameter validation shared by every service operation."""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from .errors import ValidationError

__all__ = ["validate_params"]


def validate_params(
    params: Mapping[str, Any],
    required: Iterable[str],
    valid: Optional[Iterable[str]] = None,
) -> None:
    """
    Check an operation's parameters before any request is built.

    Args:
        params: Parameter name -> value, as passed by the caller
        required: Names that must be present with a non-None value
        valid: Every recognized name (None skips the unknown-name check);
            "headers" is always accepted

    Raises:
        ValidationError: Naming every missing and every unrecognized parameter
    """
    missing = [name for name in required if params.get(name) is None]
    invalid = []
    if valid is not None:
        allowed = set(valid) | {"headers"}
        invalid = sorted(name for name in params if name not in allowed)
    if missing or invalid:
        raise ValidationError(missing=missing, invalid=invalid)
