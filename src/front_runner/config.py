"""Typed access to flat parameter mappings.

Configuration for objective spaces and statistics collectors arrives as a flat
mapping of dotted keys to values, for example::

    {
        "num-objectives": "3",
        "maximize.1": "false",
        "max.0": "100",
        "reference-point": "0 0 0",
    }

Values may be strings (as read from a parameter file) or already-typed Python
values. Every getter looks up ``base + key`` and falls back to ``default``.
"""

from collections.abc import Mapping
from numbers import Real
from typing import Any

_MISSING = object()

_TRUE = {"true", "yes", "1", "on"}
_FALSE = {"false", "no", "0", "off"}


def join(base: str, *parts: object) -> str:
    """Join a base key and sub-keys with dots, ignoring an empty base.

    Examples:
        >>> join("stat", "reference-point")
        'stat.reference-point'
        >>> join("", "min", 0)
        'min.0'
    """
    keys = [base] if base else []
    keys.extend(str(p) for p in parts)
    return ".".join(keys)


def get_required(params: Mapping[str, Any], key: str) -> Any:
    """Return the raw value stored under key.

    Raises:
        ValueError: If the key is missing.
    """
    if key not in params:
        raise ValueError(f"Missing required parameter '{key}'")
    return params[key]


def get_int(params: Mapping[str, Any], key: str, default: Any = _MISSING) -> int:
    """Read an integer parameter.

    Raises:
        ValueError: If the key is missing without a default, or the value is not an integer.
    """
    if key not in params and default is not _MISSING:
        return default
    value = get_required(params, key)
    if isinstance(value, bool):
        raise ValueError(f"Parameter '{key}' must be an integer, got {value!r}")
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValueError(f"Parameter '{key}' must be an integer, got {value!r}") from None


def get_float(params: Mapping[str, Any], key: str, default: Any = _MISSING) -> float:
    """Read a floating point parameter.

    Raises:
        ValueError: If the key is missing without a default, or the value is not a number.
    """
    if key not in params and default is not _MISSING:
        return default
    value = get_required(params, key)
    try:
        return float(str(value).strip())
    except ValueError:
        raise ValueError(f"Parameter '{key}' must be a number, got {value!r}") from None


def get_bool(params: Mapping[str, Any], key: str, default: Any = _MISSING) -> bool:
    """Read a boolean parameter ("true"/"false", "yes"/"no", "1"/"0", "on"/"off").

    Raises:
        ValueError: If the key is missing without a default, or the value is not a boolean.
    """
    if key not in params and default is not _MISSING:
        return default
    value = get_required(params, key)
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"Parameter '{key}' must be a boolean, got {value!r}")


def get_floats(params: Mapping[str, Any], key: str, default: Any = _MISSING) -> list[float]:
    """Read a whitespace-separated list of floats, e.g. ``"0 5 0 50"``.

    A sequence of numbers is accepted as well, and a single number is read as
    a one-element list.

    Raises:
        ValueError: If the key is missing without a default, the list is empty,
            or an element is not a number.
    """
    if key not in params and default is not _MISSING:
        return default
    value = get_required(params, key)
    try:
        if isinstance(value, str):
            items = value.split()
        elif isinstance(value, Real):
            items = [value]
        else:
            items = list(value)
        floats = [float(item) for item in items]
    except (TypeError, ValueError):
        raise ValueError(f"Parameter '{key}' must be a list of numbers, got {value!r}") from None
    if not floats:
        raise ValueError(f"Parameter '{key}' must contain at least one number")
    return floats
