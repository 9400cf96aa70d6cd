"""
Validators shared by config.toml loading and the CLI arguments.

Each validator returns the normalized value or raises ValidationError naming
the offending field.
"""

import math
import re
from typing import Any, Callable, List, Optional, TypeVar

from .exceptions import ValidationError

Number = TypeVar("Number", int, float)

_NODE_ID_PATTERN = re.compile(r'^[A-Za-z0-9_.:-]+$')


def _reject(field_name: str, value: Any, message: str) -> ValidationError:
    return ValidationError(f"{field_name} {message}", field_name=field_name, value=value)


def _bounded_number(
    value: Any,
    convert: Callable[[Any], Number],
    kind: str,
    min_value: Number,
    max_value: Optional[Number],
    field_name: str,
) -> Number:
    # bool is an int subclass; True is never a meaningful interval or limit
    if isinstance(value, bool):
        raise _reject(field_name, value, f"must be a valid {kind}, got {value}")
    try:
        number = convert(value)
    except (ValueError, TypeError):
        raise _reject(field_name, value, f"must be a valid {kind}, got {value}")
    if isinstance(number, float) and not math.isfinite(number):
        raise _reject(field_name, value, f"must be a finite number, got {value}")
    if number < min_value:
        raise _reject(field_name, value, f"must be >= {min_value}, got {number}")
    if max_value is not None and number > max_value:
        raise _reject(field_name, value, f"must be <= {max_value}, got {number}")
    return number


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate an integer within ``[min_value, max_value]``.

    Raises:
        ValidationError: If the value is not an integer or is out of range
    """
    return _bounded_number(value, int, "integer", min_value, max_value, field_name)


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate a finite number within ``[min_value, max_value]``.

    Used for intervals and durations, so NaN and infinity are rejected.

    Raises:
        ValidationError: If the value is not a finite number or is out of range
    """
    return _bounded_number(value, float, "number", min_value, max_value, field_name)


def validate_enum_choice(
    value: Any,
    choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of ``choices``.

    Returns:
        The choice in the spelling used by ``choices``
    """
    text = str(value)
    for choice in choices:
        if text == choice or (not case_sensitive and text.lower() == choice.lower()):
            return choice
    raise _reject(field_name, value, f"must be one of {choices}, got {value}")


def validate_cut_points(value: Any, field_name: str = "cuts") -> List[float]:
    """
    Validate a histogram cut-point table.

    A table is a non-empty list of finite, non-negative numbers in strictly
    ascending order; ``n`` cuts make ``n + 1`` buckets.

    Raises:
        ValidationError: If the table is empty, unordered or holds non-numbers
    """
    if not isinstance(value, (list, tuple)) or not value:
        raise _reject(field_name, value, "must be a non-empty list of numbers")

    cuts = [
        validate_positive_float(cut, field_name=f"{field_name}[{i}]")
        for i, cut in enumerate(value)
    ]
    for lower, upper in zip(cuts, cuts[1:]):
        if upper <= lower:
            raise _reject(
                field_name, value, f"must be strictly ascending, got {lower} before {upper}"
            )
    return cuts


def validate_node_id(node_id: Any, field_name: str = "node_id") -> str:
    """Validate a cluster node identity and return it stripped."""
    if not isinstance(node_id, str) or not node_id.strip():
        raise _reject(field_name, node_id, "must be a non-empty string")
    node_id = node_id.strip()
    if not _NODE_ID_PATTERN.match(node_id):
        raise _reject(
            field_name, node_id,
            f"may only contain letters, digits, '_', '.', ':' and '-': {node_id}",
        )
    return node_id
