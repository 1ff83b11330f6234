"""
Flatten SPARQL JSON bindings into plain records.

Each binding ``{"var": {"type": "literal", "value": "42"}}`` becomes
``{"var": 42}``: the cell value is copied, and strings that read as a
decimal number are converted to ``int`` or ``float``. The ``id`` key is
never converted.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from wikiviz.exceptions import MalformedInput

logger = logging.getLogger(__name__)

# Keys that keep their string value even when it looks numeric
NON_NUMERIC_KEYS = frozenset({"id"})

_NUMBER_RE = re.compile(
    r"[+-]?(?:[0-9]+(?P<frac>\.[0-9]*)?|(?P<bare>\.[0-9]+))(?P<exp>[eE][+-]?[0-9]+)?"
)


def to_number(value: str) -> int | float | None:
    """
    Parse *value* as a decimal number.

    Args:
        value: String to parse; surrounding whitespace is ignored

    Returns:
        ``int`` for integral literals, ``float`` when a fraction or exponent
        is present, or None when the string is not a number

    Example:
        >>> to_number("42"), to_number("-0.1278"), to_number("Q5")
        (42, -0.1278, None)
    """
    text = value.strip()
    match = _NUMBER_RE.fullmatch(text)
    if match is None:
        return None
    if match.group("frac") or match.group("bare") or match.group("exp"):
        return float(text)
    return int(text)


def normalize_binding(binding: dict[str, Any]) -> dict[str, Any]:
    """Flatten one binding; unbound variables are left out."""
    record: dict[str, Any] = {}
    for key, cell in binding.items():
        if not isinstance(cell, dict) or cell.get("value") is None:
            continue
        value = cell["value"]
        if isinstance(value, str) and key not in NON_NUMERIC_KEYS:
            number = to_number(value)
            if number is not None:
                value = number
        record[key] = value
    return record


def normalize(bindings: Any, *, strict: bool = False) -> list[dict[str, Any]]:
    """
    Flatten a list of SPARQL bindings into plain records.

    Args:
        bindings: The ``results.bindings`` list of a SPARQL JSON response
        strict: Raise instead of returning [] on malformed input

    Returns:
        One record per binding, in the same order

    Raises:
        MalformedInput: If *strict* is set and *bindings* is not a list
    """
    if not isinstance(bindings, (list, tuple)):
        if strict:
            raise MalformedInput(f"Invalid results format: {type(bindings).__name__}")
        logger.error(f"Invalid results format: {bindings!r}")
        return []

    return [
        normalize_binding(binding) if isinstance(binding, dict) else {}
        for binding in bindings
    ]
