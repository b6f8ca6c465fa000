"""Deterministic test values derived from schema constraints."""

import json
import math
import re
from typing import Any

from ..analysis.models import Constraints

FORMAT_SAMPLES = {
    "date": "2024-01-01",
    "date-time": "2024-01-01T00:00:00Z",
    "time": "00:00:00",
    "email": "user@example.com",
    "uuid": "123e4567-e89b-12d3-a456-426614174000",
    "uri": "https://example.com",
    "url": "https://example.com",
    "hostname": "example.com",
    "ipv4": "192.0.2.1",
    "ipv6": "2001:db8::1",
    "byte": "c2FtcGxl",
    "password": "Passw0rd!",
}

NIL_UUID = "00000000-0000-0000-0000-000000000000"
MISSING_ID = "nonexistent-id"
MISSING_NUMERIC_ID = 999999999

# Tried in order when a value must fail a declared pattern.
PATTERN_MISMATCH_CANDIDATES = ("", "!@#$%^&*()", " ", "0", "a")


def format_value(value: Any) -> str:
    """Render a value for a step table cell."""
    return json.dumps(value, ensure_ascii=False)


def _fit_length(text: str, constraints: Constraints, filler: str = "a") -> str:
    if constraints.max_length is not None and len(text) > constraints.max_length:
        text = text[: constraints.max_length]
    if constraints.min_length is not None and len(text) < constraints.min_length:
        text = text + filler * (constraints.min_length - len(text))
    return text


def _exclusive_step(constraints: Constraints) -> int | float:
    """Distance kept from an exclusive bound: 1, or half of a narrower range."""
    if constraints.type == "integer":
        return 1
    if constraints.minimum is not None and constraints.maximum is not None:
        return min(1, (constraints.maximum - constraints.minimum) / 2)
    return 1


def lower_bound(constraints: Constraints) -> int | float | None:
    """Smallest value the numeric bounds accept.

    Integers round up to the first whole value in range. Numbers with an
    exclusive minimum stay strictly inside any declared maximum.
    """
    low = constraints.minimum
    if low is None:
        return None
    if constraints.type == "integer":
        return math.floor(low) + 1 if constraints.exclusive_minimum else math.ceil(low)
    if constraints.exclusive_minimum:
        return low + _exclusive_step(constraints)
    return low


def upper_bound(constraints: Constraints) -> int | float | None:
    """Largest value the numeric bounds accept."""
    high = constraints.maximum
    if high is None:
        return None
    if constraints.type == "integer":
        return math.ceil(high) - 1 if constraints.exclusive_maximum else math.floor(high)
    if constraints.exclusive_maximum:
        return high - _exclusive_step(constraints)
    return high


def _as_type(value: int | float, constraints: Constraints) -> int | float:
    if constraints.type == "integer":
        return int(value)
    return value


def minimal_value(constraints: Constraints) -> Any:
    """The smallest valid value: shortest string, lowest number, first enum."""
    if constraints.enum:
        return constraints.enum[0]

    kind = constraints.type
    if kind == "string":
        if constraints.format in FORMAT_SAMPLES:
            return FORMAT_SAMPLES[constraints.format]
        return "a" * max(constraints.min_length or 0, 1)
    if kind in ("integer", "number"):
        low = lower_bound(constraints)
        if low is not None:
            return _as_type(low, constraints)
        high = upper_bound(constraints)
        if high is not None:
            return _as_type(min(1, high), constraints)
        return 1
    if kind == "boolean":
        return True
    if kind == "array":
        item = minimal_value(constraints.items) if constraints.items else "a"
        return [item] * max(constraints.min_items or 0, 1)
    if kind == "object":
        return {
            name: minimal_value(prop)
            for name, prop in constraints.properties.items()
            if name in constraints.required and not prop.read_only
        }
    return "a"


def representative_value(constraints: Constraints, name: str = "value") -> Any:
    """A typical valid value, preferring declared examples and defaults."""
    if constraints.example is not None:
        return constraints.example
    if constraints.default is not None:
        return constraints.default
    if constraints.enum:
        return constraints.enum[0]

    kind = constraints.type
    if kind == "string":
        if constraints.format in FORMAT_SAMPLES:
            return FORMAT_SAMPLES[constraints.format]
        return _fit_length(f"sample_{name}", constraints)
    if kind in ("integer", "number"):
        low, high = lower_bound(constraints), upper_bound(constraints)
        if low is not None and high is not None:
            return _as_type((low + high) / 2 if kind == "number" else (low + high) // 2, constraints)
        if low is not None:
            return _as_type(low, constraints)
        if high is not None:
            return _as_type(high, constraints)
        return 10 if kind == "integer" else 10.5
    if kind == "boolean":
        return True
    if kind == "array":
        item = representative_value(constraints.items, name) if constraints.items else f"sample_{name}"
        return [item] * max(constraints.min_items or 0, 1)
    if kind == "object":
        return {
            prop_name: representative_value(prop, prop_name)
            for prop_name, prop in constraints.properties.items()
            if not prop.read_only
        }
    return f"sample_{name}"


def wrong_type_value(constraints: Constraints) -> Any:
    """A value of the wrong JSON type, or None if the type is unknown."""
    return {
        "string": 123,
        "integer": "not_a_number",
        "number": "not_a_number",
        "boolean": "not_a_boolean",
        "array": {"not": "an array"},
        "object": "not_an_object",
    }.get(constraints.type or "")


def empty_value(constraints: Constraints) -> Any:
    """The empty value for emptiable types, or None."""
    return {"string": "", "array": [], "object": {}}.get(constraints.type or "")


def pattern_mismatch(pattern: str) -> str | None:
    """A candidate the pattern rejects, or None if every candidate matches."""
    try:
        compiled = re.compile(pattern)
    except re.error:
        return None
    for candidate in PATTERN_MISMATCH_CANDIDATES:
        if compiled.search(candidate) is None:
            return candidate
    return None


def enum_mismatch(constraints: Constraints) -> Any:
    """A value of the declared type that is not an enum member."""
    members = list(constraints.enum or ())
    if constraints.type in ("integer", "number"):
        numeric = [m for m in members if isinstance(m, (int, float)) and not isinstance(m, bool)]
        return max(numeric, default=0) + 1
    candidate = "not_an_allowed_value"
    while candidate in members:
        candidate += "_x"
    return candidate


def nonexistent_identifier(constraints: Constraints) -> Any:
    """A syntactically valid identifier that should not exist."""
    if constraints.type in ("integer", "number"):
        high = upper_bound(constraints)
        if high is not None:
            return _as_type(high, constraints)
        return MISSING_NUMERIC_ID
    if constraints.format == "uuid":
        return NIL_UUID
    return _fit_length(MISSING_ID, constraints, filler="0")
