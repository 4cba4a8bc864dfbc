"""
Type Coercion

Best-effort conversion of scalar values toward the type a schema declares,
applied before constraints are checked.

Rules (only unambiguous conversions):
- number/integer: JSON numeric strings, booleans (true -> 1), null -> 0
- boolean: "true"/"false", 1/0, null -> false
- null: "", 0, false
- string, object, array: never coerced into

Also holds overwrite_in_place, used to copy the results of a trial run
(or a pre-validation snapshot) back into the caller's containers.
"""

import math
import re
from typing import Any, Callable

# Returned by a coercer that cannot convert the value
NOT_COERCIBLE = object()

# Numeric literals as JSON writes them (no "1_000", "0x10", "inf" or
# non-ASCII digits)
_JSON_NUMBER = re.compile(
    r"-?(?:0|[1-9][0-9]*)(?P<fraction>\.[0-9]+)?(?P<exponent>[eE][+-]?[0-9]+)?"
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def matches_type(value: Any, type_name: str) -> bool:
    """Check a value against a JSON Schema type name (draft-07 semantics)."""
    if type_name == "integer":
        if isinstance(value, float):
            return value.is_integer()
        return _is_number(value)
    if type_name == "number":
        return _is_number(value)
    if type_name == "string":
        return isinstance(value, str)
    if type_name == "boolean":
        return isinstance(value, bool)
    if type_name == "null":
        return value is None
    if type_name == "object":
        return isinstance(value, dict)
    if type_name == "array":
        return isinstance(value, list)
    return False


def _parse_number(text: str) -> int | float | None:
    match = _JSON_NUMBER.fullmatch(text.strip())
    if match is None:
        return None
    if match.group("fraction") is None and match.group("exponent") is None:
        return int(match.group(0))
    number = float(match.group(0))
    if not math.isfinite(number):
        return None
    return number


def _to_number(value: Any) -> Any:
    if isinstance(value, str):
        number = _parse_number(value)
        return NOT_COERCIBLE if number is None else number
    if isinstance(value, bool):
        return int(value)
    if value is None:
        return 0
    return NOT_COERCIBLE


def _to_integer(value: Any) -> Any:
    number = _to_number(value)
    if number is NOT_COERCIBLE:
        return NOT_COERCIBLE
    if isinstance(number, float):
        if not number.is_integer():
            return NOT_COERCIBLE
        return int(number)
    return number


def _to_boolean(value: Any) -> Any:
    if value == "true" or (_is_number(value) and value == 1):
        return True
    if value == "false" or (_is_number(value) and value == 0) or value is None:
        return False
    return NOT_COERCIBLE


def _to_null(value: Any) -> Any:
    if value == "" or value is False or (_is_number(value) and value == 0):
        return None
    return NOT_COERCIBLE


_COERCERS: dict[str, Callable[[Any], Any]] = {
    "number": _to_number,
    "integer": _to_integer,
    "boolean": _to_boolean,
    "null": _to_null,
}


def coerce_value(value: Any, types: list[str]) -> Any:
    """
    Coerce value toward the first declared type it can be converted to.

    Args:
        value: The value found in the data
        types: Declared type names, in schema order

    Returns:
        The coerced value, or NOT_COERCIBLE when the value already matches
        one of the types or none of the conversions apply
    """
    if not types or any(matches_type(value, t) for t in types):
        return NOT_COERCIBLE

    for type_name in types:
        coercer = _COERCERS.get(type_name)
        if coercer is None:
            continue
        coerced = coercer(value)
        if coerced is not NOT_COERCIBLE:
            return coerced
    return NOT_COERCIBLE


def overwrite_in_place(target: Any, source: Any) -> None:
    """
    Make the container target equal to source without replacing it.

    Nested dicts and lists present on both sides are updated recursively,
    so references the caller holds to inner containers stay valid.
    Scalars (and containers whose kind changed) are assigned from source.
    """
    if isinstance(target, dict) and isinstance(source, dict):
        for key in [k for k in target if k not in source]:
            del target[key]
        for key, value in source.items():
            if key in target and _same_container(target[key], value):
                overwrite_in_place(target[key], value)
            else:
                target[key] = value
    elif isinstance(target, list) and isinstance(source, list):
        del target[len(source):]
        for index, value in enumerate(source):
            if index < len(target) and _same_container(target[index], value):
                overwrite_in_place(target[index], value)
            elif index < len(target):
                target[index] = value
            else:
                target.append(value)


def _same_container(left: Any, right: Any) -> bool:
    return (isinstance(left, dict) and isinstance(right, dict)) or (
        isinstance(left, list) and isinstance(right, list)
    )
