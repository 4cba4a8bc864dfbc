#!/usr/bin/env python3
"""
Type Coercion Test Script

Checks the scalar coercion rules applied before validation.

Usage:
    python scripts/test_coercion.py
    pytest scripts/test_coercion.py
"""

import logging
import sys

# Add project root to path
sys.path.insert(0, ".")

from schema_registry.validation.coercion import (
    NOT_COERCIBLE,
    coerce_value,
    matches_type,
    overwrite_in_place,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def test_numbers():
    """Numeric strings, booleans and null become numbers."""
    logger.info("Test: Numbers")

    assert coerce_value("20", ["integer"]) == 20
    assert coerce_value(" 7 ", ["integer"]) == 7
    assert coerce_value("20.0", ["integer"]) == 20
    assert coerce_value("1.5", ["number"]) == 1.5
    assert coerce_value("-3", ["number"]) == -3
    assert coerce_value("1e3", ["integer"]) == 1000
    assert coerce_value(True, ["integer"]) == 1
    assert coerce_value(None, ["number"]) == 0

    assert coerce_value("1.5", ["integer"]) is NOT_COERCIBLE
    assert coerce_value("abc", ["number"]) is NOT_COERCIBLE
    assert coerce_value("", ["number"]) is NOT_COERCIBLE
    assert coerce_value("nan", ["number"]) is NOT_COERCIBLE
    assert coerce_value("1_000", ["integer"]) is NOT_COERCIBLE
    assert coerce_value("\u0663", ["integer"]) is NOT_COERCIBLE
    assert coerce_value("0x10", ["number"]) is NOT_COERCIBLE
    assert coerce_value("1e400", ["number"]) is NOT_COERCIBLE
    assert coerce_value("+5", ["number"]) is NOT_COERCIBLE
    assert coerce_value([1], ["number"]) is NOT_COERCIBLE
    logger.info("✓ Numbers passed")


def test_booleans():
    """'true'/'false', 1/0 and null become booleans."""
    logger.info("Test: Booleans")

    assert coerce_value("true", ["boolean"]) is True
    assert coerce_value("false", ["boolean"]) is False
    assert coerce_value(1, ["boolean"]) is True
    assert coerce_value(0, ["boolean"]) is False
    assert coerce_value(None, ["boolean"]) is False

    assert coerce_value("yes", ["boolean"]) is NOT_COERCIBLE
    assert coerce_value(2, ["boolean"]) is NOT_COERCIBLE
    logger.info("✓ Booleans passed")


def test_null():
    """Empty string, zero and false become null."""
    logger.info("Test: Null")

    assert coerce_value("", ["null"]) is None
    assert coerce_value(0, ["null"]) is None
    assert coerce_value(False, ["null"]) is None
    assert coerce_value("x", ["null"]) is NOT_COERCIBLE
    logger.info("✓ Null passed")


def test_never_to_string_or_containers():
    """Nothing is coerced into strings, objects or arrays."""
    logger.info("Test: No String/Container Targets")

    assert coerce_value(123, ["string"]) is NOT_COERCIBLE
    assert coerce_value(True, ["string"]) is NOT_COERCIBLE
    assert coerce_value("x", ["array"]) is NOT_COERCIBLE
    assert coerce_value("x", ["object"]) is NOT_COERCIBLE
    logger.info("✓ No string/container targets passed")


def test_matching_value_untouched():
    """A value already of a declared type is left alone."""
    logger.info("Test: Matching Value Untouched")

    assert coerce_value("20", ["string", "integer"]) is NOT_COERCIBLE
    assert coerce_value(3, ["integer"]) is NOT_COERCIBLE
    assert coerce_value(3.0, ["integer"]) is NOT_COERCIBLE
    assert coerce_value("x", []) is NOT_COERCIBLE
    # First convertible type wins
    assert coerce_value("1", ["boolean", "integer"]) == 1
    assert coerce_value("true", ["integer", "boolean"]) is True
    logger.info("✓ Matching value untouched passed")


def test_matches_type():
    """Booleans are never numbers; integral floats are integers."""
    logger.info("Test: Type Matching")

    assert matches_type(1.0, "integer")
    assert not matches_type(1.5, "integer")
    assert not matches_type(True, "integer")
    assert not matches_type(False, "number")
    assert matches_type(None, "null")
    assert matches_type({}, "object")
    assert not matches_type({}, "array")
    logger.info("✓ Type matching passed")


def test_overwrite_in_place():
    """Containers are updated in place, inner ones included."""
    logger.info("Test: Overwrite In Place")

    inner = {"limit": 10, "flag": False}
    items = [1, 2, 3]
    target = {"settings": inner, "items": items, "extra": True}
    overwrite_in_place(target, {"settings": {"limit": "10"}, "items": ["1"]})

    assert target == {"settings": {"limit": "10"}, "items": ["1"]}
    assert target["settings"] is inner
    assert target["items"] is items

    # A container replaced by a scalar (or vice versa) is simply assigned
    target = {"value": {"a": 1}}
    overwrite_in_place(target, {"value": 5})
    assert target == {"value": 5}
    logger.info("✓ Overwrite in place passed")


def main():
    """Run all tests."""
    logger.info("Type Coercion Test Suite")
    logger.info("=" * 60)

    try:
        test_numbers()
        test_booleans()
        test_null()
        test_never_to_string_or_containers()
        test_matching_value_untouched()
        test_matches_type()
        test_overwrite_in_place()

        logger.info("=" * 60)
        logger.info("All tests passed! ✓")
        logger.info("=" * 60)

    except AssertionError as e:
        logger.error(f"Test failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
