"""
Raw field input coercion: invalid input becomes a safe value, never an error.
"""
import os
import sys

import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from gold_calculator.engine.inputs import parse_amount, parse_quantity, parse_tax_mode
from gold_calculator.engine.models import TaxMode


@pytest.mark.parametrize("raw, expected", [
    ("12.5", 12.5),
    ("  7 ", 7.0),
    (3, 3.0),
    (2.25, 2.25),
    ("1,5", 1.5),
    ("1,234.5", 1234.5),
    ("١٢٫٥", 12.5),
    ("0", 0.0),
])
def test_parse_amount_valid(raw, expected):
    assert parse_amount(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", ["", "   ", "abc", "-4", -0.5, None, "nan", "inf", float("inf"), True, 10**400, "1e999"])
def test_parse_amount_invalid_becomes_zero(raw):
    assert parse_amount(raw) == 0.0


@pytest.mark.parametrize("raw, expected", [
    ("3", 3),
    (5, 5),
    ("2.9", 2),
    (4.0, 4),
    ("٣", 3),
])
def test_parse_quantity_valid(raw, expected):
    assert parse_quantity(raw) == expected


@pytest.mark.parametrize("raw", ["", "x", "0", 0, "-2", "0.5", None, "nan", float("inf"), 10**400])
def test_parse_quantity_invalid_becomes_one(raw):
    assert parse_quantity(raw) == 1


def test_parse_quantity_returns_int():
    assert isinstance(parse_quantity("7.0"), int)


@pytest.mark.parametrize("raw, expected", [
    ("percentage", TaxMode.PERCENTAGE),
    ("FIXED", TaxMode.FIXED),
    (" fixed ", TaxMode.FIXED),
    (TaxMode.FIXED, TaxMode.FIXED),
    ("flat", TaxMode.PERCENTAGE),
    (None, TaxMode.PERCENTAGE),
    ("", TaxMode.PERCENTAGE),
])
def test_parse_tax_mode(raw, expected):
    assert parse_tax_mode(raw) is expected
