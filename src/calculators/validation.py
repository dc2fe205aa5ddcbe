"""Consistency checks for tax year schedules.

Each check returns a list of human-readable issues; an empty list means the
schedule is safe to register.
"""

import re
from collections.abc import Sequence
from decimal import Decimal

from src.calculators.tax_data import TaxBracket, TaxYear

YEAR_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}$")

# Published schedules use whole-dollar thresholds: next min is max or max + 1.
MAX_THRESHOLD_STEP = Decimal("1")


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _amount(value: Decimal) -> str:
    """Plain notation without float residue: 18200.0 -> 18200, 0.150 -> 0.15."""
    return f"{value.normalize():f}"


def _validate_rate(scope: str, label: str, value: Decimal) -> list[str]:
    if not value.is_finite() or value < 0 or value > 1:
        return [_format_scope(scope, f"{label} {_amount(value)} must be between 0 and 1")]
    return []


def validate_brackets(brackets: Sequence[TaxBracket], scope: str = "brackets") -> list[str]:
    """Check ordering, coverage and contiguity of a bracket schedule."""
    if not brackets:
        return [_format_scope(scope, "at least one tax bracket is required")]

    errors: list[str] = []

    for index, bracket in enumerate(brackets):
        label = f"{scope}[{index}]"
        if bracket.min < 0:
            errors.append(_format_scope(label, "min must be non-negative"))
        if bracket.base_amount < 0:
            errors.append(_format_scope(label, "base amount must be non-negative"))
        errors.extend(_validate_rate(label, "rate", bracket.rate))
        if bracket.max is not None and bracket.max <= bracket.min:
            errors.append(
                _format_scope(
                    label, f"max {_amount(bracket.max)} must exceed min {_amount(bracket.min)}"
                )
            )

    mins = [bracket.min for bracket in brackets]
    if mins != sorted(mins):
        errors.append(_format_scope(scope, "brackets must be ordered by min ascending"))

    unbounded = [index for index, bracket in enumerate(brackets) if bracket.max is None]
    if len(unbounded) != 1:
        errors.append(
            _format_scope(scope, f"exactly one unbounded top bracket required, found {len(unbounded)}")
        )
    elif unbounded[0] != len(brackets) - 1:
        errors.append(_format_scope(scope, "the unbounded bracket must be the last one"))

    for index, (lower, upper) in enumerate(zip(brackets, brackets[1:])):
        if lower.max is None:
            continue
        step = upper.min - lower.max
        if step < 0:
            errors.append(
                _format_scope(
                    f"{scope}[{index + 1}]",
                    f"min {_amount(upper.min)} overlaps previous bracket ending at {_amount(lower.max)}",
                )
            )
        elif step > MAX_THRESHOLD_STEP:
            errors.append(
                _format_scope(
                    f"{scope}[{index + 1}]",
                    f"gap between previous max {_amount(lower.max)} and min {_amount(upper.min)}",
                )
            )

    return errors


def validate_year_key(year_key: str) -> list[str]:
    if not YEAR_KEY_PATTERN.match(year_key):
        return [_format_scope("year", f"'{year_key}' should be formatted YYYY-YY (e.g. 2025-26)")]
    return []


def validate_tax_year(tax_year: TaxYear) -> list[str]:
    """Validate every part of a tax year definition."""
    errors: list[str] = []
    errors.extend(validate_year_key(tax_year.year))
    errors.extend(validate_brackets(tax_year.brackets))
    errors.extend(_validate_rate("medicare_levy", "levy", tax_year.medicare_levy))
    errors.extend(_validate_rate("super_rate", "super rate", tax_year.super_rate))
    return errors
