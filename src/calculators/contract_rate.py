"""Contractor rate calculator — permanent salary to contract day rate."""

from decimal import Decimal
from typing import NamedTuple

from src.calculators.errors import InvalidInput
from src.calculators.tax_data import to_decimal

MIN_UPLIFT = Decimal("15")
MAX_UPLIFT = Decimal("30")
DEFAULT_UPLIFT = Decimal("20")
WORKING_DAYS_PER_YEAR = 230


class ContractRange(NamedTuple):
    min: Decimal
    max: Decimal
    selected: Decimal


class ContractCalculationResult(NamedTuple):
    """Contract equivalents of a permanent base salary."""

    base_annual_salary: Decimal
    contract_annual: ContractRange
    contract_monthly: Decimal
    contract_daily: Decimal
    uplift_percentage: Decimal


def _apply_uplift(salary: Decimal, percentage: Decimal) -> Decimal:
    return salary * (1 + percentage / 100)


def calculate_contract_rate(
    base_annual_salary: Decimal | float | int,
    uplift_percentage: Decimal | float | int = DEFAULT_UPLIFT,
) -> ContractCalculationResult:
    """Convert a permanent salary into contractor annual, monthly and daily rates.

    The 15–30% range is the typical contractor uplift and is reported for
    comparison; the selected uplift is applied as given, even outside it.
    Daily rate assumes 230 working days per year.
    """
    try:
        salary = to_decimal(base_annual_salary)
        uplift = to_decimal(uplift_percentage)
    except ArithmeticError as exc:
        raise InvalidInput("Salary and uplift must be numbers") from exc
    if not (salary.is_finite() and uplift.is_finite()):
        raise InvalidInput("Salary and uplift must be finite numbers")

    selected = _apply_uplift(salary, uplift)

    return ContractCalculationResult(
        base_annual_salary=salary,
        contract_annual=ContractRange(
            min=_apply_uplift(salary, MIN_UPLIFT),
            max=_apply_uplift(salary, MAX_UPLIFT),
            selected=selected,
        ),
        contract_monthly=selected / 12,
        contract_daily=selected / WORKING_DAYS_PER_YEAR,
        uplift_percentage=uplift,
    )
