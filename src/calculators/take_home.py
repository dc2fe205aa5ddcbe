"""Take-home pay calculator — composites super, income tax and Medicare levy."""

from decimal import Decimal
from typing import NamedTuple

from src.calculators.errors import InvalidInput
from src.calculators.income_tax import compute_tax
from src.calculators.registry import TaxYearRegistry
from src.calculators.tax_data import to_decimal

PAY_PERIODS: dict[str, int] = {
    "fortnightly": 26,
    "monthly": 12,
}


class SalaryCalculationResult(NamedTuple):
    """Annual and periodic take-home figures for one salary."""

    gross_annual: Decimal  # after super has been backed out, if included
    tax: Decimal
    medicare_levy: Decimal
    net_annual: Decimal
    net_monthly: Decimal
    net_fortnightly: Decimal
    superannuation: Decimal


def _finite(label: str, value: Decimal | float | int) -> Decimal:
    try:
        number = to_decimal(value)
    except ArithmeticError as exc:
        raise InvalidInput(f"{label} must be a number, got {value!r}") from exc
    if not number.is_finite():
        raise InvalidInput(f"{label} must be finite, got {value!r}")
    return number


def calculate_take_home_salary(
    registry: TaxYearRegistry,
    gross_annual: Decimal | float | int,
    year_key: str,
    including_super: bool,
    custom_super_rate: Decimal | float | int | None = None,
) -> SalaryCalculationResult:
    """Calculate annual, monthly and fortnightly take-home pay.

    When ``including_super`` is set the salary is a total package and super is
    backed out of it; otherwise super is paid on top of the salary. Medicare
    levy applies to the full gross with no low-income threshold.

    Args:
        registry: Tax years to resolve ``year_key`` against.
        gross_annual: Salary (or package) per year; callers ensure it is > 0.
        year_key: Financial year, e.g. "2024-25".
        including_super: Whether ``gross_annual`` already includes super.
        custom_super_rate: Super rate as a percentage (11.5 = 11.5%). Defaults
            to the year's guarantee rate.

    Raises:
        UnknownTaxYear: ``year_key`` is not registered.
        InvalidInput: A numeric input is not finite.
    """
    tax_year = registry.require(year_key)
    gross = _finite("Gross salary", gross_annual)

    if custom_super_rate is not None:
        super_rate = _finite("Super rate", custom_super_rate) / 100
    else:
        super_rate = tax_year.super_rate

    if including_super:
        actual_gross = gross / (1 + super_rate)
        super_amount = gross - actual_gross
    else:
        actual_gross = gross
        super_amount = gross * super_rate

    tax = compute_tax(actual_gross, tax_year.brackets)
    medicare_levy = actual_gross * tax_year.medicare_levy
    net_annual = actual_gross - tax - medicare_levy

    return SalaryCalculationResult(
        gross_annual=actual_gross,
        tax=tax,
        medicare_levy=medicare_levy,
        net_annual=net_annual,
        net_monthly=net_annual / PAY_PERIODS["monthly"],
        net_fortnightly=net_annual / PAY_PERIODS["fortnightly"],
        superannuation=super_amount,
    )
