"""Side-by-side take-home and contract figures for a list of salaries."""

import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import NamedTuple

from src.calculators.contract_rate import (
    DEFAULT_UPLIFT,
    ContractCalculationResult,
    calculate_contract_rate,
)
from src.calculators.errors import TaxCalculatorError
from src.calculators.registry import TaxYearRegistry
from src.calculators.take_home import SalaryCalculationResult, calculate_take_home_salary

logger = logging.getLogger(__name__)

DEFAULT_SALARIES: tuple[Decimal, ...] = tuple(
    Decimal(amount) for amount in ("80000", "90000", "100000", "110000", "120000")
)


class SalaryScenario(NamedTuple):
    """One row of a salary comparison; results are None when the row failed."""

    base_salary: Decimal
    permanent: SalaryCalculationResult | None = None
    contract: ContractCalculationResult | None = None


def compare_salaries(
    registry: TaxYearRegistry,
    salaries: Iterable[Decimal | float | int],
    year_key: str,
    including_super: bool = False,
    custom_super_rate: Decimal | float | int | None = None,
    uplift_percentage: Decimal | float | int = DEFAULT_UPLIFT,
) -> list[SalaryScenario]:
    """Calculate permanent and contract figures for every salary.

    A salary whose calculation fails keeps its row with empty results, so one
    bad row (or an unknown year) degrades the table instead of aborting it.
    """
    scenarios: list[SalaryScenario] = []
    for salary in salaries:
        try:
            permanent = calculate_take_home_salary(
                registry, salary, year_key, including_super, custom_super_rate
            )
            contract = calculate_contract_rate(salary, uplift_percentage)
        except TaxCalculatorError:
            logger.exception("Calculation error for salary %s", salary)
            scenarios.append(SalaryScenario(base_salary=Decimal(str(salary))))
            continue
        scenarios.append(SalaryScenario(contract.base_annual_salary, permanent, contract))
    return scenarios
