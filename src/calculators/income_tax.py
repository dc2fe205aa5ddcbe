"""Income tax calculator — marginal bracket with precomputed base amounts."""

import logging
from collections.abc import Sequence
from decimal import Decimal

from src.calculators.tax_data import TaxBracket
from src.calculators.validation import MAX_THRESHOLD_STEP

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def compute_tax(taxable_amount: Decimal, brackets: Sequence[TaxBracket]) -> Decimal:
    """Calculate AU income tax owed on a taxable amount.

    Finds the single bracket containing the amount and charges its base amount
    plus the marginal rate on the part above the bracket's threshold. Base
    amounts already hold the tax on all lower brackets.

    Amounts inside the whole-dollar step between one bracket's max and the
    next bracket's min (at most one dollar, as in published schedules) are
    charged the upper bracket's base amount. An amount in any wider gap
    matches no bracket; that is a malformed schedule and is logged.

    Args:
        taxable_amount: Annual taxable income.
        brackets: Schedule for one tax year.

    Returns:
        Income tax owed; 0 at or below the lowest threshold or when no
        bracket matches.
    """
    ordered = sorted(brackets, key=lambda b: b.min)
    if not ordered or taxable_amount <= ordered[0].min:
        return ZERO

    previous_max: Decimal | None = None
    for bracket in ordered:
        if bracket.max is not None and taxable_amount > bracket.max:
            previous_max = bracket.max
            continue
        if taxable_amount > bracket.min:
            return bracket.base_amount + (taxable_amount - bracket.min) * bracket.rate
        if previous_max is not None and bracket.min - previous_max <= MAX_THRESHOLD_STEP:
            return bracket.base_amount
        break

    logger.warning(
        "No tax bracket covers taxable amount %s (top bracket max=%s); schedule is malformed",
        taxable_amount,
        ordered[-1].max,
    )
    return ZERO
