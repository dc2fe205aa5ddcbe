"""AU tax constants — brackets, Medicare levy and superannuation rates.

Hardcoded Python constants seed the in-memory tax year registry. Brackets use
whole-dollar thresholds as published by the ATO ("$18,201 – $45,000"), and each
bracket's base amount is the tax already owed at its threshold.
"""

from decimal import Decimal
from typing import NamedTuple


class TaxBracket(NamedTuple):
    """A single marginal income tax bracket."""

    min: Decimal
    max: Decimal | None  # None = no cap
    base_amount: Decimal
    rate: Decimal


class TaxYear(NamedTuple):
    """All tax parameters for a single AU financial year."""

    year: str
    brackets: tuple[TaxBracket, ...]
    medicare_levy: Decimal
    super_rate: Decimal


# 2022-23 and 2023-24 (pre Stage 3)
_BRACKETS_PRE_2024 = (
    TaxBracket(Decimal("0"), Decimal("18200"), Decimal("0"), Decimal("0")),
    TaxBracket(Decimal("18201"), Decimal("45000"), Decimal("0"), Decimal("0.19")),
    TaxBracket(Decimal("45001"), Decimal("120000"), Decimal("5092"), Decimal("0.325")),
    TaxBracket(Decimal("120001"), Decimal("180000"), Decimal("29467"), Decimal("0.37")),
    TaxBracket(Decimal("180001"), None, Decimal("51667"), Decimal("0.45")),
)

# Stage 3 brackets (2024-25 onwards)
_BRACKETS_2024 = (
    TaxBracket(Decimal("0"), Decimal("18200"), Decimal("0"), Decimal("0")),
    TaxBracket(Decimal("18201"), Decimal("45000"), Decimal("0"), Decimal("0.16")),
    TaxBracket(Decimal("45001"), Decimal("135000"), Decimal("4294"), Decimal("0.30")),
    TaxBracket(Decimal("135001"), Decimal("190000"), Decimal("31094"), Decimal("0.37")),
    TaxBracket(Decimal("190001"), None, Decimal("51424"), Decimal("0.45")),
)

AU_TAX_YEARS: dict[str, TaxYear] = {
    "2022-23": TaxYear(
        year="2022-23",
        brackets=_BRACKETS_PRE_2024,
        medicare_levy=Decimal("0.02"),
        super_rate=Decimal("0.105"),
    ),
    "2023-24": TaxYear(
        year="2023-24",
        brackets=_BRACKETS_PRE_2024,
        medicare_levy=Decimal("0.02"),
        super_rate=Decimal("0.11"),
    ),
    "2024-25": TaxYear(
        year="2024-25",
        brackets=_BRACKETS_2024,
        medicare_levy=Decimal("0.02"),
        super_rate=Decimal("0.115"),  # SG rate from 1 Jul 2024
    ),
    "2025-26": TaxYear(
        year="2025-26",
        brackets=_BRACKETS_2024,
        medicare_levy=Decimal("0.02"),
        super_rate=Decimal("0.12"),  # SG rate from 1 Jul 2025
    ),
}

DEFAULT_TAX_YEAR = "2024-25"


def to_decimal(value: Decimal | float | int | str) -> Decimal:
    """Convert a JSON/YAML number to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def tax_year_from_dict(year_key: str, data: dict) -> TaxYear:  # type: ignore[type-arg]
    """Build a TaxYear from a plain mapping (YAML config or API payload).

    Brackets are given as mappings with ``min``, ``max``, ``base_amount`` and
    ``rate``; a missing or null ``max`` marks the top bracket.
    """
    brackets = tuple(
        TaxBracket(
            min=to_decimal(b["min"]),
            max=to_decimal(b["max"]) if b.get("max") is not None else None,
            base_amount=to_decimal(b.get("base_amount", 0)),
            rate=to_decimal(b["rate"]),
        )
        for b in data["brackets"]
    )
    return TaxYear(
        year=year_key,
        brackets=brackets,
        medicare_levy=to_decimal(data["medicare_levy"]),
        super_rate=to_decimal(data["super_rate"]),
    )
