"""Print a permanent vs contract comparison table for a set of salaries.

Usage:
    python scripts/compare_salaries.py
    python scripts/compare_salaries.py 85000 150000 --year 2025-26 --uplift 25
    python scripts/compare_salaries.py 120000 --including-super --super-rate 12
"""

import argparse
import logging
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config import load_yaml_config
from config.settings import settings
from src.calculators.comparison import DEFAULT_SALARIES, SalaryScenario, compare_salaries
from src.calculators.registry import build_default_registry, tax_years_from_config

logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

COLUMNS = (
    ("Salary", 12),
    ("Tax", 10),
    ("Medicare", 10),
    ("Net/yr", 11),
    ("Net/month", 10),
    ("Net/f'night", 11),
    ("Super", 10),
    ("Contract/yr", 12),
    ("Day rate", 9),
)


def format_aud(value: Decimal | None) -> str:
    """Whole-dollar AUD, e.g. $100,000; '-' for a missing value."""
    if value is None:
        return "-"
    return f"${value:,.0f}"


def _positive_decimal(raw: str) -> Decimal:
    try:
        value = Decimal(raw)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"not a number: {raw}") from exc
    if not value.is_finite() or value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive number: {raw}")
    return value


def _row(scenario: SalaryScenario) -> list[str]:
    permanent = scenario.permanent
    contract = scenario.contract
    return [
        format_aud(scenario.base_salary),
        format_aud(permanent.tax if permanent else None),
        format_aud(permanent.medicare_levy if permanent else None),
        format_aud(permanent.net_annual if permanent else None),
        format_aud(permanent.net_monthly if permanent else None),
        format_aud(permanent.net_fortnightly if permanent else None),
        format_aud(permanent.superannuation if permanent else None),
        format_aud(contract.contract_annual.selected if contract else None),
        format_aud(contract.contract_daily if contract else None),
    ]


def render_table(scenarios: list[SalaryScenario]) -> str:
    """Render scenarios as a fixed-width text table."""
    header = " ".join(title.rjust(width) for title, width in COLUMNS)
    lines = [header, "-" * len(header)]
    for scenario in scenarios:
        cells = _row(scenario)
        lines.append(" ".join(cell.rjust(width) for cell, (_, width) in zip(cells, COLUMNS)))
    return "\n".join(lines)


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compare take-home pay and contract rates.")
    parser.add_argument(
        "salaries",
        nargs="*",
        type=_positive_decimal,
        help="Annual salaries to compare (defaults to 80k-120k in 10k steps)",
    )
    parser.add_argument("--year", default=settings.default_tax_year, help="Financial year, e.g. 2024-25")
    parser.add_argument(
        "--including-super",
        action="store_true",
        help="Treat salaries as packages that already include super",
    )
    parser.add_argument(
        "--super-rate",
        type=_positive_decimal,
        default=None,
        help="Custom super rate in percent (defaults to the year's rate)",
    )
    parser.add_argument(
        "--uplift",
        type=Decimal,
        default=Decimal(str(settings.default_uplift_percentage)),
        help="Contractor uplift in percent (typical range 15-30)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Print the comparison table; exit 1 if the year is unknown."""
    args = _build_argument_parser().parse_args(argv)
    registry = build_default_registry(
        tax_years_from_config(load_yaml_config(settings.tax_years_file))
    )

    if args.year not in registry:
        logger.error("Unknown tax year %s. Available: %s", args.year, ", ".join(registry.years()))
        return 1

    scenarios = compare_salaries(
        registry,
        args.salaries or DEFAULT_SALARIES,
        args.year,
        including_super=args.including_super,
        custom_super_rate=args.super_rate,
        uplift_percentage=args.uplift,
    )
    print(f"Tax year {args.year}, contractor uplift {args.uplift}%")
    print(render_table(scenarios))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
