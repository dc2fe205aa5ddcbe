"""Validate the built-in and configured AU tax year schedules.

Usage:
    python scripts/validate_tax_years.py
    python scripts/validate_tax_years.py 2024-25 2025-26
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config import load_yaml_config
from config.settings import settings
from src.calculators.errors import InvalidSchedule
from src.calculators.registry import TaxYearRegistry, build_default_registry, tax_years_from_config
from src.calculators.validation import validate_tax_year

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def validate_registry(registry: TaxYearRegistry, years: list[str] | None = None) -> dict[str, list[str]]:
    """Validate the given (or all) registered years and return issues keyed by year."""
    results: dict[str, list[str]] = {}
    for year_key in years or registry.years():
        tax_year = registry.get(year_key)
        if tax_year is None:
            results[year_key] = ["year is not registered"]
            continue
        results[year_key] = validate_tax_year(tax_year)
    return results


def main(argv: list[str] | None = None) -> int:
    """Report issues per year; exit 1 when any year has issues."""
    parser = argparse.ArgumentParser(description="Validate registered AU tax year schedules.")
    parser.add_argument("years", nargs="*", help="Specific years to validate (defaults to all)")
    args = parser.parse_args(argv)

    try:
        extra_years = tax_years_from_config(load_yaml_config(settings.tax_years_file))
    except InvalidSchedule as exc:
        logger.error("[%s] configured year rejected:", exc.year_key)
        for issue in exc.issues:
            logger.error("  - %s", issue)
        return 1

    registry = build_default_registry(extra_years)
    exit_code = 0
    for year_key, issues in validate_registry(registry, args.years).items():
        if issues:
            exit_code = 1
            logger.error("[%s] %d issue(s) detected:", year_key, len(issues))
            for issue in issues:
                logger.error("  - %s", issue)
        else:
            logger.info("[%s] OK", year_key)
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
