"""In-memory registry of AU tax years.

The registry is owned by whoever assembles the application (the API lifespan,
a script's ``main``, a test fixture) and passed into the calculators. It never
validates schedules itself; run ``validate_tax_year`` before ``add``/``update``.
"""

import logging
import threading
from collections.abc import Iterable, Mapping
from typing import Any

from src.calculators.errors import DuplicateYear, InvalidSchedule, UnknownTaxYear, UnknownYear
from src.calculators.tax_data import AU_TAX_YEARS, TaxYear, tax_year_from_dict
from src.calculators.validation import validate_tax_year

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"brackets", "medicare_levy", "super_rate"})


class TaxYearRegistry:
    """Mapping of year key ("2024-25") to TaxYear, with add and partial update."""

    def __init__(self, tax_years: Mapping[str, TaxYear] | None = None) -> None:
        self._years: dict[str, TaxYear] = dict(tax_years or {})
        self._lock = threading.Lock()

    def get(self, year_key: str) -> TaxYear | None:
        return self._years.get(year_key)

    def require(self, year_key: str) -> TaxYear:
        """Return the tax year or raise UnknownTaxYear."""
        tax_year = self._years.get(year_key)
        if tax_year is None:
            raise UnknownTaxYear(year_key)
        return tax_year

    def years(self) -> list[str]:
        """Known year keys in registration order."""
        return list(self._years)

    def add(self, year_key: str, tax_year: TaxYear) -> None:
        """Register a new tax year.

        Raises:
            DuplicateYear: ``year_key`` is already registered.
        """
        with self._lock:
            if year_key in self._years:
                raise DuplicateYear(year_key)
            self._years[year_key] = tax_year
        logger.info("Added tax year %s (%d brackets)", year_key, len(tax_year.brackets))

    def update(self, year_key: str, updates: Mapping[str, Any]) -> TaxYear:
        """Replace the named fields of an existing tax year.

        Only ``brackets``, ``medicare_levy`` and ``super_rate`` may be updated;
        fields not present in ``updates`` keep their current values.

        Returns:
            The merged TaxYear now stored under ``year_key``.

        Raises:
            UnknownYear: ``year_key`` is not registered.
            ValueError: ``updates`` names a field that cannot be updated.
        """
        unknown = set(updates) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update tax year fields: {', '.join(sorted(unknown))}")

        changes = dict(updates)
        if "brackets" in changes:
            changes["brackets"] = tuple(changes["brackets"])

        with self._lock:
            current = self._years.get(year_key)
            if current is None:
                raise UnknownYear(year_key)
            merged = current._replace(**changes)
            self._years[year_key] = merged
        logger.info("Updated tax year %s fields=%s", year_key, sorted(changes))
        return merged

    def __contains__(self, year_key: object) -> bool:
        return year_key in self._years

    def __len__(self) -> int:
        return len(self._years)


def tax_years_from_config(raw_config: Mapping[str, Any]) -> list[TaxYear]:
    """Build and validate the tax years declared under ``tax_years`` in a config mapping.

    Raises:
        InvalidSchedule: A declared year is missing a field, holds a value that
            is not a number, or fails validation.
    """
    tax_years: list[TaxYear] = []
    for year_key, data in (raw_config.get("tax_years") or {}).items():
        try:
            tax_year = tax_year_from_dict(str(year_key), data)
            issues = validate_tax_year(tax_year)
        except KeyError as exc:
            raise InvalidSchedule(str(year_key), [f"missing field {exc}"]) from exc
        except (TypeError, AttributeError, ArithmeticError) as exc:
            raise InvalidSchedule(
                str(year_key), [f"malformed definition: {type(exc).__name__}"]
            ) from exc
        if issues:
            raise InvalidSchedule(tax_year.year, issues)
        tax_years.append(tax_year)
    return tax_years


def build_default_registry(extra_years: Iterable[TaxYear] | None = None) -> TaxYearRegistry:
    """Build a fresh registry seeded with the built-in AU tax years.

    Args:
        extra_years: Additional, already validated, years to register after
            the built-in ones (e.g. loaded from ``config/tax_years.yaml``).
    """
    registry = TaxYearRegistry(AU_TAX_YEARS)
    for tax_year in extra_years or ():
        registry.add(tax_year.year, tax_year)
    logger.info("Tax year registry seeded with %d years", len(registry))
    return registry
