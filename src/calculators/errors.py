"""Exceptions raised by the tax calculators and the tax year registry."""


class TaxCalculatorError(Exception):
    """Base class for calculator and registry errors."""


class UnknownTaxYear(TaxCalculatorError, KeyError):
    """A calculation asked for a tax year that is not registered."""

    def __init__(self, year_key: str) -> None:
        super().__init__(year_key)
        self.year_key = year_key

    def __str__(self) -> str:
        return f"Tax year {self.year_key} not found"


class UnknownYear(UnknownTaxYear):
    """An update targeted a tax year that is not registered."""


class DuplicateYear(TaxCalculatorError):
    """A tax year with the same key is already registered."""

    def __init__(self, year_key: str) -> None:
        super().__init__(f"Tax year {year_key} already exists")
        self.year_key = year_key


class InvalidInput(TaxCalculatorError, ValueError):
    """A salary, rate or uplift is not a usable number."""


class InvalidSchedule(TaxCalculatorError, ValueError):
    """A tax year definition failed validation."""

    def __init__(self, year_key: str, issues: list[str]) -> None:
        super().__init__(f"Tax year {year_key} is invalid: {'; '.join(issues)}")
        self.year_key = year_key
        self.issues = issues
