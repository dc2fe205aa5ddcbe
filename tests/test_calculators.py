"""Tests for the AU tax, take-home and contract rate calculators."""

import logging
from decimal import Decimal

import pytest

from src.calculators.comparison import DEFAULT_SALARIES, compare_salaries
from src.calculators.contract_rate import WORKING_DAYS_PER_YEAR, calculate_contract_rate
from src.calculators.errors import InvalidInput, UnknownTaxYear
from src.calculators.income_tax import compute_tax
from src.calculators.registry import TaxYearRegistry
from src.calculators.take_home import calculate_take_home_salary
from src.calculators.tax_data import AU_TAX_YEARS, TaxBracket, TaxYear

BRACKETS_2024_25 = AU_TAX_YEARS["2024-25"].brackets
BRACKETS_2023_24 = AU_TAX_YEARS["2023-24"].brackets

# --- Income tax tests ---


class TestComputeTax:
    @pytest.mark.parametrize("amount", ["-500", "0"])
    def test_at_or_below_lowest_threshold(self, amount: str) -> None:
        assert compute_tax(Decimal(amount), BRACKETS_2024_25) == 0

    def test_tax_free_threshold(self) -> None:
        """$18,200 sits inside the 0% bracket."""
        assert compute_tax(Decimal("18200"), BRACKETS_2024_25) == 0

    def test_first_dollar_of_second_bracket(self) -> None:
        assert compute_tax(Decimal("18201"), BRACKETS_2024_25) == 0

    def test_within_16_percent_bracket(self) -> None:
        """($30,000 - $18,201) * 16% = $1,887.84."""
        assert compute_tax(Decimal("30000"), BRACKETS_2024_25) == Decimal("1887.84")

    def test_top_of_16_percent_bracket(self) -> None:
        """($45,000 - $18,201) * 16% = $4,287.84."""
        assert compute_tax(Decimal("45000"), BRACKETS_2024_25) == Decimal("4287.84")

    def test_first_dollar_of_30_percent_bracket(self) -> None:
        """$45,001 is charged the bracket's base amount."""
        assert compute_tax(Decimal("45001"), BRACKETS_2024_25) == Decimal("4294")

    def test_whole_dollar_step_uses_upper_bracket(self) -> None:
        """Cents between $45,000 and $45,001 are not a tax-free gap."""
        assert compute_tax(Decimal("45000.50"), BRACKETS_2024_25) == Decimal("4294")

    def test_reference_100k(self) -> None:
        """$4,294 + ($100,000 - $45,001) * 30% = $20,793.70."""
        assert compute_tax(Decimal("100000"), BRACKETS_2024_25) == Decimal("20793.70")

    def test_top_bracket_200k(self) -> None:
        """$51,424 + ($200,000 - $190,001) * 45% = $55,923.55."""
        assert compute_tax(Decimal("200000"), BRACKETS_2024_25) == Decimal("55923.55")

    def test_old_brackets_2023_24(self) -> None:
        """$5,092 + ($100,000 - $45,001) * 32.5% = $22,966.675."""
        assert compute_tax(Decimal("100000"), BRACKETS_2023_24) == Decimal("22966.675")

    def test_only_matching_bracket_contributes(self, simple_year: TaxYear) -> None:
        """$4,000 base + $10,000 * 20%, not a sum over every bracket."""
        assert compute_tax(Decimal("60000"), simple_year.brackets) == Decimal("6000")

    def test_continuous_at_contiguous_boundary(self, simple_year: TaxYear) -> None:
        at_boundary = compute_tax(Decimal("50000"), simple_year.brackets)
        just_above = compute_tax(Decimal("50000.01"), simple_year.brackets)
        assert at_boundary == Decimal("4000")
        assert just_above - at_boundary == Decimal("0.002")

    def test_unsorted_brackets(self, simple_year: TaxYear) -> None:
        reversed_brackets = tuple(reversed(simple_year.brackets))
        assert compute_tax(Decimal("60000"), reversed_brackets) == Decimal("6000")

    def test_empty_schedule(self) -> None:
        assert compute_tax(Decimal("50000"), ()) == 0

    def test_no_unbounded_bracket_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        brackets = (
            TaxBracket(Decimal("0"), Decimal("100"), Decimal("0"), Decimal("0")),
            TaxBracket(Decimal("100"), Decimal("200"), Decimal("0"), Decimal("0.1")),
        )
        with caplog.at_level(logging.WARNING):
            assert compute_tax(Decimal("500"), brackets) == 0
        assert "No tax bracket covers" in caplog.text

    def test_wide_gap_owes_nothing_and_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        brackets = (
            TaxBracket(Decimal("0"), Decimal("10000"), Decimal("0"), Decimal("0")),
            TaxBracket(Decimal("50000"), None, Decimal("9000"), Decimal("0.30")),
        )
        with caplog.at_level(logging.WARNING):
            assert compute_tax(Decimal("30000"), brackets) == 0
        assert "No tax bracket covers" in caplog.text
        assert compute_tax(Decimal("60000"), brackets) == Decimal("12000")

    def test_fractional_amount_in_whole_dollar_step(self, caplog: pytest.LogCaptureFixture) -> None:
        tax_year = AU_TAX_YEARS["2024-25"]
        with caplog.at_level(logging.WARNING):
            assert compute_tax(Decimal("45000.50"), tax_year.brackets) == Decimal("4294")
        assert "No tax bracket covers" not in caplog.text


# --- Take-home tests ---


class TestTakeHome:
    def test_excluding_super_100k(self, registry: TaxYearRegistry) -> None:
        result = calculate_take_home_salary(registry, Decimal("100000"), "2024-25", False)
        assert result.gross_annual == Decimal("100000")
        assert result.tax == Decimal("20793.70")
        assert result.medicare_levy == Decimal("2000")
        assert result.net_annual == Decimal("77206.30")
        assert float(result.net_monthly) == pytest.approx(6433.86, abs=0.01)
        assert float(result.net_fortnightly) == pytest.approx(2969.47, abs=0.01)
        assert result.superannuation == Decimal("11500")

    def test_including_super_backs_out_super(self, registry: TaxYearRegistry) -> None:
        result = calculate_take_home_salary(registry, Decimal("100000"), "2024-25", True)
        assert float(result.gross_annual) == pytest.approx(89686.10, abs=0.01)
        assert float(result.superannuation) == pytest.approx(10313.90, abs=0.01)
        assert float(result.gross_annual + result.superannuation) == pytest.approx(100000.0)
        # Tax is on the reduced gross: $4,294 + ($89,686.10 - $45,001) * 30%
        assert float(result.tax) == pytest.approx(17699.53, abs=0.01)

    def test_net_is_gross_less_tax_and_levy(self, registry: TaxYearRegistry) -> None:
        result = calculate_take_home_salary(registry, Decimal("85000"), "2025-26", True)
        assert result.net_annual == result.gross_annual - result.tax - result.medicare_levy
        assert result.net_monthly == result.net_annual / 12
        assert result.net_fortnightly == result.net_annual / 26

    def test_levy_has_no_threshold(self, registry: TaxYearRegistry) -> None:
        """Low incomes pay no income tax but still pay the 2% levy."""
        result = calculate_take_home_salary(registry, Decimal("15000"), "2024-25", False)
        assert result.tax == 0
        assert result.medicare_levy == Decimal("300")

    def test_custom_super_rate_percent(self, registry: TaxYearRegistry) -> None:
        result = calculate_take_home_salary(
            registry, Decimal("100000"), "2024-25", False, Decimal("10")
        )
        assert result.superannuation == Decimal("10000")

    def test_custom_super_rate_float(self, registry: TaxYearRegistry) -> None:
        result = calculate_take_home_salary(registry, 100000, "2024-25", False, 12.5)
        assert result.superannuation == Decimal("12500")

    def test_year_super_rates(self, registry: TaxYearRegistry) -> None:
        supers = {
            year: calculate_take_home_salary(registry, Decimal("100000"), year, False).superannuation
            for year in ("2022-23", "2023-24", "2024-25", "2025-26")
        }
        assert supers == {
            "2022-23": Decimal("10500"),
            "2023-24": Decimal("11000"),
            "2024-25": Decimal("11500"),
            "2025-26": Decimal("12000"),
        }

    def test_unknown_year(self, registry: TaxYearRegistry) -> None:
        with pytest.raises(UnknownTaxYear, match="2099-00"):
            calculate_take_home_salary(registry, Decimal("50000"), "2099-00", False)

    @pytest.mark.parametrize("bad", [Decimal("NaN"), float("inf"), "abc"])
    def test_non_finite_gross(self, registry: TaxYearRegistry, bad: object) -> None:
        with pytest.raises(InvalidInput):
            calculate_take_home_salary(registry, bad, "2024-25", False)  # type: ignore[arg-type]

    def test_uses_fixture_schedule(self, registry: TaxYearRegistry, simple_year: TaxYear) -> None:
        registry.add(simple_year.year, simple_year)
        result = calculate_take_home_salary(registry, Decimal("60000"), "2030-31", False)
        assert result.tax == Decimal("6000")
        assert result.medicare_levy == Decimal("600")
        assert result.superannuation == Decimal("6000")

    def test_idempotent(self, registry: TaxYearRegistry) -> None:
        first = calculate_take_home_salary(registry, Decimal("123456.78"), "2024-25", True)
        second = calculate_take_home_salary(registry, Decimal("123456.78"), "2024-25", True)
        assert first == second


# --- Contract rate tests ---


class TestContractRate:
    def test_default_uplift_100k(self) -> None:
        result = calculate_contract_rate(Decimal("100000"))
        assert result.uplift_percentage == Decimal("20")
        assert result.contract_annual.selected == Decimal("120000")
        assert result.contract_annual.min == Decimal("115000")
        assert result.contract_annual.max == Decimal("130000")
        assert result.contract_monthly == Decimal("10000")
        assert float(result.contract_daily) == pytest.approx(521.74, abs=0.01)
        assert result.base_annual_salary == Decimal("100000")

    def test_daily_rate_uses_230_days(self) -> None:
        result = calculate_contract_rate(Decimal("115000"), Decimal("0"))
        assert WORKING_DAYS_PER_YEAR == 230
        assert result.contract_daily == Decimal("500")

    @pytest.mark.parametrize(
        ("uplift", "expected"),
        [("5", "105000"), ("50", "150000")],
    )
    def test_uplift_not_clamped(self, uplift: str, expected: str) -> None:
        result = calculate_contract_rate(Decimal("100000"), Decimal(uplift))
        assert result.contract_annual.selected == Decimal(expected)
        # Typical range is still reported
        assert result.contract_annual.min == Decimal("115000")
        assert result.contract_annual.max == Decimal("130000")

    def test_accepts_floats(self) -> None:
        result = calculate_contract_rate(100000.0, 25)
        assert result.contract_annual.selected == Decimal("125000")

    def test_non_finite_salary(self) -> None:
        with pytest.raises(InvalidInput):
            calculate_contract_rate(float("nan"))

    def test_idempotent(self) -> None:
        assert calculate_contract_rate(Decimal("98765"), 22) == calculate_contract_rate(
            Decimal("98765"), 22
        )


# --- Comparison tests ---


class TestComparison:
    def test_default_salaries(self, registry: TaxYearRegistry) -> None:
        scenarios = compare_salaries(registry, DEFAULT_SALARIES, "2024-25")
        assert [s.base_salary for s in scenarios] == list(DEFAULT_SALARIES)
        assert all(s.permanent is not None and s.contract is not None for s in scenarios)
        hundred_k = scenarios[2]
        assert hundred_k.permanent is not None
        assert hundred_k.permanent.tax == Decimal("20793.70")

    def test_uplift_applied_to_every_row(self, registry: TaxYearRegistry) -> None:
        scenarios = compare_salaries(
            registry, [Decimal("80000"), Decimal("120000")], "2024-25", uplift_percentage=25
        )
        assert [s.contract.contract_annual.selected for s in scenarios if s.contract] == [
            Decimal("100000"),
            Decimal("150000"),
        ]

    def test_failed_row_keeps_empty_results(
        self, registry: TaxYearRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.ERROR):
            scenarios = compare_salaries(registry, [Decimal("80000"), float("nan")], "2024-25")
        assert len(scenarios) == 2
        assert scenarios[0].permanent is not None
        assert scenarios[1].permanent is None
        assert scenarios[1].contract is None
        assert "Calculation error for salary" in caplog.text

    def test_unknown_year_degrades_every_row(self, registry: TaxYearRegistry) -> None:
        scenarios = compare_salaries(registry, [Decimal("80000"), Decimal("90000")], "2099-00")
        assert [s.permanent for s in scenarios] == [None, None]
        assert [s.base_salary for s in scenarios] == [Decimal("80000"), Decimal("90000")]


class TestCrossYear:
    def test_stage_3_lowers_tax(self, registry: TaxYearRegistry) -> None:
        """Same income yields less tax under the 2024-25 brackets."""
        old = calculate_take_home_salary(registry, Decimal("100000"), "2023-24", False)
        new = calculate_take_home_salary(registry, Decimal("100000"), "2024-25", False)
        assert new.tax < old.tax
        assert new.net_annual > old.net_annual
