"""Pydantic request and response models for the calculator API."""

from typing import Annotated

from pydantic import BaseModel, Field

from src.calculators.comparison import DEFAULT_SALARIES, SalaryScenario
from src.calculators.contract_rate import (
    MAX_UPLIFT,
    MIN_UPLIFT,
    WORKING_DAYS_PER_YEAR,
    ContractCalculationResult,
)
from src.calculators.tax_data import TaxBracket, TaxYear, to_decimal
from src.calculators.take_home import SalaryCalculationResult
from src.calculators.validation import YEAR_KEY_PATTERN

PositiveAmount = Annotated[float, Field(gt=0, allow_inf_nan=False)]
Rate = Annotated[float, Field(ge=0, le=1, allow_inf_nan=False)]
YearKey = Annotated[str, Field(pattern=YEAR_KEY_PATTERN.pattern)]
Amount = Annotated[float, Field(allow_inf_nan=False)]
SuperRatePercent = Annotated[float, Field(gt=0, le=100, allow_inf_nan=False)]
UpliftPercent = Annotated[float, Field(ge=0, allow_inf_nan=False)]


# --- Tax years ---


class BracketModel(BaseModel):
    """A tax bracket as exchanged over the API (max null = top bracket)."""

    min: float = Field(ge=0, allow_inf_nan=False)
    max: Amount | None = None
    base_amount: float = Field(default=0, ge=0, allow_inf_nan=False)
    rate: Rate

    def to_bracket(self) -> TaxBracket:
        return TaxBracket(
            min=to_decimal(self.min),
            max=to_decimal(self.max) if self.max is not None else None,
            base_amount=to_decimal(self.base_amount),
            rate=to_decimal(self.rate),
        )

    @classmethod
    def from_bracket(cls, bracket: TaxBracket) -> "BracketModel":
        return cls(
            min=float(bracket.min),
            max=float(bracket.max) if bracket.max is not None else None,
            base_amount=float(bracket.base_amount),
            rate=float(bracket.rate),
        )


class TaxYearCreate(BaseModel):
    """Request body for registering a new tax year."""

    year: YearKey
    brackets: list[BracketModel] = Field(min_length=1)
    medicare_levy: Rate
    super_rate: Rate

    def to_tax_year(self) -> TaxYear:
        return TaxYear(
            year=self.year,
            brackets=tuple(b.to_bracket() for b in self.brackets),
            medicare_levy=to_decimal(self.medicare_levy),
            super_rate=to_decimal(self.super_rate),
        )


class TaxYearUpdate(BaseModel):
    """Request body for a partial tax year update; omitted fields are kept."""

    brackets: Annotated[list[BracketModel], Field(min_length=1)] | None = None
    medicare_levy: Rate | None = None
    super_rate: Rate | None = None

    def to_updates(self) -> dict[str, object]:
        updates: dict[str, object] = {}
        if self.brackets is not None:
            updates["brackets"] = tuple(b.to_bracket() for b in self.brackets)
        if self.medicare_levy is not None:
            updates["medicare_levy"] = to_decimal(self.medicare_levy)
        if self.super_rate is not None:
            updates["super_rate"] = to_decimal(self.super_rate)
        return updates


class TaxYearResponse(BaseModel):
    year: str
    brackets: list[BracketModel]
    medicare_levy: float
    super_rate: float

    @classmethod
    def from_tax_year(cls, tax_year: TaxYear) -> "TaxYearResponse":
        return cls(
            year=tax_year.year,
            brackets=[BracketModel.from_bracket(b) for b in tax_year.brackets],
            medicare_levy=float(tax_year.medicare_levy),
            super_rate=float(tax_year.super_rate),
        )


class TaxYearListResponse(BaseModel):
    years: list[str]
    default_tax_year: str


# --- Calculations ---


class TakeHomeRequest(BaseModel):
    """Request body for the take-home calculation."""

    gross_annual: PositiveAmount
    tax_year: YearKey | None = None
    including_super: bool = False
    custom_super_rate: SuperRatePercent | None = None


class SalaryResultResponse(BaseModel):
    gross_annual: float
    tax: float
    medicare_levy: float
    net_annual: float
    net_monthly: float
    net_fortnightly: float
    superannuation: float

    @classmethod
    def from_result(cls, result: SalaryCalculationResult) -> "SalaryResultResponse":
        return cls(**{name: float(value) for name, value in result._asdict().items()})


class TakeHomeResponse(SalaryResultResponse):
    tax_year: str
    super_rate_percent: float


class ContractRateRequest(BaseModel):
    """Request body for the contract rate conversion."""

    base_annual_salary: PositiveAmount
    uplift_percentage: UpliftPercent | None = None


class ContractRangeResponse(BaseModel):
    min: float
    max: float
    selected: float


class ContractResultResponse(BaseModel):
    base_annual_salary: float
    contract_annual: ContractRangeResponse
    contract_monthly: float
    contract_daily: float
    uplift_percentage: float
    typical_uplift_min: float = float(MIN_UPLIFT)
    typical_uplift_max: float = float(MAX_UPLIFT)
    working_days_per_year: int = WORKING_DAYS_PER_YEAR

    @classmethod
    def from_result(cls, result: ContractCalculationResult) -> "ContractResultResponse":
        annual = result.contract_annual
        return cls(
            base_annual_salary=float(result.base_annual_salary),
            contract_annual=ContractRangeResponse(
                min=float(annual.min),
                max=float(annual.max),
                selected=float(annual.selected),
            ),
            contract_monthly=float(result.contract_monthly),
            contract_daily=float(result.contract_daily),
            uplift_percentage=float(result.uplift_percentage),
        )


class CompareRequest(BaseModel):
    """Request body for the salary comparison table."""

    salaries: list[PositiveAmount] = Field(
        default_factory=lambda: [float(s) for s in DEFAULT_SALARIES], min_length=1
    )
    tax_year: YearKey | None = None
    including_super: bool = False
    custom_super_rate: SuperRatePercent | None = None
    uplift_percentage: UpliftPercent | None = None


class ScenarioResponse(BaseModel):
    base_salary: float
    permanent: SalaryResultResponse | None = None
    contract: ContractResultResponse | None = None

    @classmethod
    def from_scenario(cls, scenario: SalaryScenario) -> "ScenarioResponse":
        return cls(
            base_salary=float(scenario.base_salary),
            permanent=(
                SalaryResultResponse.from_result(scenario.permanent)
                if scenario.permanent is not None
                else None
            ),
            contract=(
                ContractResultResponse.from_result(scenario.contract)
                if scenario.contract is not None
                else None
            ),
        )


class CompareResponse(BaseModel):
    tax_year: str
    including_super: bool
    uplift_percentage: float
    scenarios: list[ScenarioResponse]
