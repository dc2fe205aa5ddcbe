"""API routes for the AU take-home pay and contract rate calculators."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.api.schemas import (
    CompareRequest,
    CompareResponse,
    ContractRateRequest,
    ContractResultResponse,
    SalaryResultResponse,
    ScenarioResponse,
    TakeHomeRequest,
    TakeHomeResponse,
    TaxYearCreate,
    TaxYearListResponse,
    TaxYearResponse,
    TaxYearUpdate,
)
from src.calculators.comparison import compare_salaries
from src.calculators.contract_rate import calculate_contract_rate
from src.calculators.errors import DuplicateYear, InvalidInput, UnknownTaxYear
from src.calculators.registry import TaxYearRegistry
from src.calculators.take_home import calculate_take_home_salary
from src.calculators.tax_data import to_decimal
from src.calculators.validation import validate_brackets, validate_tax_year

logger = logging.getLogger(__name__)

router = APIRouter()


def _registry(request: Request) -> TaxYearRegistry:
    return request.app.state.registry


def _validation_failed(issues: list[str]) -> JSONResponse:
    logger.warning("Rejected tax year definition: %s", issues)
    return JSONResponse({"error": "Invalid tax year definition", "issues": issues}, status_code=422)


@router.get("/health")
async def health(request: Request) -> dict:  # type: ignore[type-arg]
    """Health check endpoint with the number of registered tax years."""
    return {"status": "ok", "tax_years": len(_registry(request))}


# --- Tax years ---


@router.get("/tax-years", response_model=TaxYearListResponse)
async def list_tax_years(request: Request) -> TaxYearListResponse:
    """List registered financial years."""
    return TaxYearListResponse(
        years=_registry(request).years(),
        default_tax_year=settings.default_tax_year,
    )


@router.get("/tax-years/{year_key}", response_model=TaxYearResponse)
async def get_tax_year(year_key: str, request: Request) -> TaxYearResponse | JSONResponse:
    """Return the schedule, levy and super rate for one year."""
    tax_year = _registry(request).get(year_key)
    if tax_year is None:
        return JSONResponse({"error": str(UnknownTaxYear(year_key))}, status_code=404)
    return TaxYearResponse.from_tax_year(tax_year)


@router.post("/tax-years", response_model=TaxYearResponse, status_code=201)
async def add_tax_year(body: TaxYearCreate, request: Request) -> TaxYearResponse | JSONResponse:
    """Validate and register a new financial year."""
    tax_year = body.to_tax_year()
    issues = validate_tax_year(tax_year)
    if issues:
        return _validation_failed(issues)

    try:
        _registry(request).add(tax_year.year, tax_year)
    except DuplicateYear as exc:
        return JSONResponse({"error": str(exc)}, status_code=409)
    return TaxYearResponse.from_tax_year(tax_year)


@router.patch("/tax-years/{year_key}", response_model=TaxYearResponse)
async def update_tax_year(
    year_key: str, body: TaxYearUpdate, request: Request
) -> TaxYearResponse | JSONResponse:
    """Replace the supplied fields of an existing financial year."""
    updates = body.to_updates()
    if "brackets" in updates:
        issues = validate_brackets(updates["brackets"])  # type: ignore[arg-type]
        if issues:
            return _validation_failed(issues)

    try:
        tax_year = _registry(request).update(year_key, updates)
    except UnknownTaxYear as exc:
        return JSONResponse({"error": str(exc)}, status_code=404)
    return TaxYearResponse.from_tax_year(tax_year)


# --- Calculations ---


@router.post("/calculate/take-home", response_model=TakeHomeResponse)
async def take_home(body: TakeHomeRequest, request: Request) -> TakeHomeResponse | JSONResponse:
    """Calculate tax, Medicare levy, super and net pay for a salary."""
    registry = _registry(request)
    year_key = body.tax_year or settings.default_tax_year

    try:
        result = calculate_take_home_salary(
            registry,
            to_decimal(body.gross_annual),
            year_key,
            body.including_super,
            to_decimal(body.custom_super_rate) if body.custom_super_rate is not None else None,
        )
    except UnknownTaxYear as exc:
        return JSONResponse({"error": str(exc)}, status_code=404)
    except InvalidInput as exc:
        return JSONResponse({"error": str(exc)}, status_code=422)

    super_rate = (
        body.custom_super_rate
        if body.custom_super_rate is not None
        else float(registry.require(year_key).super_rate * 100)
    )
    return TakeHomeResponse(
        **SalaryResultResponse.from_result(result).model_dump(),
        tax_year=year_key,
        super_rate_percent=super_rate,
    )


@router.post("/calculate/contract-rate", response_model=ContractResultResponse)
async def contract_rate(body: ContractRateRequest) -> ContractResultResponse | JSONResponse:
    """Convert a permanent salary into contractor annual, monthly and daily rates."""
    uplift = (
        body.uplift_percentage
        if body.uplift_percentage is not None
        else settings.default_uplift_percentage
    )
    try:
        result = calculate_contract_rate(to_decimal(body.base_annual_salary), to_decimal(uplift))
    except InvalidInput as exc:
        return JSONResponse({"error": str(exc)}, status_code=422)
    return ContractResultResponse.from_result(result)


@router.post("/calculate/compare", response_model=CompareResponse)
async def compare(body: CompareRequest, request: Request) -> CompareResponse:
    """Compare take-home and contract figures across several salaries."""
    year_key = body.tax_year or settings.default_tax_year
    uplift = (
        body.uplift_percentage
        if body.uplift_percentage is not None
        else settings.default_uplift_percentage
    )
    scenarios = compare_salaries(
        _registry(request),
        [to_decimal(salary) for salary in body.salaries],
        year_key,
        including_super=body.including_super,
        custom_super_rate=(
            to_decimal(body.custom_super_rate) if body.custom_super_rate is not None else None
        ),
        uplift_percentage=to_decimal(uplift),
    )
    return CompareResponse(
        tax_year=year_key,
        including_super=body.including_super,
        uplift_percentage=uplift,
        scenarios=[ScenarioResponse.from_scenario(s) for s in scenarios],
    )
