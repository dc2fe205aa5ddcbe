"""Shared test fixtures."""

from decimal import Decimal

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.routes import router
from src.calculators.registry import TaxYearRegistry, build_default_registry
from src.calculators.tax_data import TaxBracket, TaxYear


@pytest.fixture
def registry() -> TaxYearRegistry:
    """A fresh registry seeded with the built-in years (never shared between tests)."""
    return build_default_registry()


@pytest.fixture
def simple_year() -> TaxYear:
    """Round-number fixture schedule: 0% to 10k, 10% to 50k, 20% above."""
    return TaxYear(
        year="2030-31",
        brackets=(
            TaxBracket(Decimal("0"), Decimal("10000"), Decimal("0"), Decimal("0")),
            TaxBracket(Decimal("10000"), Decimal("50000"), Decimal("0"), Decimal("0.10")),
            TaxBracket(Decimal("50000"), None, Decimal("4000"), Decimal("0.20")),
        ),
        medicare_levy=Decimal("0.01"),
        super_rate=Decimal("0.10"),
    )


@pytest.fixture
def app(registry: TaxYearRegistry) -> FastAPI:
    """Create a test app with the router and a fresh registry but no lifespan."""
    test_app = FastAPI()
    test_app.include_router(router)
    test_app.state.registry = registry
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
