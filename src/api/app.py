"""FastAPI application factory."""

import base64
import logging
import secrets
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from config import load_yaml_config
from config.settings import settings
from src.api.routes import router
from src.calculators.registry import build_default_registry, tax_years_from_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup: seed the tax year registry. Shutdown: log only, nothing to release."""
    logging.basicConfig(level=settings.log_level)
    logger.info("Starting up...")

    extra_years = tax_years_from_config(load_yaml_config(settings.tax_years_file))
    app.state.registry = build_default_registry(extra_years)

    yield

    logger.info("Shutting down...")


UNAUTHORIZED = Response(
    content="Unauthorized",
    status_code=401,
    headers={"WWW-Authenticate": "Basic"},
)

AUTH_USERNAME = settings.auth_username.encode()
AUTH_PASSWORD = settings.auth_password.encode()

PROTECTED_PREFIX = "/tax-years"
PROTECTED_METHODS = frozenset({"POST", "PATCH", "PUT", "DELETE"})


class BasicAuthMiddleware(BaseHTTPMiddleware):
    """Enforce HTTP Basic Auth on tax year changes when credentials are configured."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        if not (AUTH_USERNAME and AUTH_PASSWORD):
            return await call_next(request)
        if request.method not in PROTECTED_METHODS or not request.url.path.startswith(
            PROTECTED_PREFIX
        ):
            return await call_next(request)

        auth = request.headers.get("Authorization")
        if auth and auth.startswith("Basic "):
            try:
                decoded = base64.b64decode(auth[6:]).decode()
                username, password = decoded.split(":", 1)
            except ValueError:
                return UNAUTHORIZED
            if secrets.compare_digest(username.encode(), AUTH_USERNAME) and secrets.compare_digest(
                password.encode(), AUTH_PASSWORD
            ):
                return await call_next(request)
        logger.warning("Unauthorized %s %s", request.method, request.url.path)
        return UNAUTHORIZED


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="AU Take-Home Pay Calculator", lifespan=lifespan)
    app.add_middleware(BasicAuthMiddleware)
    app.include_router(router)
    return app
