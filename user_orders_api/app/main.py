"""
Main entrypoint for the User Orders API.

This module assembles the FastAPI application, sets up logging,
creates the in‑memory store and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn user_orders_api.app.main:app --reload

Service errors are turned into JSON responses here:

* ``NotFoundError`` -> 404, ``ConflictError`` -> 409 and
  ``BadRequestError`` -> 400, all as ``{"error": ..., "timestamp": ...}``;
* ``ValidationFailedError`` and request parsing errors -> 400 as
  ``{"errors": [...], "timestamp": ...}``.

Timestamps are milliseconds since the Unix epoch.
"""

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.errors import ServiceError, ValidationFailedError
from .core.logging_config import setup_logging
from .core.store import DataStore
from .schemas.common import ErrorResponse, ValidationErrorResponse
from .services.data_service import DataService

logger = logging.getLogger(__name__)


def _format_request_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    message = error.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render a ``ServiceError`` with its status code and error body."""
    if isinstance(exc, ValidationFailedError):
        body = ValidationErrorResponse(errors=exc.errors)
    else:
        body = ErrorResponse(error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(by_alias=True))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report unparsable bodies and parameters as a 400 validation failure."""
    errors = [_format_request_error(error) for error in exc.errors()]
    logger.warning("Rejected malformed request to %s: %s", request.url.path, "; ".join(errors))
    body = ValidationErrorResponse(errors=errors)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump(by_alias=True))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Each call builds a new ``DataStore``, so applications created
    separately (for example one per test) share no data.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use instead of the ones read from the environment
        at import time.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that the setup steps
    # below can log.
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.state.settings = settings
    app.state.store = DataStore()
    app.state.started_at = time.monotonic()
    if settings.seed_on_startup:
        DataService.seed(app.state.store)

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(v1_router, prefix=settings.api_prefix)

    logger.info("%s %s ready under '%s'", settings.project_name, settings.api_version, settings.api_prefix)
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
