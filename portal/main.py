"""FastAPI application entrypoint. No business logic; only wiring, middleware and error rendering."""

from dotenv import load_dotenv

load_dotenv()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from portal.api.v1 import auth_router
from portal.api.v1 import router as api_router
from portal.core.config import settings
from portal.core.exceptions import PortalError, Unauthenticated, ValidationFailed
from portal.core.middleware import setup_middleware
from portal.core.security import warm_password_checks

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger("portal")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: pay for the dummy bcrypt hash before the first login arrives."""
    warm_password_checks()
    logger.info("Studio Portal API started: env=%s", settings.APP_ENV)
    yield


app = FastAPI(
    title="Studio Portal API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.APP_ENV == "dev" else None,
    redoc_url="/redoc" if settings.APP_ENV == "dev" else None,
)

setup_middleware(app, settings)


def _field_errors(exc: RequestValidationError) -> dict[str, str]:
    """Collapse pydantic errors to one message per field name."""
    errors: dict[str, str] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        message = str(err.get("msg", "Invalid value")).removeprefix("Value error, ")
        errors.setdefault(field, message)
    return errors


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": _field_errors(exc)},
    )


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    if isinstance(exc, Unauthenticated):
        logger.info(
            "Authentication failed: reason=%s path=%s",
            exc.reason,
            request.url.path,
        )
    elif exc.status_code >= 500:
        logger.error("Unhandled portal error on %s: %s", request.url.path, exc.message)
    content: dict[str, object] = {"detail": exc.message}
    if isinstance(exc, ValidationFailed) and exc.errors:
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: full detail to the log, generic body to the client."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


app.include_router(auth_router, prefix=settings.AUTH_PREFIX, tags=["auth"])
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Studio Portal API"}
