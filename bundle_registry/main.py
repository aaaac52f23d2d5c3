import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bundle_registry.api.routes import bundles, export, files
from bundle_registry.core.config import get_settings
from bundle_registry.core.error_codes import ErrorCode
from bundle_registry.core.errors import ApiError
from bundle_registry.core.security import now_ms
from bundle_registry.db.session import init_db
from bundle_registry.schemas.bundles import HealthResponse

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


@app.exception_handler(ApiError)
async def handle_api_error(_, exc: ApiError):
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(SQLAlchemyError)
async def handle_store_error(request: Request, exc: SQLAlchemyError):
    logger.exception("%s on %s %s", ErrorCode.STORE_ERROR, request.method, request.url.path)
    # Echo the driver message (e.g. "UNIQUE constraint failed: bundles.id").
    message = str(getattr(exc, "orig", None) or exc)
    return _error_response(500, message)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(_, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    return _error_response(400, message)


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(_, exc: StarletteHTTPException):
    return _error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("%s on %s %s", ErrorCode.INTERNAL_ERROR, request.method, request.url.path)
    return _error_response(500, str(exc) or exc.__class__.__name__)


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(ok=True, time=now_ms())


@app.on_event("startup")
def on_startup() -> None:
    init_db()
    logger.info(
        "%s starting (env=%s, api key %s)",
        settings.app_name,
        settings.app_env,
        "required" if settings.api_key else "not configured",
    )


app.include_router(bundles.router)
app.include_router(files.router)
app.include_router(export.router)


def serve() -> None:
    logger.info("Server listening on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    serve()
