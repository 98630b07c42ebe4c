"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routers import health, letters, users
from core.config import get_settings
from core.logging import configure_logging
from db.session import dispose_engine


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    app_settings = get_settings()
    configure_logging(app_settings.log_level)
    logger.info("Cartas API starting on port %s", app_settings.port)

    yield

    # Shutdown: release pooled database connections
    await dispose_engine()
    logger.info("Cartas API stopped")


app_settings = get_settings()

app = FastAPI(
    title="Cartas API",
    description="Write letters, draw a random unanswered letter and reply to it.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException,
) -> JSONResponse:
    """Render errors as {"error": message}, keeping any extra detail fields."""
    if isinstance(exc.detail, dict):
        content = {"error": exc.detail.get("message", "")}
        content.update({k: v for k, v in exc.detail.items() if k != "message"})
    else:
        content = {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    _request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Missing fields and malformed ids are client errors (400), not 422."""
    messages = []
    for err in exc.errors():
        loc = err.get("loc", ["unknown"])
        field = loc[-1] if loc else "unknown"
        messages.append(f"{field}: {err.get('msg', 'invalid')}")
    return JSONResponse(
        status_code=400,
        content={"error": "; ".join(messages) if messages else "Requisição inválida"},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Store failures and other unexpected errors."""
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(status_code=500, content={"error": "Erro interno do servidor."})


app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(letters.router)


def main() -> None:
    """Run the API with uvicorn on the configured host and port."""
    uvicorn.run(
        "api.main:app",
        host=app_settings.host,
        port=app_settings.port,
        log_level=app_settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
