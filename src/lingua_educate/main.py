"""HTTP entry point: logging setup, app factory and the uvicorn runner."""

import logging

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lingua_educate.api.routes import router
from lingua_educate.config import Settings, get_settings
from lingua_educate.errors import InvalidInput

UNAUTHENTICATED_PATHS = frozenset({"/api/health"})


def configure_logging(settings: Settings) -> None:
    """Route structlog output to stdout as JSON lines or coloured console text."""
    if settings.log_format.lower() == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def create_app(settings: Settings) -> FastAPI:
    """Build the API with CORS, optional shared-secret auth and error mapping."""
    app = FastAPI(title="LinguaEducate", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)

    @app.middleware("http")
    async def require_app_secret(request: Request, call_next):
        if settings.app_secret and request.url.path not in UNAUTHENTICATED_PATHS:
            if request.headers.get("X-App-Secret") != settings.app_secret:
                return JSONResponse({"error": "Unauthorized"}, status_code=401)
        return await call_next(request)

    @app.exception_handler(InvalidInput)
    async def invalid_input(request: Request, exc: InvalidInput) -> JSONResponse:
        return JSONResponse({"detail": str(exc)}, status_code=400)

    return app


settings = get_settings()
configure_logging(settings)
app = create_app(settings)


def main() -> None:
    uvicorn.run(
        "lingua_educate.main:app",
        host=settings.host,
        port=settings.port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
