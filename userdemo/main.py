# userdemo\main.py
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from userdemo import __version__
from userdemo.adapters.api.routers import health, users
from userdemo.shared.config import AppEnv, settings
from userdemo.shared.container import container
from userdemo.shared.logging_config import configure_logging
from userdemo.shared.telemetry import instrument_fastapi, setup_telemetry, shutdown_telemetry

logger = structlog.get_logger()

# Only this module holds Provide[...] markers; routers go through it
WIRED_MODULES = ["userdemo.adapters.api.dependencies"]


def error_body(code: int, message) -> dict:
    return {"status": "error", "code": code, "message": message}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_telemetry(settings.OTEL_SERVICE_NAME)
    logger.info("app_startup", app=settings.APP_NAME, env=settings.APP_ENV.value, port=settings.PORT)

    yield

    logger.info("app_shutdown")
    shutdown_telemetry()


def register_exception_handlers(app: FastAPI) -> None:
    """
    Every error leaves the service as ``{"status", "code", "message"}``.
    Request validation errors keep FastAPI's default 422 body.
    """

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.status_code, exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("unhandled_exception", path=request.url.path, error=str(exc), exc_info=exc)
        message = str(exc) if settings.DEBUG else "Internal Server Error"
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(status.HTTP_500_INTERNAL_SERVER_ERROR, message),
        )


def create_app() -> FastAPI:
    """
    Builds the FastAPI application around the shared DI container.
    """
    configure_logging()

    # Wired before the lifespan runs; TestClient may skip it
    container.wire(modules=WIRED_MODULES)

    app = FastAPI(
        title="User Service Demo",
        version=__version__,
        description="Calculator / UserService / UserController demo service",
        docs_url=None if settings.APP_ENV == AppEnv.PRODUCTION else "/docs",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    instrument_fastapi(app)
    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(users.router)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serves ``userdemo.main:app`` with uvicorn."""
    import uvicorn

    uvicorn.run(
        "userdemo.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_config=None,
    )


if __name__ == "__main__":
    run()
