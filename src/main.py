"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.ta_client.api.router import router as client_router
from src.ta_common.errors import AppError
from src.ta_common.logging_config import setup_logging
from src.ta_common.response import error_response
from src.ta_gateway.api.router import router as auth_router
from src.ta_gateway.middleware.request_log import RequestLogMiddleware, get_request_id
from src.ta_order.api.router import router as order_router
from src.ta_order.application.state import OrderStore
from src.ta_order.infrastructure.backend_client import create_http_client

logger = logging.getLogger("ta")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: backend http clients + order store. Shutdown: close clients."""
    setup_logging()
    app.state.backend_http = create_http_client()
    app.state.auth_http = create_http_client(base_url=settings.BACKEND_AUTH_URL)
    app.state.order_store = OrderStore()
    logger.info("Backend: %s (timeout %.0fs)", settings.BACKEND_BASE_URL, settings.BACKEND_TIMEOUT_SECONDS)
    yield
    await app.state.backend_http.aclose()
    await app.state.auth_http.aclose()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = get_request_id(request)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(auth_router, prefix="/api/v1")
app.include_router(order_router, prefix="/api/v1")
app.include_router(client_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
