from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from htmx_tutorial import __version__
from htmx_tutorial.config import AppConfig, load_app_config
from htmx_tutorial.contacts import ContactStore
from htmx_tutorial.exercises.router import router as exercises_router
from htmx_tutorial.fragments import FragmentRenderer
from htmx_tutorial.logs import configure_logging
from htmx_tutorial.models import fail
from htmx_tutorial.pages.router import router as pages_router

logger = logging.getLogger(__name__)

HTMX_REQUEST_HEADERS = [
    "Content-Type",
    "Authorization",
    "X-Requested-With",
    "HX-Request",
    "HX-Trigger",
    "HX-Target",
    "HX-Current-URL",
    "HX-Boosted",
    "HX-Trigger-Name",
    "HX-Prompt",
]

HTMX_RESPONSE_HEADERS = [
    "HX-Location",
    "HX-Push-Url",
    "HX-Redirect",
    "HX-Refresh",
    "HX-Replace-Url",
    "HX-Reswap",
    "HX-Retarget",
    "HX-Reselect",
    "HX-Trigger",
    "HX-Trigger-After-Settle",
    "HX-Trigger-After-Swap",
]


def _status_to_code(status_code: int) -> str:
    if status_code == 404:
        return "not_found"
    if status_code == 405:
        return "method_not_allowed"
    if status_code == 422:
        return "validation_error"
    if 400 <= status_code < 500:
        return "client_error"
    return "server_error"


def create_app(config: AppConfig | None = None) -> FastAPI:
    config = config if config is not None else load_app_config()

    resolver = config.addressing.build_resolver()
    renderer = FragmentRenderer(resolver)
    # A missing or broken template must stop the process here, not fail a request later.
    renderer.validate()

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        configure_logging(config.logging)
        logger.info("HTMX tutorial starting up")
        logger.info(
            "Endpoint addressing: %s (%s)",
            resolver.mode.value,
            resolver.resolve("/"),
        )
        yield
        logger.info("HTMX tutorial shutting down")

    app = FastAPI(title="HTMX Tutorial", version=__version__, lifespan=_lifespan)

    app.state.app_config = config
    app.state.fragment_renderer = renderer
    app.state.contact_store = ContactStore()
    # Pages and fragments share one environment so pages can embed fragments.
    app.state.page_templates = Jinja2Templates(env=renderer.env)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors.allow_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=HTMX_REQUEST_HEADERS,
        expose_headers=HTMX_RESPONSE_HEADERS,
    )

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=fail(
                code="validation_error",
                message="Request validation failed",
                details=exc.errors(),
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def _http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=fail(
                code=_status_to_code(exc.status_code),
                message=str(exc.detail),
            ).model_dump(mode="json"),
            headers=exc.headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def _starlette_http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=fail(
                code=_status_to_code(exc.status_code),
                message=exc.detail if isinstance(exc.detail, str) else "HTTP error",
            ).model_dump(mode="json"),
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=fail(code="internal_error", message="Internal server error").model_dump(
                mode="json"
            ),
        )

    app.include_router(exercises_router)
    app.include_router(pages_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app
