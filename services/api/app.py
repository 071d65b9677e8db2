"""
FastAPI application factory for the users API.

Collaborators are passed in rather than looked up globally, so tests and the
bootstrap can each supply their own engine and tracer.
"""

import logging

from fastapi import FastAPI, Request
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from services.api.middleware import CORSHeadersMiddleware, JSONContentTypeMiddleware
from services.api.repository import UserRepository
from services.api.responses import OrjsonResponse
from services.api.routes import router
from services.api.tracing import OperationTracer, build_tracer
from utils.config import Settings, get_settings
from utils.db import get_engine
from utils.errors import UserServiceError

logger = logging.getLogger(__name__)


async def handle_service_error(request: Request, exc: UserServiceError) -> OrjsonResponse:
    """Return the raw error text as a JSON string with the error's status code."""
    level = logging.WARNING if exc.status_code < 500 else logging.ERROR
    logger.log(
        level,
        "Request failed: %s %s -> %d %s: %s",
        request.method,
        request.url.path,
        exc.status_code,
        type(exc).__name__,
        exc.message,
    )
    return OrjsonResponse(exc.message, status_code=exc.status_code)


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> OrjsonResponse:
    """Render routing errors (unknown path, wrong method) as a bare JSON string too."""
    return OrjsonResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


def create_app(
    settings: Settings | None = None,
    engine: Engine | None = None,
    tracer: OperationTracer | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings, defaults to the environment
        engine: Database engine, defaults to one built from settings.DATABASE_URL
        tracer: Operation tracer, defaults to one chosen by settings.DEBUG

    Returns:
        Configured FastAPI instance
    """
    settings = settings or get_settings()
    engine = engine or get_engine(settings.DATABASE_URL)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        default_response_class=OrjsonResponse,
    )

    app.state.settings = settings
    app.state.repository = UserRepository(engine)
    app.state.tracer = tracer or build_tracer(settings.DEBUG)

    # Last added runs first: CORS wraps the content-type stamping
    app.add_middleware(JSONContentTypeMiddleware)
    app.add_middleware(
        CORSHeadersMiddleware,
        allow_origin=settings.CORS_ALLOW_ORIGIN,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    app.add_exception_handler(UserServiceError, handle_service_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.include_router(router, prefix=settings.API_PREFIX)

    logger.info(
        "Users API configured (prefix=%s, debug=%s, dialect=%s)",
        settings.API_PREFIX,
        settings.DEBUG,
        engine.dialect.name,
    )
    return app
