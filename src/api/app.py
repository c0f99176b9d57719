from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel
from starlette.exceptions import HTTPException as StarletteHTTPException
from .error import ClientError, ServerError
from .middleware import BareOptionsMiddleware, RequestLoggingMiddleware
import logging

logger = logging.getLogger(__name__)

_HTTP_ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: ("BAD_REQUEST", "Bad request"),
    status.HTTP_401_UNAUTHORIZED: ("UNAUTHORIZED", "Authentication required"),
    status.HTTP_403_FORBIDDEN: ("FORBIDDEN", "Forbidden"),
    status.HTTP_404_NOT_FOUND: ("NOT_FOUND", "Not found"),
    status.HTTP_405_METHOD_NOT_ALLOWED: ("METHOD_NOT_ALLOWED", "Method not allowed"),
}


def _error_response(status_code: int, code: str, message: str, headers=None):
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
        headers=headers,
    )


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": "INTERNAL_ERROR", "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    code, message = _HTTP_ERROR_CODES.get(exc.status_code, ("HTTP_ERROR", "Request failed"))
    logger.warning(f"HTTP {exc.status_code} on {request.method} {request.url.path}")
    return _error_response(exc.status_code, code, message, headers=exc.headers)


async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    logger.warning(f"Validation error on {request.url.path}: {location} {message}")
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        "BAD_REQUEST",
        f"{location}: {message}" if location else message,
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", "Internal server error"
    )


def create_app(ApplicationConfig) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.AUTO_CREATE_TABLES:
            from src.depends import engine

            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
            logger.info("Database tables ready")
        yield

    app = FastAPI(title="Entity Gateway API", version="0.1.0", lifespan=lifespan)

    # Last added runs first: logging, then OPTIONS, then CORS for the rest
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_methods=ApplicationConfig.CORS_ALLOW_METHODS,
        allow_headers=ApplicationConfig.CORS_ALLOW_HEADERS,
    )

    app.add_middleware(
        BareOptionsMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_methods=ApplicationConfig.CORS_ALLOW_METHODS,
        allow_headers=ApplicationConfig.CORS_ALLOW_HEADERS,
    )

    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.add_middleware(RequestLoggingMiddleware)

    from src.api.routes import auth, entities, health_check, organizations

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=prefix, tags=["Authentication"])
    app.include_router(organizations.router, prefix=prefix, tags=["Organizations"])
    app.include_router(entities.router, prefix=prefix, tags=["Entities"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
