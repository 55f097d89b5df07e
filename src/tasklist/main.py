from __future__ import annotations

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from .db import SQLAlchemyRepository
from .logging_setup import setup_logging
from .routers import todos as todos_router
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "todos", "description": "List, create, toggle and delete tasks."},
]


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application, its repository and its error handlers.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Task List",
        description="Backend API service for a minimal task list persisted in a relational table.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )
    app.state.settings = settings
    app.state.repository = SQLAlchemyRepository(settings.database_url)

    # Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Report malformed or missing input as a client fault.

        Response format:
            {
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": [... pydantic/fastapi error details ...]
            }
        """
        return JSONResponse(
            status_code=400,
            content={
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(SQLAlchemyError)
    async def storage_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Report a failed storage operation as a server fault."""
        logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": "ServerFault", "message": "Storage operation failed"},
        )

    @app.exception_handler(Exception)
    async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Report any other unhandled error as a server fault."""
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": "ServerFault", "message": "Internal server error"},
        )

    # PUBLIC_INTERFACE
    @app.get("/health", summary="Health Check", tags=["health"], response_class=PlainTextResponse)
    def health_check() -> str:
        """
        Health check endpoint. Returns plain text 'OK'.
        """
        return "OK"

    app.include_router(todos_router.router)
    return app


# PUBLIC_INTERFACE
def serve() -> None:
    """
    Run the service with uvicorn on HOST:PORT.

    Logging is configured before the app (and its database) is built, so
    start-up messages are not lost. Also usable directly:
    ``uvicorn --factory tasklist.main:create_app``.
    """
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Server is running on http://%s:%s", settings.host, settings.port)
    uvicorn.run(
        "tasklist.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    serve()
