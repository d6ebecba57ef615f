"""
Account service - signup, login and bearer-token protected routes for the jobs platform
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import asyncio
import logging
import sys

import pydantic
import uvicorn

from .auth import build_password_context
from .config import Settings
from .db import create_db_engine, create_session_factory, init_db
from .errors import AccountError
from .routes import accounts, jobs
from .service import AccountService
from .utils.event_logger import configure_logging

logger = logging.getLogger(__name__)


def request_deadline(timeout: float):
    """Build an HTTP middleware that answers 504 once a request runs past timeout seconds."""

    async def enforce_deadline(request: Request, call_next):
        try:
            return await asyncio.wait_for(call_next(request), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("Request timed out after %ss: %s %s", timeout, request.method, request.url.path)
            return JSONResponse(status_code=504, content={"message": "Request timed out"})

    return enforce_deadline


async def account_error_handler(request: Request, exc: AccountError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    message = "Invalid request body"
    if fields:
        message = f"Invalid request body (invalid: {', '.join(fields)})"
    return JSONResponse(status_code=400, content={"message": message})


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(settings: Settings) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Connect to the database and build the account service on startup"""
        engine = create_db_engine(settings.DATABASE_URL)
        init_db(engine)
        app.state.session_factory = create_session_factory(engine)
        app.state.account_service = AccountService(
            settings, build_password_context(settings.PASSWORD_HASH_ROUNDS)
        )
        yield
        engine.dispose()

    app = FastAPI(
        title="Account Service",
        description="Account registration and authentication for the jobs platform",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_deadline(settings.REQUEST_TIMEOUT_SECONDS))

    app.add_exception_handler(AccountError, account_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    app.include_router(jobs.router)
    app.include_router(accounts.router)
    return app


def main() -> None:
    try:
        settings = Settings()
    except pydantic.ValidationError as e:
        configure_logging()
        fields = ", ".join(str(err["loc"][-1]) for err in e.errors() if err.get("loc"))
        logger.critical("Invalid configuration, refusing to start (check: %s)", fields)
        sys.exit(1)

    configure_logging(settings.LOG_LEVEL, settings.LOG_DIR)
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
