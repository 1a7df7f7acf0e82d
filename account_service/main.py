"""
Account Service - credential issuing authentication API
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from typing import Optional
import logging

from .auth import PasswordHasher, TokenIssuer, TokenVerifier
from .config import Settings
from .db import build_engine, build_session_factory, init_db
from .errors import AccountError
from .routes import auth

logger = logging.getLogger(__name__)


def _envelope(status_code: int, message: str, error: Optional[str] = None) -> JSONResponse:
    body = {"success": False, "message": message}
    if error:
        body["error"] = error
    return JSONResponse(status_code=status_code, content=body)


async def account_error_handler(_request: Request, exc: AccountError) -> JSONResponse:
    return _envelope(exc.status_code, exc.message, exc.error)


async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    detail = None
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = f"{field}: {first.get('msg')}" if field else first.get("msg")
    return _envelope(status.HTTP_400_BAD_REQUEST, "Invalid input", detail)


async def http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return _envelope(exc.status_code, "Route not found")
    return _envelope(exc.status_code, str(exc.detail))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Raises:
        ConfigurationError: If JWT_SECRET is missing; the service must not
            start without a signing secret.
    """
    settings = settings or Settings()

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Built eagerly so a missing secret fails here rather than on first request
    token_issuer = TokenIssuer(settings)
    token_verifier = TokenVerifier(settings)

    engine = build_engine(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        """Create tables on startup, release connections on shutdown"""
        init_db(engine)
        logger.info("Database initialized: %s", engine.url.render_as_string(hide_password=True))
        yield
        engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.hasher = PasswordHasher(rounds=settings.PASSWORD_HASH_ROUNDS)
    app.state.token_issuer = token_issuer
    app.state.token_verifier = token_verifier

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AccountError, account_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    app.include_router(auth.router)

    @app.get("/")
    def root():
        return {
            "message": f"{settings.APP_NAME} is running",
            "version": settings.APP_VERSION,
            "endpoints": {
                "register": "POST /api/auth/register",
                "login": "POST /api/auth/login",
                "me": "GET /api/auth/me",
                "updateprofile": "PUT /api/auth/updateprofile",
                "updatepassword": "PUT /api/auth/updatepassword",
                "users": "GET /api/auth/users",
            },
        }

    return app
