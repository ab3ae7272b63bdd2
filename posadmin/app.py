"""
POS Admin — Main application.

Assembles all packages: config, middleware, auth, dashboards.
"""

import time
import traceback
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from posadmin.accounts.store import ProfileStore
from posadmin.auth.store import IdentityStore
from posadmin.config import settings, db_manager
from posadmin.middleware import RoleAccessMiddleware
from posadmin.utils import Logger, error_response, success_response
from posadmin.utils.exceptions import ServiceUnavailableError

# ── Route imports ────────────────────────────────────────────────
from posadmin.auth.routes import auth_router
from posadmin.superadmin import superadmin_router
from posadmin.admin import admin_router
from posadmin.cashier import cashier_router
from posadmin.profile import profile_router

logger = Logger("request")


# ── Request Logging Middleware ───────────────────────────────────
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request: method, path, status code, and duration."""

    async def dispatch(self, request: Request, call_next):
        start = time.time()
        method = request.method
        path = request.url.path
        client = request.client.host if request.client else "unknown"

        logger.info(f"--> {method} {path} (from {client})")

        try:
            response = await call_next(request)
        except Exception as exc:
            duration = round((time.time() - start) * 1000, 2)
            logger.error(f"<-- {method} {path} | 500 | {duration}ms")
            logger.error(f"    Exception: {exc}")
            logger.error(traceback.format_exc())
            raise

        duration = round((time.time() - start) * 1000, 2)
        status = response.status_code

        if status >= 500:
            logger.error(f"<-- {method} {path} | {status} | {duration}ms")
        elif status >= 400:
            logger.warning(f"<-- {method} {path} | {status} | {duration}ms")
        else:
            logger.info(f"<-- {method} {path} | {status} | {duration}ms")

        return response


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Validation failed"
    first = errors[0]
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    return f"{field}: {first.get('msg')}" if field else first.get("msg", "Validation failed")


# ── App factory ──────────────────────────────────────────────────
def create_app(
    profile_store: Optional[ProfileStore] = None,
    identity_store: Optional[IdentityStore] = None,
) -> FastAPI:
    """
    Build the application.

    When stores are passed in, no database connection is opened; otherwise
    they are created from MongoDB collections at startup.
    """
    injected = profile_store is not None and identity_store is not None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not injected:
            await db_manager.connect()
            db = db_manager.database
            app.state.profile_store = ProfileStore(db[settings.profile_collection])
            app.state.identity_store = IdentityStore(db[settings.identity_collection])
            await app.state.identity_store.ensure_indexes()
        yield
        if not injected:
            db_manager.close()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Role-gated point-of-sale administration",
        docs_url="/api/docs",
        lifespan=lifespan,
    )

    if injected:
        app.state.profile_store = profile_store
        app.state.identity_store = identity_store

    # ── Role access (innermost) ──────────────────────────────
    app.add_middleware(RoleAccessMiddleware)

    # ── Request logging (runs on every request) ──────────────
    app.add_middleware(RequestLoggingMiddleware)

    # ── CORS (outermost) ─────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allowed_methods,
        allow_headers=settings.cors_allowed_headers,
    )

    # ── Exception handlers ───────────────────────────────────
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        response = error_response(str(exc.detail), code=exc.status_code)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return error_response(_validation_message(exc), code=422)

    @app.exception_handler(PyMongoError)
    async def store_exception_handler(request: Request, exc: PyMongoError):
        logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
        unavailable = ServiceUnavailableError()
        return error_response(unavailable.detail, code=unavailable.status_code)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.method} {request.url.path}:")
        logger.error(traceback.format_exc())
        return error_response(
            str(exc) if settings.debug else "Internal server error", code=500
        )

    # ── Routes ───────────────────────────────────────────────
    app.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    app.include_router(
        superadmin_router, prefix="/dashboard/superadmin", tags=["Superadmin"]
    )
    app.include_router(admin_router, prefix="/dashboard/admin", tags=["Admin"])
    app.include_router(cashier_router, prefix="/dashboard/cashier", tags=["Cashier"])
    app.include_router(profile_router, prefix="/dashboard/profile", tags=["Profile"])

    # ── Landing + health ─────────────────────────────────────
    @app.get("/")
    async def landing():
        return success_response(
            data={"app": settings.app_name, "login": "/auth/login"},
            message="Welcome",
        )

    @app.get("/health")
    async def health():
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.app_version,
            "database": db_manager.is_connected,
        }

    return app


# ── Create the app instance ──────────────────────────────────────
app = create_app()
