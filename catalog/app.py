import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import sessionmaker
from starlette.middleware.base import BaseHTTPMiddleware

from catalog.core.config import Settings, get_settings
from catalog.core.logging import configure_logging, log_context
from catalog.core.rate_limiter import RateLimiter
from catalog.db.session import build_session_factory, create_db_engine
from catalog.domain.errors import CatalogError, RateLimitedError
from catalog.routers import auth as auth_router
from catalog.routers import spaces as spaces_router
from catalog.routers import taxonomy as taxonomy_router
from catalog.routers import users as users_router
from catalog.services.auth_service import AuthService
from catalog.services.space_service import SpaceService
from catalog.services.taxonomy_service import TAXONOMY_MODELS, TaxonomyService
from catalog.services.user_service import UserService

logger = logging.getLogger("catalog.errors")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (anti clickjacking, sniffing, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    status_code = exc.status_code
    context = log_context(path=request.url.path, error=type(exc).__name__)
    if status_code >= 500:
        logger.error(exc.message, extra=context)
    else:
        logger.info(exc.message, extra=context)
    body = {"detail": exc.message}
    if exc.details is not None:
        body["errors"] = exc.details
    headers = {"Retry-After": str(exc.retry_after)} if isinstance(exc, RateLimitedError) else None
    return JSONResponse(body, status_code=status_code, headers=headers)


def create_app(settings: Settings | None = None, session_factory: sessionmaker | None = None) -> FastAPI:
    """Build the API; tests pass their own settings and session factory."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    if session_factory is None:
        session_factory = build_session_factory(create_db_engine(settings.database_url))

    app = FastAPI(title="Space Catalog API")
    app.state.settings = settings
    app.state.rate_limiter = RateLimiter()
    app.state.space_service = SpaceService(session_factory, slug_max_attempts=settings.slug_max_attempts)
    app.state.auth_service = AuthService(session_factory, settings)
    app.state.user_service = UserService(session_factory)
    app.state.taxonomy_services = {kind: TaxonomyService(session_factory, kind) for kind in TAXONOMY_MODELS}

    allowed_cors = set(settings.cors_origins)
    if settings.app_env != "prod":
        allowed_cors.update({"http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173"})
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    app.add_exception_handler(CatalogError, catalog_error_handler)

    app.include_router(auth_router.router)
    app.include_router(spaces_router.router)
    app.include_router(taxonomy_router.types_router)
    app.include_router(taxonomy_router.categories_router)
    app.include_router(taxonomy_router.features_router)
    app.include_router(users_router.router)

    @app.get("/")
    def root():
        return {"message": "Space Catalog API", "env": settings.app_env}

    return app
