import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from authapi.core.config import Settings, settings as default_settings
from authapi.core.database import build_engine, build_session_factory, init_db
from authapi.core.exceptions import NotAuthenticatedError, RegistrationError
from authapi.core.security import build_password_context
from authapi.services.auth_service import AuthService
from authapi.services.user_store import UserStore
from authapi.api.routes import secret, sessions, users

logger = logging.getLogger(__name__)


async def registration_error_handler(request: Request, exc: RegistrationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": exc.message, "errors": exc.errors})


async def not_authenticated_handler(request: Request, exc: NotAuthenticatedError) -> JSONResponse:
    return JSONResponse(status_code=401, content={"loggedOut": True})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application and its collaborators.

    The engine, store and auth service are created here and kept on app.state
    so routes receive them through dependencies instead of module globals.
    """
    settings = settings or default_settings

    engine = build_engine(settings.DATABASE_URL)
    init_db(engine)
    user_store = UserStore(build_session_factory(engine))
    auth_service = AuthService(user_store, build_password_context(settings.BCRYPT_ROUNDS))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage app lifecycle events.

        Shutdown: release pooled database connections
        """
        logger.info(f"Auth API started with database {engine.url.render_as_string(hide_password=True)}")
        yield
        engine.dispose()
        logger.info("Database engine disposed")

    app = FastAPI(
        title="Auth API",
        description="User registration and access-token authentication",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.user_store = user_store
    app.state.auth_service = auth_service

    # CORS middleware - allows browser clients on other origins to call the API
    # Tokens travel in the Authorization header, so no cookies or credentials are allowed
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RegistrationError, registration_error_handler)
    app.add_exception_handler(NotAuthenticatedError, not_authenticated_handler)

    app.include_router(users.router)
    app.include_router(sessions.router)
    app.include_router(secret.router)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Hello world"

    @app.get("/health")
    async def health():
        """Health check endpoint - used by monitoring/deployment tools"""
        return {"status": "healthy"}

    return app
