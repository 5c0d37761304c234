import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import Settings, get_settings
from .core.database import check_db_connection, create_db_engine, create_session_factory, init_db
from .core.events import EventPublisher, create_publisher
from .core.exceptions import ConflictError, InvalidCredentialsError, NotFoundError
from .routers import auth, tasks
from .utils.security import BcryptPasswordHasher, JwtTokenSigner, PasswordHasher, TokenSigner

logger = logging.getLogger(__name__)

QUIET_PATHS = ("/", "/health")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app(
    settings: Optional[Settings] = None,
    password_hasher: Optional[PasswordHasher] = None,
    token_signer: Optional[TokenSigner] = None,
    event_publisher: Optional[EventPublisher] = None,
) -> FastAPI:
    """
    Build the application and wire its collaborators.

    Anything not passed in is built from settings: the database engine and
    session factory, bcrypt hasher, JWT signer and event publisher.
    """
    settings = settings or get_settings()

    engine = create_db_engine(settings.database_url, echo=settings.debug)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.service_name}...")
        init_db(engine, max_retries=settings.db_init_retries, delay=settings.db_init_delay)
        logger.info(f"{settings.service_name} startup completed")
        yield
        logger.info(f"Shutting down {settings.service_name}...")
        app.state.event_publisher.close()
        engine.dispose()

    app = FastAPI(
        title="Task Manager",
        description="Task CRUD with username/password authentication",
        version=settings.service_version,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.password_hasher = password_hasher or BcryptPasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_signer = token_signer or JwtTokenSigner(
        settings.secret_key,
        algorithm=settings.algorithm,
        expire_minutes=settings.access_token_expire_minutes
    )
    app.state.event_publisher = event_publisher or create_publisher(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        """Log all requests with timing"""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        response.headers["X-Process-Time"] = str(process_time)
        if request.url.path not in QUIET_PATHS:
            logger.info(f"{request.method} {request.url.path} - {response.status_code} ({process_time:.3f}s)")
        return response

    @app.exception_handler(ConflictError)
    @app.exception_handler(InvalidCredentialsError)
    async def bad_request_handler(request: Request, exc: Exception):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions"""
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc) if settings.debug else "Internal server error"}
        )

    app.include_router(auth.router)
    app.include_router(tasks.router)

    @app.get("/")
    def root():
        """Root endpoint"""
        return {
            "service": settings.service_name,
            "version": settings.service_version,
            "status": "running",
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        db_healthy = check_db_connection(engine)
        return {
            "service": settings.service_name,
            "version": settings.service_version,
            "status": "healthy" if db_healthy else "unhealthy",
            "database": "connected" if db_healthy else "disconnected",
            "timestamp": time.time()
        }

    return app


configure_logging(get_settings().log_level)
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("taskmanager.main:app", host="0.0.0.0", port=8000, reload=True)
