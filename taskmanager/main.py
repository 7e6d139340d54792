"""
Task Manager API - Main Application

Authenticated task CRUD service backed by MongoDB.
"""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from taskmanager.config import Settings, settings
from taskmanager.database import Database
from taskmanager.auth import auth_router
from taskmanager.auth.repository import MongoUserRepository
from taskmanager.auth.tokens import TokenService
from taskmanager.errors import InternalError, TaskManagerError
from taskmanager.tasks import tasks_router
from taskmanager.tasks.repository import TaskRepository
from taskmanager.security import validate_security_config

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)


def create_app(app_settings: Settings = settings) -> FastAPI:
    """Build the FastAPI application for the given settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown events."""
        # Startup: a missing signing secret aborts here
        validate_security_config(app_settings)
        app.state.token_service = TokenService(
            app_settings.JWT_SECRET_KEY,
            algorithm=app_settings.JWT_ALGORITHM,
            lifetime=timedelta(minutes=app_settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES),
        )

        # Startup: Connect to MongoDB
        database = Database(app_settings.MONGODB_URI, app_settings.MONGODB_DATABASE)
        await database.connect()
        db = database.get_database()
        await MongoUserRepository(db).ensure_indexes()
        await TaskRepository(db).ensure_indexes()
        app.state.database = database
        logger.info(f"{app_settings.APP_NAME} started")

        yield

        # Shutdown: Disconnect from MongoDB
        await database.disconnect()

    app = FastAPI(
        title=app_settings.APP_NAME,
        version=app_settings.APP_VERSION,
        description="Personal task tracking with per-user task lists",
        docs_url="/docs" if app_settings.DEBUG else None,
        redoc_url="/redoc" if app_settings.DEBUG else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    @app.exception_handler(TaskManagerError)
    async def task_manager_error_handler(request: Request, exc: TaskManagerError) -> JSONResponse:
        headers = None
        if exc.status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.debug(f"Rejected request body on {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid request body"},
        )

    # Runs inside CORSMiddleware; the Exception handler below does not.
    @app.exception_handler(PyMongoError)
    async def store_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
        logger.exception(f"Store failure on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": InternalError.default_message},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )

    prefix = app_settings.API_PREFIX

    @app.get(f"{prefix}/health", tags=["Health"])
    async def health_check() -> dict:
        """
        Health check endpoint.

        Liveness marker for load balancers; does not touch the database.
        """
        return {
            "status": "OK",
            "message": "Server is running",
            "service": app_settings.APP_NAME,
            "version": app_settings.APP_VERSION,
        }

    @app.get("/", tags=["Root"])
    async def root() -> dict:
        """Root endpoint with service information."""
        return {
            "service": app_settings.APP_NAME,
            "version": app_settings.APP_VERSION,
            "docs": "/docs" if app_settings.DEBUG else "disabled",
        }

    app.include_router(auth_router, prefix=prefix)
    app.include_router(tasks_router, prefix=prefix)

    return app


app = create_app()
