"""
FastAPI application entry point.
Main application setup and configuration.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
import logging

from landlord_api.config import settings
from landlord_api.database import Database
from landlord_api.routers import (
    auth_router,
    properties_router,
    appliances_router,
    maintenance_router,
    issues_router,
    rent_payments_router,
    reports_router,
    health_router,
)
from landlord_api.utils.exceptions import APIException
from landlord_api.services.error_handler import ErrorHandlerService
from landlord_api.middleware import RequestLoggingMiddleware

# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Opens the connection pool on startup and closes it on shutdown.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    database = Database.from_settings(settings)
    app.state.db = database

    if settings.auto_create_tables:
        await database.create_tables()

    if not await database.ping():
        # Requests will answer 500 until the database comes back
        logger.error("Failed to connect to database on startup")

    yield

    logger.info("Shutting down application")
    await database.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Property management API for small landlords.

    ## Features

    * **Properties**: addresses, types and expected monthly rent
    * **Appliances**: inventory per property with operational status
    * **Maintenance**: service history; completed repairs restore appliances and close issues
    * **Issues**: problems reported against appliances, prioritized by urgency
    * **Rent**: payment ledger with rent status per property
    * **Reports**: maintenance dashboard and monthly and yearly financial analytics

    ## Authentication

    Register at `/api/auth/register`, obtain a JWT from `/api/auth/login`, then send it
    in the Authorization header as `Bearer <token>`. Every resource is private to its owner.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Authentication", "description": "Registration, login and the current user"},
        {"name": "Properties", "description": "Properties owned by the caller"},
        {"name": "Appliances", "description": "Appliances installed in owned properties"},
        {"name": "Maintenance", "description": "Maintenance history and cost rollups"},
        {"name": "Issues", "description": "Reported appliance problems"},
        {"name": "Rent Payments", "description": "Rent payment ledger"},
        {"name": "Reports", "description": "Rent status, dashboard and analytics"},
        {"name": "Health", "description": "Liveness and database health"},
    ],
    lifespan=lifespan,
)

app.add_middleware(
    RequestLoggingMiddleware,
    max_request_size=settings.max_request_size,
    enable_request_logging=settings.debug,
    slow_request_threshold=2.0,
)

# Added last so it wraps everything, including error responses
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Processing-Time"],
)

app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(properties_router, prefix=settings.api_prefix)
app.include_router(appliances_router, prefix=settings.api_prefix)
app.include_router(maintenance_router, prefix=settings.api_prefix)
app.include_router(issues_router, prefix=settings.api_prefix)
app.include_router(rent_payments_router, prefix=settings.api_prefix)
app.include_router(reports_router, prefix=settings.api_prefix)
app.include_router(health_router)


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Handle custom API exceptions with structured error responses."""
    return ErrorHandlerService.handle_api_exception(exc, request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies, paths and query strings answer 400."""
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    return ErrorHandlerService.handle_database_error(exc, request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return ErrorHandlerService.handle_http_exception(exc, request)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with secure error responses."""
    return ErrorHandlerService.handle_unexpected_error(exc, request)


@app.get("/", tags=["Health"])
async def root():
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.environment,
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json"
        },
        "api_prefix": settings.api_prefix
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "landlord_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
