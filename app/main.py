"""
FastAPI Application Entry Point - Application initialization and configuration
"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from typing import Dict
import logging
import sys
import time

from app.core.config import settings, validate_config, is_production
from app.core.exceptions import AppError, FieldValidationError
from app.core.gateway import AuthGateway
from app.core.policy import RoutePolicy
from app.database import SessionLocal, check_db_connection, close_db_connections, get_pool_stats, init_db

# Configure application logging with timestamp and log level
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

VALUE_ERROR_PREFIX = "Value error, "  # Pydantic prepends this to messages raised in validators
REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}

def create_application() -> FastAPI:
    """
    Factory function to create and configure FastAPI application.
    Using factory pattern allows easier testing with different configurations.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        docs_url="/api/docs" if not is_production() else None,  # Hide Swagger docs in production
        redoc_url="/api/redoc" if not is_production() else None,  # Hide ReDoc in production
        description="Multi-tenant task tracking API with role-based access"
    )

    setup_middleware(app)  # Auth gateway, CORS and request logging
    setup_exception_handlers(app)  # Domain errors -> HTTP status codes
    setup_event_handlers(app)  # Startup/shutdown hooks
    setup_routers(app)  # Mount API route handlers

    return app

def setup_middleware(app: FastAPI) -> None:
    """
    Configure application middleware - runs on every request/response.

    Registration order matters: the last one added runs first, so requests
    pass through logging, then CORS, then the auth gateway.
    """

    # Authenticate the bearer token and enforce the route policy
    app.middleware("http")(AuthGateway(RoutePolicy(settings.PUBLIC_PATH_PREFIXES), SessionLocal))

    # CORS middleware - allows frontend to call API from different origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request timing and logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every request with method, path, status, and processing time"""
        start_time = time.time()
        logger.info(f"➡️  {request.method} {request.url.path}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"⬅️  {request.method} {request.url.path} "
            f"- Status: {response.status_code} - Time: {process_time:.2f}s"
        )
        response.headers["X-Process-Time"] = str(process_time)  # Timing header for debugging
        return response

def validation_errors_to_map(exc: RequestValidationError) -> Dict[str, str]:
    """Flatten pydantic errors to {field: message}, first message per field wins"""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        names = [str(part) for part in error["loc"] if part not in REQUEST_LOCATIONS]
        field = names[-1] if names else "body"

        if error["type"] == "missing":
            message = f"{field} is required"
        else:
            message = error["msg"]
            if message.startswith(VALUE_ERROR_PREFIX):
                message = message[len(VALUE_ERROR_PREFIX):]

        errors.setdefault(field, message)
    return errors

def app_error_response(exc: AppError) -> JSONResponse:
    """Render a domain error as {"error", "detail", "timestamp"}"""
    detail = exc.errors if isinstance(exc, FieldValidationError) else exc.message
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "detail": detail, "timestamp": time.time()},
        headers=exc.headers
    )

def setup_exception_handlers(app: FastAPI) -> None:
    """Configure global exception handlers for consistent error responses"""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Handle Pydantic validation errors (invalid request data).
        Returns 400 with a field -> message map.
        """
        error = FieldValidationError(validation_errors_to_map(exc))
        logger.warning(f"❌ Validation error on {request.url.path}: {error.errors}")
        return app_error_response(error)

    @app.exception_handler(AppError)
    async def app_exception_handler(request: Request, exc: AppError):
        """Map domain errors raised by services and routers to their HTTP status"""
        if exc.status_code >= 500:
            logger.error(f"❌ {exc.error} on {request.method} {request.url.path}: {exc.message}")
        else:
            logger.info(f"↩️  {exc.status_code} {exc.error} on {request.method} {request.url.path}: {exc.message}")
        return app_error_response(exc)

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        """
        Handle database errors - logs full details but returns generic message.
        Security: Never expose database schema or internal errors to client.
        """
        logger.error(
            f"❌ Database error on {request.method} {request.url.path}: {str(exc)}",
            exc_info=True
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Database Error",
                "detail": "An error occurred while processing your request. Please try again later.",
                "timestamp": time.time()
            }
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Catch-all handler for unexpected exceptions"""
        logger.error(
            f"❌ Unhandled exception on {request.method} {request.url.path}: {str(exc)}",
            exc_info=True
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal Server Error",
                "detail": "An unexpected error occurred.",
                "timestamp": time.time()
            }
        )

def setup_event_handlers(app: FastAPI) -> None:
    """Configure startup and shutdown event handlers"""

    @app.on_event("startup")
    async def startup_event():
        """
        Run on application startup - validate config and check dependencies.
        Fail fast: If checks fail, application won't start.
        """
        logger.info(f"🚀 Starting {settings.APP_NAME}...")

        try:
            validate_config()
        except ValueError as e:
            logger.error(f"❌ Configuration validation failed: {e}")
            sys.exit(1)

        if not check_db_connection():
            logger.error("❌ Cannot connect to database. Exiting.")
            sys.exit(1)

        init_db()

        pool_stats = get_pool_stats()
        logger.info(f"📊 Database pool: {pool_stats}")
        logger.info("✅ Application started successfully")
        logger.info(f"🌍 Environment: {settings.ENVIRONMENT}")
        logger.info(f"🔧 Debug mode: {settings.DEBUG}")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Run on application shutdown - clean up resources gracefully"""
        logger.info(f"🛑 Shutting down {settings.APP_NAME}...")
        close_db_connections()
        logger.info("✅ Shutdown complete")

def setup_routers(app: FastAPI) -> None:
    """Mount API routers"""

    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Health check endpoint for monitoring and load balancers.
        Returns application status, database connectivity, and version info.
        """
        db_healthy = check_db_connection()
        pool_stats = get_pool_stats()

        return {
            "status": "healthy" if db_healthy else "unhealthy",
            "database": "connected" if db_healthy else "disconnected",
            "pool_stats": pool_stats,
            "timestamp": time.time(),
            "version": settings.APP_VERSION
        }

    from app.api import auth, users, user_tasks, admin, admin_tasks
    app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(user_tasks.router, prefix="/api/user/tasks", tags=["My Tasks"])
    app.include_router(users.router, prefix="/api/user", tags=["My Account"])
    app.include_router(admin_tasks.router, prefix="/api/admin/tasks", tags=["Admin: Tasks"])
    app.include_router(admin.router, prefix="/api/admin", tags=["Admin: Users"])

# Create application instance
app = create_application()

if __name__ == "__main__":
    """
    Direct execution entry point - for development only.
    Production: Use `uvicorn app.main:app --host 0.0.0.0 --port 8000`
    """
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info"
    )
