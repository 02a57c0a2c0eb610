from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
from starlette.middleware.cors import CORSMiddleware
import time
from pathlib import Path
from contextlib import asynccontextmanager
from typing import Optional

# Load environment variables first
ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')

import uvicorn

from config import Settings, get_settings, get_cors_config, validate_environment
from logging_config import setup_logging, get_logger, set_request_context, clear_request_context
from sentry_integration import init_sentry, capture_exception
from email_integration import EmailClient, router as email_router
from email_integration.email_schema import HealthResponse, internal_error_body

# Get settings
settings = get_settings()

# Configure structured logging
# Use JSON format in production, plain text in development
setup_logging(
    level=settings.LOG_LEVEL,
    json_format=settings.is_production,
    service_name=settings.SERVICE_NAME,
)
logger = get_logger(__name__)

# Initialize Sentry error tracking
if settings.SENTRY_DSN:
    init_sentry(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
    )


def create_app(
    settings: Optional[Settings] = None,
    email_client: Optional[EmailClient] = None,
) -> FastAPI:
    """
    Build the email service application.

    Args:
        settings: Settings to use (defaults to environment)
        email_client: Pre-built send client, mostly for tests
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler"""
        env_status = validate_environment(settings)
        if not env_status["valid"]:
            for error in env_status["errors"]:
                logger.error(f"Configuration Error: {error}")
            if settings.is_production:
                raise RuntimeError("Cannot start in production with invalid configuration")

        for warning in env_status.get("warnings", []):
            logger.warning(f"Configuration Warning: {warning}")

        app.state.email_client = email_client or EmailClient(
            api_key=settings.RESEND_API_KEY,
            from_address=settings.FROM_EMAIL,
        )

        logger.info(f"Email service running on port {settings.PORT}")
        logger.info(f"Endpoint: http://localhost:{settings.PORT}/send-reset-email")

        yield

        logger.info("Shutting down email service...")

    app = FastAPI(
        title="Email Service",
        description="Password reset email relay backed by Resend.",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug_enabled else None,
        redoc_url=None,
    )

    # ==================== HEALTH CHECK ====================

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        """Liveness check; does not touch the email provider."""
        return {"status": "ok", "service": "email-service"}

    app.include_router(email_router)

    # ==================== MIDDLEWARE ====================

    if settings.cors_origins_list:
        app.add_middleware(CORSMiddleware, **get_cors_config(settings))

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log requests with timing information"""
        start_time = time.time()

        request_id = request.headers.get("X-Request-ID", f"req-{int(start_time * 1000)}")
        set_request_context(request_id)

        if settings.debug_enabled:
            logger.debug(f"[{request_id}] {request.method} {request.url.path}")

        try:
            response = await call_next(request)

            process_time = time.time() - start_time

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = str(round(process_time * 1000, 2))

            if settings.debug_enabled or response.status_code >= 400:
                logger.info(f"[{request_id}] {request.method} {request.url.path} -> {response.status_code} ({process_time:.3f}s)")

            return response
        except Exception as e:
            logger.error(f"[{request_id}] Request failed: {str(e)}")
            raise
        finally:
            clear_request_context()

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions"""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        capture_exception(exc, path=request.url.path)
        return JSONResponse(status_code=500, content=internal_error_body(exc))

    return app


app = create_app()


def main():
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    main()
