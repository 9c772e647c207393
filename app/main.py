"""
Application entry point.

Run locally:
    uvicorn app.main:app --reload --port 8000

In Docker:
    CMD ["uvicorn", "app.main:app", "--host", "0.0.0.0", "--port", "8000"]

API docs available at:
    http://localhost:8000/docs   (Swagger UI)
    http://localhost:8000/redoc  (ReDoc)
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.core.logging import configure_logging
from app.core.rate_limiter import limiter
from app.routers import (
    auth, contact, leads, testimonials, blogs, packages, payments, checkout, content
)

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append({"field": ".".join(loc), "message": error.get("msg", "")})
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Invalid data", "errors": errors},
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Database error"},
    )


def create_app() -> FastAPI:
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Claryntia API",
        description=(
            "Backend for a coaching and healing practice website. "
            "Serves CMS content, takes contact forms and leads, and runs "
            "checkout through Razorpay or a UPI QR code, plus an admin panel."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # ── Rate Limiter ──────────────────────────────────────────────────────────
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # ── Error envelope ────────────────────────────────────────────────────────
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)

    # ── CORS ──────────────────────────────────────────────────────────────────
    # Credentials are on so the admin session cookie crosses origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routers ───────────────────────────────────────────────────────────────

    # Admin session
    app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])

    # Contact form and lead capture
    app.include_router(contact.router, prefix="/api/contact", tags=["Contact"])
    app.include_router(leads.router, tags=["Leads"])

    # Admin-managed records (reads are public)
    app.include_router(testimonials.router, prefix="/api/testimonials", tags=["Testimonials"])
    app.include_router(blogs.router, prefix="/api/blogs", tags=["Blogs"])
    app.include_router(packages.router, prefix="/api/packages", tags=["Packages"])
    app.include_router(payments.router, prefix="/api/payments", tags=["Payments"])

    # Checkout: /api/checkout/* and /api/payment/*
    app.include_router(checkout.router, prefix="/api", tags=["Checkout"])

    # CMS content
    app.include_router(content.router, prefix="/api/content", tags=["Content"])

    # ── Health Check ──────────────────────────────────────────────────────────
    @app.get("/health", tags=["Health"])
    def health_check():
        """
        Simple health check endpoint for load balancers and Docker health checks.
        Returns 200 if the application is running.
        """
        return {"status": "ok", "version": "1.0.0"}

    return app


app = create_app()
