"""Storefront FastAPI application.

``create_app`` wires routers, error mapping and the payment gateway from an
explicit ``StorefrontSettings``; it expects the domain to be initialized
already. ``build`` is the process entry point: it reads and validates the
settings once, configures logging and persistence, initializes the domain
and then calls ``create_app``.

Usage:
    uvicorn --factory storefront.api.app:build --host 0.0.0.0 --port 8000
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.api.routes import order_router, product_router, webhook_router
from storefront.checkout.gateway import PaymentGateway, build_gateway
from storefront.config import StorefrontSettings
from storefront.domain import storefront
from storefront.utils.db import configure_persistence
from storefront.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def create_app(settings: StorefrontSettings, gateway: PaymentGateway | None = None) -> FastAPI:
    """Build the application around already-validated settings."""
    app = FastAPI(
        title=f"{settings.store_name} API",
        description="Storefront: catalogue, orders and checkout reconciliation",
    )
    app.state.settings = settings
    app.state.gateway = gateway or build_gateway(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.site_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context for each request."""
        with storefront.domain_context():
            response = await call_next(request)
        return response

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "validation_error", "messages": exc.messages},
        )

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": str(exc)})

    app.include_router(product_router)
    app.include_router(order_router)
    app.include_router(webhook_router)

    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "domain": storefront.name,
                "environment": settings.environment,
                "gateway": type(app.state.gateway).__name__,
            }
        )

    return app


def build() -> FastAPI:
    """Read settings from the environment and build the application."""
    settings = StorefrontSettings.from_env()
    configure_logging(
        environment=settings.environment,
        level=settings.log_level,
        log_dir=settings.log_dir,
    )
    configure_persistence(storefront, settings)
    storefront.init()
    logger.info(
        "Storefront starting",
        environment=settings.environment,
        gateway=settings.payment_gateway,
    )
    return create_app(settings)
