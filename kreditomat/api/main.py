"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from kreditomat.api.middleware import RequestIDMiddleware, MetricsMiddleware
from kreditomat.api.v1 import calculation, eligibility, loan_data
from kreditomat.infrastructure.database.models import Base
from kreditomat.infrastructure.database.session import engine
from kreditomat.infrastructure.observability.logging import setup_logging
from kreditomat.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Kreditomat Loan Calculator",
        description="Loan affordability and debt-burden (PDN) estimates",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(calculation.router, prefix="/v1", tags=["calculator"])
    app.include_router(eligibility.router, prefix="/v1", tags=["offers"])
    app.include_router(loan_data.router, prefix="/v1", tags=["loan-data"])

    return app


def init_db() -> None:
    """Create the loan snapshot table if it does not exist"""
    Base.metadata.create_all(bind=engine)


app = create_app()
