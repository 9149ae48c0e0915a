"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from housing_calculator.api.middleware import RequestIDMiddleware, MetricsMiddleware
from housing_calculator.api.v1 import calculation, results
from housing_calculator.infrastructure.database.session import init_db
from housing_calculator.infrastructure.observability.logging import setup_logging
from housing_calculator.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Housing Affordability Calculator",
        description="Loan eligibility and post-move-in cash flow service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(calculation.router, prefix="/calculator", tags=["calculator"])
    app.include_router(results.router, prefix="/calculator", tags=["results"])

    return app


app = create_app()
