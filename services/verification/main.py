"""
Verification Service - Main Application
========================================

FastAPI application verifying identity attestations against the
on-chain VerifyAll hub.

Version: 0.1.0
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from attest.config import settings
from attest.logging import get_logger, setup_logging
from attest.models import ErrorResponse, HealthResponse
from services.verification.routes import verification


# Setup logging
setup_logging(
    log_level=settings.log_level.value,
    json_logs=settings.is_production,
    service_name="verification",
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> Any:
    """Application lifespan manager."""
    logger.info(
        "verification_service_starting",
        environment=settings.environment.value,
        port=settings.ports.verification,
        chain_mode=settings.chain.mode.value,
    )

    try:
        verification.get_attestation_verifier()
    except Exception as e:
        logger.error("startup_failed", error=str(e))
        raise

    yield

    logger.info("verification_service_shutting_down")


# Create FastAPI application
app = FastAPI(
    title="Attest Verification Service",
    description="Verification of zero-knowledge identity attestations",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins_list,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Health Check Endpoints
# ============================================================================


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """
    Service health check.

    Reads the current registry root to confirm the chain is reachable.
    """
    components: dict[str, dict[str, Any]] = {}

    try:
        verifier = verification.get_attestation_verifier()
        await verifier.registry.get_identity_commitment_merkle_root()
        components["registry"] = {"status": "healthy", "mode": settings.chain.mode.value}
    except Exception as e:
        logger.warning("registry_health_check_failed", error=str(e))
        components["registry"] = {"status": "unhealthy", "error": str(e)}

    return HealthResponse.from_components("verification", "0.1.0", components)


@app.get("/", tags=["Health"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": "Attest Verification Service",
        "version": "0.1.0",
        "docs": "/docs",
    }


# ============================================================================
# Include Routers
# ============================================================================

app.include_router(
    verification.router,
    prefix="/api/v1/verify",
    tags=["Verification"],
)


# ============================================================================
# Error Handlers
# ============================================================================


def _error_response(status_code: int, error: str, error_code: str) -> JSONResponse:
    body = ErrorResponse(error=error, status_code=status_code, error_code=error_code)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    logger.warning(
        "http_exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
    )
    error_code = "upstream_failure" if exc.status_code == status.HTTP_502_BAD_GATEWAY else "http_error"
    return _error_response(exc.status_code, str(exc.detail), error_code)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        "internal_error",
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.verification.main:app",
        host="0.0.0.0",
        port=settings.ports.verification,
        reload=settings.debug,
        log_level=settings.log_level.value.lower(),
    )
