"""
Crowdfund Service Main Application

FastAPI application exposing the crowdfunding project ledger.
Port: 8260
"""

import os
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Depends, Header, Request, status
from fastapi.responses import JSONResponse

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from core.config import get_settings
from core.logger import setup_service_logger
from core.nats_client import get_event_bus, close_event_bus

from . import __version__ as SERVICE_VERSION
from .clients.wallet_client import WalletClient
from .factory import create_project_ledger
from .models import (
    ProjectCreateRequest,
    ProjectCreatedResponse,
    ProjectDetails,
    ProjectSummary,
    ProjectListResponse,
    ContributionRequest,
    ContributionResponse,
    ContributorsResponse,
    ContributionTotalResponse,
    WithdrawalResponse,
    HealthResponse,
    ErrorResponse,
)
from .project_ledger import ProjectLedger
from .protocols import (
    CrowdfundServiceError,
    InvalidDurationError,
    InvalidGoalAmountError,
    InvalidProjectIdError,
    AlreadyCompletedError,
    ZeroContributionError,
    ProjectExpiredError,
    NotAuthorizedError,
    NotCompletedYetError,
    AlreadyWithdrawnError,
    ReentrantCallError,
    TransferFailedError,
)

config = get_settings()
logger = setup_service_logger(config.service_name, level=config.logging.log_level, config=config.logging)

SERVICE_NAME = config.service_name
SERVICE_PORT = config.service_port

# Global ledger and collaborators, built in lifespan
ledger: Optional[ProjectLedger] = None
wallet_client: Optional[WalletClient] = None
event_bus = None

ERROR_STATUS_CODES = {
    InvalidDurationError: status.HTTP_400_BAD_REQUEST,
    InvalidGoalAmountError: status.HTTP_400_BAD_REQUEST,
    ZeroContributionError: status.HTTP_400_BAD_REQUEST,
    InvalidProjectIdError: status.HTTP_404_NOT_FOUND,
    NotAuthorizedError: status.HTTP_403_FORBIDDEN,
    AlreadyCompletedError: status.HTTP_409_CONFLICT,
    ProjectExpiredError: status.HTTP_409_CONFLICT,
    NotCompletedYetError: status.HTTP_409_CONFLICT,
    AlreadyWithdrawnError: status.HTTP_409_CONFLICT,
    ReentrantCallError: status.HTTP_409_CONFLICT,
    TransferFailedError: status.HTTP_502_BAD_GATEWAY,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    global ledger, wallet_client, event_bus

    logger.info(f"Starting {SERVICE_NAME} on port {SERVICE_PORT}")

    if config.nats_enabled:
        try:
            event_bus = await get_event_bus(SERVICE_NAME, config.nats_url)
            logger.info("✅ Event bus initialized successfully")
        except Exception as e:
            logger.warning(f"⚠️  Failed to initialize event bus: {e}. Continuing without event publishing.")
            event_bus = None

    wallet_client = WalletClient(
        base_url=config.wallet_service_url,
        timeout=config.wallet_timeout_seconds,
    )
    ledger = create_project_ledger(
        config=config,
        event_bus=event_bus,
        transfer_client=wallet_client,
    )

    yield

    logger.info(f"Shutting down {SERVICE_NAME}")
    ledger = None
    await wallet_client.close()
    wallet_client = None
    if event_bus:
        await close_event_bus()
        event_bus = None


app = FastAPI(
    title="Crowdfund Service",
    description="Crowdfunding project ledger: projects, contributions and creator payouts",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)


# ====================
# Exception Handlers
# ====================


@app.exception_handler(CrowdfundServiceError)
async def crowdfund_error_handler(request: Request, exc: CrowdfundServiceError):
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=str(exc), error=type(exc).__name__).model_dump(),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(detail="Internal server error", error=type(exc).__name__).model_dump(),
    )


# ====================
# Dependencies
# ====================


def get_ledger() -> ProjectLedger:
    """Get the project ledger"""
    if ledger is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized",
        )
    return ledger


def get_caller_id(x_user_id: Optional[str] = Header(None, alias="X-User-ID")) -> str:
    """Authenticated caller principal, forwarded by the gateway"""
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-ID header required",
        )
    return x_user_id


# ====================
# Health Endpoints
# ====================


@app.get("/api/v1/crowdfund/health")
@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint"""
    dependencies = {}

    if event_bus is not None:
        dependencies["nats"] = "healthy" if event_bus.is_connected else "unhealthy"
    else:
        dependencies["nats"] = "not_configured"

    if wallet_client is not None:
        wallet_ok = await wallet_client.health_check()
        dependencies["wallet_service"] = "healthy" if wallet_ok else "unhealthy"

    return HealthResponse(
        status="healthy" if ledger is not None else "initializing",
        service=SERVICE_NAME,
        port=SERVICE_PORT,
        version=SERVICE_VERSION,
        dependencies=dependencies,
    )


# ====================
# Project Endpoints
# ====================


@app.post(
    "/api/v1/crowdfund/projects",
    response_model=ProjectCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Projects"],
)
async def create_project(
    request: ProjectCreateRequest,
    service: ProjectLedger = Depends(get_ledger),
    caller_id: str = Depends(get_caller_id),
):
    """Create a crowdfunding project owned by the caller"""
    project_id = await service.create_project(
        title=request.title,
        description=request.description,
        goal_amount=request.goal_amount,
        duration=request.duration,
        creator=caller_id,
        duration_unit=request.duration_unit,
    )
    return ProjectCreatedResponse(project_id=project_id)


@app.get(
    "/api/v1/crowdfund/projects",
    response_model=ProjectListResponse,
    tags=["Projects"],
)
async def list_projects(
    limit: int = Query(50, ge=1, le=200, description="Page size"),
    offset: int = Query(0, ge=0, description="Page offset"),
    service: ProjectLedger = Depends(get_ledger),
):
    """List projects in creation order"""
    projects, total = await service.list_projects(limit=limit, offset=offset)
    return ProjectListResponse(
        projects=[ProjectSummary.from_project(p) for p in projects],
        total=total,
        limit=limit,
        offset=offset,
    )


@app.get(
    "/api/v1/crowdfund/projects/{project_id}",
    response_model=ProjectDetails,
    tags=["Projects"],
)
async def get_project_details(
    project_id: int,
    service: ProjectLedger = Depends(get_ledger),
):
    """Get a project's public details"""
    return await service.get_project_details(project_id)


@app.get(
    "/api/v1/crowdfund/projects/{project_id}/contributors",
    response_model=ContributorsResponse,
    tags=["Projects"],
)
async def get_project_contributors(
    project_id: int,
    service: ProjectLedger = Depends(get_ledger),
):
    """Get a project's contributors in contribution order"""
    contributors = await service.get_project_contributors(project_id)
    return ContributorsResponse(
        project_id=project_id,
        contributors=contributors,
        count=len(contributors),
    )


# ====================
# Funding Endpoints
# ====================


@app.post(
    "/api/v1/crowdfund/projects/{project_id}/contributions",
    response_model=ContributionResponse,
    tags=["Funding"],
)
async def contribute_to_project(
    project_id: int,
    request: ContributionRequest,
    service: ProjectLedger = Depends(get_ledger),
    caller_id: str = Depends(get_caller_id),
):
    """Record a settled contribution from the caller"""
    return await service.contribute_to_project(
        project_id=project_id,
        amount=request.amount,
        contributor=caller_id,
        payment_reference=request.payment_reference,
    )


@app.post(
    "/api/v1/crowdfund/projects/{project_id}/withdraw",
    response_model=WithdrawalResponse,
    tags=["Funding"],
)
async def withdraw_funds(
    project_id: int,
    service: ProjectLedger = Depends(get_ledger),
    caller_id: str = Depends(get_caller_id),
):
    """Pay the collected funds of a completed project to its creator"""
    return await service.withdraw_funds(project_id=project_id, caller=caller_id)


@app.get(
    "/api/v1/crowdfund/contributors/{principal}/total",
    response_model=ContributionTotalResponse,
    tags=["Funding"],
)
async def get_contribution_total(
    principal: str,
    service: ProjectLedger = Depends(get_ledger),
):
    """Get a principal's cumulative contribution across all projects"""
    total = await service.get_contribution_total(principal)
    return ContributionTotalResponse(principal=principal, total_contributed=total)


# ====================
# Main Entry Point
# ====================


def main():
    """Run the service"""
    import uvicorn

    uvicorn.run(
        "microservices.crowdfund_service.main:app",
        host=config.service_host,
        port=SERVICE_PORT,
        reload=config.debug,
        log_level=config.logging.log_level.lower(),
    )


if __name__ == "__main__":
    main()
