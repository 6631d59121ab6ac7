"""Status and health check API router."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from nexflow.api.models import RootResponse, ReadinessResponse
from nexflow.services.relay import RequestRelay, get_relay

router = APIRouter()

SERVICE_VERSION = "1.0.0"


def utc_timestamp() -> str:
    """Current UTC time as ISO 8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/", tags=["Health"], response_model=RootResponse)
async def root():
    """Service banner; answers whenever the process is up."""
    return {
        "message": "Welcome to NexFlow API",
        "status": "active",
        "timestamp": utc_timestamp(),
    }


@router.get("/health", tags=["Health"])
async def health_check():
    """Liveness probe - indicates if the process is running."""
    return {
        "status": "ok",
        "service": "nexflow",
        "version": SERVICE_VERSION,
    }


@router.get("/health/ready", tags=["Health"], response_model=ReadinessResponse)
async def readiness_probe(relay: RequestRelay = Depends(get_relay)):
    """Readiness probe - checks that the tool catalog is loaded."""
    state = relay.catalog.state.value
    if relay.catalog.ready:
        return {"status": "ready", "catalog": state}
    return JSONResponse(status_code=503, content={"status": "not_ready", "catalog": state})
