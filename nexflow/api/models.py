"""API request/response models."""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


# ============================================================================
# Process Models
# ============================================================================

class ProcessRequest(BaseModel):
    """Request model for /process."""
    question: Optional[str] = Field(None, example="What's the weather in Paris?")


class ProcessResponse(BaseModel):
    """Response model for a relayed question."""
    gpt_response: Dict[str, Any] = Field(..., description="Tool selection: tool, method, parameters")
    tool_result: Any = Field(..., description="Raw JSON returned by the tool provider")
    final_response: str = Field(..., description="Natural language explanation of the result")
    success: bool = True


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""
    error: str


# ============================================================================
# Status Models
# ============================================================================

class RootResponse(BaseModel):
    """Response model for the root route."""
    message: str = Field(..., example="Welcome to NexFlow API")
    status: str = Field(..., example="active")
    timestamp: str = Field(..., description="ISO 8601 UTC timestamp")


class ReadinessResponse(BaseModel):
    """Response model for the readiness probe."""
    status: str
    catalog: str
