"""Tool selection model."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Dict, Any


class ToolSelection(BaseModel):
    """The language model's choice of which tool method to call and with what."""
    model_config = ConfigDict(extra="allow")

    tool: str = Field(..., min_length=1, description="Tool name from the catalog")
    method: str = Field(..., min_length=1, description="Method of the tool")
    parameters: Dict[str, Any] = Field(..., description="JSON body for the tool call")

    @field_validator("tool", "method")
    @classmethod
    def reject_dot_segments(cls, value: str) -> str:
        """Tool and method become URL path segments; '.' and '..' are not names."""
        if value in (".", ".."):
            raise ValueError(f"{value!r} is not a valid name")
        return value
