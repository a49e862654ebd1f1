from datetime import datetime, timezone
from pydantic import BaseModel, Field
from typing import Generic, TypeVar, Optional, Any, Dict

DataType = TypeVar("DataType")

class APIResponse(BaseModel, Generic[DataType]):
    """Success envelope: every 2xx body carries a message and optional data."""
    message: str = Field(..., description="Human-readable outcome")
    data: Optional[DataType] = Field(None, description="Payload for the request, if any")

class ErrorDetail(BaseModel):
    code: str = Field(..., description="Stable machine-readable code, e.g. NOT_FOUND")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Field errors or other context")

class ErrorResponse(BaseModel):
    """Error envelope shared by every exception handler."""
    error: ErrorDetail
    timestamp: str = Field(..., description="UTC time the error was rendered, ISO 8601")
    path: str
    request_id: Optional[str] = Field(None, description="Echo of X-Request-ID for log correlation")

    @classmethod
    def build(cls, detail: ErrorDetail, *, path: str, request_id: Optional[str] = None) -> "ErrorResponse":
        return cls(
            error=detail,
            timestamp=datetime.now(timezone.utc).isoformat(),
            path=path,
            request_id=request_id,
        )
