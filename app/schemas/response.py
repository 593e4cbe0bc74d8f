from pydantic import BaseModel, Field
from typing import Optional, Any

class ErrorResponse(BaseModel):
    """
    JSON envelope for framework-level errors (unknown route, bad request body).
    """
    error: str = Field(..., description="Human-readable message")
    code: str = Field(..., description="Machine-readable error code")
    details: Optional[Any] = None
