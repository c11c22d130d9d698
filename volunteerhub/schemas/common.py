"""Common response schemas."""
from datetime import datetime
from typing import Annotated, Optional
from pydantic import AfterValidator, BaseModel

from volunteerhub.core.utils import to_utc


class SuccessResponse(BaseModel):
    """Standard success response."""
    success: bool = True
    message: Optional[str] = None


class ErrorDetail(BaseModel):
    """Error detail structure."""
    code: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response for documentation."""
    success: bool = False
    error: ErrorDetail


# Datetimes read back from SQLite are naive; they are always stored as UTC
UTCDatetime = Annotated[datetime, AfterValidator(to_utc)]
