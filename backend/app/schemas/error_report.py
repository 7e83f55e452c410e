"""
Pydantic schemas for error reports.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ErrorReportWrite(BaseModel):
    resource_id: str = Field(..., min_length=1, max_length=32)
    user_id: str = Field(..., min_length=1, max_length=32)
    description: Optional[str] = Field(None, max_length=5000)
    created_date: Optional[datetime] = None
    resolved: bool = False


class ErrorReportCreate(ErrorReportWrite):
    pass


class ErrorReportUpdate(ErrorReportWrite):
    pass


class ErrorReportResponse(BaseModel):
    id: str
    resource_id: str
    user_id: str
    description: Optional[str]
    created_date: datetime
    resolved: bool

    model_config = {"from_attributes": True}


class ResolveResponse(BaseModel):
    resource_id: str
    resolved_any: bool
