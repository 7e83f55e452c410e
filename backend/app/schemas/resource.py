"""
Pydantic schemas for resources.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ResourceWrite(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    image_url: Optional[str] = Field(None, max_length=1000)
    institution_id: str = Field(..., min_length=1, max_length=32)


class ResourceCreate(ResourceWrite):
    pass


class ResourceUpdate(ResourceWrite):
    pass


class ResourceResponse(BaseModel):
    id: str
    name: str
    description: Optional[str]
    image_url: Optional[str]
    institution_id: str

    model_config = {"from_attributes": True}


class ResourceHealth(BaseModel):
    resource_id: str
    has_active_error_reports: bool
