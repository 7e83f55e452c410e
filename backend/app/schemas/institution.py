"""
Pydantic schemas for institutions.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.core.timeofday import parse_time_of_day


class InstitutionWrite(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    image_url: Optional[str] = Field(None, max_length=1000)
    open_time: str = Field(..., examples=["08:00"])
    close_time: str = Field(..., examples=["20:00"])
    booking_interval: int = Field(60, gt=0, le=24 * 60)

    @field_validator("open_time", "close_time")
    @classmethod
    def validate_time_of_day(cls, value: str) -> str:
        parse_time_of_day(value)
        return value.strip()

    @model_validator(mode="after")
    def validate_hours(self) -> "InstitutionWrite":
        if parse_time_of_day(self.close_time) <= parse_time_of_day(self.open_time):
            raise ValueError("close_time must be after open_time")
        return self


class InstitutionCreate(InstitutionWrite):
    pass


class InstitutionUpdate(InstitutionWrite):
    pass


class InstitutionResponse(BaseModel):
    id: str
    name: str
    image_url: Optional[str]
    open_time: str
    close_time: str
    booking_interval: int

    model_config = {"from_attributes": True}
