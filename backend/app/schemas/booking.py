"""
Pydantic schemas for booking-related request/response validation.
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.core.timeofday import parse_time_of_day


class BookingWrite(BaseModel):
    """Full booking record as sent on create and update (whole-record replace)."""

    institution_id: str = Field(..., min_length=1, max_length=32)
    user_id: str = Field(..., min_length=1, max_length=32)
    resource_id: str = Field(..., min_length=1, max_length=32)
    date: dt.date
    start_time: str = Field(..., examples=["14:30"])
    end_time: str = Field(..., examples=["15:30"])
    active: Optional[bool] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_of_day(cls, value: str) -> str:
        parse_time_of_day(value)
        return value.strip()

    @model_validator(mode="after")
    def validate_range(self) -> "BookingWrite":
        if parse_time_of_day(self.end_time) <= parse_time_of_day(self.start_time):
            raise ValueError("end_time must be after start_time")
        return self


class BookingCreate(BookingWrite):
    pass


class BookingUpdate(BookingWrite):
    pass


class BookingResponse(BaseModel):
    id: str
    institution_id: str
    user_id: str
    resource_id: str
    date: dt.date
    start_time: str
    end_time: str
    active: Optional[bool] = None
    created_at: Optional[dt.datetime] = None

    model_config = {"from_attributes": True}
