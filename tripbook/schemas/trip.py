from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import datetime
from typing import List, Optional

from tripbook.schemas.user import UserSummary


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Trip dates are stored as naive UTC."""
    if value is None or value.tzinfo is None:
        return value
    return (value - value.utcoffset()).replace(tzinfo=None)


class TripBase(BaseModel):
    title: str = Field(..., min_length=1)
    description: str
    destination: str = Field(..., min_length=1)
    start_date: datetime
    end_date: datetime
    price: float = Field(..., ge=0)
    max_capacity: int = Field(..., ge=1)
    image: Optional[str] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be blank")
        return value


class TripCreate(TripBase):
    image: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must be on or before end_date")
        return self


class TripUpdate(BaseModel):
    """Partial update. Creator and booking state are not accepted here."""

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    destination: Optional[str] = Field(None, min_length=1)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    price: Optional[float] = Field(None, ge=0)
    max_capacity: Optional[int] = Field(None, ge=1)
    image: Optional[str] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("title must not be blank")
        return value


class TripResponse(TripBase):
    id: int
    current_bookings: int
    available_spots: int
    is_full: bool
    creator_id: int
    creator: Optional[UserSummary] = None
    booked_by_ids: List[int] = []
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TripDetailResponse(TripResponse):
    booked_by: List[UserSummary] = []


class MessageResponse(BaseModel):
    message: str
