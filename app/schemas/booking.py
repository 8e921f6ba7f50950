from datetime import date
from typing import Optional

from pydantic import Field, field_validator

from app.schemas.availability import CamelModel


class BookingForm(CamelModel):
    """Guest details as typed into the widget form."""

    name: str
    phone: str
    adults: int = 1
    children: int = 0
    dogs: int = 0


class BookingRequest(CamelModel):
    """Booking form submission. Only notified, never stored."""

    start_date: date
    end_date: date
    name: str = Field(..., max_length=120)
    phone: str = Field(..., max_length=32)
    adults: int = Field(1, ge=1, le=20)
    children: int = Field(0, ge=0, le=20)
    pets: int = Field(0, ge=0, le=10)
    room_name: Optional[str] = None
    room_number: Optional[int] = None
    is_mirador: bool = False

    @field_validator("name", "phone")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("end_date")
    @classmethod
    def validate_dates(cls, v: date, info):
        start_date = info.data.get("start_date")
        if start_date and v <= start_date:
            raise ValueError("endDate must be after startDate")
        return v

    @property
    def nights(self) -> int:
        return (self.end_date - self.start_date).days

    @property
    def guests_total(self) -> int:
        return self.adults + self.children


class GuestsOut(CamelModel):
    adults: int
    children: int
    pets: int
    total: int


class BookedRoomOut(CamelModel):
    name: Optional[str] = None
    number: Optional[int] = None


class BookingResponseData(CamelModel):
    booking_id: Optional[str] = None
    guest_name: str
    check_in: date
    check_out: date
    nights: int
    room: Optional[BookedRoomOut] = None
    guests: GuestsOut


class BookingResponse(CamelModel):
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    data: Optional[BookingResponseData] = None
