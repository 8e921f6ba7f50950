from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire (the widget speaks JS)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RoomAvailabilityRecord(CamelModel):
    """One room's availability for one calendar month."""

    room_number: int = Field(..., gt=0)
    room_name: str
    available_dates: list[int] = Field(default_factory=list)
    # Display only, available_dates is authoritative
    occupied_dates: list[int] = Field(default_factory=list)
    year: int
    month: int = Field(..., ge=1, le=12)
    # None when the month has no tab: every day is treated as occupied
    tab_title: Optional[str] = None


class MonthMeta(CamelModel):
    year: int
    month: int
    tab_title: Optional[str] = None
    tab_found: bool = False


class AvailabilityMeta(CamelModel):
    spreadsheet_id: str
    current_month: MonthMeta
    next_month: MonthMeta
    requested_date: str
    timestamp: datetime


class AvailabilityResponse(CamelModel):
    success: bool
    data: Optional[list[RoomAvailabilityRecord]] = None
    error: Optional[str] = None
    meta: Optional[AvailabilityMeta] = None


class RoomInfo(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    room_number: int
    room_name: str


class GuestInfo(CamelModel):
    adults: int = Field(1, ge=0)
    children: int = Field(0, ge=0)

    @property
    def party_size(self) -> int:
        return self.adults + self.children


class SheetInfo(CamelModel):
    sheet_id: int = 0
    title: str = ""
    index: int = 0
    row_count: Optional[int] = None
    column_count: Optional[int] = None


class MonthTabInfo(CamelModel):
    sheet_id: int
    title: str
    index: int
    year: int
    month: int
    month_name: str
    is_current_month: bool = False


class CalendarOut(CamelModel):
    """Everything the picker needs to render one state of the widget."""

    current_month: date
    available_dates: list[date]
    occupied_dates: list[date]
    disabled_dates: list[date]
    eligible_rooms: list[RoomInfo]
    first_allowed_checkout: Optional[date] = None
    range_valid: Optional[bool] = None
    feed_error: Optional[str] = None
