import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_availability_service
from app.domain.picker import DatesPicker
from app.schemas.availability import CalendarOut, GuestInfo
from app.services.availability_service import AvailabilityService

router = APIRouter(prefix="/api", tags=["calendar"])


@router.get("/calendar", response_model=CalendarOut, response_model_by_alias=True)
async def get_calendar(
    month: datetime.date,
    check_in: Optional[datetime.date] = Query(None, alias="from"),
    check_out: Optional[datetime.date] = Query(None, alias="to"),
    adults: Optional[int] = Query(None, ge=0),
    children: int = Query(0, ge=0),
    mirador: bool = False,
    service: AvailabilityService = Depends(get_availability_service),
):
    """
    Состояние календаря виджета: что показать, что заблокировать, какие комнаты свободны.

    `from` / `to` replay the guest's clicks, `adults` / `children` filter rooms by capacity.
    """
    guest_info = GuestInfo(adults=adults, children=children) if adults is not None else None
    picker = DatesPicker(feed=service, guest_info=guest_info, is_mirador=mirador, today=month)
    await picker.load()

    if check_in:
        picker.pick(check_in)
        if check_out:
            picker.pick(check_out)

    range_valid = None
    if check_in and check_out:
        range_valid = picker.validator.is_range_valid(check_in, check_out)

    return CalendarOut(
        current_month=picker.current_month,
        available_dates=picker.available_dates(),
        occupied_dates=picker.occupied_dates(),
        disabled_dates=picker.disabled_dates(),
        eligible_rooms=picker.eligible_rooms(),
        first_allowed_checkout=(
            picker.validator.find_first_allowed_checkout_date(check_in) if check_in else None
        ),
        range_valid=range_valid,
        feed_error=picker.error,
    )
