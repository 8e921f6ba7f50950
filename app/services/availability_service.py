"""
Availability feed: current and next month of every room, read from the sheet.
"""
import asyncio
import datetime
import logging
from typing import Optional

from app.core.config import settings
from app.domain.calendar import days_in_month, next_month
from app.schemas.availability import (
    AvailabilityMeta,
    AvailabilityResponse,
    MonthMeta,
    RoomAvailabilityRecord,
)
from app.services.sheets_service import GoogleSheetsService

logger = logging.getLogger(__name__)


class FeedConfigurationError(RuntimeError):
    """Spreadsheet id or Google credentials are missing."""


def occupied_month(
    room_numbers: list[int], year: int, month: int
) -> list[RoomAvailabilityRecord]:
    """Stand-in records for a month without a tab: every day occupied."""
    all_days = list(range(1, days_in_month(year, month) + 1))
    return [
        RoomAvailabilityRecord(
            room_number=room_number,
            room_name=f"Кімната {room_number}",
            available_dates=[],
            occupied_dates=all_days,
            year=year,
            month=month,
            tab_title=None,
        )
        for room_number in room_numbers
    ]


class AvailabilityService:
    def __init__(
        self,
        sheets: Optional[GoogleSheetsService] = None,
        spreadsheet_id: Optional[str] = None,
    ):
        self.sheets = sheets if sheets is not None else GoogleSheetsService()
        self.spreadsheet_id = (
            settings.booking_sheet_id if spreadsheet_id is None else spreadsheet_id
        )

    def check_configured(self) -> None:
        if not self.spreadsheet_id:
            raise FeedConfigurationError("BOOKING_SHEET_ID is not configured in environment")
        if not self.sheets.is_configured:
            raise FeedConfigurationError("Google API key not configured")

    def load_month(
        self, year: int, month: int
    ) -> tuple[list[RoomAvailabilityRecord], Optional[str]]:
        """Records for one month and the tab they came from (None if there is no tab)."""
        tab_title = self.sheets.find_tab_by_date(self.spreadsheet_id, year, month)
        if tab_title is None:
            logger.info(f"No tab for {year}-{month:02d}, treating month as fully occupied")
            return occupied_month(list(self.sheets.room_rows), year, month), None

        records = self.sheets.get_room_availability(self.spreadsheet_id, tab_title, year, month)
        return records, tab_title

    async def _load_month_safe(self, year: int, month: int) -> dict:
        try:
            records, tab_title = await asyncio.to_thread(self.load_month, year, month)
            return {"success": True, "data": records, "tab_title": tab_title}
        except Exception as e:
            logger.error(f"Failed to load availability for {year}-{month:02d}: {e}", exc_info=True)
            return {"success": False, "error": str(e) or type(e).__name__, "tab_title": None}

    async def fetch(self, requested: datetime.date) -> AvailabilityResponse:
        """Snapshot of the month containing `requested` and the month after it.

        Never raises: configuration and sheet errors come back as success=False.
        """
        try:
            self.check_configured()
        except FeedConfigurationError as e:
            logger.error(f"Availability feed not configured: {e}")
            return AvailabilityResponse(success=False, error=str(e))

        current = (requested.year, requested.month)
        following = next_month(*current)

        current_result, next_result = await asyncio.gather(
            self._load_month_safe(*current),
            self._load_month_safe(*following),
        )

        if not current_result["success"] or not next_result["success"]:
            errors = []
            if not current_result["success"]:
                errors.append(f"Current month error: {current_result['error']}")
            if not next_result["success"]:
                errors.append(f"Next month error: {next_result['error']}")
            return AvailabilityResponse(
                success=False, error=f"Failed to fetch data: {' '.join(errors)}"
            )

        return AvailabilityResponse(
            success=True,
            data=[*current_result["data"], *next_result["data"]],
            meta=AvailabilityMeta(
                spreadsheet_id=self.spreadsheet_id,
                current_month=MonthMeta(
                    year=current[0],
                    month=current[1],
                    tab_title=current_result["tab_title"],
                    tab_found=current_result["tab_title"] is not None,
                ),
                next_month=MonthMeta(
                    year=following[0],
                    month=following[1],
                    tab_title=next_result["tab_title"],
                    tab_found=next_result["tab_title"] is not None,
                ),
                requested_date=requested.isoformat(),
                timestamp=datetime.datetime.now(datetime.timezone.utc),
            ),
        )
