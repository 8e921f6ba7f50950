"""
Сервис чтения таблицы занятости из Google Sheets.

One tab per month; rows are rooms (name in column A), columns B.. are days.
A white cell means the room is free that night, any fill colour means occupied.
"""
import logging
import re
from typing import Optional

import gspread
from google.oauth2.service_account import Credentials
from gspread.utils import absolute_range_name, rowcol_to_a1

from app.core.config import settings
from app.domain.calendar import days_in_month
from app.schemas.availability import MonthTabInfo, RoomAvailabilityRecord, SheetInfo
from app.services.month_tabs import extract_month_tabs, find_tab_title
from app.services.tab_cache import TabCache

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]

_SPREADSHEET_ID_RE = re.compile(r"^[a-zA-Z0-9_-]+$")


def is_white_background(color: Optional[dict]) -> bool:
    """No fill, pure white, or all-zero (the API omits zero components)."""
    if not color:
        return True
    rgb = (color.get("red", 0), color.get("green", 0), color.get("blue", 0))
    return rgb == (1, 1, 1) or rgb == (0, 0, 0)


def cell_background(cell: Optional[dict]) -> Optional[dict]:
    if not cell:
        return None
    effective = (cell.get("effectiveFormat") or {}).get("backgroundColor")
    entered = (cell.get("userEnteredFormat") or {}).get("backgroundColor")
    return effective or entered


class GoogleSheetsService:
    """Read-only access to the availability spreadsheet."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        credentials_file: Optional[str] = None,
        room_rows: Optional[dict[int, int]] = None,
        cache: Optional[TabCache] = None,
    ):
        self.api_key = settings.google_api_key if api_key is None else api_key
        self.credentials_file = (
            settings.google_sheets_credentials_file if credentials_file is None else credentials_file
        )
        self.room_rows = settings.room_rows if room_rows is None else room_rows
        self.cache = cache if cache is not None else TabCache()
        self.client: Optional[gspread.Client] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.credentials_file or self.api_key)

    @property
    def credential_id(self) -> str:
        return self.credentials_file or self.api_key

    def connect(self):
        """Подключение к Google Sheets"""
        if self.credentials_file:
            creds = Credentials.from_service_account_file(self.credentials_file, scopes=SCOPES)
            self.client = gspread.authorize(creds)
        elif self.api_key:
            self.client = gspread.api_key(self.api_key)
        else:
            raise RuntimeError("Google Sheets credentials are not configured")
        logger.info("Google Sheets client initialized")

    def _open(self, spreadsheet_id: str) -> gspread.Spreadsheet:
        if self.client is None:
            self.connect()
        try:
            return self.client.open_by_key(spreadsheet_id)
        except Exception:
            self.client = None  # Сбрасываем клиент при ошибке открытия таблицы
            raise

    @staticmethod
    def validate_spreadsheet_id(spreadsheet_id: str) -> bool:
        return bool(_SPREADSHEET_ID_RE.match(spreadsheet_id)) and len(spreadsheet_id) > 20

    def get_sheets_info(self, spreadsheet_id: str) -> tuple[list[SheetInfo], list[MonthTabInfo]]:
        """All tabs and the parsed month tabs, from cache when fresh."""
        key = TabCache.make_key(spreadsheet_id, self.credential_id)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info(
                f"Using cached tabs for {spreadsheet_id}: "
                f"{len(cached.tabs)} tabs, {len(cached.month_tabs)} month tabs"
            )
            return cached.tabs, cached.month_tabs

        logger.info(f"Fetching fresh tabs for {spreadsheet_id}")
        spreadsheet = self._open(spreadsheet_id)
        tabs = [
            SheetInfo(
                sheet_id=ws.id,
                title=ws.title,
                index=ws.index,
                row_count=ws.row_count,
                column_count=ws.col_count,
            )
            for ws in spreadsheet.worksheets()
        ]
        month_tabs = extract_month_tabs(tabs)
        self.cache.set(key, spreadsheet_id, tabs, month_tabs)

        logger.info(
            f"Cached {len(tabs)} tabs ({len(month_tabs)} month tabs) for {spreadsheet_id}"
        )
        return tabs, month_tabs

    def find_tab_by_date(self, spreadsheet_id: str, year: int, month: int) -> Optional[str]:
        tabs, _ = self.get_sheets_info(spreadsheet_id)
        return find_tab_title(tabs, year, month)

    def get_room_availability(
        self, spreadsheet_id: str, tab_title: str, year: int, month: int
    ) -> list[RoomAvailabilityRecord]:
        """Availability of every configured room row in one month tab (single API call)."""
        if not self.room_rows:
            return []

        month_days = days_in_month(year, month)
        first_row = min(self.room_rows.values())
        last_row = max(self.room_rows.values())
        # A = room name, B.. = day 1..month_days
        cells = f"A{first_row}:{rowcol_to_a1(last_row, month_days + 1)}"

        spreadsheet = self._open(spreadsheet_id)
        metadata = spreadsheet.fetch_sheet_metadata(
            params={
                "ranges": absolute_range_name(tab_title, cells),
                "includeGridData": "true",
            }
        )

        sheets = metadata.get("sheets") or [{}]
        grid = (sheets[0].get("data") or [{}])[0].get("rowData") or []

        records = []
        for room_number, row in self.room_rows.items():
            offset = row - first_row
            values = (grid[offset].get("values") or []) if offset < len(grid) else []
            room_name = values[0].get("formattedValue") if values else None
            if not room_name:
                logger.debug(f"Tab {tab_title!r}: no room in row {row}, skipping")
                continue

            available, occupied = [], []
            # Trailing cells the API left out are neither free nor occupied
            for day in range(1, min(len(values), month_days + 1)):
                if is_white_background(cell_background(values[day])):
                    available.append(day)
                else:
                    occupied.append(day)

            records.append(
                RoomAvailabilityRecord(
                    room_number=room_number,
                    room_name=room_name,
                    available_dates=available,
                    occupied_dates=occupied,
                    year=year,
                    month=month,
                    tab_title=tab_title,
                )
            )
        return records
