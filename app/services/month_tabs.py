"""
Parsing of month tab titles ("Лютий 2025", "2025-02", "2025-02-лютий", "February 2025").

Each matcher is a pure function title -> MonthTab | None; they are tried in
MONTH_TAB_MATCHERS order and the first hit wins.
"""
import datetime
import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from app.schemas.availability import MonthTabInfo, SheetInfo

logger = logging.getLogger(__name__)

UKRAINIAN_MONTHS = [
    "січень",
    "лютий",
    "березень",
    "квітень",
    "травень",
    "червень",
    "липень",
    "серпень",
    "вересень",
    "жовтень",
    "листопад",
    "грудень",
]

ENGLISH_MONTHS = [
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
]

_UKRAINIAN_RE = re.compile(r"^([а-яіїєґ']+)\s+(\d{4})$")
_ISO_RE = re.compile(r"^(\d{4})-(\d{1,2})$")
_ISO_UKRAINIAN_RE = re.compile(r"^(\d{4})-(\d{1,2})-([а-яіїєґ']+)$")
_ENGLISH_RE = re.compile(r"^([a-z]+)\s+(\d{4})$")


@dataclass(frozen=True)
class MonthTab:
    year: int
    month: int
    month_name: str


def _month_by_name(names: list[str], name: str) -> Optional[int]:
    return names.index(name) + 1 if name in names else None


def _valid(year: int, month: Optional[int], month_name: str) -> Optional[MonthTab]:
    if month is None or not 1 <= month <= 12:
        return None
    return MonthTab(year=year, month=month, month_name=month_name)


def match_ukrainian(title: str) -> Optional[MonthTab]:
    m = _UKRAINIAN_RE.match(title)
    if not m:
        return None
    name, year = m.groups()
    return _valid(int(year), _month_by_name(UKRAINIAN_MONTHS, name), name)


def match_iso(title: str) -> Optional[MonthTab]:
    m = _ISO_RE.match(title)
    if not m:
        return None
    year, month = int(m.group(1)), int(m.group(2))
    name = UKRAINIAN_MONTHS[month - 1] if 1 <= month <= 12 else ""
    return _valid(year, month, name)


def match_iso_ukrainian(title: str) -> Optional[MonthTab]:
    m = _ISO_UKRAINIAN_RE.match(title)
    if not m:
        return None
    year, month, name = m.groups()
    return _valid(int(year), int(month), name)


def match_english(title: str) -> Optional[MonthTab]:
    m = _ENGLISH_RE.match(title)
    if not m:
        return None
    name, year = m.groups()
    return _valid(int(year), _month_by_name(ENGLISH_MONTHS, name), name)


MONTH_TAB_MATCHERS: list[Callable[[str], Optional[MonthTab]]] = [
    match_ukrainian,
    match_iso,
    match_iso_ukrainian,
    match_english,
]


def parse_tab_title(title: Optional[str]) -> Optional[MonthTab]:
    if not title or not isinstance(title, str):
        return None
    normalized = title.lower().strip()
    if not normalized:
        return None
    for matcher in MONTH_TAB_MATCHERS:
        parsed = matcher(normalized)
        if parsed:
            return parsed
    return None


def extract_month_tabs(
    sheets: Iterable[SheetInfo], today: Optional[datetime.date] = None
) -> list[MonthTabInfo]:
    today = today or datetime.date.today()
    month_tabs = []

    for sheet in sheets:
        parsed = parse_tab_title(sheet.title)
        if parsed is None:
            logger.debug(f"Skipping non-month tab {sheet.title!r} (id {sheet.sheet_id})")
            continue
        month_tabs.append(
            MonthTabInfo(
                sheet_id=sheet.sheet_id,
                title=sheet.title,
                index=sheet.index,
                year=parsed.year,
                month=parsed.month,
                month_name=parsed.month_name,
                is_current_month=(parsed.year, parsed.month) == (today.year, today.month),
            )
        )

    month_tabs.sort(key=lambda tab: (tab.year, tab.month))
    return month_tabs


def find_tab_title(sheets: list[SheetInfo], year: int, month: int) -> Optional[str]:
    """Title of the tab holding (year, month), or None."""
    for sheet in sheets:
        parsed = parse_tab_title(sheet.title)
        if parsed and (parsed.year, parsed.month) == (year, month):
            return sheet.title

    # Loose match for titles with extra words around "<місяць> <рік>"
    search = f"{UKRAINIAN_MONTHS[month - 1]} {year}"
    for sheet in sheets:
        if sheet.title and search in sheet.title.lower().strip():
            return sheet.title
    return None
