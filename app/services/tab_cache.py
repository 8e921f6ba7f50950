"""
Cache of spreadsheet tab metadata.

Listing tabs is one Sheets API call per availability request and the tab
list changes roughly once a month, so entries live for a day by default.
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from app.core.config import settings
from app.schemas.availability import MonthTabInfo, SheetInfo

logger = logging.getLogger(__name__)


@dataclass
class TabCacheEntry:
    spreadsheet_id: str
    tabs: list[SheetInfo]
    month_tabs: list[MonthTabInfo]
    timestamp: float
    expires_at: float = field(default=0.0)


class TabCache:
    def __init__(
        self,
        ttl_seconds: Optional[int] = None,
        max_entries: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = settings.tab_cache_ttl_seconds if ttl_seconds is None else ttl_seconds
        self.max_entries = settings.tab_cache_max_entries if max_entries is None else max_entries
        self._clock = clock
        self._entries: dict[str, TabCacheEntry] = {}

    @staticmethod
    def make_key(spreadsheet_id: str, credential: str) -> str:
        # Only a prefix of the credential goes into the key
        return f"{spreadsheet_id}_{credential[:8]}"

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[TabCacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            logger.debug(f"Tab cache entry expired: {key}")
            self.evict(key)
            return None
        return entry

    def set(
        self,
        key: str,
        spreadsheet_id: str,
        tabs: list[SheetInfo],
        month_tabs: list[MonthTabInfo],
    ) -> TabCacheEntry:
        now = self._clock()
        entry = TabCacheEntry(
            spreadsheet_id=spreadsheet_id,
            tabs=tabs,
            month_tabs=month_tabs,
            timestamp=now,
            expires_at=now + self.ttl_seconds,
        )
        self._entries[key] = entry

        if len(self._entries) > self.max_entries:
            # Keep the newest entries only
            by_age = sorted(self._entries.items(), key=lambda item: item[1].timestamp, reverse=True)
            for stale_key, _ in by_age[self.max_entries:]:
                self.evict(stale_key)

        return entry

    def evict(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self, spreadsheet_id: Optional[str] = None) -> int:
        """Drop all entries, or only those of one spreadsheet. Returns how many went."""
        if spreadsheet_id:
            keys = [k for k, entry in self._entries.items() if entry.spreadsheet_id == spreadsheet_id]
            for key in keys:
                self.evict(key)
            logger.info(f"Cleared tab cache for spreadsheet {spreadsheet_id}")
            return len(keys)

        count = len(self._entries)
        self._entries.clear()
        logger.info("Cleared all tab cache")
        return count

    def stats(self) -> dict:
        """Size plus per-entry age and remaining lifetime, in minutes."""
        now = self._clock()
        return {
            "size": len(self._entries),
            "entries": [
                {
                    "spreadsheetId": entry.spreadsheet_id,
                    "age": round((now - entry.timestamp) / 60),
                    "expiresIn": round((entry.expires_at - now) / 60),
                }
                for entry in self._entries.values()
            ],
        }
