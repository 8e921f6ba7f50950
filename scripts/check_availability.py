"""
Print the derived calendar for a month straight from the configured spreadsheet.

Usage:
    python scripts/check_availability.py [YYYY-MM] [--mirador] [--guests N]

Handy after recolouring cells in the sheet: shows what the widget will offer.
"""
import argparse
import asyncio
import datetime
import logging
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.core.logging import setup_logging  # noqa: E402
from app.data.rooms_config import get_room_config_list, get_room_info  # noqa: E402
from app.domain.picker import DatesPicker  # noqa: E402
from app.schemas.availability import GuestInfo  # noqa: E402
from app.services.availability_service import AvailabilityService  # noqa: E402


def _month(value: str) -> datetime.date:
    return datetime.datetime.strptime(value, "%Y-%m").date()


def _days(dates: list[datetime.date]) -> str:
    return ", ".join(str(d.day) for d in dates) or "-"


async def check_availability(month: datetime.date, mirador: bool, guests: int | None):
    service = AvailabilityService()
    guest_info = GuestInfo(adults=guests) if guests else None
    picker = DatesPicker(feed=service, guest_info=guest_info, is_mirador=mirador, today=month)

    await picker.load()
    if picker.error:
        print(f"❌ Feed error: {picker.error}")
        return 1

    rooms = picker.index.rooms()
    print(f"\n--- Rooms in snapshot ({len(rooms)}) ---")
    for room in rooms:
        known = get_room_info(room.room_number)
        if known is None:
            print(f"  ⚠️ №{room.room_number}: {room.room_name} (not in the room catalogue, never offered)")
        elif known.room_name != room.room_name:
            print(f"  №{room.room_number}: {room.room_name} (catalogue: {known.room_name})")
        else:
            print(f"  №{room.room_number}: {room.room_name}")

    print("\n--- Capacity ---")
    for config in get_room_config_list(r.room_number for r in rooms):
        print(f"  {config.name}: up to {config.max_persons} guests, {config.price} грн/night")

    available = picker.available_dates()
    occupied = picker.occupied_dates()
    for year, month_number in picker.validator.window:
        print(f"\n--- {year}-{month_number:02d} ---")
        print("✅ Available:", _days([d for d in available if (d.year, d.month) == (year, month_number)]))
        print("⛔ Occupied: ", _days([d for d in occupied if (d.year, d.month) == (year, month_number)]))

    stats = service.sheets.cache.stats()
    print(f"\nTab cache: {stats['size']} entr{'y' if stats['size'] == 1 else 'ies'}")
    return 0


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("month", nargs="?", type=_month, default=datetime.date.today())
    parser.add_argument("--mirador", action="store_true", help="only the Mirador room")
    parser.add_argument("--guests", type=int, default=None, help="filter rooms by capacity")
    args = parser.parse_args()

    setup_logging()
    logging.getLogger("app").setLevel(logging.WARNING)
    sys.exit(asyncio.run(check_availability(args.month, args.mirador, args.guests)))


if __name__ == "__main__":
    main()
