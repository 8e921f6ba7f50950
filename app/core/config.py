import os
from dotenv import load_dotenv
from pydantic import BaseModel

# Загрузка переменных из .env
load_dotenv()


class Settings(BaseModel):
    project_name: str = "Mirador Booking"

    # Google Sheets
    booking_sheet_id: str = ""
    google_api_key: str = ""
    google_sheets_credentials_file: str = ""

    # Room number -> sheet row, "room:row" pairs
    sheet_room_rows: str = "1:4,2:5,3:6,4:8,5:9,6:10"

    # Tab cache
    tab_cache_ttl_seconds: int = 24 * 60 * 60
    tab_cache_max_entries: int = 10

    # Single-room widget variant
    mirador_room_number: int = 7

    # Email (Resend)
    resend_api_key: str = ""
    receiver_email: str = ""
    sender_email: str = "onboarding@resend.dev"

    # Optional Telegram copy of booking requests
    telegram_bot_token: str = ""
    telegram_chat_id: int = 0

    # Origins allowed to call the API from the embedded widget
    cors_origins: list[str] = ["*"]

    # Rate limiting settings
    rate_limit_enabled: bool = True  # Killswitch for quick disable
    rate_limit_booking: str = "10/minute"

    # Logging settings
    log_format: str = "console"  # Options: "console", "json"
    log_slow_request_threshold_ms: int = 500  # Log timing only if duration > threshold

    @property
    def room_rows(self) -> dict[int, int]:
        """Parsed SHEET_ROOM_ROWS, ordered by room number."""
        mapping: dict[int, int] = {}
        for pair in self.sheet_room_rows.split(","):
            if ":" in pair:
                room_number, row = pair.strip().split(":")
                mapping[int(room_number)] = int(row)
        return dict(sorted(mapping.items()))


settings = Settings(
    booking_sheet_id=os.environ.get("BOOKING_SHEET_ID", ""),
    google_api_key=os.environ.get("GOOGLE_API_KEY", ""),
    google_sheets_credentials_file=os.environ.get("GOOGLE_SHEETS_CREDENTIALS_FILE", ""),
    sheet_room_rows=os.environ.get("SHEET_ROOM_ROWS", "1:4,2:5,3:6,4:8,5:9,6:10"),
    tab_cache_ttl_seconds=int(os.environ.get("TAB_CACHE_TTL_SECONDS", str(24 * 60 * 60))),
    tab_cache_max_entries=int(os.environ.get("TAB_CACHE_MAX_ENTRIES", "10")),
    mirador_room_number=int(os.environ.get("MIRADOR_ROOM_NUMBER", "7")),
    resend_api_key=os.environ.get("RESEND_API_KEY", ""),
    receiver_email=os.environ.get("RECEIVER_EMAIL", ""),
    sender_email=os.environ.get("SENDER_EMAIL", "onboarding@resend.dev"),
    telegram_bot_token=os.environ.get("TELEGRAM_BOT_TOKEN", ""),
    telegram_chat_id=int(os.environ.get("TELEGRAM_CHAT_ID", "0")),
    cors_origins=[
        origin.strip()
        for origin in os.environ.get("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ],
    rate_limit_enabled=os.environ.get("RATE_LIMIT_ENABLED", "true").lower() == "true",
    rate_limit_booking=os.environ.get("RATE_LIMIT_BOOKING", "10/minute"),
    log_format=os.environ.get("LOG_FORMAT", "console"),
    log_slow_request_threshold_ms=int(
        os.environ.get("LOG_SLOW_REQUEST_THRESHOLD_MS", "500")
    ),
)
