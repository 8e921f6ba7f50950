import datetime
from html import escape

from app.core.config import settings
from app.utils.phone import format_phone, phone_link

UKRAINIAN_WEEKDAYS = [
    "понеділок",
    "вівторок",
    "середа",
    "четвер",
    "пʼятниця",
    "субота",
    "неділя",
]

# Родовий відмінок: "2 червня"
UKRAINIAN_MONTHS_GENITIVE = [
    "січня",
    "лютого",
    "березня",
    "квітня",
    "травня",
    "червня",
    "липня",
    "серпня",
    "вересня",
    "жовтня",
    "листопада",
    "грудня",
]


def format_date_uk(day: datetime.date) -> str:
    """понеділок, 2 червня 2025 р."""
    return (
        f"{UKRAINIAN_WEEKDAYS[day.weekday()]}, "
        f"{day.day} {UKRAINIAN_MONTHS_GENITIVE[day.month - 1]} {day.year} р."
    )


def format_datetime_uk(moment: datetime.datetime) -> str:
    return f"{format_date_uk(moment.date())}, {moment:%H:%M}"


class Messages:
    """
    Centralized store for booking notification texts.
    Uses settings for dynamic content.
    """

    @property
    def BOOKING_SUBMITTED(self) -> str:
        return "Заявка на бронювання успішно відправлена"

    @property
    def EMAIL_NOT_CONFIGURED(self) -> str:
        return "Email service not configured"

    @property
    def BOOKING_FAILED(self) -> str:
        return "Failed to submit booking request"

    def booking_email_subject(self, name: str) -> str:
        return f"Заявка - {name}"

    def booking_email_html(self, request, received_at: datetime.datetime) -> str:
        """HTML body of the owner's email for one BookingRequest."""
        view_type = "Mirador" if request.is_mirador else "Звичайна"
        rows = [
            ("Ім'я", escape(request.name)),
            (
                "Телефон",
                f'<a href="{phone_link(request.phone)}">{escape(format_phone(request.phone))}</a>',
            ),
            ("Заїзд", format_date_uk(request.start_date)),
            ("Виїзд", format_date_uk(request.end_date)),
            ("Ночей", str(request.nights)),
        ]
        if request.room_name and request.room_number:
            rows.append(("Кімната", f"{escape(request.room_name)} (№{request.room_number})"))
        rows.append(("Дорослих", str(request.adults)))
        rows.append(("Дітей", str(request.children)))
        if request.pets > 0:
            rows.append(("Тварин", str(request.pets)))
        rows.append(("Тип форми", view_type))
        rows.append(("Отримано", format_datetime_uk(received_at)))

        table = "\n".join(
            f'<tr><td style="padding:4px 12px 4px 0;color:#666">{label}</td>'
            f"<td style=\"padding:4px 0\"><b>{value}</b></td></tr>"
            for label, value in rows
        )
        return (
            f"<h2>Нова заявка на бронювання · {escape(settings.project_name)}</h2>\n"
            f"<table>\n{table}\n</table>"
        )

    def booking_telegram(self, request) -> str:
        room = (
            f"🏠 <b>Кімната:</b> {escape(request.room_name)} (№{request.room_number})\n"
            if request.room_name and request.room_number
            else ""
        )
        pets = f"🐕 <b>Тварин:</b> {request.pets}\n" if request.pets > 0 else ""
        return (
            f"📩 <b>Нова заявка: {escape(request.name)}</b>\n\n"
            f"📱 {escape(format_phone(request.phone))}\n"
            f"📅 {request.start_date:%d.%m.%Y} — {request.end_date:%d.%m.%Y} "
            f"({request.nights} ноч.)\n"
            f"{room}"
            f"👤 <b>Гості:</b> {request.adults} + {request.children}\n"
            f"{pets}"
            f"🔖 {'Mirador' if request.is_mirador else 'Звичайна'}"
        )


messages = Messages()
