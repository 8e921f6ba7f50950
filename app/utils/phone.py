import re


def normalize_phone(raw: str | None) -> str:
    """Digits only, Ukrainian numbers brought to 380XXXXXXXXX."""
    if not raw:
        return ""
    p = re.sub(r"[^0-9]", "", raw)
    if p.startswith("0") and len(p) == 10:
        p = "38" + p
    if len(p) == 9:
        p = "380" + p
    return p


def format_phone(raw: str | None) -> str:
    """+380 (XX) XXX-XX-XX for Ukrainian numbers, input unchanged otherwise."""
    p = normalize_phone(raw)
    if len(p) != 12 or not p.startswith("380"):
        return (raw or "").strip()
    return f"+{p[:3]} ({p[3:5]}) {p[5:8]}-{p[8:10]}-{p[10:]}"


def phone_link(raw: str | None) -> str:
    p = normalize_phone(raw)
    return f"tel:+{p}" if p else ""
