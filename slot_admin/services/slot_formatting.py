from datetime import date, datetime

from slot_admin.schemas.slot import Slot, SlotView

_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def format_slot_date(raw_date: str) -> str:
    """Renders ``2025-03-21`` as ``March 21, Friday``."""
    if not raw_date:
        return ""
    try:
        parsed_date = date.fromisoformat(raw_date.strip()[:10])
    except ValueError:
        return raw_date
    month_name = _MONTH_NAMES[parsed_date.month - 1]
    weekday_name = _WEEKDAY_NAMES[parsed_date.weekday()]
    return f"{month_name} {parsed_date.day}, {weekday_name}"


def format_slot_time(raw_time: str) -> str:
    """Renders a 24-hour ``HH:MM`` as ``h:MM AM/PM``."""
    if not raw_time:
        return ""
    try:
        parsed_time = datetime.strptime(raw_time.strip()[:5], "%H:%M").time()
    except ValueError:
        return raw_time
    suffix = "PM" if parsed_time.hour >= 12 else "AM"
    hour = parsed_time.hour % 12 or 12
    return f"{hour}:{parsed_time.minute:02d} {suffix}"


def build_slot_view(slot: Slot) -> SlotView:
    return SlotView(
        id=slot.id,
        date=slot.date,
        time=slot.time,
        display_date=format_slot_date(slot.date),
        display_time=format_slot_time(slot.time),
    )


def build_slot_views(slots: list[Slot]) -> list[SlotView]:
    return [build_slot_view(slot) for slot in slots if slot.is_available]
