"""Turn a dump selection (-n daysago / -t digits / default) into a calendar date."""
from dataclasses import dataclass
from datetime import date, timedelta

DATE_LAYOUT = "%Y%m%d"
OVERLAY_LENGTHS = (2, 4, 6, 8)


@dataclass(frozen=True)
class Selection:
    """Which dump to use. Both fields at their defaults means the most recent one."""

    days_ago: int = 0
    digits: str = ""

    def __post_init__(self):
        if self.days_ago < 0:
            raise ValueError(f"days ago must not be negative: {self.days_ago}")
        if self.days_ago and self.digits:
            raise ValueError("days ago and an explicit date are mutually exclusive")

    @property
    def most_recent(self) -> bool:
        return not self.days_ago and not self.digits


def expand_digits(now: date, digits: str) -> str:
    """
    Overlay d, dd, mmdd, yymmdd or yyyymmdd onto now's YYYYMMDD.

    A single digit is always a day in the first nine days of the month,
    so the tens digit of the day becomes 0 instead of coming from now.
    """
    if not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"invalid date: {digits}")

    ref = now.strftime(DATE_LAYOUT)
    if len(digits) == 1:
        return ref[:-2] + "0" + digits
    if len(digits) in OVERLAY_LENGTHS:
        return ref[: len(ref) - len(digits)] + digits
    raise ValueError(f"invalid date: {digits}")


def parse_compact_date(value: str) -> date:
    y, m, d = value[:4], value[4:6], value[6:8]
    try:
        return date(int(y), int(m), int(d))
    except ValueError as exc:
        raise ValueError(f"parsing date {value!r}: {exc}") from exc


def resolve_date(now: date, selection: Selection) -> date:
    if selection.days_ago:
        try:
            return now - timedelta(days=selection.days_ago)
        except OverflowError as exc:
            raise ValueError(f"invalid days ago: {selection.days_ago}") from exc
    if selection.digits:
        return parse_compact_date(expand_digits(now, selection.digits))
    return now
