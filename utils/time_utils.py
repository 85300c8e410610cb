from datetime import datetime, tzinfo

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

TIME_FORMAT = "%d.%m.%Y %H:%M"


def now_str(tz: tzinfo | None = None) -> str:
    """Return current timestamp as string in the common format."""
    return datetime.now(tz).strftime(TIME_FORMAT)


def parse_datetime(value: datetime | str) -> datetime:
    """Parse ISO-like strings (``2023-11-23T10:00:00``, ``2023-11-23 10:00``).

    Aware values are converted to local naive time, the store keeps naive
    local timestamps.
    """
    if isinstance(value, datetime):
        result = value
    else:
        result = date_parser.parse(str(value))
    if result.tzinfo is not None:
        result = result.astimezone().replace(tzinfo=None)
    return result


def month_bounds(moment: datetime) -> tuple[datetime, datetime]:
    """Return ``[start, end)`` of the calendar month containing ``moment``."""
    start = moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return start, start + relativedelta(months=1)
