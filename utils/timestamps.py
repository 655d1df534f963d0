"""Timestamp formatting utility."""

from __future__ import annotations

import math
import time as _time
from datetime import datetime

from database.exceptions import InvalidTimestampError


def _render(moment: datetime) -> str:
    """Render *moment* as YYYY-MM-DD HH:MM:SS with a four-digit year."""
    return f"{moment.year:04d}-{moment:%m-%d %H:%M:%S}"


def format_timestamp(time: datetime | float | None = None) -> str:
    """Format *time* as ``YYYY-MM-DD HH:MM:SS`` in the local time zone.

    *time* may be Unix epoch seconds, a ``datetime`` (naive values are
    taken as local, aware ones are converted), or ``None`` for now.

    Raises InvalidTimestampError for values that cannot be represented.
    """
    if time is None:
        time = _time.time()

    if isinstance(time, datetime):
        if time.tzinfo is None:
            return _render(time)
        try:
            return _render(time.astimezone())
        except (OverflowError, OSError, ValueError) as exc:
            msg = f"Timestamp out of range: {time.isoformat()}"
            raise InvalidTimestampError(msg) from exc

    if isinstance(time, bool) or not isinstance(time, (int, float)):
        msg = f"Unsupported timestamp type: {type(time).__name__}"
        raise InvalidTimestampError(msg)

    if isinstance(time, float) and not math.isfinite(time):
        msg = f"Timestamp is not finite: {time}"
        raise InvalidTimestampError(msg)

    try:
        moment = datetime.fromtimestamp(time)
    except (OverflowError, OSError, ValueError) as exc:
        msg = f"Timestamp out of range: {time}"
        raise InvalidTimestampError(msg) from exc
    return _render(moment)
