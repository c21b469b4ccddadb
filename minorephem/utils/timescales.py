"""
Conversions between civil timestamps and Julian Ephemeris Dates.

Julian Ephemeris Dates are Julian dates on the TT scale; civil timestamps are
UTC. astropy.time handles leap seconds and the TT-TAI offset.
"""

import logging
from datetime import datetime, timezone

from astropy.time import Time

from ..config import TIMESTAMP_FORMAT
from ..exceptions import InvalidTimestampError

log = logging.getLogger(__name__)


def calendar_to_jd(year: int, month: int, day: int) -> float:
    """Julian Ephemeris Date at 0h TT of a Gregorian calendar date."""
    return float(Time(datetime(year, month, day), scale='tt').jd)


def parse_timestamp(text: str) -> datetime:
    """
    Parses a UTC timestamp of the form 2019-10-04T00:00:00Z.

    Raises:
        InvalidTimestampError: If the text does not match TIMESTAMP_FORMAT.
    """
    try:
        return datetime.strptime(text.strip(), TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
    except (ValueError, AttributeError) as e:
        raise InvalidTimestampError(
            f"Invalid timestamp '{text}'. Expected format YYYY-MM-DDTHH:MM:SSZ"
        ) from e


def datetime_to_jde(dt: datetime) -> float:
    """UTC datetime (naive datetimes are taken as UTC) to Julian Ephemeris Date."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return float(Time(dt, scale='utc').tt.jd)


def jde_to_datetime(jde: float) -> datetime:
    """Julian Ephemeris Date to an aware UTC datetime."""
    return Time(jde, format='jd', scale='tt').utc.to_datetime(timezone=timezone.utc)
