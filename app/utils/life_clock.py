"""Life clock calculations: lived time and countdown to a fixed horizon"""
from datetime import date, datetime, time, timezone
from typing import Optional

from pydantic import BaseModel

MAX_AGE_YEARS = 90
MAX_VALID_AGE_YEARS = 100

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR
MS_PER_MONTH = 30.44 * MS_PER_DAY
MS_PER_YEAR = 365.25 * MS_PER_DAY


class LifeCountdown(BaseModel):
    lived_years: float
    remaining_years: float
    progress_percent: float
    life_stage: str
    years: int
    months: int
    days: int
    hours: int
    minutes: int
    seconds: int


def _as_utc_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def validate_birthdate(birthdate: date | datetime, now: Optional[datetime] = None) -> None:
    """
    Raises:
        ValueError: birthdate is in the future or more than 100 years ago
    """
    birth = _as_utc_datetime(birthdate)
    now = _as_utc_datetime(now or datetime.now(timezone.utc))
    if birth > now:
        raise ValueError("You cannot be born in the future")
    age_years = (now - birth).total_seconds() * MS_PER_SECOND / MS_PER_YEAR
    if age_years > MAX_VALID_AGE_YEARS:
        raise ValueError(f"Age cannot exceed {MAX_VALID_AGE_YEARS} years")


def life_stage(lived_years: float) -> str:
    if lived_years <= 25:
        return "early"
    if lived_years <= 50:
        return "mid"
    if lived_years <= 75:
        return "late"
    return "final"


def life_countdown(
    birthdate: date | datetime,
    now: Optional[datetime] = None,
    max_age: int = MAX_AGE_YEARS,
) -> LifeCountdown:
    """
    Time lived and time left until `max_age`.

    A year is 365.25 days and a month 30.44 days. Past the horizon every
    countdown component is zero.
    """
    birth = _as_utc_datetime(birthdate)
    now = _as_utc_datetime(now or datetime.now(timezone.utc))

    lived_ms = (now - birth).total_seconds() * MS_PER_SECOND
    left_ms = max_age * MS_PER_YEAR - lived_ms
    lived_years = lived_ms / MS_PER_YEAR

    base = dict(
        lived_years=lived_years,
        remaining_years=max(left_ms / MS_PER_YEAR, 0.0),
        progress_percent=min(lived_years / max_age * 100, 100.0),
        life_stage=life_stage(lived_years),
    )
    if left_ms <= 0:
        return LifeCountdown(**base, years=0, months=0, days=0, hours=0, minutes=0, seconds=0)

    return LifeCountdown(
        **base,
        years=int(left_ms // MS_PER_YEAR),
        months=int((left_ms % MS_PER_YEAR) // MS_PER_MONTH),
        days=int((left_ms % MS_PER_MONTH) // MS_PER_DAY),
        hours=int((left_ms % MS_PER_DAY) // MS_PER_HOUR),
        minutes=int((left_ms % MS_PER_HOUR) // MS_PER_MINUTE),
        seconds=int((left_ms % MS_PER_MINUTE) // MS_PER_SECOND),
    )
