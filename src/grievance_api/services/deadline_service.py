"""Urgency classification and business-hours SLA deadlines."""

from dataclasses import dataclass
from datetime import datetime
from datetime import time
from datetime import timedelta
from datetime import timezone

from grievance_api.database.models.base import Urgency

# Deadlines are computed on the campus clock, which has no DST
CAMPUS_TZ = timezone(timedelta(hours=5, minutes=30), name="IST")

BUSINESS_START = time(9, 0)
BUSINESS_END = time(17, 0)

SATURDAY = 5
SUNDAY = 6
FRIDAY = 4


@dataclass(frozen=True)
class SlaTier:
    """Resolution target for an urgency tier."""

    urgency: Urgency
    sla_hours: int
    label: str


HIGH_TIER = SlaTier(Urgency.HIGH, 24, "1 working day")
MEDIUM_TIER = SlaTier(Urgency.MEDIUM, 72, "3 working days")
LOW_TIER = SlaTier(Urgency.LOW, 120, "5 working days")

# Checked in order; the first tier with a matching keyword wins
_KEYWORD_TIERS: tuple[tuple[tuple[str, ...], SlaTier], ...] = (
    (("harassment", "threat"), HIGH_TIER),
    (("academic", "hostel"), MEDIUM_TIER),
)


def classify_urgency(category: str) -> SlaTier:
    """Map a free-text category to its SLA tier."""
    normalized = category.lower()
    for keywords, tier in _KEYWORD_TIERS:
        if any(keyword in normalized for keyword in keywords):
            return tier
    return LOW_TIER


def _at_business_start(moment: datetime) -> datetime:
    return moment.replace(
        hour=BUSINESS_START.hour, minute=0, second=0, microsecond=0
    )


def _next_business_morning(moment: datetime) -> datetime:
    """09:00 on the following weekday. Only called for weekday moments."""
    days = 3 if moment.weekday() == FRIDAY else 1
    return _at_business_start(moment + timedelta(days=days))


def to_campus_time(moment: datetime) -> datetime:
    """Express ``moment`` on the campus clock; naive values are campus time."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=CAMPUS_TZ)
    return moment.astimezone(CAMPUS_TZ)


def business_start(submitted_at: datetime) -> datetime:
    """When the SLA clock starts for a submission at ``submitted_at``."""
    local = to_campus_time(submitted_at)
    weekday = local.weekday()

    if weekday == SUNDAY:
        return _at_business_start(local + timedelta(days=1))
    if weekday == SATURDAY:
        return _at_business_start(local + timedelta(days=2))
    if local.hour >= BUSINESS_END.hour:
        return _next_business_morning(local)
    if local.hour < BUSINESS_START.hour:
        return _at_business_start(local)
    return local


def compute_deadline(submitted_at: datetime, sla_hours: int) -> datetime:
    """Add ``sla_hours`` business hours to a submission time.

    The clock advances one hour at a time. An hour that carries it past 17:00
    is spent moving to 09:00 on the next business day, so each increment
    consumes exactly one hour of the SLA whether or not it jumps.
    """
    deadline = business_start(submitted_at)

    for _ in range(sla_hours):
        deadline += timedelta(hours=1)
        if deadline.time() > BUSINESS_END:
            deadline = _next_business_morning(deadline)

    return deadline
