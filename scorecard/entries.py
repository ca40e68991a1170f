"""
Week entries: the user-editable record, its ordering, and collection edits.

The collection is treated as an immutable value. Every edit returns a new
list sorted by week_start; inputs are never mutated in place.
"""

from dataclasses import asdict, dataclass, replace
from datetime import date, timedelta
from typing import Dict, List, Optional

from scorecard.coercion import to_boolean_value, to_numeric_value


# ---------------------------------------------------------------------------
# Field catalogue (Python attribute → JSON key)
# ---------------------------------------------------------------------------

SCORED_FIELDS = (
    "deep_work_h",
    "play_h",
    "real_contacts_per_week",
    "sleep_score",
    "alcohol_deviation_per_week",
    "avg_steps_per_day",
    "emergency_fund_months",
    "pipeline_actions_per_week",
)

NUMERIC_FIELDS = SCORED_FIELDS + ("income_jpy",)

BOOLEAN_FIELDS = ("manual_red_flag", "payment_red_flag")

JSON_KEYS: Dict[str, str] = {
    "week_start": "weekStart",
    "deep_work_h": "deepWorkH",
    "play_h": "playH",
    "real_contacts_per_week": "realContactsPerWeek",
    "sleep_score": "sleepScore",
    "alcohol_deviation_per_week": "alcoholDeviationPerWeek",
    "avg_steps_per_day": "avgStepsPerDay",
    "emergency_fund_months": "emergencyFundMonths",
    "pipeline_actions_per_week": "pipelineActionsPerWeek",
    "income_jpy": "incomeJPY",
    "manual_red_flag": "manualRedFlag",
    "payment_red_flag": "paymentRedFlag",
    "notes": "notes",
}


@dataclass(frozen=True)
class WeekEntry:
    """One week of raw metrics. None means "not yet recorded"."""

    week_start: str
    deep_work_h: Optional[float] = None
    play_h: Optional[float] = None
    real_contacts_per_week: Optional[float] = None
    sleep_score: Optional[float] = None
    alcohol_deviation_per_week: Optional[float] = None
    avg_steps_per_day: Optional[float] = None
    emergency_fund_months: Optional[float] = None
    pipeline_actions_per_week: Optional[float] = None
    income_jpy: Optional[float] = None
    manual_red_flag: bool = False
    payment_red_flag: bool = False
    notes: str = ""

    def value_or_zero(self, name: str) -> float:
        value = getattr(self, name)
        return 0.0 if value is None else float(value)

    def to_dict(self) -> Dict:
        """Render with the camelCase keys used by the stored JSON format."""
        return {JSON_KEYS[k]: v for k, v in asdict(self).items()}


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------

def sort_entries(entries: List[WeekEntry]) -> List[WeekEntry]:
    """Stable ascending sort on week_start (ISO strings sort chronologically)."""
    return sorted(entries, key=lambda e: e.week_start)


# ---------------------------------------------------------------------------
# Week arithmetic
# ---------------------------------------------------------------------------

def monday_of(day: date) -> date:
    return day - timedelta(days=day.weekday())


def next_week_start(week_start: str) -> str:
    return (date.fromisoformat(week_start) + timedelta(days=7)).isoformat()


def create_empty_entry(
    week_start: Optional[str] = None,
    today: Optional[date] = None,
) -> WeekEntry:
    """A blank entry, by default for the Monday of the current week."""
    if week_start is None:
        week_start = monday_of(today or date.today()).isoformat()
    return WeekEntry(week_start=week_start)


# ---------------------------------------------------------------------------
# Collection edits
# ---------------------------------------------------------------------------

def add_week(entries: List[WeekEntry], today: Optional[date] = None) -> List[WeekEntry]:
    """Append an empty entry one week after the latest one."""
    ordered = sort_entries(entries)
    if not ordered:
        return [create_empty_entry(today=today)]
    new_start = next_week_start(ordered[-1].week_start)
    return sort_entries(ordered + [create_empty_entry(new_start)])


def copy_previous_week(entries: List[WeekEntry]) -> List[WeekEntry]:
    """
    Duplicate the latest week's metrics into the following week.

    Red-flag booleans and notes are reset; they describe a specific week
    and are not carried forward.
    """
    ordered = sort_entries(entries)
    if not ordered:
        return ordered
    last = ordered[-1]
    copied = replace(
        last,
        week_start=next_week_start(last.week_start),
        manual_red_flag=False,
        payment_red_flag=False,
        notes="",
    )
    return sort_entries(ordered + [copied])


def update_entry(entries: List[WeekEntry], index: int, **changes) -> List[WeekEntry]:
    """
    Edit fields of the entry at `index` and return the re-sorted collection.

    Numeric fields accept raw form text; it is coerced the same way stored
    data is, so unparseable input clears the field.
    """
    unknown = set(changes) - set(JSON_KEYS)
    if unknown:
        raise ValueError(f"Unknown entry fields: {sorted(unknown)}")

    coerced = {}
    for name, value in changes.items():
        if name in NUMERIC_FIELDS:
            coerced[name] = to_numeric_value(value)
        elif name in BOOLEAN_FIELDS:
            coerced[name] = to_boolean_value(value)
        elif name == "notes":
            coerced[name] = value if isinstance(value, str) else ""
        else:
            if not isinstance(value, str):
                raise ValueError("week_start must be an ISO date string")
            coerced[name] = value

    updated = list(entries)
    updated[index] = replace(updated[index], **coerced)
    return sort_entries(updated)


def delete_entry(entries: List[WeekEntry], index: int) -> List[WeekEntry]:
    """Remove one entry. The collection is never emptied."""
    if len(entries) <= 1:
        return list(entries)
    return sort_entries([e for i, e in enumerate(entries) if i != index])


def clear_all(today: Optional[date] = None) -> List[WeekEntry]:
    return [create_empty_entry(today=today)]
