"""
Pipeline orchestration: sort → frame → score → streaks → red flags → grade.

Derivation is a pure function of the entry list. Every call rebuilds the
frame and the streak state from scratch; a change to any week means
re-deriving the whole sequence. Report formatting lives here too.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

import pandas as pd

from scorecard.config import ScorecardConfig
from scorecard.detectors import AutoFlags, compute_red_flags, compute_streak_flags
from scorecard.entries import BOOLEAN_FIELDS, NUMERIC_FIELDS, WeekEntry, sort_entries
from scorecard.grading import compute_grades
from scorecard.scoring import MAX_TOTAL_SCORE, compute_metric_scores


# ---------------------------------------------------------------------------
# Derived record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DerivedWeek:
    """A week entry with its computed score, grade, and flags. Never stored."""

    entry: WeekEntry
    total_score: int
    grade: str
    auto_flags: AutoFlags
    overall_red_flag: bool
    emoji_label: str

    @property
    def week_start(self) -> str:
        return self.entry.week_start

    def to_dict(self) -> Dict:
        data = self.entry.to_dict()
        data.update({
            "totalScore": self.total_score,
            "grade": self.grade,
            "emojiLabel": self.emoji_label,
            "autoFlags": {
                "sleep": self.auto_flags.sleep,
                "contacts": self.auto_flags.contacts,
                "noIncome": self.auto_flags.no_income,
            },
            "overallRedFlag": self.overall_red_flag,
        })
        return data


# ---------------------------------------------------------------------------
# Frame construction
# ---------------------------------------------------------------------------

def _entries_frame(entries: List[WeekEntry]) -> pd.DataFrame:
    """One row per entry; absent metrics become 0.0."""
    data = {"week_start": [e.week_start for e in entries]}
    for name in NUMERIC_FIELDS:
        data[name] = pd.Series([e.value_or_zero(name) for e in entries], dtype="float64")
    for name in BOOLEAN_FIELDS:
        data[name] = pd.Series([bool(getattr(e, name)) for e in entries], dtype=bool)
    return pd.DataFrame(data)


# ---------------------------------------------------------------------------
# Core derivation (PURE FUNCTION — NO I/O)
# ---------------------------------------------------------------------------

def derive_frame(
    entries: List[WeekEntry],
    cfg: ScorecardConfig | None = None,
) -> pd.DataFrame:
    """
    Full derivation as a DataFrame, one row per week in chronological order.

    Columns include the zero-filled metrics, every <metric>_score,
    total_score, the streak counters, the auto-flag columns,
    overall_red_flag, grade, and emoji_label.
    """
    if cfg is None:
        cfg = ScorecardConfig()

    df = _entries_frame(sort_entries(entries))
    if df.empty:
        return df

    # Stage 1: Score
    df = compute_metric_scores(df, cfg)

    # Stage 2: Streaks
    df = compute_streak_flags(df, cfg)

    # Stage 3: Red flags + grade
    df = compute_red_flags(df)
    df = compute_grades(df, cfg)

    return df


def derive(
    entries: List[WeekEntry],
    cfg: ScorecardConfig | None = None,
) -> List[DerivedWeek]:
    """Derive score, grade, and flags for every week, sorted by week_start."""
    ordered = sort_entries(entries)
    df = derive_frame(ordered, cfg)
    if df.empty:
        return []

    return [
        DerivedWeek(
            entry=entry,
            total_score=int(total),
            grade=str(grade),
            auto_flags=AutoFlags(
                sleep=bool(sleep), contacts=bool(contacts), no_income=bool(no_income)
            ),
            overall_red_flag=bool(red),
            emoji_label=str(label),
        )
        for entry, total, grade, sleep, contacts, no_income, red, label in zip(
            ordered,
            df["total_score"],
            df["grade"],
            df["sleep_flag"],
            df["contacts_flag"],
            df["no_income_flag"],
            df["overall_red_flag"],
            df["emoji_label"],
        )
    ]


def score_series(derived: List[DerivedWeek]) -> pd.Series:
    """Total score per week, indexed by week_start, for charting."""
    return pd.Series(
        [w.total_score for w in derived],
        index=pd.Index([w.week_start for w in derived], name="week_start"),
        name="total_score",
        dtype="int64",
    )


# ---------------------------------------------------------------------------
# Report generation
# ---------------------------------------------------------------------------

def flag_labels(week: DerivedWeek) -> str:
    labels = []
    if week.auto_flags.sleep:
        labels.append("Sleep")
    if week.auto_flags.contacts:
        labels.append("Contacts")
    if week.auto_flags.no_income:
        labels.append("No income")
    if week.entry.manual_red_flag:
        labels.append("Manual")
    if week.entry.payment_red_flag:
        labels.append("Payment")
    return " / ".join(labels) if labels else "-"


def grade_description(week: Optional[DerivedWeek]) -> str:
    if week is None:
        return "-"
    if week.overall_red_flag:
        return "C (red flag)"
    return week.grade


def generate_report(derived: List[DerivedWeek]) -> str:
    """Format derived weeks as a human-readable text report."""
    latest = derived[-1] if derived else None
    score = f"{latest.total_score} / {MAX_TOTAL_SCORE}" if latest else "-"

    lines = [
        "WEEKLY SCORECARD REPORT",
        "=" * 58,
        "",
        f"  Latest Week         : {latest.week_start if latest else '-'}",
        f"  Score               : {score}",
        f"  Grade               : {grade_description(latest)}",
        f"  Red Flags           : {flag_labels(latest) if latest else '-'}",
        "",
        "  History:",
    ]

    for number, week in enumerate(derived, start=1):
        lines.append(
            f"    Week {number:<3d} {week.week_start}  "
            f"{week.total_score:>2d} / {MAX_TOTAL_SCORE}  {week.emoji_label}  "
            f"{flag_labels(week)}"
        )

    if latest and latest.overall_red_flag:
        lines.append("")
        lines.append("  ⚠  RED FLAG: Latest week is graded C until the flag clears")

    lines.append("")
    lines.append("=" * 58)
    return "\n".join(lines)
