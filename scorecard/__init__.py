"""
Weekly Scorecard — Deterministic Scoring and Red Flag Engine

Derives a 0-16 score, an A/B/C grade, and streak-based red flags from
weekly self-tracking entries.

Architecture:
    config      — Metric tiers, grade boundaries, streak rules (single source of truth)
    entries     — WeekEntry record, ordering, and collection edits
    coercion    — Field-level coercion of untrusted values (numbers, booleans)
    sanitizer   — Untrusted JSON → validated, sorted entries (all-or-nothing)
    scoring     — Eight metric rules and the weekly total
    detectors   — Streak fold for sleep / contacts / no-income flags
    grading     — Grade classification with red flag override
    pipeline    — Orchestration: sort → score → streaks → grade → report
    store       — JSON file load / save / import / export

Public API:
    sanitize(raw)           → sorted entries, or RejectedInput
    derive(entries)         → derived weeks
    generate_report(derived) → formatted report
"""

from scorecard.pipeline import DerivedWeek, derive, derive_frame, generate_report
from scorecard.sanitizer import RejectedInput, sanitize

__version__ = "1.0.0"

__all__ = [
    "DerivedWeek",
    "RejectedInput",
    "derive",
    "derive_frame",
    "generate_report",
    "sanitize",
]
