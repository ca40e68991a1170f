"""
Centralized configuration for metric tiers, grade boundaries, and streak rules.

Every tunable constant lives here. The scoring, flag, and grading modules
read their thresholds from a ScorecardConfig and never hard-code numbers.
"""

from dataclasses import dataclass, field
from typing import Dict


# ---------------------------------------------------------------------------
# Metric tiers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TierThresholds:
    """
    Boundaries for a single metric's 0/1/2 sub-score.

    Threshold tiers are inclusive (value >= two_points → 2).
    Exact tiers match discrete values instead (value == two_points → 2).
    """

    two_points: float
    one_point: float
    exact: bool = False

    def __post_init__(self):
        if not self.exact and self.two_points < self.one_point:
            raise ValueError(
                f"two_points ({self.two_points}) must be >= one_point ({self.one_point})"
            )


@dataclass(frozen=True)
class MetricThresholds:
    """Tier boundaries for the eight scored metrics."""

    deep_work_h: TierThresholds = field(default_factory=lambda: TierThresholds(12, 6))
    play_h: TierThresholds = field(default_factory=lambda: TierThresholds(6, 2))
    real_contacts_per_week: TierThresholds = field(
        default_factory=lambda: TierThresholds(1, 0.5)
    )
    sleep_score: TierThresholds = field(default_factory=lambda: TierThresholds(7, 5))

    # Zero deviations is best, exactly one is tolerated
    alcohol_deviation_per_week: TierThresholds = field(
        default_factory=lambda: TierThresholds(0, 1, exact=True)
    )

    avg_steps_per_day: TierThresholds = field(
        default_factory=lambda: TierThresholds(7000, 4000)
    )
    emergency_fund_months: TierThresholds = field(
        default_factory=lambda: TierThresholds(12, 6)
    )
    pipeline_actions_per_week: TierThresholds = field(
        default_factory=lambda: TierThresholds(2, 1)
    )


# ---------------------------------------------------------------------------
# Grading
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GradeThresholds:
    """Minimum total score for each grade above C."""

    a_min: int = 13
    b_min: int = 8

    def __post_init__(self):
        if self.a_min <= self.b_min:
            raise ValueError(f"a_min ({self.a_min}) must exceed b_min ({self.b_min})")


EMOJI_LABELS: Dict[str, str] = {
    "A": "🟢A",
    "B": "🟡B",
    "C": "🔴C",
}


# ---------------------------------------------------------------------------
# Streak flags
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StreakThresholds:
    """
    Failure conditions and run lengths for the automatic red flags.

    A week "fails" when its value is at or below the ceiling; a flag is raised
    once the run of consecutive failing weeks reaches the given length.
    """

    low_sleep_ceiling: float = 4.0
    sleep_weeks: int = 2

    no_contact_ceiling: float = 0.0
    contact_weeks: int = 2

    no_income_ceiling: float = 0.0
    no_income_weeks: int = 8

    def __post_init__(self):
        for name in ("sleep_weeks", "contact_weeks", "no_income_weeks"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)}")


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StorageParams:
    """File names and formatting for persisted / exported entries."""

    data_file: str = "scenario-scorecard-data.json"
    export_indent: int = 2


# ---------------------------------------------------------------------------
# Top-level config aggregate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScorecardConfig:
    """Complete engine configuration. Pass to derive() to override defaults."""

    metrics: MetricThresholds = field(default_factory=MetricThresholds)
    grades: GradeThresholds = field(default_factory=GradeThresholds)
    streaks: StreakThresholds = field(default_factory=StreakThresholds)
    storage: StorageParams = field(default_factory=StorageParams)
