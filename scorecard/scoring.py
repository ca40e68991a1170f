"""
Metric scoring: maps raw weekly metrics to 0/1/2 sub-scores and a 0-16 total.

Each rule is a pure function that works on scalars, numpy arrays, or pandas
Series alike. compute_metric_scores applies all eight to a DataFrame in one
pass. Income is never scored.
"""

from typing import Callable, Dict

import numpy as np
import pandas as pd

from scorecard.config import ScorecardConfig, TierThresholds
from scorecard.entries import SCORED_FIELDS


SCORE_COLUMNS = tuple(f"{name}_score" for name in SCORED_FIELDS)

MAX_TOTAL_SCORE = 2 * len(SCORED_FIELDS)


# ---------------------------------------------------------------------------
# Tier primitives
# ---------------------------------------------------------------------------

def _threshold_tier(value, tier: TierThresholds):
    """2 at or above two_points, 1 at or above one_point, else 0."""
    v = np.asarray(value, dtype=np.float64)
    return np.where(v >= tier.two_points, 2, np.where(v >= tier.one_point, 1, 0))


def _exact_tier(value, tier: TierThresholds):
    """2 when equal to two_points, 1 when equal to one_point, else 0."""
    v = np.asarray(value, dtype=np.float64)
    return np.where(v == tier.two_points, 2, np.where(v == tier.one_point, 1, 0))


def _tier(value, tier: TierThresholds):
    return _exact_tier(value, tier) if tier.exact else _threshold_tier(value, tier)


# ---------------------------------------------------------------------------
# The eight rules
# ---------------------------------------------------------------------------

def score_deep_work(value, cfg: ScorecardConfig):
    return _tier(value, cfg.metrics.deep_work_h)


def score_play(value, cfg: ScorecardConfig):
    return _tier(value, cfg.metrics.play_h)


def score_real_contacts(value, cfg: ScorecardConfig):
    return _tier(value, cfg.metrics.real_contacts_per_week)


def score_sleep(value, cfg: ScorecardConfig):
    return _tier(value, cfg.metrics.sleep_score)


def score_alcohol_deviation(value, cfg: ScorecardConfig):
    # Discrete check, not monotone: 2 deviations score the same as 10
    return _tier(value, cfg.metrics.alcohol_deviation_per_week)


def score_steps(value, cfg: ScorecardConfig):
    return _tier(value, cfg.metrics.avg_steps_per_day)


def score_emergency_fund(value, cfg: ScorecardConfig):
    return _tier(value, cfg.metrics.emergency_fund_months)


def score_pipeline_actions(value, cfg: ScorecardConfig):
    return _tier(value, cfg.metrics.pipeline_actions_per_week)


SCORE_RULES: Dict[str, Callable] = {
    "deep_work_h": score_deep_work,
    "play_h": score_play,
    "real_contacts_per_week": score_real_contacts,
    "sleep_score": score_sleep,
    "alcohol_deviation_per_week": score_alcohol_deviation,
    "avg_steps_per_day": score_steps,
    "emergency_fund_months": score_emergency_fund,
    "pipeline_actions_per_week": score_pipeline_actions,
}


def score_metric(name: str, value, cfg: ScorecardConfig) -> int:
    """Score a single scalar value. None counts as zero."""
    return int(SCORE_RULES[name](0.0 if value is None else value, cfg))


# ---------------------------------------------------------------------------
# Frame transform
# ---------------------------------------------------------------------------

def compute_metric_scores(df: pd.DataFrame, cfg: ScorecardConfig) -> pd.DataFrame:
    """
    Append one <metric>_score column per scored metric plus total_score.

    Expects the metric columns to be already zero-filled; absent values
    score exactly like explicit zeros.
    """
    for name, column in zip(SCORED_FIELDS, SCORE_COLUMNS):
        df[column] = SCORE_RULES[name](df[name].to_numpy(), cfg).astype(np.int64)

    df["total_score"] = df[list(SCORE_COLUMNS)].sum(axis=1).astype(np.int64)
    return df
