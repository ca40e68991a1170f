"""
Streak-based red flag detection: low sleep, no contacts, no income.

The three run-length counters are folded over the weeks in chronological
order. State is an immutable StreakState threaded through the fold and
created fresh for every derivation, so nothing carries over between runs.
"""

from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Tuple

import pandas as pd

from scorecard.config import ScorecardConfig


AUTO_FLAG_COLUMNS = ("sleep_flag", "contacts_flag", "no_income_flag")


class StreakState(NamedTuple):
    """Consecutive failing weeks seen so far, per condition."""

    sleep: int = 0
    contacts: int = 0
    no_income: int = 0


@dataclass(frozen=True)
class AutoFlags:
    sleep: bool = False
    contacts: bool = False
    no_income: bool = False

    def any(self) -> bool:
        return self.sleep or self.contacts or self.no_income


# ---------------------------------------------------------------------------
# Single step
# ---------------------------------------------------------------------------

def _run(count: int, failing: bool) -> int:
    return count + 1 if failing else 0


def advance_streaks(
    state: StreakState,
    sleep_score: float,
    real_contacts: float,
    income: float,
    cfg: ScorecardConfig,
) -> StreakState:
    """
    Fold one week into the streak state.

    Values must already be absence-as-zero; a missing income counts as
    no income.
    """
    st = cfg.streaks
    return StreakState(
        sleep=_run(state.sleep, sleep_score <= st.low_sleep_ceiling),
        contacts=_run(state.contacts, real_contacts <= st.no_contact_ceiling),
        no_income=_run(state.no_income, income <= st.no_income_ceiling),
    )


def flags_for(state: StreakState, cfg: ScorecardConfig) -> AutoFlags:
    st = cfg.streaks
    return AutoFlags(
        sleep=state.sleep >= st.sleep_weeks,
        contacts=state.contacts >= st.contact_weeks,
        no_income=state.no_income >= st.no_income_weeks,
    )


# ---------------------------------------------------------------------------
# Full scan
# ---------------------------------------------------------------------------

def scan_streaks(
    weeks: Iterable[Tuple[float, float, float]],
    cfg: ScorecardConfig,
) -> List[StreakState]:
    """
    Run the fold over (sleep_score, real_contacts, income) triples.

    Returns the state after each week, parallel to the input.
    """
    state = StreakState()
    states: List[StreakState] = []
    for sleep_score, real_contacts, income in weeks:
        state = advance_streaks(state, sleep_score, real_contacts, income, cfg)
        states.append(state)
    return states


def compute_streak_flags(df: pd.DataFrame, cfg: ScorecardConfig) -> pd.DataFrame:
    """
    Append streak counters and the three auto-flag columns.

    The frame must be sorted chronologically with zero-filled metrics.
    """
    states = scan_streaks(
        zip(df["sleep_score"], df["real_contacts_per_week"], df["income_jpy"]),
        cfg,
    )
    flags = [flags_for(s, cfg) for s in states]

    df["sleep_streak"] = [s.sleep for s in states]
    df["contact_streak"] = [s.contacts for s in states]
    df["no_income_streak"] = [s.no_income for s in states]

    df["sleep_flag"] = [f.sleep for f in flags]
    df["contacts_flag"] = [f.contacts for f in flags]
    df["no_income_flag"] = [f.no_income for f in flags]

    return df


# ---------------------------------------------------------------------------
# Overall red flag
# ---------------------------------------------------------------------------

def compute_red_flags(df: pd.DataFrame) -> pd.DataFrame:
    """A week is red-flagged by either manual override or any auto flag."""
    df["overall_red_flag"] = (
        df["manual_red_flag"].astype(bool)
        | df["payment_red_flag"].astype(bool)
        | df[list(AUTO_FLAG_COLUMNS)].any(axis=1)
    )
    return df
