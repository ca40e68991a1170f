"""
Grade classification: maps a weekly total score and red-flag state to A/B/C.

A raised red flag always forces C; the pre-override grade never leaves
this module.
"""

import pandas as pd

from scorecard.config import EMOJI_LABELS, ScorecardConfig


def classify_grade(total_score: int, red_flag: bool, cfg: ScorecardConfig) -> str:
    """
    Classify one week.

    Decision order matters — the red flag override is checked first.

        C  — any red flag, or total below b_min
        A  — total >= a_min
        B  — total >= b_min
    """
    g = cfg.grades

    if red_flag:
        return "C"

    if total_score >= g.a_min:
        return "A"

    if total_score >= g.b_min:
        return "B"

    return "C"


def emoji_label(grade: str) -> str:
    return EMOJI_LABELS[grade]


def compute_grades(df: pd.DataFrame, cfg: ScorecardConfig) -> pd.DataFrame:
    """Append grade and emoji_label columns (requires overall_red_flag)."""
    grades = [
        classify_grade(int(total), bool(flag), cfg)
        for total, flag in zip(df["total_score"], df["overall_red_flag"])
    ]

    df["grade"] = grades
    df["emoji_label"] = [emoji_label(g) for g in grades]
    return df
