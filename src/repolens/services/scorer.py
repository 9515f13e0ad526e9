"""Health score: fixed linear penalties over the aggregate finding counts.

The score is not normalised by repository size, so a huge repository and a
tiny one are judged on the same absolute scale.
"""

from __future__ import annotations

from dataclasses import dataclass

from repolens.domain.entities import FindingTotals

# ── Weight constants ────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ScoreWeights:
    """Points deducted per unit of each finding."""

    long_file: int = 3
    todo: int = 1
    console_log: int = 2
    secret_hint: int = 10


DEFAULT_WEIGHTS = ScoreWeights()

MAX_SCORE = 100
MIN_SCORE = 0

HEALTHY_THRESHOLD = 80
RISKY_THRESHOLD = 50

# (attribute, threshold, message). The insight fires when the count exceeds the threshold.
_INSIGHT_RULES: tuple[tuple[str, int, str], ...] = (
    ("long_files", 5, "Consider splitting large files into smaller modules."),
    ("todos", 10, "High number of TODOs may indicate unfinished features."),
    ("console_logs", 5, "Remove console.logs before production deployment."),
    (
        "secret_hints",
        0,
        "Lines resembling hard-coded credentials were found "
        "(substring heuristic, verify manually).",
    ),
)

CLEAN_INSIGHT = "Codebase looks clean with no major red flags."


# ── Public API ──────────────────────────────────────────────────────────────


def compute_score(totals: FindingTotals, weights: ScoreWeights = DEFAULT_WEIGHTS) -> int:
    """Return ``100 - penalties`` clamped to ``[0, 100]``."""
    penalty = (
        weights.long_file * totals.long_files
        + weights.todo * totals.todos
        + weights.console_log * totals.console_logs
        + weights.secret_hint * totals.secret_hints
    )
    return max(MIN_SCORE, min(MAX_SCORE, MAX_SCORE - penalty))


def health_label(score: int) -> str:
    if score >= HEALTHY_THRESHOLD:
        return "Healthy"
    if score < RISKY_THRESHOLD:
        return "Risky"
    return "Needs Review"


def build_insights(totals: FindingTotals) -> list[str]:
    """Advisory hints derived from the totals, in a fixed order."""
    insights = [
        message
        for attr, threshold, message in _INSIGHT_RULES
        if getattr(totals, attr) > threshold
    ]
    return insights or [CLEAN_INSIGHT]
