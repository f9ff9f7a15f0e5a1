"""Month labels and default performance data."""

from __future__ import annotations

import random
from datetime import date, datetime
from typing import Any

from teamboard.models.team import HISTORY_LIMIT

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
CURRENT_EMPLOYEE_SCORE = 85
DEFAULT_TEAM_SCORE = 75


def month_label(day: date | datetime) -> str:
    return MONTH_ABBREVIATIONS[day.month - 1]


def previous_month_labels(count: int, today: date | datetime) -> list[str]:
    """Labels of the ``count`` calendar months before ``today``, oldest first."""
    labels: list[str] = []
    index = today.month - 1
    for _ in range(count):
        index = (index - 1) % 12
        labels.append(MONTH_ABBREVIATIONS[index])
    labels.reverse()
    return labels


def default_employee_performance(today: date | datetime, rng: random.Random) -> dict[str, Any]:
    monthly = [{"month": m, "score": rng.randint(70, 89)} for m in previous_month_labels(5, today)]
    monthly.append({"month": month_label(today), "score": CURRENT_EMPLOYEE_SCORE})
    return {
        "monthlyPerformance": monthly,
        "skillDistribution": [
            {"name": "Technical", "value": 40},
            {"name": "Soft Skills", "value": 30},
            {"name": "Problem Solving", "value": 20},
            {"name": "Leadership", "value": 10},
        ],
        "projectCompletion": [
            {"name": "Completed", "value": 80},
            {"name": "Pending", "value": 20},
        ],
        "codeQuality": [
            {"name": "Clean Code", "value": 75},
            {"name": "Needs Improvement", "value": 25},
        ],
    }


def default_team_history(today: date | datetime, rng: random.Random, current_score: Any = None) -> list[dict[str, Any]]:
    history = [{"month": m, "score": rng.randint(80, 89)} for m in previous_month_labels(5, today)]
    history.append({"month": month_label(today), "score": DEFAULT_TEAM_SCORE if current_score is None else current_score})
    return history


def record_month_score(
    history: list[dict[str, Any]],
    month: str,
    score: Any,
    limit: int = HISTORY_LIMIT,
) -> list[dict[str, Any]]:
    """Upsert ``score`` under ``month`` and keep only the newest ``limit`` entries.

    An existing entry for the month is overwritten in place; otherwise a new
    entry is appended. The oldest entries are dropped first.
    """
    updated = [dict(entry) for entry in history]
    for entry in updated:
        if entry.get("month") == month:
            entry["score"] = score
            break
    else:
        updated.append({"month": month, "score": score})
    return updated[-limit:]
