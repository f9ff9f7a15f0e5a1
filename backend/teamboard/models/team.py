"""Team documents."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from teamboard.models.common import Document, Number, Score, TrimmedText

TeamStatus = Literal["active", "inactive", "on-hold"]

# Months of performance history kept per team
HISTORY_LIMIT = 6

REQUIRED_MESSAGES: dict[str, str] = {
    "name": "Team name is required",
    "description": "Team description is required",
    "lead": "Team lead name is required",
    "members": "Number of team members is required",
    "performance": "Performance score is required",
}


class TeamMonthScore(BaseModel):
    month: str
    score: Score


class TeamFields(BaseModel):
    """Caller-editable team fields, validated on create and after every update merge."""

    name: TrimmedText
    description: TrimmedText
    lead: TrimmedText
    members: Number = Field(ge=1)
    status: TeamStatus = "active"
    completedProjects: Number = Field(default=0, ge=0)
    ongoingProjects: Number = Field(default=0, ge=0)
    performance: Score
    teamPerformance: list[TeamMonthScore] = Field(default_factory=list)

    @field_validator("teamPerformance")
    @classmethod
    def _bounded_history(cls, history: list[TeamMonthScore]) -> list[TeamMonthScore]:
        months = [entry.month for entry in history]
        repeated = sorted({m for m in months if months.count(m) > 1})
        if repeated:
            raise ValueError(f"duplicate month labels: {', '.join(repeated)}")
        return history[-HISTORY_LIMIT:]


class Team(Document, TeamFields):
    """A stored team."""

    updatedAt: str | None = None


class PerformanceUpdate(BaseModel):
    performance: Score
