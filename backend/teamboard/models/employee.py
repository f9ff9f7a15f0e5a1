"""Employee documents."""

from __future__ import annotations

from pydantic import BaseModel, Field

from teamboard.models.common import Document, MonthScore, NameValue, Number, RequiredText


class EmployeePerformance(BaseModel):
    skillDistribution: list[NameValue] = Field(default_factory=list)
    monthlyPerformance: list[MonthScore] = Field(default_factory=list)
    projectCompletion: list[NameValue] = Field(default_factory=list)
    codeQuality: list[NameValue] = Field(default_factory=list)


class EmployeeFields(BaseModel):
    """Caller-editable employee fields, validated on create and after every update merge."""

    name: RequiredText
    role: RequiredText
    team: RequiredText
    yearsExperience: Number
    email: RequiredText
    phone: RequiredText
    bio: str | None = None
    skills: list[str] = Field(default_factory=list)
    projects: list[str] = Field(default_factory=list)
    costing: list[str] = Field(default_factory=list)
    available: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    performance: EmployeePerformance = Field(default_factory=EmployeePerformance)


class Employee(Document, EmployeeFields):
    """A stored employee."""
