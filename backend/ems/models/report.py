"""Org-chart report models."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from ems.models.base import CamelModel


class HierarchyNode(CamelModel):
    id: int
    name: str
    role: str
    department: str | None = None
    department_id: int | None = None
    manager_id: int | None = None
    job_title: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    subordinates: list[HierarchyNode] = Field(default_factory=list)
