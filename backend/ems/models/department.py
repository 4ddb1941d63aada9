from __future__ import annotations

from ems.models.base import CamelModel


class DepartmentSummary(CamelModel):
    id: int
    name: str


class DepartmentResponse(DepartmentSummary):
    description: str | None = None


class DepartmentRequest(CamelModel):
    name: str
    description: str | None = None
