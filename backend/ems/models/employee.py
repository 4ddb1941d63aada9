"""Employee request/response models."""

from __future__ import annotations

from datetime import datetime

from ems.models.auth import Role
from ems.models.base import CamelModel
from ems.models.department import DepartmentSummary


class EmployeeSummary(CamelModel):
    """Manager reference embedded in employee responses."""

    id: int
    first_name: str
    last_name: str
    email: str
    job_title: str | None = None


class EmployeeResponse(CamelModel):
    id: int
    active: bool
    email: str
    role: Role
    first_name: str
    last_name: str
    job_title: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    department: DepartmentSummary | None = None
    manager: EmployeeSummary | None = None
    manager_id: int | None = None


class EmployeeRequest(CamelModel):
    """Create/update payload. ``password`` is required on create and optional on update."""

    email: str
    password: str | None = None
    first_name: str
    last_name: str
    job_title: str | None = None
    active: bool = True
    role: Role = Role.EMPLOYEE
    department_id: int | None = None
    manager_id: int | None = None
