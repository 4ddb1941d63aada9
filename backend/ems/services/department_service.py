from __future__ import annotations

import logging

from ems.core.exceptions import NotFoundError, ValidationError
from ems.models.department import DepartmentRequest, DepartmentResponse
from ems.models.entities import Department
from ems.repositories.department_repository import DepartmentRepository
from ems.repositories.employee_repository import EmployeeRepository

logger = logging.getLogger(__name__)


class DepartmentService:
    def __init__(self, departments: DepartmentRepository, employees: EmployeeRepository) -> None:
        self._departments = departments
        self._employees = employees

    def list_departments(self) -> list[DepartmentResponse]:
        return [DepartmentResponse.model_validate(d) for d in self._departments.list_all()]

    def _get(self, department_id: int) -> Department:
        department = self._departments.get_by_id(department_id)
        if not department:
            raise NotFoundError(f"Department not found with id: {department_id}")
        return department

    def get_department(self, department_id: int) -> DepartmentResponse:
        return DepartmentResponse.model_validate(self._get(department_id))

    def _require_name(self, name: str, *, exclude_id: int | None = None) -> str:
        name = name.strip()
        if not name:
            raise ValidationError("Department name is required")
        existing = self._departments.get_by_name(name)
        if existing and existing.id != exclude_id:
            raise ValidationError(f"Department name already in use: {name}")
        return name

    def create_department(self, payload: DepartmentRequest) -> DepartmentResponse:
        name = self._require_name(payload.name)
        saved = self._departments.save(Department(name=name, description=payload.description))
        logger.info("Department %s created (%s)", saved.id, saved.name)
        return DepartmentResponse.model_validate(saved)

    def update_department(self, department_id: int, payload: DepartmentRequest) -> DepartmentResponse:
        existing = self._get(department_id)
        existing.name = self._require_name(payload.name, exclude_id=department_id)
        existing.description = payload.description
        return DepartmentResponse.model_validate(self._departments.save(existing))

    def delete_department(self, department_id: int) -> None:
        self._get(department_id)
        # Members stay, without a department
        self._employees.clear_department(department_id)
        self._departments.delete_by_id(department_id)
        logger.info("Department %s deleted", department_id)
