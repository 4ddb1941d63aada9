"""Employee use cases: role-gated listing/lookup and validated mutations."""

from __future__ import annotations

import logging

from ems.core.auth import hash_password
from ems.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from ems.models.auth import Role, UserInfo
from ems.models.department import DepartmentSummary
from ems.models.employee import EmployeeRequest, EmployeeResponse, EmployeeSummary
from ems.models.entities import Employee
from ems.repositories.department_repository import DepartmentRepository
from ems.repositories.employee_repository import EmployeeRepository
from ems.services.access_control import Operation, is_permitted, visible_employees
from ems.services.manager_validation import validate_manager

logger = logging.getLogger(__name__)


def _parse_roles(role_filter: str | None) -> set[Role] | None:
    if not role_filter:
        return None
    roles: set[Role] = set()
    for raw in role_filter.split(","):
        try:
            roles.add(Role(raw.strip()))
        except ValueError:
            # Unknown role names are ignored
            continue
    return roles


def to_summary(employee: Employee) -> EmployeeSummary:
    return EmployeeSummary(
        id=employee.id,
        first_name=employee.first_name,
        last_name=employee.last_name,
        email=employee.email,
        job_title=employee.job_title,
    )


def to_response(employee: Employee, manager: Employee | None = None) -> EmployeeResponse:
    department = employee.department
    return EmployeeResponse(
        id=employee.id,
        active=employee.active,
        email=employee.email,
        role=employee.role,
        first_name=employee.first_name,
        last_name=employee.last_name,
        job_title=employee.job_title,
        created_at=employee.created_at,
        updated_at=employee.updated_at,
        department=DepartmentSummary(id=department.id, name=department.name) if department else None,
        manager=to_summary(manager) if manager else None,
        manager_id=employee.manager_id,
    )


class EmployeeService:
    def __init__(
        self,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
        *,
        bcrypt_rounds: int = 12,
    ) -> None:
        self._employees = employees
        self._departments = departments
        self._bcrypt_rounds = bcrypt_rounds

    def _manager_of(self, employee: Employee) -> Employee | None:
        if employee.manager_id is None:
            return None
        return self._employees.get_by_id(employee.manager_id)

    def render(self, employee: Employee) -> EmployeeResponse:
        return to_response(employee, self._manager_of(employee))

    def list_visible(self, caller: UserInfo) -> list[Employee]:
        return visible_employees(caller.role, caller.id, self._employees.list_all())

    def list_employees(self, caller: UserInfo, role_filter: str | None = None) -> list[EmployeeResponse]:
        employees = self._employees.list_all()
        by_id = {e.id: e for e in employees}
        visible = visible_employees(caller.role, caller.id, employees)

        roles = _parse_roles(role_filter)
        if roles is not None:
            visible = [e for e in visible if e.role in roles]

        out: list[EmployeeResponse] = []
        for employee in visible:
            manager = by_id.get(employee.manager_id) if employee.manager_id is not None else None
            out.append(to_response(employee, manager))
        return out

    def get_employee(self, caller: UserInfo, employee_id: int) -> EmployeeResponse:
        # Hidden records are reported exactly like missing ones
        if not is_permitted(caller.role, caller.id, employee_id, Operation.VIEW):
            raise NotFoundError(f"Employee not found with id: {employee_id}")

        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee not found with id: {employee_id}")
        return self.render(employee)

    def _resolve_department_id(self, department_id: int | None) -> int | None:
        if department_id is None:
            return None
        if not self._departments.get_by_id(department_id):
            raise NotFoundError(f"Department not found with id: {department_id}")
        return department_id

    def _resolve_manager_id(self, manager_id: int | None) -> int | None:
        if manager_id is None:
            return None
        if not self._employees.get_by_id(manager_id):
            raise NotFoundError(f"Manager not found with id: {manager_id}")
        return manager_id

    def _ensure_email_free(self, email: str, *, exclude_id: int | None = None) -> None:
        existing = self._employees.get_by_email(email)
        if existing and existing.id != exclude_id:
            raise ValidationError(f"Email already in use: {email}")

    def create_employee(self, caller: UserInfo, payload: EmployeeRequest) -> EmployeeResponse:
        if not is_permitted(caller.role, caller.id, None, Operation.CREATE):
            raise ForbiddenError("Only administrators can create employees")
        if not payload.password:
            raise ValidationError("Password is required")

        email = payload.email.strip()
        self._ensure_email_free(email)
        department_id = self._resolve_department_id(payload.department_id)
        manager_id = self._resolve_manager_id(payload.manager_id)
        validate_manager(None, manager_id, self._employees.get_manager_id)

        employee = Employee(
            email=email,
            password=hash_password(payload.password, self._bcrypt_rounds),
            first_name=payload.first_name,
            last_name=payload.last_name,
            job_title=payload.job_title,
            active=payload.active,
            role=payload.role,
            department_id=department_id,
            manager_id=manager_id,
        )
        saved = self._employees.save(employee)
        logger.info("Employee %s created by %s", saved.id, caller.email)
        return self.render(saved)

    def update_employee(self, caller: UserInfo, employee_id: int, payload: EmployeeRequest) -> EmployeeResponse:
        existing = self._employees.get_by_id(employee_id)
        if not existing:
            raise NotFoundError(f"Employee not found with id: {employee_id}")

        if not is_permitted(caller.role, caller.id, employee_id, Operation.UPDATE):
            raise ForbiddenError("You are not allowed to update this employee")
        if caller.role is not Role.ADMIN and (payload.role != existing.role or payload.active != existing.active):
            raise ForbiddenError("Only administrators can change role or active status")

        email = payload.email.strip()
        self._ensure_email_free(email, exclude_id=employee_id)
        department_id = self._resolve_department_id(payload.department_id)
        manager_id = self._resolve_manager_id(payload.manager_id)
        validate_manager(existing.id, manager_id, self._employees.get_manager_id)
        password_hash = hash_password(payload.password, self._bcrypt_rounds) if payload.password else None

        existing.active = payload.active
        existing.email = email
        if password_hash:
            existing.password = password_hash
        existing.role = payload.role
        existing.first_name = payload.first_name
        existing.last_name = payload.last_name
        existing.job_title = payload.job_title
        existing.department_id = department_id
        existing.manager_id = manager_id

        saved = self._employees.save(existing)
        return self.render(saved)

    def delete_employee(self, caller: UserInfo, employee_id: int) -> None:
        if caller.role is Role.ADMIN and caller.id == employee_id:
            raise ValidationError("Administrators cannot delete their own account")
        if not is_permitted(caller.role, caller.id, employee_id, Operation.DELETE):
            raise ForbiddenError("Only administrators can delete employees")

        if not self._employees.get_by_id(employee_id):
            raise NotFoundError(f"Employee not found with id: {employee_id}")

        cleared = self._employees.clear_manager(employee_id)
        if cleared:
            logger.info("Cleared manager link on %d direct reports of %s", cleared, employee_id)
        self._employees.delete_by_id(employee_id)
