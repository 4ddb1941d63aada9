from __future__ import annotations

from typing import Sequence

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from ems.models.entities import Employee


class EmployeeRepository:
    """Persistence for employees. Mutating calls commit their own transaction."""

    def __init__(self, session: Session):
        self._session = session

    def list_all(self) -> Sequence[Employee]:
        return self._session.scalars(select(Employee).order_by(Employee.id)).all()

    def get_by_id(self, employee_id: int) -> Employee | None:
        return self._session.get(Employee, employee_id)

    def get_by_email(self, email: str) -> Employee | None:
        return self._session.scalars(select(Employee).where(Employee.email == email)).first()

    def get_manager_id(self, employee_id: int) -> int | None:
        return self._session.scalar(select(Employee.manager_id).where(Employee.id == employee_id))

    def count(self) -> int:
        return int(self._session.scalar(select(func.count()).select_from(Employee)) or 0)

    def save(self, employee: Employee) -> Employee:
        self._session.add(employee)
        self._session.commit()
        self._session.refresh(employee)
        return employee

    def clear_manager(self, manager_id: int) -> int:
        result = self._session.execute(
            update(Employee).where(Employee.manager_id == manager_id).values(manager_id=None)
        )
        self._session.commit()
        return result.rowcount

    def clear_department(self, department_id: int) -> int:
        result = self._session.execute(
            update(Employee).where(Employee.department_id == department_id).values(department_id=None)
        )
        self._session.commit()
        return result.rowcount

    def delete_by_id(self, employee_id: int) -> bool:
        employee = self.get_by_id(employee_id)
        if not employee:
            return False
        self._session.delete(employee)
        self._session.commit()
        return True
