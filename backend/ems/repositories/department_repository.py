from __future__ import annotations

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from ems.models.entities import Department


class DepartmentRepository:
    def __init__(self, session: Session):
        self._session = session

    def list_all(self) -> Sequence[Department]:
        return self._session.scalars(select(Department).order_by(Department.name)).all()

    def get_by_id(self, department_id: int) -> Department | None:
        return self._session.get(Department, department_id)

    def get_by_name(self, name: str) -> Department | None:
        return self._session.scalars(select(Department).where(Department.name == name)).first()

    def save(self, department: Department) -> Department:
        self._session.add(department)
        self._session.commit()
        self._session.refresh(department)
        return department

    def delete_by_id(self, department_id: int) -> bool:
        department = self.get_by_id(department_id)
        if not department:
            return False
        self._session.delete(department)
        self._session.commit()
        return True
