"""Role-based authorization policy for employee records."""

from __future__ import annotations

from enum import Enum
from typing import Sequence, TypeVar

from ems.models.auth import Role


class Operation(str, Enum):
    LIST = "list"
    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


def is_permitted(role: Role, caller_id: int, target_id: int | None, operation: Operation) -> bool:
    """Single decision point for who may do what to which employee."""
    if operation is Operation.LIST:
        return True

    if role is Role.ADMIN:
        if operation is Operation.DELETE:
            return target_id != caller_id
        return True

    if operation is Operation.VIEW:
        return target_id == caller_id
    if operation is Operation.UPDATE:
        return role is Role.EMPLOYEE and target_id == caller_id
    return False


_T = TypeVar("_T")


def visible_employees(role: Role, caller_id: int, employees: Sequence[_T]) -> list[_T]:
    """Admins see everything; everyone else sees only their own record."""
    if role is Role.ADMIN:
        return list(employees)
    return [e for e in employees if getattr(e, "id", None) == caller_id]
