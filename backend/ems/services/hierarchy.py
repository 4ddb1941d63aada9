"""Org-chart construction from a flat employee list."""

from __future__ import annotations

from typing import Iterable

from ems.models.entities import Employee
from ems.models.report import HierarchyNode


def _to_node(employee: Employee) -> HierarchyNode:
    department = employee.department
    return HierarchyNode(
        id=employee.id,
        name=employee.full_name,
        role=employee.role.value,
        department=department.name if department else None,
        department_id=department.id if department else None,
        manager_id=employee.manager_id,
        job_title=employee.job_title,
        created_at=employee.created_at,
        updated_at=employee.updated_at,
    )


def build_hierarchy(employees: Iterable[Employee], department_id: int | None = None) -> list[HierarchyNode]:
    """Return the forest of manager -> subordinate trees, in input order.

    Input may be in any order. With ``department_id`` set, only that department's
    employees are considered, and an employee whose manager sits outside the
    department is dropped. Without a filter such an employee becomes a root.

    Each node is attached under its single declared manager only, so data with
    a latent manager cycle cannot make this loop.
    """
    members = list(employees)
    if department_id is not None:
        members = [e for e in members if e.department is not None and e.department.id == department_id]

    nodes: dict[int, HierarchyNode] = {e.id: _to_node(e) for e in members}

    roots: list[HierarchyNode] = []
    for employee in members:
        node = nodes[employee.id]
        if employee.manager_id is None:
            roots.append(node)
            continue

        manager_node = nodes.get(employee.manager_id)
        if manager_node is not None:
            manager_node.subordinates.append(node)
        elif department_id is None:
            roots.append(node)

    return roots


def flatten(nodes: Iterable[HierarchyNode]) -> list[HierarchyNode]:
    """Depth-first list of every node in the forest."""
    out: list[HierarchyNode] = []
    stack = list(reversed(list(nodes)))
    while stack:
        node = stack.pop()
        out.append(node)
        stack.extend(reversed(node.subordinates))
    return out
