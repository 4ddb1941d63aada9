from __future__ import annotations

import random

from ems.models.auth import Role
from ems.models.entities import Department, Employee
from ems.services.hierarchy import build_hierarchy, flatten

ENGINEERING = Department(id=10, name="Engineering")
SALES = Department(id=20, name="Sales")


def _emp(
    emp_id: int,
    manager_id: int | None = None,
    department: Department | None = None,
    role: Role = Role.EMPLOYEE,
) -> Employee:
    return Employee(
        id=emp_id,
        email=f"e{emp_id}@ems.test",
        password="x",
        first_name=f"First{emp_id}",
        last_name=f"Last{emp_id}",
        role=role,
        manager_id=manager_id,
        department=department,
        job_title=f"Title {emp_id}",
    )


def test_chain_builds_single_tree():
    a, b, c = _emp(1), _emp(2, manager_id=1), _emp(3, manager_id=2)

    roots = build_hierarchy([a, b, c])

    assert [r.id for r in roots] == [1]
    assert [n.id for n in roots[0].subordinates] == [2]
    assert [n.id for n in roots[0].subordinates[0].subordinates] == [3]
    assert roots[0].subordinates[0].subordinates[0].subordinates == []


def test_child_before_parent_order_is_supported():
    roots = build_hierarchy([_emp(3, manager_id=2), _emp(2, manager_id=1), _emp(1)])

    assert [r.id for r in roots] == [1]
    assert roots[0].subordinates[0].id == 2
    assert roots[0].subordinates[0].subordinates[0].id == 3


def test_node_carries_employee_attributes():
    boss = _emp(1, department=ENGINEERING, role=Role.ADMIN)

    node = build_hierarchy([boss])[0]

    assert node.name == "First1 Last1"
    assert node.role == "ADMIN"
    assert node.department == "Engineering"
    assert node.department_id == 10
    assert node.manager_id is None
    assert node.job_title == "Title 1"


def test_subordinates_keep_input_order():
    roots = build_hierarchy([_emp(1), _emp(4, manager_id=1), _emp(2, manager_id=1), _emp(3, manager_id=1)])

    assert [n.id for n in roots[0].subordinates] == [4, 2, 3]


def test_missing_manager_becomes_root_without_filter():
    roots = build_hierarchy([_emp(1), _emp(2, manager_id=99)])

    assert sorted(r.id for r in roots) == [1, 2]


def test_missing_manager_is_dropped_with_department_filter():
    boss = _emp(1, department=SALES)
    engineer_lead = _emp(2, manager_id=1, department=ENGINEERING)
    engineer = _emp(3, manager_id=2, department=ENGINEERING)
    top_engineer = _emp(4, department=ENGINEERING)

    roots = build_hierarchy([boss, engineer_lead, engineer, top_engineer], department_id=10)

    # employee 2 reports into Sales, so it and its subtree vanish from the Engineering chart
    assert [r.id for r in roots] == [4]
    assert {n.id for n in flatten(roots)} == {4}


def test_department_filter_keeps_only_members():
    employees = [
        _emp(1, department=ENGINEERING),
        _emp(2, manager_id=1, department=ENGINEERING),
        _emp(3, department=SALES),
        _emp(4),
    ]

    roots = build_hierarchy(employees, department_id=10)

    assert {n.id for n in flatten(roots)} == {1, 2}


def test_flattened_output_matches_input_for_acyclic_graph():
    rng = random.Random(7)
    employees = [_emp(1)]
    for emp_id in range(2, 60):
        employees.append(_emp(emp_id, manager_id=rng.randint(1, emp_id - 1)))
    rng.shuffle(employees)

    roots = build_hierarchy(employees)
    ids = [n.id for n in flatten(roots)]

    assert sorted(ids) == list(range(1, 60))
    assert len(ids) == len(set(ids))


def test_latent_cycle_does_not_loop():
    # 1 -> 2 -> 1 only exists if validation was bypassed
    roots = build_hierarchy([_emp(1, manager_id=2), _emp(2, manager_id=1), _emp(3)])

    assert [r.id for r in roots] == [3]


def test_empty_input():
    assert build_hierarchy([]) == []
    assert build_hierarchy([], department_id=1) == []


def test_serializes_with_camel_case_fields():
    roots = build_hierarchy([_emp(1, department=ENGINEERING), _emp(2, manager_id=1)])

    data = roots[0].model_dump(by_alias=True)

    assert data["departmentId"] == 10
    assert data["subordinates"][0]["managerId"] == 1
    assert "jobTitle" in data
