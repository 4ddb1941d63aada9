from __future__ import annotations

from typing import Callable

from ems.core.exceptions import ValidationError

SELF_MANAGEMENT_MESSAGE = "An employee cannot be their own manager."
CYCLE_MESSAGE = "Assigning this manager would create a management cycle."


def validate_manager(
    employee_id: int | None,
    manager_id: int | None,
    manager_of: Callable[[int], int | None],
) -> None:
    """Reject a manager assignment that is a self-reference or closes a cycle.

    ``manager_of`` returns the stored manager id of a persisted employee. The
    proposed manager's chain is walked upward until it ends (accepted) or
    reaches ``employee_id`` (rejected). An employee that is not persisted yet
    has no id and cannot be part of any chain.
    """
    if manager_id is None:
        return

    if employee_id is not None and manager_id == employee_id:
        raise ValidationError(SELF_MANAGEMENT_MESSAGE)

    if employee_id is None:
        return

    visited: set[int] = set()
    current: int | None = manager_id
    while current is not None and current not in visited:
        if current == employee_id:
            raise ValidationError(CYCLE_MESSAGE)
        visited.add(current)
        current = manager_of(current)
