from __future__ import annotations

import logging

from ems.models.auth import UserInfo
from ems.models.report import HierarchyNode
from ems.services.employee_service import EmployeeService
from ems.services.hierarchy import build_hierarchy, flatten

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(self, employee_service: EmployeeService) -> None:
        self._employee_service = employee_service

    def org_chart(self, caller: UserInfo, department_id: int | None = None) -> list[HierarchyNode]:
        visible = self._employee_service.list_visible(caller)
        roots = build_hierarchy(visible, department_id)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Org chart for %s: %d roots, %d nodes (department=%s)",
                caller.email,
                len(roots),
                len(flatten(roots)),
                department_id,
            )
        return roots
