from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ems.core.dependencies import get_current_user, get_report_service
from ems.models.auth import UserInfo
from ems.models.report import HierarchyNode
from ems.services.report_service import ReportService

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/orgchart", response_model=list[HierarchyNode])
def get_org_chart(
    department_id: int | None = Query(None, alias="departmentId"),
    user: UserInfo = Depends(get_current_user),
    service: ReportService = Depends(get_report_service),
):
    return service.org_chart(user, department_id)
