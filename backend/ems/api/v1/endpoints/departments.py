from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from ems.api.v1.errors import to_http_exception
from ems.core.dependencies import get_current_user, get_department_service, require_role
from ems.core.exceptions import EmsError
from ems.models.auth import Role, UserInfo
from ems.models.department import DepartmentRequest, DepartmentResponse
from ems.services.department_service import DepartmentService

router = APIRouter(prefix="/departments", tags=["departments"])


@router.get("", response_model=list[DepartmentResponse])
def list_departments(
    user: UserInfo = Depends(get_current_user),
    service: DepartmentService = Depends(get_department_service),
):
    return service.list_departments()


@router.get("/{department_id}", response_model=DepartmentResponse)
def get_department(
    department_id: int,
    user: UserInfo = Depends(get_current_user),
    service: DepartmentService = Depends(get_department_service),
):
    try:
        return service.get_department(department_id)
    except EmsError as err:
        raise to_http_exception(err) from err


@router.post("", response_model=DepartmentResponse)
def create_department(
    payload: DepartmentRequest,
    user: UserInfo = Depends(require_role(Role.ADMIN)),
    service: DepartmentService = Depends(get_department_service),
):
    try:
        return service.create_department(payload)
    except EmsError as err:
        raise to_http_exception(err) from err


@router.put("/{department_id}", response_model=DepartmentResponse)
def update_department(
    department_id: int,
    payload: DepartmentRequest,
    user: UserInfo = Depends(require_role(Role.ADMIN)),
    service: DepartmentService = Depends(get_department_service),
):
    try:
        return service.update_department(department_id, payload)
    except EmsError as err:
        raise to_http_exception(err) from err


@router.delete("/{department_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_department(
    department_id: int,
    user: UserInfo = Depends(require_role(Role.ADMIN)),
    service: DepartmentService = Depends(get_department_service),
):
    try:
        service.delete_department(department_id)
    except EmsError as err:
        raise to_http_exception(err) from err
    return Response(status_code=status.HTTP_204_NO_CONTENT)
