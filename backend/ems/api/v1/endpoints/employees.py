from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ems.api.v1.errors import to_http_exception
from ems.core.dependencies import get_current_user, get_employee_service, require_role
from ems.core.exceptions import EmsError
from ems.models.auth import Role, UserInfo
from ems.models.employee import EmployeeRequest, EmployeeResponse
from ems.services.employee_service import EmployeeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=list[EmployeeResponse])
def list_employees(
    role: str | None = None,
    user: UserInfo = Depends(get_current_user),
    service: EmployeeService = Depends(get_employee_service),
):
    try:
        return service.list_employees(user, role_filter=role)
    except Exception as err:
        logger.exception("Failed to list employees")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve employees",
        ) from err


@router.get("/{employee_id}", response_model=EmployeeResponse)
def get_employee(
    employee_id: int,
    user: UserInfo = Depends(get_current_user),
    service: EmployeeService = Depends(get_employee_service),
):
    try:
        return service.get_employee(user, employee_id)
    except EmsError as err:
        raise to_http_exception(err) from err


@router.post("", response_model=EmployeeResponse)
def create_employee(
    payload: EmployeeRequest,
    user: UserInfo = Depends(require_role(Role.ADMIN)),
    service: EmployeeService = Depends(get_employee_service),
):
    try:
        return service.create_employee(user, payload)
    except EmsError as err:
        raise to_http_exception(err) from err


@router.put("/{employee_id}", response_model=EmployeeResponse)
def update_employee(
    employee_id: int,
    payload: EmployeeRequest,
    user: UserInfo = Depends(require_role(Role.ADMIN, Role.EMPLOYEE)),
    service: EmployeeService = Depends(get_employee_service),
):
    try:
        return service.update_employee(user, employee_id, payload)
    except EmsError as err:
        raise to_http_exception(err) from err


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_employee(
    employee_id: int,
    user: UserInfo = Depends(require_role(Role.ADMIN)),
    service: EmployeeService = Depends(get_employee_service),
):
    try:
        service.delete_employee(user, employee_id)
    except EmsError as err:
        raise to_http_exception(err) from err
    return Response(status_code=status.HTTP_204_NO_CONTENT)
