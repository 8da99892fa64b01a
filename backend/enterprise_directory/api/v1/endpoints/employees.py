from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from enterprise_directory.core.dependencies import get_auth_context
from enterprise_directory.core.exceptions import UnauthorizedError
from enterprise_directory.models.auth import AuthContext
from enterprise_directory.models.employee import EmployeeModel
from enterprise_directory.services.employee_service import employee_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])


def _stored_response(content) -> JSONResponse:
    # Stored rows may carry employment type "Unknown"; serialize without re-validating.
    return JSONResponse(content=jsonable_encoder(content))


def _forbidden(err: UnauthorizedError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(err))


@router.get("", response_model=list[EmployeeModel])
async def list_employees(
    auth: AuthContext = Depends(get_auth_context),  # noqa: B008
):
    try:
        employees = await employee_service.get_all_employees()
    except Exception as err:
        logger.exception("Failed to list employees")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve employees",
        ) from err

    return _stored_response(employees)


@router.get("/{employee_id}", response_model=EmployeeModel)
async def get_employee(
    employee_id: int,
    auth: AuthContext = Depends(get_auth_context),  # noqa: B008
):
    try:
        employee = await employee_service.get_employee_by_id(employee_id)
    except Exception as err:
        logger.exception("Failed to get employee %s", employee_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve employee",
        ) from err

    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee with id {employee_id} not found",
        )

    return _stored_response(employee)


@router.post("", response_model=EmployeeModel, status_code=status.HTTP_201_CREATED)
async def create_employee(
    employee: EmployeeModel,
    auth: AuthContext = Depends(get_auth_context),  # noqa: B008
):
    try:
        return await employee_service.add_employee(employee, auth)
    except UnauthorizedError as err:
        raise _forbidden(err) from err


@router.put("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_employee(
    employee_id: int,
    employee: EmployeeModel,
    auth: AuthContext = Depends(get_auth_context),  # noqa: B008
):
    if employee.id is not None and employee.id != employee_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Employee id in body does not match the URL",
        )

    try:
        await employee_service.update_employee(employee.model_copy(update={"id": employee_id}), auth)
    except UnauthorizedError as err:
        raise _forbidden(err) from err
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: int,
    auth: AuthContext = Depends(get_auth_context),  # noqa: B008
):
    try:
        await employee_service.delete_employee(employee_id, auth)
    except UnauthorizedError as err:
        raise _forbidden(err) from err
    return Response(status_code=status.HTTP_204_NO_CONTENT)
