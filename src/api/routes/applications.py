"""
Application API Routes

Management screen for registered applications.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from libs.result import Error
from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.applications import (
    ApplicationListResponse,
    ApplicationOptionsResponse,
    ApplicationResponse,
    CreateApplicationCommand,
    CreateApplicationUseCase,
    DeleteApplicationResponse,
    DeleteApplicationUseCase,
    GetApplicationUseCase,
    ListApplicationOptionsUseCase,
    ListApplicationsUseCase,
    UpdateApplicationCommand,
    UpdateApplicationUseCase,
)
from src.depends import get_unit_of_work

router = APIRouter(
    prefix="/applications",
    tags=["Applications"],
    dependencies=[Depends(verify_admin_api_key)],
)


class ApplicationRequest(BaseModel):
    """Create/update application HTTP request payload"""

    name: str = Field(..., max_length=255, description="Unique application name")
    description: Optional[str] = Field(None, max_length=1000)


def _raise_for(error: Error):
    if error.code == "VALIDATION_ERROR":
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    if error.code in ("APPLICATION_NOT_FOUND", "RECORD_NOT_FOUND"):
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    if error.code in ("APPLICATION_NAME_EXISTS", "APPLICATION_HAS_EVENTS", "HAS_RELATED_DATA"):
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    raise ServerError(error)


@router.get("", status_code=status.HTTP_200_OK, response_model=ApplicationListResponse)
async def list_applications(uow: UnitOfWork = Depends(get_unit_of_work)):
    """List applications, newest first, with their event counts"""
    result = await ListApplicationsUseCase(uow).execute()
    if result.is_err():
        _raise_for(result.error)
    return result.value


@router.get("/options", status_code=status.HTTP_200_OK, response_model=ApplicationOptionsResponse)
async def list_application_options(uow: UnitOfWork = Depends(get_unit_of_work)):
    """Applications ordered by name, for filter dropdowns"""
    result = await ListApplicationOptionsUseCase(uow).execute()
    if result.is_err():
        _raise_for(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApplicationResponse)
async def create_application(
    request: ApplicationRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Create Application

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (empty name)
        - 409 Conflict: APPLICATION_NAME_EXISTS
    """
    command = CreateApplicationCommand(name=request.name, description=request.description)
    result = await CreateApplicationUseCase(uow).execute(command)
    if result.is_err():
        _raise_for(result.error)
    return result.value


@router.get("/{application_id}", status_code=status.HTTP_200_OK, response_model=ApplicationResponse)
async def get_application(application_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await GetApplicationUseCase(uow).execute(application_id)
    if result.is_err():
        _raise_for(result.error)
    return result.value


@router.put("/{application_id}", status_code=status.HTTP_200_OK, response_model=ApplicationResponse)
async def update_application(
    application_id: UUID,
    request: ApplicationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Application

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (empty name)
        - 404 Not Found: APPLICATION_NOT_FOUND
        - 409 Conflict: APPLICATION_NAME_EXISTS
    """
    command = UpdateApplicationCommand(
        application_id=application_id, name=request.name, description=request.description
    )
    result = await UpdateApplicationUseCase(uow).execute(command)
    if result.is_err():
        _raise_for(result.error)
    return result.value


@router.delete(
    "/{application_id}", status_code=status.HTTP_200_OK, response_model=DeleteApplicationResponse
)
async def delete_application(application_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Delete Application

    Raises:
        - 404 Not Found: APPLICATION_NOT_FOUND
        - 409 Conflict: APPLICATION_HAS_EVENTS (message carries the event count)
    """
    result = await DeleteApplicationUseCase(uow).execute(application_id)
    if result.is_err():
        _raise_for(result.error)
    return result.value
