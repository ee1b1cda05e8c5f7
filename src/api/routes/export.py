"""
Export API Routes

Excel download of an application's events.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.excel_export import XLSX_MEDIA_TYPE
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.events import ExportEventsCommand, ExportEventsUseCase
from src.depends import get_unit_of_work
from src.domain.entities import ExportType

router = APIRouter(
    prefix="/export",
    tags=["Export"],
    dependencies=[Depends(verify_admin_api_key)],
)


@router.get("/events", status_code=status.HTTP_200_OK, response_class=Response)
async def export_events(
    application_id: Optional[UUID] = Query(None, alias="applicationId"),
    user_id: Optional[UUID] = Query(None, alias="userId"),
    event_type: Optional[str] = Query(None, alias="eventType"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    export_type: ExportType = Query(ExportType.full, alias="exportType"),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Export Events to Excel

    Returns an .xlsx attachment with at most EXPORT_ROW_LIMIT rows.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (applicationId missing)
        - 404 Not Found: APPLICATION_NOT_FOUND or NO_DATA
        - 500 Internal Server Error: Server error
    """
    command = ExportEventsCommand(
        application_id=application_id,
        user_id=user_id,
        event_type=event_type,
        start_date=start_date,
        end_date=end_date,
        export_type=export_type,
    )
    use_case = ExportEventsUseCase(
        uow,
        row_limit=ApplicationConfig.EXPORT_ROW_LIMIT,
        timezone=ApplicationConfig.EXPORT_TIMEZONE,
    )
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        if error.code in ("APPLICATION_NOT_FOUND", "NO_DATA"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    export = result.value
    return Response(
        content=export.content,
        media_type=XLSX_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{export.filename}"',
            "Content-Length": str(len(export.content)),
        },
    )
