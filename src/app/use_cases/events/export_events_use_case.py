"""
Use Case: Export Events

Serializes the matching events of one application into an Excel workbook.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from src.app.services.excel_export import build_rows, encode_workbook, export_filename
from src.app.services.persistence_errors import persistence_error
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.event_filter import EventFilterCriteria, PageWindow, build_event_filter

from .dtos import ExportEventsCommand, ExportEventsResponse

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_ROW_LIMIT = 10000


class ExportEventsUseCase:
    """
    Business Rules:
    - application_id is required and must name an existing application
    - At most row_limit newest events are exported; extra rows are dropped
    - An empty result is an error, never an empty workbook
    - Filename depends only on application, template, range and current date
    """

    def __init__(
        self,
        uow: UnitOfWork,
        row_limit: int = DEFAULT_EXPORT_ROW_LIMIT,
        timezone: str = "UTC",
    ):
        self.uow = uow
        self.row_limit = row_limit
        self.timezone = timezone

    async def execute(self, command: ExportEventsCommand) -> Result[ExportEventsResponse]:
        if command.application_id is None:
            return Return.err(Error("VALIDATION_ERROR", "Application ID is required"))

        event_filter = build_event_filter(
            EventFilterCriteria(
                application_id=command.application_id,
                user_id=command.user_id,
                event_type=command.event_type,
                start_date=command.start_date,
                end_date=command.end_date,
            )
        )

        async with self.uow:
            try:
                application = await self.uow.applications.get_by_id(command.application_id)
                if application is None:
                    return Return.err(Error("APPLICATION_NOT_FOUND", "Application not found"))

                events = await self.uow.auth_events.list_filtered(
                    event_filter, PageWindow(limit=self.row_limit, offset=0)
                )
            except SQLAlchemyError as exc:
                logger.exception("Error exporting events to Excel")
                return Return.err(persistence_error(exc))

            if not events:
                return Return.err(Error("NO_DATA", "No events found for the selected filters"))

            # Rows are built while the session still holds the loaded events
            rows = build_rows(events, command.export_type, self.timezone)
            application_name = application.name

        content = encode_workbook(command.export_type, rows)
        filename = export_filename(
            application_name,
            command.export_type,
            event_filter.start.date() if event_filter.start else None,
            event_filter.end.date() if event_filter.end else None,
            utcnow().date(),
        )

        logger.info(f"Exported {len(events)} events of {application_name} as {filename}")
        return Return.ok(
            ExportEventsResponse(content=content, filename=filename, count=len(events))
        )
