from datetime import datetime
from typing import List, Tuple
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import selectinload
from sqlmodel import col, or_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.auth_event_repository import IAuthEventRepository
from src.domain.entities import AuthEvent, User
from src.domain.event_filter import EventFilter, PageWindow


LIKE_ESCAPE = "\\"


def _like_literal(text: str) -> str:
    """Escape LIKE wildcards so the text only matches itself"""
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def _conditions(event_filter: EventFilter) -> list:
    """WHERE clauses for a filter; search clauses assume users is joined"""
    conditions = []

    if event_filter.application_id is not None:
        conditions.append(AuthEvent.application_id == event_filter.application_id)
    if event_filter.event_type:
        conditions.append(AuthEvent.event_type == event_filter.event_type)
    if event_filter.user_id is not None:
        conditions.append(AuthEvent.user_id == event_filter.user_id)
    if event_filter.start is not None:
        conditions.append(col(AuthEvent.created_at) >= event_filter.start)
    if event_filter.end is not None:
        conditions.append(col(AuthEvent.created_at) <= event_filter.end)

    if event_filter.search:
        pattern = f"%{_like_literal(event_filter.search)}%"
        conditions.append(
            or_(
                col(AuthEvent.event_type).ilike(pattern, escape=LIKE_ESCAPE),
                col(User.first_name).ilike(pattern, escape=LIKE_ESCAPE),
                col(User.last_name).ilike(pattern, escape=LIKE_ESCAPE),
            )
        )

    return conditions


def _filtered(stmt, event_filter: EventFilter):
    if event_filter.search:
        stmt = stmt.join(User, AuthEvent.user_id == User.id)
    return stmt.where(*_conditions(event_filter))


class AuthEventRepository(IAuthEventRepository):
    """AuthEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, auth_event: AuthEvent) -> AuthEvent:
        """Create a new auth event (immutable)"""
        self.session.add(auth_event)
        await self.session.flush()
        await self.session.refresh(auth_event)
        return auth_event

    async def list_filtered(
        self, event_filter: EventFilter, window: PageWindow
    ) -> List[AuthEvent]:
        stmt = _filtered(
            select(AuthEvent).options(
                selectinload(AuthEvent.application), selectinload(AuthEvent.user)
            ),
            event_filter,
        )
        stmt = (
            stmt.order_by(col(AuthEvent.created_at).desc())
            .offset(window.offset)
            .limit(window.limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count(self, event_filter: EventFilter) -> int:
        stmt = _filtered(select(func.count(AuthEvent.id)), event_filter)
        result = await self.session.exec(stmt)
        return result.one()

    async def count_by_type(self, event_filter: EventFilter) -> List[Tuple[str, int]]:
        event_count = func.count(AuthEvent.id).label("event_count")
        stmt = _filtered(select(AuthEvent.event_type, event_count), event_filter)
        stmt = stmt.group_by(AuthEvent.event_type).order_by(
            event_count.desc(), AuthEvent.event_type
        )
        result = await self.session.exec(stmt)
        return [(event_type, count) for event_type, count in result.all()]

    async def count_distinct_users(self, event_filter: EventFilter) -> int:
        stmt = _filtered(
            select(func.count(func.distinct(AuthEvent.user_id))), event_filter
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def count_by_application(self, application_id: UUID) -> int:
        stmt = select(func.count(AuthEvent.id)).where(
            AuthEvent.application_id == application_id
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def list_timestamps(self, event_filter: EventFilter) -> List[datetime]:
        stmt = _filtered(select(AuthEvent.created_at), event_filter)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def delete_matching(self, event_filter: EventFilter, limit: int) -> int:
        stmt = _filtered(select(AuthEvent), event_filter)
        stmt = stmt.order_by(col(AuthEvent.created_at)).limit(limit)
        result = await self.session.exec(stmt)
        events = list(result.all())

        for event in events:
            await self.session.delete(event)
        await self.session.flush()
        return len(events)
