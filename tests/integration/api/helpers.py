"""Seeding helpers shared by the API tests"""

from datetime import datetime
from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from src.domain.entities import Application, AuthEvent, User

ADMIN_HEADERS = {"X-Admin-API-Key": "test-admin-key-12345"}


async def seed_application(session: AsyncSession, name: str = "myapp") -> Application:
    application = Application(name=name)
    session.add(application)
    await session.commit()
    return application


async def seed_user(
    session: AsyncSession,
    auth_user_id: str = "user_2abcDEF",
    first_name: Optional[str] = "Ada",
    last_name: Optional[str] = "Lovelace",
) -> User:
    user = User(auth_user_id=auth_user_id, first_name=first_name, last_name=last_name)
    session.add(user)
    await session.commit()
    return user


async def seed_event(
    session: AsyncSession,
    application: Application,
    user: User,
    created_at: datetime,
    event_type: str = "session.created",
) -> AuthEvent:
    event = AuthEvent(
        event_type=event_type,
        application_id=application.id,
        user_id=user.id,
        created_at=created_at,
    )
    session.add(event)
    await session.commit()
    return event
