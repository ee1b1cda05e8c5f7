from fastapi import APIRouter, Depends, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error
from src.adapter.database import Database
from src.api.error import ServerError
from src.depends import get_database

router = APIRouter(tags=["Health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check(database: Database = Depends(get_database)):
    """Liveness probe that also checks the database answers"""
    try:
        async with database.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise ServerError(Error("DATABASE_UNAVAILABLE", "Database unavailable", reason=str(exc)))

    return {"status": "ok"}
