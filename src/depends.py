from fastapi import Request

from src.adapter.database import Database
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_unit_of_work(request: Request):
    database = get_database(request)
    async with database.session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)
