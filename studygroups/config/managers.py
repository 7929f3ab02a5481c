"""
Database engines and schema setup for the study group tables.
"""

from collections.abc import Iterable

from sqlalchemy import URL, Table
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel, create_engine

from studygroups.database.meta import ALL_TABLES


def _tables(models: Iterable[type[SQLModel]]) -> list[Table]:
    return [model.__table__ for model in models]


def create_tables(
    connection_url: URL,
    echo: bool = False,
    models: Iterable[type[SQLModel]] = ALL_TABLES,
):
    """
    Create the schema for `models` over a short-lived synchronous connection.
    Tables that already exist are left alone. Used by `studygroups setup`.
    """
    engine = create_engine(connection_url, echo=echo)
    try:
        with engine.begin() as conn:
            SQLModel.metadata.create_all(conn, tables=_tables(models))
    finally:
        engine.dispose()


def drop_tables(
    connection_url: URL,
    echo: bool = False,
    models: Iterable[type[SQLModel]] = ALL_TABLES,
):
    """
    Drop the tables for `models`. WARNING: this deletes all study groups; you
    probably only want this in a test.
    """
    engine = create_engine(connection_url, echo=echo)
    try:
        with engine.begin() as conn:
            SQLModel.metadata.drop_all(conn, tables=_tables(models))
    finally:
        engine.dispose()


class DatabaseManager:
    """
    Owns the async engine used to serve requests. Expected usage:

    manager = DatabaseManager(conn_url)

    async with manager.session() as conn:
        async with conn.begin():
            groups = await SQLStudyGroupRepository(conn=conn, log=log).get_study_groups()
    """

    engine: AsyncEngine
    session: async_sessionmaker

    def __init__(self, connection_url: URL, echo: bool = False):
        self.engine = create_async_engine(connection_url, echo=echo)
        self.session = async_sessionmaker(self.engine)

    async def create_tables(self, models: Iterable[type[SQLModel]] = ALL_TABLES):
        """
        Create any missing study group tables. Run by the API on startup.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all, tables=_tables(models))

    async def close(self):
        await self.engine.dispose()
