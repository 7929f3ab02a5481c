"""
Dependencies used by the API.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from structlog import get_logger
from structlog.typing import FilteringBoundLogger

from studygroups.config.managers import DatabaseManager
from studygroups.config.settings import Settings
from studygroups.repository.base import StudyGroupRepository
from studygroups.repository.memory import InMemoryStudyGroupRepository
from studygroups.repository.sql import SQLStudyGroupRepository


@lru_cache
def SETTINGS():
    return Settings()


@lru_cache
def DATABASE_MANAGER() -> DatabaseManager:
    return SETTINGS().database_manager()


def logger():
    return get_logger()


@lru_cache
def memory_repository() -> InMemoryStudyGroupRepository:
    return InMemoryStudyGroupRepository(log=logger())


async def get_repository(log: Annotated[FilteringBoundLogger, Depends(logger)]):
    if SETTINGS().repository_backend == "memory":
        yield memory_repository()
        return

    async with DATABASE_MANAGER().session() as session:
        async with session.begin():
            yield SQLStudyGroupRepository(conn=session, log=log)


LoggerDependency = Annotated[FilteringBoundLogger, Depends(logger)]
RepositoryDependency = Annotated[StudyGroupRepository, Depends(get_repository)]
