"""
Configuration variables and fixtures for the service layer tests.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
import structlog

from studygroups.config.settings import Settings
from studygroups.core.study_group import StudyGroupData, Subject
from studygroups.core.user import UserReference
from studygroups.repository.base import StudyGroupRepository
from studygroups.repository.memory import InMemoryStudyGroupRepository


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def session_manager(server_settings: Settings, database):
    manager = server_settings.database_manager()
    yield manager
    await manager.close()


@pytest_asyncio.fixture(scope="session")
def logger():
    yield structlog.get_logger()


@pytest.fixture
def mock_repository():
    repository = AsyncMock(spec=StudyGroupRepository)
    repository.user_has_group_for_subject.return_value = False
    yield repository


@pytest.fixture
def memory_repository(logger):
    yield InMemoryStudyGroupRepository(log=logger)


@pytest.fixture
def sample_groups():
    return [
        StudyGroupData(
            study_group_id=1,
            name="Math Club",
            subject=Subject.MATH,
            create_date=datetime(2025, 1, 1, tzinfo=timezone.utc),
            members=[UserReference(user_id=1)],
        ),
        StudyGroupData(
            study_group_id=2,
            name="Physics Friends",
            subject=Subject.PHYSICS,
            create_date=datetime(2024, 5, 1, tzinfo=timezone.utc),
            members=[UserReference(user_id=2)],
        ),
        StudyGroupData(
            study_group_id=3,
            name="Chemistry Crew",
            subject=Subject.CHEMISTRY,
            create_date=datetime(2023, 10, 15, tzinfo=timezone.utc),
            members=[UserReference(user_id=3)],
        ),
    ]
