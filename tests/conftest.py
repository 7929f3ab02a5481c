"""
Core configuration
"""

import pytest_asyncio

from studygroups.config.settings import Settings


@pytest_asyncio.fixture(scope="session")
def server_settings(tmp_path_factory):
    database_path = tmp_path_factory.mktemp("database") / "studygroups.db"

    yield Settings(
        database_type="sqlite",
        database_db=str(database_path),
        database_echo=False,
        repository_backend="sql",
    )


@pytest_asyncio.fixture(scope="session")
def database(server_settings: Settings):
    server_settings.create_schema()
    yield
    server_settings.drop_schema()
