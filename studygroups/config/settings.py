"""
Main settings object.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import URL

from . import managers


class Settings(BaseSettings):
    database_type: Literal["sqlite", "postgres"] = "sqlite"
    database_user: str | None = None
    database_password: str | None = None
    database_port: int | None = None
    database_host: str | None = None
    database_db: str = "studygroups.db"

    database_echo: bool = False

    # Which repository adapter backs the API. The memory backend keeps
    # everything in-process and is lost on restart.
    repository_backend: Literal["sql", "memory"] = "sql"

    # Create the table schema when the application starts.
    create_tables: bool = True

    hostname: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(env_prefix="STUDYGROUPS_", env_file=".env")

    @property
    def sync_driver(self) -> str:
        match self.database_type:
            case "sqlite":
                return "sqlite"
            case "postgres":
                return "postgresql+psycopg"
            case _:
                raise ValueError

    @property
    def async_driver(self) -> str:
        match self.database_type:
            case "sqlite":
                return "sqlite+aiosqlite"
            case "postgres":
                return "postgresql+asyncpg"
            case _:
                raise ValueError

    @property
    def sync_uri(self) -> URL:
        return URL.create(
            drivername=self.sync_driver,
            username=self.database_user,
            password=self.database_password,
            host=self.database_host,
            port=self.database_port,
            database=self.database_db,
        )

    def create_schema(self):
        managers.create_tables(connection_url=self.sync_uri, echo=self.database_echo)

    def drop_schema(self):
        managers.drop_tables(connection_url=self.sync_uri, echo=self.database_echo)

    @property
    def async_uri(self) -> URL:
        return URL.create(
            drivername=self.async_driver,
            username=self.database_user,
            password=self.database_password,
            host=self.database_host,
            port=self.database_port,
            database=self.database_db,
        )

    def database_manager(self) -> managers.DatabaseManager:
        return managers.DatabaseManager(
            connection_url=self.async_uri, echo=self.database_echo
        )
