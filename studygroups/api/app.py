"""
FastAPI app
"""

from importlib.metadata import version

from fastapi import FastAPI

from .dependencies import DATABASE_MANAGER, SETTINGS, logger
from .handlers import add_exception_handlers
from .study_groups import study_group_app


async def lifespan(app: FastAPI):
    settings = SETTINGS()
    app.settings = settings

    if settings.repository_backend != "sql":
        yield
        return

    manager = DATABASE_MANAGER()

    if settings.create_tables:
        await manager.create_tables()
        await logger().ainfo(
            "database.tables_created", database_type=settings.database_type
        )

    yield

    await manager.close()
    # A fresh engine is needed if the app is started again in this process.
    DATABASE_MANAGER.cache_clear()


app = FastAPI(
    lifespan=lifespan,
    title="Study Groups API",
    summary="Create, search and join study groups.",
    version=version("studygroups"),
)

app = add_exception_handlers(app)

app.include_router(study_group_app, prefix="/study-groups")
