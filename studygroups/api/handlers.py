"""
Exception handlers translating service errors into HTTP responses.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from structlog import get_logger

from studygroups.service.study_groups import DuplicateSubjectError, StudyGroupNotFound


def duplicate_subject_handler(
    request: Request, exc: DuplicateSubjectError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
    )


def not_found_handler(request: Request, exc: StudyGroupNotFound) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
    )


async def storage_error_handler(
    request: Request, exc: SQLAlchemyError
) -> JSONResponse:
    log = get_logger()
    await log.aerror("storage.failure", url=str(request.url), error=str(exc))

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Storage failure"},
    )


def add_exception_handlers(app: FastAPI) -> FastAPI:
    """
    Adds exception handlers for the study group service errors:

    - `DuplicateSubjectError` becomes a 400
    - `StudyGroupNotFound` becomes a 404
    - Any `SQLAlchemyError` becomes an opaque 500
    """
    app.add_exception_handler(DuplicateSubjectError, duplicate_subject_handler)
    app.add_exception_handler(StudyGroupNotFound, not_found_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
    return app
