"""
Study group management.
"""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from studygroups.core.ordering import SortingOrder
from studygroups.core.study_group import StudyGroupData, StudyGroupName, StudySubject
from studygroups.core.user import UserReference
from studygroups.service import study_groups as study_groups_service

from .dependencies import LoggerDependency, RepositoryDependency

study_group_app = APIRouter(tags=["Study Groups"])


class StudyGroupCreationRequest(BaseModel):
    """
    Request model for creating a new study group.
    """

    name: StudyGroupName
    subject: StudySubject
    created_by_user_id: int
    member_ids: list[int] = []


class JoinStudyGroupRequest(BaseModel):
    """
    Request model for adding a member to a study group.
    """

    user_id: int


@study_group_app.post(
    "",
    summary="Create a new study group",
    description=(
        "Create a study group with the given name and subject. Users may only "
        "have one study group per subject."
    ),
    responses={
        200: {"description": "Study group created successfully."},
        400: {"description": "The user already has a group for this subject."},
        422: {"description": "Invalid name or subject."},
    },
)
async def create_study_group(
    content: StudyGroupCreationRequest,
    repository: RepositoryDependency,
    log: LoggerDependency,
) -> StudyGroupData:
    """
    Create a new study group.
    """
    group = StudyGroupData(
        name=content.name,
        subject=content.subject,
        create_date=datetime.now(tz=timezone.utc),
        created_by_user_id=content.created_by_user_id,
        members=[UserReference(user_id=x) for x in content.member_ids],
    )

    return await study_groups_service.create(
        group=group, repository=repository, log=log
    )


@study_group_app.get(
    "",
    summary="List all study groups",
    responses={
        200: {"description": "List of study groups."},
    },
)
async def list_study_groups(
    repository: RepositoryDependency,
    log: LoggerDependency,
) -> list[StudyGroupData]:
    return await study_groups_service.get_group_list(repository=repository, log=log)


@study_group_app.get(
    "/search",
    summary="Search study groups",
    description=(
        "Find study groups whose name or subject contains the search text, "
        "sorted by creation date."
    ),
    responses={
        200: {"description": "Matching study groups, possibly none."},
        422: {"description": "Unknown sort order."},
    },
)
async def search_study_groups(
    subject: str,
    repository: RepositoryDependency,
    log: LoggerDependency,
    order: SortingOrder = SortingOrder.ASCENDING,
) -> list[StudyGroupData]:
    return await study_groups_service.search(
        subject=subject, order=order, repository=repository, log=log
    )


@study_group_app.get(
    "/{study_group_id}",
    summary="Get study group by ID",
    responses={
        200: {"description": "Study group details with members."},
        404: {"description": "Study group not found."},
    },
)
async def get_study_group(
    study_group_id: int,
    repository: RepositoryDependency,
    log: LoggerDependency,
) -> StudyGroupData:
    return await study_groups_service.read_by_id(
        study_group_id=study_group_id, repository=repository, log=log
    )


@study_group_app.post(
    "/{study_group_id}/members",
    summary="Join a study group",
    responses={
        200: {"description": "Member added, or was already present."},
        404: {"description": "Study group not found."},
    },
)
async def join_study_group(
    study_group_id: int,
    content: JoinStudyGroupRequest,
    repository: RepositoryDependency,
    log: LoggerDependency,
) -> StudyGroupData:
    return await study_groups_service.join(
        study_group_id=study_group_id,
        user_id=content.user_id,
        repository=repository,
        log=log,
    )


@study_group_app.delete(
    "/{study_group_id}/members/{user_id}",
    summary="Leave a study group",
    responses={
        200: {"description": "Member removed, or was not present."},
        404: {"description": "Study group not found."},
    },
)
async def leave_study_group(
    study_group_id: int,
    user_id: int,
    repository: RepositoryDependency,
    log: LoggerDependency,
) -> StudyGroupData:
    return await study_groups_service.leave(
        study_group_id=study_group_id,
        user_id=user_id,
        repository=repository,
        log=log,
    )
