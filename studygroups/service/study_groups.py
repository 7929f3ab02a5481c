"""
Service layer for study groups.
"""

from structlog.typing import FilteringBoundLogger

from studygroups.core.ordering import SortingOrder
from studygroups.core.study_group import StudyGroupData
from studygroups.repository.base import StudyGroupNotFound, StudyGroupRepository

__all__ = ["DuplicateSubjectError", "StudyGroupNotFound"]


class DuplicateSubjectError(Exception):
    pass


async def create(
    group: StudyGroupData,
    repository: StudyGroupRepository,
    log: FilteringBoundLogger,
) -> StudyGroupData:
    """
    Create a new study group.

    Parameters
    ----------
    group: StudyGroupData
        The new group. Its `created_by_user_id` is the user the group is
        created for.
    repository: StudyGroupRepository
        Storage for study groups.
    log: FilteringBoundLogger
        Logger instance.

    Raises
    ------
    DuplicateSubjectError
        If the creating user already has a group for this subject. Nothing is
        stored in that case.
    """
    log = log.bind(
        name=group.name,
        subject=group.subject.value,
        created_by_user_id=group.created_by_user_id,
    )

    # Not atomic: two concurrent requests can both pass this check unless the
    # storage layer serializes them.
    if await repository.user_has_group_for_subject(
        user_id=group.created_by_user_id, subject=group.subject
    ):
        await log.ainfo("study_group.duplicate_subject")
        raise DuplicateSubjectError(
            f"User {group.created_by_user_id} already has a "
            f"{group.subject.value} study group"
        )

    created = await repository.create_study_group(group)
    await log.ainfo("study_group.created", study_group_id=created.study_group_id)

    return created


async def get_group_list(
    repository: StudyGroupRepository,
    log: FilteringBoundLogger,
) -> list[StudyGroupData]:
    """
    Get a list of all study groups.
    """
    groups = await repository.get_study_groups()
    await log.adebug("study_group.listed", number_of_groups=len(groups))
    return groups


async def search(
    subject: str,
    order: SortingOrder,
    repository: StudyGroupRepository,
    log: FilteringBoundLogger,
) -> list[StudyGroupData]:
    """
    Search for study groups by name or subject.

    Parameters
    ----------
    subject: str
        Text to look for in the group name or subject.
    order: SortingOrder
        Whether the oldest (ascending) or newest (descending) groups come first.

    Returns
    -------
    list[StudyGroupData]
        The matching groups. Empty if nothing matches.

    Raises
    ------
    ValueError
        If `order` is not a known sorting order.
    """
    log = log.bind(query=subject, order=order)
    groups = await repository.search_study_groups(subject=subject, order=order)
    await log.adebug("study_group.searched", number_of_groups=len(groups))
    return groups


async def read_by_id(
    study_group_id: int,
    repository: StudyGroupRepository,
    log: FilteringBoundLogger,
) -> StudyGroupData:
    """
    Read a study group by its ID.

    Raises
    ------
    StudyGroupNotFound
        If the group does not exist.
    """
    group = await repository.read_study_group(study_group_id=study_group_id)
    await log.adebug("study_group.found", study_group_id=study_group_id)
    return group


async def join(
    study_group_id: int,
    user_id: int,
    repository: StudyGroupRepository,
    log: FilteringBoundLogger,
) -> StudyGroupData:
    """
    Add a user to a study group.

    Raises
    ------
    StudyGroupNotFound
        If the group does not exist.
    """
    log = log.bind(study_group_id=study_group_id, user_id=user_id)
    group = await repository.join_study_group(
        study_group_id=study_group_id, user_id=user_id
    )
    await log.ainfo("study_group.joined")
    return group


async def leave(
    study_group_id: int,
    user_id: int,
    repository: StudyGroupRepository,
    log: FilteringBoundLogger,
) -> StudyGroupData:
    """
    Remove a user from a study group.

    Raises
    ------
    StudyGroupNotFound
        If the group does not exist.
    """
    log = log.bind(study_group_id=study_group_id, user_id=user_id)
    group = await repository.leave_study_group(
        study_group_id=study_group_id, user_id=user_id
    )
    await log.ainfo("study_group.left")
    return group
