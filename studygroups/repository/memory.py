"""
In-process study group storage. Nothing survives a restart.
"""

from itertools import count

import structlog
from structlog.typing import FilteringBoundLogger

from studygroups.core.ordering import SortingOrder, sort_by_create_date
from studygroups.core.study_group import StudyGroupData, Subject
from studygroups.core.user import UserReference

from .base import StudyGroupNotFound, StudyGroupRepository


class InMemoryStudyGroupRepository(StudyGroupRepository):
    store: dict[int, StudyGroupData]

    def __init__(self, log: FilteringBoundLogger | None = None):
        self.store = {}
        self.log = log or structlog.get_logger()
        self._ids = count(1)

    def _get(self, study_group_id: int) -> StudyGroupData:
        if study_group_id not in self.store:
            raise StudyGroupNotFound(f"Study group with id {study_group_id} not found")
        return self.store[study_group_id]

    async def create_study_group(self, group: StudyGroupData) -> StudyGroupData:
        stored = group.model_copy(update={"study_group_id": next(self._ids)}, deep=True)
        self.store[stored.study_group_id] = stored

        await self.log.ainfo(
            "study_group.stored", study_group_id=stored.study_group_id, backend="memory"
        )

        return stored.model_copy(deep=True)

    async def get_study_groups(self) -> list[StudyGroupData]:
        return [g.model_copy(deep=True) for g in self.store.values()]

    async def search_study_groups(
        self, subject: str, order: SortingOrder
    ) -> list[StudyGroupData]:
        needle = subject.lower()
        matches = [
            g.model_copy(deep=True)
            for g in self.store.values()
            if needle in g.name.lower() or needle in g.subject.value.lower()
        ]
        return sort_by_create_date(matches, order)

    async def read_study_group(self, study_group_id: int) -> StudyGroupData:
        return self._get(study_group_id).model_copy(deep=True)

    async def join_study_group(self, study_group_id: int, user_id: int) -> StudyGroupData:
        group = self._get(study_group_id)
        if not group.is_member(user_id):
            group.add_member(UserReference(user_id=user_id))
        return group.model_copy(deep=True)

    async def leave_study_group(
        self, study_group_id: int, user_id: int
    ) -> StudyGroupData:
        group = self._get(study_group_id)
        group.remove_member(UserReference(user_id=user_id))
        return group.model_copy(deep=True)

    async def user_has_group_for_subject(self, user_id: int, subject: Subject) -> bool:
        return any(
            g.subject == subject
            and (g.created_by_user_id == user_id or g.is_member(user_id))
            for g in self.store.values()
        )
