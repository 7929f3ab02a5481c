"""
Repository interface for study group persistence.

The service layer only talks to this interface; concrete adapters live next
to it and are selected by configuration.
"""

from abc import ABC, abstractmethod

from studygroups.core.ordering import SortingOrder
from studygroups.core.study_group import StudyGroupData, Subject


class StudyGroupNotFound(Exception):
    pass


class StudyGroupRepository(ABC):
    @abstractmethod
    async def create_study_group(self, group: StudyGroupData) -> StudyGroupData:
        """
        Persist a new study group.

        Returns
        -------
        StudyGroupData
            The stored group, carrying its newly assigned ID.
        """
        ...

    @abstractmethod
    async def get_study_groups(self) -> list[StudyGroupData]:
        """
        All stored study groups, in the order they were created.
        """
        ...

    @abstractmethod
    async def search_study_groups(
        self, subject: str, order: SortingOrder
    ) -> list[StudyGroupData]:
        """
        Find the groups whose name or subject contains `subject`
        (case-insensitive), sorted by creation date.

        Raises
        ------
        ValueError
            If `order` is not a known sorting order.
        """
        ...

    @abstractmethod
    async def read_study_group(self, study_group_id: int) -> StudyGroupData:
        """
        Raises
        ------
        StudyGroupNotFound
            If the group does not exist.
        """
        ...

    @abstractmethod
    async def join_study_group(self, study_group_id: int, user_id: int) -> StudyGroupData:
        """
        Add a user to a group. Joining a group twice does nothing.

        Raises
        ------
        StudyGroupNotFound
            If the group does not exist.
        """
        ...

    @abstractmethod
    async def leave_study_group(
        self, study_group_id: int, user_id: int
    ) -> StudyGroupData:
        """
        Remove a user from a group. Leaving a group you are not in does nothing.

        Raises
        ------
        StudyGroupNotFound
            If the group does not exist.
        """
        ...

    @abstractmethod
    async def user_has_group_for_subject(self, user_id: int, subject: Subject) -> bool:
        """
        Whether the user created, or is a member of, a group for `subject`.
        """
        ...
