"""
Study group ORM
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Column
from sqlmodel import Field, Relationship, SQLModel

from studygroups.core.study_group import StudyGroupData, Subject
from studygroups.core.user import UserReference

from .types import UTCDateTime


class StudyGroupMembership(SQLModel, table=True):
    """
    A record of a user's membership of a study group. Users live outside this
    service, so only their ID is stored.
    """

    study_group_id: Optional[int] = Field(
        default=None,
        primary_key=True,
        foreign_key="studygroup.study_group_id",
        ondelete="CASCADE",
    )
    user_id: int = Field(primary_key=True)

    study_group: "StudyGroup" = Relationship(back_populates="memberships")


class StudyGroup(SQLModel, table=True):
    study_group_id: Optional[int] = Field(default=None, primary_key=True)

    name: str
    # Stored as the plain enum value so that it can be searched with LIKE.
    subject: str = Field(index=True)
    create_date: datetime = Field(sa_column=Column(UTCDateTime()))
    created_by_user_id: int = Field(default=0, index=True)

    memberships: list[StudyGroupMembership] = Relationship(
        back_populates="study_group",
        sa_relationship_kwargs=dict(lazy="joined", cascade="all, delete-orphan"),
    )

    def has_member(self, user_id: int) -> bool:
        return any(m.user_id == user_id for m in self.memberships)

    def add_member(self, user_id: int):
        """
        Add a member to this group. If they are already a member, this function
        does nothing.

        Note that all changes to the local copy of this data (as performed by
        this function) must be flushed to the database separately.
        """
        if self.has_member(user_id):
            return

        self.memberships.append(StudyGroupMembership(user_id=user_id))

    def remove_member(self, user_id: int):
        """
        Remove a member from this group. If they are not a member, this function
        does nothing.
        """
        self.memberships = [m for m in self.memberships if m.user_id != user_id]

    @classmethod
    def from_core(cls, group: StudyGroupData) -> "StudyGroup":
        """
        Build a new (unsaved) row from a core object. Duplicate members are
        collapsed as the membership table is keyed on the user.
        """
        member_ids = list(dict.fromkeys(m.user_id for m in group.members))

        return cls(
            name=group.name,
            subject=group.subject.value,
            create_date=group.create_date,
            created_by_user_id=group.created_by_user_id,
            memberships=[StudyGroupMembership(user_id=x) for x in member_ids],
        )

    def to_core(self) -> StudyGroupData:
        """
        Convert this StudyGroup ORM object to a StudyGroupData core object.
        """
        return StudyGroupData(
            study_group_id=self.study_group_id,
            name=self.name,
            subject=Subject(self.subject),
            create_date=self.create_date,
            created_by_user_id=self.created_by_user_id,
            members=[UserReference(user_id=m.user_id) for m in self.memberships],
        )
