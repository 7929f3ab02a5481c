"""
Core study group data models.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import AfterValidator, BaseModel, BeforeValidator, Field

from .user import UserReference

NAME_MIN_LENGTH = 5
NAME_MAX_LENGTH = 30


class Subject(str, Enum):
    MATH = "Math"
    PHYSICS = "Physics"
    CHEMISTRY = "Chemistry"


def check_name_length(name: str) -> str:
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        raise ValueError(
            f"Study group name must be between {NAME_MIN_LENGTH} and "
            f"{NAME_MAX_LENGTH} characters, got {len(name)}"
        )
    return name


def check_subject(subject: object) -> Subject:
    if isinstance(subject, Subject):
        return subject

    try:
        return Subject(subject)
    except ValueError:
        allowed = ", ".join(s.value for s in Subject)
        raise ValueError(f"invalid subject {subject!r}, expected one of {allowed}")


StudyGroupName = Annotated[str, AfterValidator(check_name_length)]
StudySubject = Annotated[Subject, BeforeValidator(check_subject)]


class StudyGroupData(BaseModel):
    """
    A study group. The name and subject are checked when the group is
    constructed; later changes to the membership never re-validate them.
    """

    study_group_id: int = 0
    name: StudyGroupName
    subject: StudySubject
    create_date: datetime = Field(frozen=True)
    created_by_user_id: int = 0
    members: list[UserReference] = Field(default_factory=list)

    def is_member(self, user_id: int) -> bool:
        return any(member.user_id == user_id for member in self.members)

    def add_member(self, user: UserReference):
        """
        Append `user` to the membership. Users already present are added again.
        """
        self.members.append(user)

    def remove_member(self, user: UserReference):
        """
        Remove the first occurrence of `user` from the membership. If they are
        not a member, this function does nothing.
        """
        if user in self.members:
            self.members.remove(user)
