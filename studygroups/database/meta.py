"""
Meta functionality for the database.
"""

from .study_group import StudyGroup, StudyGroupMembership

ALL_TABLES = (
    StudyGroup,
    StudyGroupMembership,
)
