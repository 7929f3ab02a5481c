"""
Relational storage for study groups, using SQLModel tables through an
asynchronous SQLAlchemy session.
"""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog.typing import FilteringBoundLogger

from studygroups.core.ordering import SortingOrder, check_order
from studygroups.core.study_group import StudyGroupData, Subject
from studygroups.database.study_group import StudyGroup, StudyGroupMembership

from .base import StudyGroupNotFound, StudyGroupRepository


def _order_by(order: SortingOrder):
    match check_order(order):
        case SortingOrder.ASCENDING:
            return (StudyGroup.create_date.asc(), StudyGroup.study_group_id.asc())
        case SortingOrder.DESCENDING:
            return (StudyGroup.create_date.desc(), StudyGroup.study_group_id.asc())
        case _:
            raise ValueError(f"Unknown sort order {order!r}")


class SQLStudyGroupRepository(StudyGroupRepository):
    """
    Study group repository bound to a single database session. The caller owns
    the transaction; this class only flushes.
    """

    conn: AsyncSession
    log: FilteringBoundLogger

    def __init__(self, conn: AsyncSession, log: FilteringBoundLogger):
        self.conn = conn
        self.log = log

    async def _read(self, study_group_id: int, log: FilteringBoundLogger) -> StudyGroup:
        result = await self.conn.execute(
            select(StudyGroup).where(StudyGroup.study_group_id == study_group_id)
        )
        group = result.unique().scalar_one_or_none()
        if not group:
            await log.ainfo("study_group.not_found")
            raise StudyGroupNotFound(f"Study group with id {study_group_id} not found")
        return group

    async def create_study_group(self, group: StudyGroupData) -> StudyGroupData:
        log = self.log.bind(
            name=group.name,
            subject=group.subject.value,
            created_by_user_id=group.created_by_user_id,
            number_of_members=len(group.members),
        )

        row = StudyGroup.from_core(group)
        self.conn.add(row)
        await self.conn.flush()

        await log.ainfo("study_group.stored", study_group_id=row.study_group_id)

        return row.to_core()

    async def get_study_groups(self) -> list[StudyGroupData]:
        result = await self.conn.execute(
            select(StudyGroup).order_by(StudyGroup.study_group_id)
        )
        groups = result.unique().scalars().all()
        await self.log.adebug("study_group.listed", number_of_groups=len(groups))
        return [g.to_core() for g in groups]

    async def search_study_groups(
        self, subject: str, order: SortingOrder
    ) -> list[StudyGroupData]:
        log = self.log.bind(query=subject, order=order)

        result = await self.conn.execute(
            select(StudyGroup)
            .where(
                or_(
                    StudyGroup.name.icontains(subject, autoescape=True),
                    StudyGroup.subject.icontains(subject, autoescape=True),
                )
            )
            .order_by(*_order_by(order))
        )
        groups = result.unique().scalars().all()
        await log.adebug("study_group.searched", number_of_groups=len(groups))
        return [g.to_core() for g in groups]

    async def read_study_group(self, study_group_id: int) -> StudyGroupData:
        log = self.log.bind(study_group_id=study_group_id)
        group = await self._read(study_group_id, log)
        await log.adebug("study_group.found")
        return group.to_core()

    async def join_study_group(self, study_group_id: int, user_id: int) -> StudyGroupData:
        log = self.log.bind(study_group_id=study_group_id, user_id=user_id)
        group = await self._read(study_group_id, log)

        if group.has_member(user_id):
            await log.ainfo("study_group.user_already_member")
        else:
            group.add_member(user_id)
            await self.conn.flush()
            await log.ainfo("study_group.user_added")

        return group.to_core()

    async def leave_study_group(
        self, study_group_id: int, user_id: int
    ) -> StudyGroupData:
        log = self.log.bind(study_group_id=study_group_id, user_id=user_id)
        group = await self._read(study_group_id, log)

        if group.has_member(user_id):
            group.remove_member(user_id)
            await self.conn.flush()
            await log.ainfo("study_group.user_removed")
        else:
            await log.ainfo("study_group.user_not_member")

        return group.to_core()

    async def user_has_group_for_subject(self, user_id: int, subject: Subject) -> bool:
        log = self.log.bind(user_id=user_id, subject=subject.value)

        result = await self.conn.execute(
            select(StudyGroup.study_group_id)
            .outerjoin(
                StudyGroupMembership,
                StudyGroupMembership.study_group_id == StudyGroup.study_group_id,
            )
            .where(StudyGroup.subject == subject.value)
            .where(
                or_(
                    StudyGroup.created_by_user_id == user_id,
                    StudyGroupMembership.user_id == user_id,
                )
            )
            .limit(1)
        )
        found = result.first() is not None

        await log.adebug("study_group.subject_checked", found=found)
        return found
