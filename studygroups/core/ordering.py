"""
Sort orders for study group listings.
"""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .study_group import StudyGroupData


class SortingOrder(str, Enum):
    ASCENDING = "Ascending"
    DESCENDING = "Descending"


def check_order(order: object) -> "SortingOrder":
    """
    Only `SortingOrder` members are accepted. Plain strings, even ones equal to
    a member's value, are rejected; convert them with `SortingOrder(value)`
    first.

    Raises
    ------
    ValueError
        If `order` is not a `SortingOrder`.
    """
    if not isinstance(order, SortingOrder):
        raise ValueError(f"Unknown sort order {order!r}")
    return order


def sort_by_create_date(
    groups: list["StudyGroupData"], order: SortingOrder
) -> list["StudyGroupData"]:
    """
    Sort groups by their creation date. Groups created at the same instant
    keep their relative order.

    Raises
    ------
    ValueError
        If `order` is not a known sorting order.
    """
    match check_order(order):
        case SortingOrder.ASCENDING:
            return sorted(groups, key=lambda g: g.create_date)
        case SortingOrder.DESCENDING:
            return sorted(groups, key=lambda g: g.create_date, reverse=True)
        case _:
            raise ValueError(f"Unknown sort order {order!r}")
