import logging

from sqlalchemy.orm import Session

from ..core.errors import ConflictError, IntegrityViolation, NotFoundError, ValidationError
from ..db import store
from ..models.activity_list import ActivityList, ListStatus
from .member_service import get_by_name

logger = logging.getLogger(__name__)

# statuses a member may hold on one list only
UNIQUE_STATUSES = frozenset({ListStatus.IN_PROGRESS})


def parse_status(value: str | ListStatus) -> ListStatus:
    try:
        return ListStatus(value)
    except ValueError:
        raise ValidationError("Invalid status")


def get_list(db: Session, list_id: str) -> ActivityList | None:
    return store.get(db, ActivityList, list_id)


def list_lists(db: Session, *, page: int = 1, size: int = 20) -> tuple[list[ActivityList], int]:
    return store.page(db, ActivityList, page=page, size=size, order_by=ActivityList.created_at)


def find_lists(db: Session, *, family_member_name: str, status: ListStatus | None = None) -> list[ActivityList]:
    criteria = [ActivityList.family_member_name == family_member_name]
    if status is not None:
        criteria.append(ActivityList.status == status)
    return store.find(db, ActivityList, *criteria, order_by=ActivityList.created_at)


def _ensure_member(db: Session, name: str) -> None:
    if not name or not get_by_name(db, name):
        raise ValidationError("Invalid name")


def _ensure_unique_status(db: Session, *, name: str, status: ListStatus, list_id: str | None = None) -> None:
    if status not in UNIQUE_STATUSES:
        return
    for other in find_lists(db, family_member_name=name, status=status):
        if other.id != list_id:
            raise ConflictError(f"This member already has a list '{status.value}'")


def create_list(db: Session, *, family_member_name: str, status: str | ListStatus) -> ActivityList:
    status = parse_status(status)
    _ensure_member(db, family_member_name)
    _ensure_unique_status(db, name=family_member_name, status=status)
    try:
        lst = store.save(db, ActivityList(family_member_name=family_member_name, status=status, activities=[]))
    except IntegrityViolation as e:
        raise ConflictError(f"This member already has a list '{status.value}'") from e
    logger.info(f"List created: id={lst.id}, member={lst.family_member_name}, status={lst.status.value}")
    return lst


def update_list(
    db: Session,
    *,
    list_id: str,
    status: str | ListStatus | None = None,
    family_member_name: str | None = None,
) -> ActivityList:
    """
    Change a list's status and/or member.

    Any of the four statuses may follow any other, except that a closed list
    ("Encerrada") stays closed.
    """
    lst = get_list(db, list_id)
    if not lst:
        raise NotFoundError("List not found")

    new_status = parse_status(status) if status is not None else lst.status
    new_name = family_member_name if family_member_name is not None else lst.family_member_name

    if lst.status == ListStatus.CLOSED and new_status != ListStatus.CLOSED:
        raise ValidationError("A closed list cannot be reopened")
    if new_name != lst.family_member_name:
        _ensure_member(db, new_name)
    _ensure_unique_status(db, name=new_name, status=new_status, list_id=lst.id)

    lst.status = new_status
    lst.family_member_name = new_name
    try:
        lst = store.save(db, lst)
    except IntegrityViolation as e:
        raise ConflictError(f"This member already has a list '{new_status.value}'") from e
    logger.info(f"List updated: id={lst.id}, status={lst.status.value}")
    return lst


def delete_list(db: Session, list_id: str) -> None:
    if not store.delete(db, ActivityList, list_id):
        raise NotFoundError("List not found")
    logger.info(f"List deleted: id={list_id}")
