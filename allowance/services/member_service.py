import logging
import math
from datetime import date

from sqlalchemy.orm import Session

from ..core.errors import IntegrityViolation, NotFoundError, ValidationError
from ..db import store
from ..models.activity_list import ActivityList
from ..models.member import Member

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 3
MAX_AGE = 18


def age_on(birth_date: date, today: date) -> int:
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def get_member(db: Session, member_id: str) -> Member | None:
    return store.get(db, Member, member_id)


def get_by_name(db: Session, name: str) -> Member | None:
    return store.find_one(db, Member, Member.name == name)


def list_members(db: Session, *, page: int = 1, size: int = 20) -> tuple[list[Member], int]:
    return store.page(db, Member, page=page, size=size, order_by=Member.name)


def _validate(db: Session, *, name: str, birth_date: date, allowance_value: float, member_id: str | None = None) -> tuple[str, float]:
    name = (name or "").strip()
    if len(name) < MIN_NAME_LENGTH:
        raise ValidationError("Invalid name")
    existing = get_by_name(db, name)
    if existing and existing.id != member_id:
        raise ValidationError("Name already registered")
    age = age_on(birth_date, date.today())
    if not 0 <= age < MAX_AGE:
        raise ValidationError("Invalid birth date")
    if allowance_value is None or not math.isfinite(allowance_value) or allowance_value < 0:
        raise ValidationError("Invalid allowance value")
    return name, round(float(allowance_value), 2)


def create_member(db: Session, *, name: str, birth_date: date, allowance_value: float) -> Member:
    name, allowance_value = _validate(db, name=name, birth_date=birth_date, allowance_value=allowance_value)
    try:
        member = store.save(db, Member(name=name, birth_date=birth_date, allowance_value=allowance_value))
    except IntegrityViolation as e:
        raise ValidationError("Name already registered") from e
    logger.info(f"Member created: id={member.id}, name={member.name}")
    return member


def update_member(db: Session, *, member_id: str, name: str, birth_date: date, allowance_value: float) -> Member:
    member = get_member(db, member_id)
    if not member:
        raise NotFoundError("Family member not found")
    name, allowance_value = _validate(
        db, name=name, birth_date=birth_date, allowance_value=allowance_value, member_id=member.id
    )

    old_name = member.name
    member.name = name
    member.birth_date = birth_date
    member.allowance_value = allowance_value
    if old_name != name:
        # lists reference their member by name
        for lst in store.find(db, ActivityList, ActivityList.family_member_name == old_name):
            lst.family_member_name = name
    try:
        member = store.save(db, member)
    except IntegrityViolation as e:
        raise ValidationError("Name already registered") from e
    logger.info(f"Member updated: id={member.id}, name={member.name}")
    return member


def delete_member(db: Session, member_id: str) -> None:
    if not store.delete(db, Member, member_id):
        raise NotFoundError("Family member not found")
    logger.info(f"Member deleted: id={member_id}")
