import logging

from sqlalchemy.orm import Session

from ..core.errors import IntegrityViolation, NotFoundError, ValidationError
from ..db import store
from ..models.activity import Activity
from .relation_service import (
    CascadeReport,
    find_lists_with_activity,
    refresh_activity_in_lists,
    remove_activity_from_lists,
)

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 5


def get_activity(db: Session, activity_id: str) -> Activity | None:
    return store.get(db, Activity, activity_id)


def get_by_description(db: Session, description: str) -> Activity | None:
    return store.find_one(db, Activity, Activity.description == description)


def list_activities(db: Session, *, page: int = 1, size: int = 20) -> tuple[list[Activity], int]:
    return store.page(db, Activity, page=page, size=size, order_by=Activity.created_at)


def _validate_description(db: Session, description: str, *, activity_id: str | None = None) -> str:
    description = (description or "").strip()
    if len(description) < MIN_DESCRIPTION_LENGTH:
        raise ValidationError("Description is too short")
    existing = get_by_description(db, description)
    if existing and existing.id != activity_id:
        raise ValidationError("An activity with this description already exists")
    return description


def create_activity(db: Session, *, description: str) -> Activity:
    description = _validate_description(db, description)
    try:
        activity = store.save(db, Activity(description=description))
    except IntegrityViolation as e:
        raise ValidationError("An activity with this description already exists") from e
    logger.info(f"Activity created: id={activity.id}, description={activity.description!r}")
    return activity


def update_activity(db: Session, *, activity_id: str, description: str) -> tuple[Activity, CascadeReport]:
    """
    Rename an activity and refresh its snapshot in every open list.

    Returns the saved activity and the refresh report; lists in
    ``report.failed`` still carry the old description.
    """
    activity = get_activity(db, activity_id)
    if not activity:
        raise NotFoundError("Activity not found")
    description = _validate_description(db, description, activity_id=activity.id)

    activity.description = description
    try:
        activity = store.save(db, activity)
    except IntegrityViolation as e:
        raise ValidationError("An activity with this description already exists") from e

    # refresh the snapshot descriptions in every open list
    lists = find_lists_with_activity(db, activity_id=activity.id)
    report = refresh_activity_in_lists(db, lists, activity=activity)
    logger.info(
        f"Activity updated: id={activity.id}, {len(report.updated)} list(s) refreshed, {len(report.failed)} failed"
    )
    return activity, report


def delete_activity(db: Session, activity_id: str) -> CascadeReport:
    """
    Remove an activity from the catalog.

    The activity is first stripped from every list that is not closed, then the
    catalog row goes. Closed lists keep their copies as history.
    """
    activity = get_activity(db, activity_id)
    if not activity:
        raise NotFoundError("Activity not found")

    lists = find_lists_with_activity(db, activity_id=activity_id)
    report = remove_activity_from_lists(db, lists, activity_id=activity_id)
    store.delete(db, Activity, activity_id)
    logger.info(f"Activity deleted: id={activity_id}, removed from {len(report.updated)} list(s)")
    return report
