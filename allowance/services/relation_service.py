"""
Keeps the activity copies embedded in lists consistent with the catalog.

Lists store snapshots of activities rather than foreign keys, so editing or
deleting a catalog activity has to walk every list that references it.
Catalog-wide walks skip closed lists ("Encerrada"): those are history.
Each list is committed on its own; one failing list does not stop the batch.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Iterable

from sqlalchemy.orm import Session

from ..core.errors import NotFoundError, PersistenceError, ValidationError
from ..db import store
from ..models.activity import Activity
from ..models.activity_list import ActivityList, ListStatus

logger = logging.getLogger(__name__)


@dataclass
class CascadeReport:
    updated: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def _has_activity(lst: ActivityList, activity_id: str) -> bool:
    return any(item.get("activity_id") == activity_id for item in (lst.activities or []))


def filter_activities(lst: ActivityList, activity_id: str) -> list[dict]:
    """Copy of the list's instances without those of ``activity_id``."""
    return [dict(item) for item in (lst.activities or []) if item.get("activity_id") != activity_id]


def find_lists_with_activity(db: Session, *, activity_id: str) -> list[ActivityList]:
    open_lists = store.find(
        db, ActivityList, ActivityList.status != ListStatus.CLOSED, order_by=ActivityList.created_at
    )
    return [lst for lst in open_lists if _has_activity(lst, activity_id)]


def _apply_to_lists(
    db: Session,
    lists: Iterable[ActivityList],
    rewrite: Callable[[ActivityList], list[dict]],
    action: str,
) -> CascadeReport:
    report = CascadeReport()
    for lst in lists:
        list_id = lst.id
        try:
            lst.activities = rewrite(lst)
            store.save(db, lst)
        except PersistenceError as e:
            logger.error(f"Could not {action} on list {list_id}: {e.message}", exc_info=True)
            report.failed[list_id] = e.message
            continue
        report.updated.append(list_id)
    if report.failed:
        logger.warning(f"{action}: {len(report.updated)} list(s) updated, {len(report.failed)} failed")
    return report


def remove_activity_from_lists(db: Session, lists: Iterable[ActivityList], *, activity_id: str) -> CascadeReport:
    return _apply_to_lists(
        db, lists, lambda lst: filter_activities(lst, activity_id), f"remove activity {activity_id}"
    )


def refresh_activity_in_lists(db: Session, lists: Iterable[ActivityList], *, activity: Activity) -> CascadeReport:
    def rewrite(lst: ActivityList) -> list[dict]:
        items = []
        for item in lst.activities or []:
            item = dict(item)
            if item.get("activity_id") == activity.id:
                item["description"] = activity.description
            items.append(item)
        return items

    return _apply_to_lists(db, lists, rewrite, f"refresh activity {activity.id}")


def attach_activity(db: Session, *, list_id: str, activity_id: str, value: float) -> ActivityList:
    lst = store.get(db, ActivityList, list_id)
    if not lst:
        raise NotFoundError("List not found")
    activity = store.get(db, Activity, activity_id)
    if not activity:
        raise NotFoundError("Activity not found")
    if lst.status == ListStatus.CLOSED:
        raise ValidationError("This list is closed and cannot be changed")

    value = float(value)
    if not math.isfinite(value):
        raise ValidationError("Invalid value")
    value = round(value, 2)
    instance = {"activity_id": activity.id, "description": activity.description, "value": value}
    items = [dict(item) for item in (lst.activities or [])]
    # one instance per activity: re-attaching replaces the value
    for i, item in enumerate(items):
        if item.get("activity_id") == activity.id:
            items[i] = instance
            break
    else:
        items.append(instance)

    lst.activities = items
    store.save(db, lst)
    logger.info(f"Activity {activity.id} attached to list {lst.id} with value {value}")
    return lst


def detach_activity(db: Session, *, list_id: str, activity_id: str) -> ActivityList:
    lst = store.get(db, ActivityList, list_id)
    if not lst:
        raise NotFoundError("List not found")
    lst.activities = filter_activities(lst, activity_id)
    store.save(db, lst)
    logger.info(f"Activity {activity_id} detached from list {lst.id}")
    return lst
