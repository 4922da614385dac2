from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...schemas.activity import CascadeOut
from ...schemas.activity_list import ListOut, RelationCreate, RelationRemove
from ...schemas.common import Envelope
from ...services.activity_service import get_activity
from ...services.relation_service import (
    attach_activity,
    detach_activity,
    find_lists_with_activity,
    remove_activity_from_lists,
)
from ..deps import get_current_user, get_db
from ..responses import envelope

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.post("", response_model=Envelope[ListOut])
def add_activity_into_list(payload: RelationCreate, db: Session = Depends(get_db)):
    lst = attach_activity(db, list_id=payload.list_id, activity_id=payload.activity_id, value=payload.value)
    return envelope(ListOut.model_validate(lst))


@router.patch("/{list_id}", response_model=Envelope[ListOut])
def remove_activity_from_specific_list(list_id: str, payload: RelationRemove, db: Session = Depends(get_db)):
    if not get_activity(db, payload.activity_id):
        raise HTTPException(404, "Activity not found")
    lst = detach_activity(db, list_id=list_id, activity_id=payload.activity_id)
    return envelope(ListOut.model_validate(lst))


@router.delete("/{activity_id}", response_model=Envelope[CascadeOut])
def remove_activity_from_all_lists(activity_id: str, db: Session = Depends(get_db)):
    """Strip the activity from every open list; the catalog entry stays."""
    if not get_activity(db, activity_id):
        raise HTTPException(404, "Activity not found")
    lists = find_lists_with_activity(db, activity_id=activity_id)
    report = remove_activity_from_lists(db, lists, activity_id=activity_id)
    return envelope(CascadeOut(id=activity_id, updated_lists=report.updated, failed_lists=report.failed))
