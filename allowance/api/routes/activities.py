from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ...schemas.activity import ActivityCreate, ActivityOut, ActivityUpdate, ActivityUpdateOut, CascadeOut
from ...schemas.common import Envelope, Page
from ...services.activity_service import (
    create_activity,
    delete_activity,
    get_activity,
    list_activities,
    update_activity,
)
from ..deps import Pagination, get_current_user, get_db
from ..responses import envelope

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("", response_model=Envelope[Page[ActivityOut]])
def all_activities(pagination: Pagination = Depends(), db: Session = Depends(get_db)):
    rows, count = list_activities(db, page=pagination.page, size=pagination.size)
    return envelope({"rows": [ActivityOut.model_validate(a) for a in rows], "count": count})


@router.get("/{activity_id}", response_model=Envelope[ActivityOut])
def one_activity(activity_id: str, db: Session = Depends(get_db)):
    a = get_activity(db, activity_id)
    if not a:
        raise HTTPException(404, "Activity not found")
    return envelope(ActivityOut.model_validate(a))


@router.post("", response_model=Envelope[ActivityOut], status_code=status.HTTP_201_CREATED)
def add_activity(payload: ActivityCreate, db: Session = Depends(get_db)):
    a = create_activity(db, description=payload.description)
    return envelope(ActivityOut.model_validate(a), status.HTTP_201_CREATED)


@router.put("", response_model=Envelope[ActivityUpdateOut])
def edit_activity(payload: ActivityUpdate, db: Session = Depends(get_db)):
    a, report = update_activity(db, activity_id=payload.id, description=payload.description)
    out = ActivityUpdateOut.model_validate(a)
    out.updated_lists = report.updated
    out.failed_lists = report.failed
    return envelope(out)


@router.delete("/{activity_id}", response_model=Envelope[CascadeOut])
def remove_activity(activity_id: str, db: Session = Depends(get_db)):
    report = delete_activity(db, activity_id)
    return envelope(CascadeOut(id=activity_id, updated_lists=report.updated, failed_lists=report.failed))
