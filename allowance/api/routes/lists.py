from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ...schemas.activity_list import ListCreate, ListOut, ListUpdate
from ...schemas.common import Envelope, Page
from ...services.list_service import (
    create_list,
    delete_list,
    get_list,
    list_lists,
    update_list,
)
from ..deps import Pagination, get_current_user, get_db
from ..responses import envelope

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("", response_model=Envelope[Page[ListOut]])
def all_lists(pagination: Pagination = Depends(), db: Session = Depends(get_db)):
    rows, count = list_lists(db, page=pagination.page, size=pagination.size)
    return envelope({"rows": [ListOut.model_validate(lst) for lst in rows], "count": count})


@router.get("/{list_id}", response_model=Envelope[ListOut])
def one_list(list_id: str, db: Session = Depends(get_db)):
    lst = get_list(db, list_id)
    if not lst:
        raise HTTPException(404, "List not found")
    return envelope(ListOut.model_validate(lst))


@router.post("", response_model=Envelope[ListOut], status_code=status.HTTP_201_CREATED)
def add_list(payload: ListCreate, db: Session = Depends(get_db)):
    lst = create_list(db, family_member_name=payload.family_member_name, status=payload.status)
    return envelope(ListOut.model_validate(lst), status.HTTP_201_CREATED)


# status changes go through here
@router.patch("/{list_id}", response_model=Envelope[ListOut])
def edit_list(list_id: str, payload: ListUpdate, db: Session = Depends(get_db)):
    lst = update_list(
        db,
        list_id=list_id,
        status=payload.status,
        family_member_name=payload.family_member_name,
    )
    return envelope(ListOut.model_validate(lst))


@router.delete("/{list_id}", response_model=Envelope[str])
def remove_list(list_id: str, db: Session = Depends(get_db)):
    delete_list(db, list_id)
    return envelope(list_id)
