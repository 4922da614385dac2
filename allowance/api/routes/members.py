from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ...schemas.common import Envelope, Page
from ...schemas.member import MemberCreate, MemberOut, MemberUpdate
from ...services.member_service import (
    create_member,
    delete_member,
    get_member,
    list_members,
    update_member,
)
from ..deps import Pagination, get_current_user, get_db
from ..responses import envelope

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("", response_model=Envelope[Page[MemberOut]])
def all_members(pagination: Pagination = Depends(), db: Session = Depends(get_db)):
    rows, count = list_members(db, page=pagination.page, size=pagination.size)
    return envelope({"rows": [MemberOut.model_validate(m) for m in rows], "count": count})


@router.get("/{member_id}", response_model=Envelope[MemberOut])
def one_member(member_id: str, db: Session = Depends(get_db)):
    m = get_member(db, member_id)
    if not m:
        raise HTTPException(404, "Family member not found")
    return envelope(MemberOut.model_validate(m))


@router.post("", response_model=Envelope[MemberOut], status_code=status.HTTP_201_CREATED)
def add_member(payload: MemberCreate, db: Session = Depends(get_db)):
    m = create_member(
        db,
        name=payload.name,
        birth_date=payload.birth_date,
        allowance_value=payload.allowance_value,
    )
    return envelope(MemberOut.model_validate(m), status.HTTP_201_CREATED)


@router.put("", response_model=Envelope[MemberOut])
def edit_member(payload: MemberUpdate, db: Session = Depends(get_db)):
    m = update_member(
        db,
        member_id=payload.id,
        name=payload.name,
        birth_date=payload.birth_date,
        allowance_value=payload.allowance_value,
    )
    return envelope(MemberOut.model_validate(m))


@router.delete("/{member_id}", response_model=Envelope[str])
def remove_member(member_id: str, db: Session = Depends(get_db)):
    delete_member(db, member_id)
    return envelope(member_id)
