from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...models.activity_list import ListStatus
from ...schemas.activity_list import ClosedHistoryOut, InProgressHistoryOut, ListOut
from ...schemas.common import Envelope
from ...services.aggregation import compute_total_discount, count_failed_activities_per_list, net_allowance
from ...services.list_service import find_lists
from ...services.member_service import get_by_name
from ..deps import get_current_user, get_db
from ..responses import envelope

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/{name}/closed", response_model=Envelope[ClosedHistoryOut])
def lists_closed_and_failed_activities(name: str, db: Session = Depends(get_db)):
    lists = find_lists(db, family_member_name=name, status=ListStatus.CLOSED)
    return envelope(ClosedHistoryOut(
        lists=[ListOut.model_validate(lst) for lst in lists],
        total_failed_activities=count_failed_activities_per_list(lists),
    ))


@router.get("/{name}/inprogress", response_model=Envelope[InProgressHistoryOut])
def lists_in_progress(name: str, db: Session = Depends(get_db)):
    member = get_by_name(db, name)
    if not member:
        raise HTTPException(404, "Family member not found")
    lists = find_lists(db, family_member_name=name, status=ListStatus.IN_PROGRESS)
    return envelope(InProgressHistoryOut(
        lists=[ListOut.model_validate(lst) for lst in lists],
        total_discount=compute_total_discount(lists),
        allowance_value=member.allowance_value,
        net_allowance=net_allowance(member.allowance_value, lists),
    ))
