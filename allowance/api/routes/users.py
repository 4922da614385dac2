from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...schemas.common import Envelope
from ...schemas.user import SignupIn, UserOut, UserUpdate
from ...models.user import User
from ...services.user_service import create_user, update_user, delete_user
from ..deps import get_db, get_current_user
from ..responses import envelope

router = APIRouter()


@router.post("", response_model=Envelope[UserOut], status_code=status.HTTP_201_CREATED)
def signup(payload: SignupIn, db: Session = Depends(get_db)):
    user = create_user(db, email=payload.email, password=payload.password)
    return envelope(UserOut.model_validate(user), status.HTTP_201_CREATED)


@router.get("/me", response_model=Envelope[UserOut])
def me(current: User = Depends(get_current_user)):
    return envelope(UserOut.model_validate(current))


@router.put("/me", response_model=Envelope[UserOut])
def update_me(
    payload: UserUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    user = update_user(db, current, email=payload.email, password=payload.password)
    return envelope(UserOut.model_validate(user))


@router.delete("/me", response_model=Envelope[str])
def delete_me(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    delete_user(db, current.id)
    return envelope("User deleted.")
