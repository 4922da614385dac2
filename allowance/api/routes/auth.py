import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from ...schemas.auth import RefreshIn, TokenOut
from ...schemas.common import Envelope
from ...services.user_service import authenticate, issue_tokens, refresh_access_token, revoke_refresh_token
from ..deps import get_db, get_token_payload
from ..responses import envelope

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/token", response_model=Envelope[TokenOut])
def token(form: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    # OAuth2 form field "username" carries the e-mail
    user = authenticate(db, email=form.username, password=form.password)
    if not user:
        logger.warning(f"Login failed for {form.username}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect credentials")
    access, refresh_plain = issue_tokens(db, user)
    return envelope(TokenOut(access_token=access, refresh_token=refresh_plain))

@router.post("/refresh", response_model=Envelope[TokenOut])
def refresh(payload: RefreshIn, db: Session = Depends(get_db)):
    tokens = refresh_access_token(db, payload.refresh_token)
    if not tokens:
        raise HTTPException(401, "Invalid or expired refresh")
    access, refresh_plain = tokens
    return envelope(TokenOut(access_token=access, refresh_token=refresh_plain))

@router.post("/logout", response_model=Envelope[str])
def logout(payload: RefreshIn, db: Session = Depends(get_db)):
    if not revoke_refresh_token(db, payload.refresh_token):
        raise HTTPException(401, "Invalid or expired refresh")
    return envelope("Logged out.")

@router.get("", response_model=Envelope[str])
def token_email(payload: dict = Depends(get_token_payload)):
    email = payload.get("email")
    if not email:
        raise HTTPException(401, "Invalid token payload")
    return envelope(email)
