from datetime import datetime
from pydantic import BaseModel, EmailStr
from .common import ORMModel

class SignupIn(BaseModel):
    email: EmailStr
    password: str

class UserUpdate(BaseModel):
    email: EmailStr | None = None
    password: str | None = None

class UserOut(ORMModel):
    id: str
    email: EmailStr
    is_active: bool
    created_at: datetime
