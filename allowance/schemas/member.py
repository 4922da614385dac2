from datetime import date, datetime
from pydantic import BaseModel, Field
from .common import ORMModel

class MemberCreate(BaseModel):
    name: str
    birth_date: date
    allowance_value: float = Field(ge=0, allow_inf_nan=False)

class MemberUpdate(MemberCreate):
    id: str

class MemberOut(ORMModel):
    id: str
    name: str
    birth_date: date
    allowance_value: float
    created_at: datetime
    updated_at: datetime
