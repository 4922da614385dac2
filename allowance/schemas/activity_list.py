from datetime import datetime
from pydantic import BaseModel, Field
from ..models.activity_list import ListStatus
from .common import ORMModel

class ListCreate(BaseModel):
    family_member_name: str
    status: str

class ListUpdate(BaseModel):
    family_member_name: str | None = None
    status: str | None = None

class ActivityInstanceOut(BaseModel):
    activity_id: str
    description: str
    value: float

class ListOut(ORMModel):
    id: str
    family_member_name: str
    status: ListStatus
    activities: list[ActivityInstanceOut] = []
    created_at: datetime
    updated_at: datetime

class RelationCreate(BaseModel):
    list_id: str
    activity_id: str
    value: float = Field(allow_inf_nan=False)

class RelationRemove(BaseModel):
    activity_id: str

class ClosedHistoryOut(BaseModel):
    lists: list[ListOut]
    total_failed_activities: list[int]

class InProgressHistoryOut(BaseModel):
    lists: list[ListOut]
    total_discount: float
    allowance_value: float
    net_allowance: float
