from datetime import datetime
from pydantic import BaseModel
from .common import ORMModel

class ActivityCreate(BaseModel):
    description: str

class ActivityUpdate(ActivityCreate):
    id: str

class ActivityOut(ORMModel):
    id: str
    description: str
    created_at: datetime
    updated_at: datetime

class CascadeOut(BaseModel):
    id: str
    updated_lists: list[str] = []
    failed_lists: dict[str, str] = {}

class ActivityUpdateOut(ActivityOut):
    updated_lists: list[str] = []
    failed_lists: dict[str, str] = {}
