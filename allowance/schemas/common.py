from datetime import datetime
from typing import Any, Generic, TypeVar
from pydantic import BaseModel, ConfigDict

T = TypeVar("T")

class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

class Envelope(BaseModel, Generic[T]):
    """Every response body: ``{"status", "date", "data"}``."""
    status: int
    date: datetime
    data: T | None = None

class ErrorEnvelope(BaseModel):
    status: int
    date: datetime
    error: Any

class Page(BaseModel, Generic[T]):
    rows: list[T]
    count: int
