from datetime import date
from sqlalchemy import String, DateTime, Date, Float
from sqlalchemy.orm import Mapped, mapped_column
from uuid import uuid4
from ..db.base_class import Base
from . import utcnow

class Member(Base):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name: Mapped[str] = mapped_column(String(128), unique=True, index=True, nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    allowance_value: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
