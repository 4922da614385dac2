from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from uuid import uuid4
from ..db.base_class import Base
from . import utcnow

class Activity(Base):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    description: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
