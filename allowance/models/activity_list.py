from enum import StrEnum
from typing import Any
from sqlalchemy import String, DateTime, JSON, Index, Enum, text
from sqlalchemy.orm import Mapped, mapped_column
from uuid import uuid4
from ..db.base_class import Base
from . import utcnow

class ListStatus(StrEnum):
    OPEN = "Em aberto"
    WAITING = "Em espera"
    IN_PROGRESS = "Em andamento"
    CLOSED = "Encerrada"

_IN_PROGRESS = f"status = '{ListStatus.IN_PROGRESS.value}'"

class ActivityList(Base):
    """
    A family member's scored list.

    ``activities`` holds embedded copies, one dict per attached activity:
    ``{"activity_id": str, "description": str, "value": float}``. The
    description is a snapshot taken on attach.
    """
    __table_args__ = (
        # at most one list "Em andamento" per member
        Index(
            "uq_list_member_in_progress",
            "family_member_name",
            unique=True,
            sqlite_where=text(_IN_PROGRESS),
            postgresql_where=text(_IN_PROGRESS),
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    family_member_name: Mapped[str] = mapped_column(String(128), index=True, nullable=False)
    status: Mapped[ListStatus] = mapped_column(
        Enum(ListStatus, native_enum=False, length=32, values_callable=lambda e: [m.value for m in e]),
        default=ListStatus.OPEN,
        index=True,
    )
    activities: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)
    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
