from __future__ import annotations

import enum
import uuid
from datetime import datetime

from sqlalchemy import (
    DateTime,
    Enum,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from legate.app.core.database import Base


class EstateRole(str, enum.Enum):
    OWNER = "OWNER"
    EDITOR = "EDITOR"
    VIEWER = "VIEWER"


class Estate(Base):
    __tablename__ = "estates"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id"), nullable=False
    )
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    case_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    collaborators: Mapped[list[EstateCollaborator]] = relationship(
        back_populates="estate", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("ix_estates_owner", "owner_id"),
    )


class EstateCollaborator(Base):
    """A non-owner user granted access to an estate."""

    __tablename__ = "estate_collaborators"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    estate_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("estates.id"), nullable=False
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id"), nullable=False
    )
    role: Mapped[EstateRole] = mapped_column(
        Enum(EstateRole), nullable=False, default=EstateRole.VIEWER
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    estate: Mapped[Estate] = relationship(back_populates="collaborators")

    __table_args__ = (
        UniqueConstraint("estate_id", "user_id", name="uq_estate_collaborator"),
        Index("ix_estate_collaborators_user", "user_id"),
    )
