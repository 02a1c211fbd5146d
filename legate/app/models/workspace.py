from __future__ import annotations

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from legate.app.core.database import Base


class InvoiceTerms(str, enum.Enum):
    DUE_ON_RECEIPT = "DUE_ON_RECEIPT"
    NET_15 = "NET_15"
    NET_30 = "NET_30"
    NET_45 = "NET_45"
    NET_60 = "NET_60"


class WorkspaceSettings(Base):
    """Per-owner firm branding and billing defaults."""

    __tablename__ = "workspace_settings"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id"), unique=True, nullable=False
    )
    firm_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    default_currency: Mapped[str | None] = mapped_column(
        String(3), nullable=True, default="USD"
    )
    default_invoice_terms: Mapped[InvoiceTerms] = mapped_column(
        Enum(InvoiceTerms), nullable=False, default=InvoiceTerms.NET_30
    )
    default_hourly_rate_cents: Mapped[int | None] = mapped_column(
        Integer, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
