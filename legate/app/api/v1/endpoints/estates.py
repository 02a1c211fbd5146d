from __future__ import annotations

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from legate.app.api.deps import get_request_context
from legate.app.core.context import RequestContext
from legate.app.core.database import get_db
from legate.app.schemas.invoice import EstateInvoiceListResponse
from legate.app.services.invoices import list_estate_invoices

router = APIRouter()

StatusFilter = Literal["ALL", "DRAFT", "SENT", "UNPAID", "PARTIAL", "PAID", "VOID"]


@router.get("/{estate_id}/invoices", response_model=EstateInvoiceListResponse)
def estate_invoices(
    estate_id: UUID,
    status: StatusFilter = Query("ALL"),
    q: str = Query(""),
    invoice_number: str = Query(""),
    timeframe: Literal["all", "30d", "this-month"] = Query("all"),
    sort_by: Literal["recent", "invoice-asc", "invoice-desc"] = Query("recent"),
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> dict[str, object]:
    return list_estate_invoices(
        db,
        ctx,
        estate_id,
        status=status,
        q=q,
        invoice_number=invoice_number,
        timeframe=timeframe,
        sort_by=sort_by,
    )
