from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from legate.app.core.context import RequestContext
from legate.app.core.money import ZERO, invoice_amount, normalize_money_from_db
from legate.app.models.invoice import Invoice, InvoiceStatus
from legate.app.services.estates import estate_label, get_accessible_estate

logger = logging.getLogger(__name__)

STATUS_ALL = "ALL"
# "UNPAID" in the list filter means anything not yet settled
STATUS_UNPAID = "UNPAID"
UNSETTLED_STATUSES = (
    InvoiceStatus.DRAFT,
    InvoiceStatus.SENT,
    InvoiceStatus.UNPAID,
    InvoiceStatus.PARTIAL,
)
CLOSED_STATUSES = (InvoiceStatus.PAID, InvoiceStatus.VOID)

_CENT = Decimal("0.01")

TIMEFRAMES = ("all", "30d", "this-month")
SORT_OPTIONS = ("recent", "invoice-asc", "invoice-desc")


def _status_clause(status_filter: str):
    if status_filter == STATUS_UNPAID:
        return Invoice.status.in_(UNSETTLED_STATUSES)
    return Invoice.status == InvoiceStatus(status_filter)


def _timeframe_start(timeframe: str, now: datetime) -> datetime | None:
    if timeframe == "30d":
        return now - timedelta(days=30)
    if timeframe == "this-month":
        return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return None


def _order_by(sort_by: str) -> list[Any]:
    if sort_by == "invoice-asc":
        return [Invoice.invoice_number.asc(), Invoice.created_at.desc()]
    if sort_by == "invoice-desc":
        return [Invoice.invoice_number.desc(), Invoice.created_at.desc()]
    return [Invoice.issue_date.desc(), Invoice.created_at.desc()]


def _item(inv: Invoice) -> dict[str, Any]:
    amount = normalize_money_from_db(invoice_amount(inv)).quantize(_CENT)
    status = InvoiceStatus(inv.status)
    balance_due = ZERO if status in CLOSED_STATUSES else amount
    return {
        "id": str(inv.id),
        "status": status.value,
        "invoice_number": inv.invoice_number,
        "issue_date": inv.issue_date.isoformat() if inv.issue_date else None,
        "due_date": inv.due_date.isoformat() if inv.due_date else None,
        "notes": inv.notes,
        "total": str(amount),
        "balance_due": str(balance_due),
    }


def list_estate_invoices(
    db: Session,
    ctx: RequestContext,
    estate_id: UUID,
    *,
    status: str = STATUS_ALL,
    q: str = "",
    invoice_number: str = "",
    timeframe: str = "all",
    sort_by: str = "recent",
    now: datetime | None = None,
) -> dict[str, Any]:
    """List one estate's invoices with amounts normalized to dollars.

    Stored amounts go through the magnitude heuristic, unlike the aging
    report which reads them as cents.
    """
    estate = get_accessible_estate(db, ctx, estate_id)
    now = now or datetime.now(timezone.utc)

    query = db.query(Invoice).filter(
        Invoice.owner_id == ctx.user_id, Invoice.estate_id == estate.id
    )

    status_filter = status.strip().upper() or STATUS_ALL
    if status_filter != STATUS_ALL:
        query = query.filter(_status_clause(status_filter))

    number_filter = invoice_number.strip()
    if number_filter:
        query = query.filter(Invoice.invoice_number.ilike(f"%{number_filter}%"))

    search = q.strip()
    if search:
        query = query.filter(
            or_(
                Invoice.notes.ilike(f"%{search}%"),
                Invoice.invoice_number.ilike(f"%{search}%"),
            )
        )

    start = _timeframe_start(timeframe, now)
    if start is not None:
        query = query.filter(Invoice.issue_date >= start)

    invoices = query.order_by(*_order_by(sort_by)).all()
    items = [_item(inv) for inv in invoices]

    total_invoiced = ZERO
    total_collected = ZERO
    total_outstanding = ZERO
    for item in items:
        amount = Decimal(item["total"])
        if item["status"] != InvoiceStatus.VOID.value:
            total_invoiced += amount
        if item["status"] == InvoiceStatus.PAID.value:
            total_collected += amount
        if item["status"] not in (s.value for s in CLOSED_STATUSES):
            total_outstanding += amount

    logger.info(
        "Listed %d invoices for estate %s (status=%s, timeframe=%s)",
        len(items),
        estate.id,
        status_filter,
        timeframe,
    )
    return {
        "estate_id": str(estate.id),
        "estate_label": estate_label(estate.id, estate.display_name, estate.case_name),
        "invoices": items,
        "summary": {
            "total_invoiced": str(total_invoiced),
            "total_collected": str(total_collected),
            "total_outstanding": str(total_outstanding),
        },
    }
