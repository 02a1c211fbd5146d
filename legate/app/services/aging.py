"""Accounts-receivable aging over outstanding invoices.

Each outstanding invoice is placed into one of five fixed buckets by how many
whole days have passed since its reference date (due date, else issue date,
else creation date). The report is recomputed on every request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable

from sqlalchemy.orm import Session

from legate.app.core.context import RequestContext
from legate.app.core.money import (
    format_money,
    invoice_amount,
    resolve_currency,
    to_cents,
)
from legate.app.models.invoice import OUTSTANDING_STATUSES, Invoice, InvoiceStatus
from legate.app.models.workspace import WorkspaceSettings
from legate.app.services.estates import estate_label_map, label_for_invoice

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)

CURRENT = "CURRENT"
AGE_0_30 = "AGE_0_30"
AGE_31_60 = "AGE_31_60"
AGE_61_90 = "AGE_61_90"
AGE_90_PLUS = "AGE_90_PLUS"

NO_OLDEST = "None"


@dataclass(frozen=True)
class AgingBucket:
    key: str
    label: str
    min_days: int | None  # None: unbounded
    max_days: int | None

    def contains(self, days_past_due: int) -> bool:
        if self.min_days is not None and days_past_due < self.min_days:
            return False
        if self.max_days is not None and days_past_due > self.max_days:
            return False
        return True


AGING_BUCKETS: tuple[AgingBucket, ...] = (
    AgingBucket(CURRENT, "Current (not yet due)", None, 0),
    AgingBucket(AGE_0_30, "0–30 days past due", 1, 30),
    AgingBucket(AGE_31_60, "31–60 days past due", 31, 60),
    AgingBucket(AGE_61_90, "61–90 days past due", 61, 90),
    AgingBucket(AGE_90_PLUS, "90+ days past due", 91, None),
)


def bucket_for(days_past_due: int) -> AgingBucket:
    """First bucket whose range holds *days_past_due*; Current otherwise."""
    for bucket in AGING_BUCKETS:
        if bucket.contains(days_past_due):
            return bucket
    return AGING_BUCKETS[0]


# ─── Dates ──────────────────────────────────────────────────────────────────


def as_utc(value: object) -> datetime | None:
    """Coerce a stored date value to an aware UTC datetime.

    Accepts datetimes (naive ones are taken as UTC), dates and ISO 8601
    strings. Anything else, or an unparsable string, gives None.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return None


def resolve_reference_date(invoice: Invoice) -> datetime | None:
    """Due date, else issue date, else creation date.

    The first present field decides; if it cannot be read the invoice has no
    reference date at all.
    """
    for raw in (invoice.due_date, invoice.issue_date, invoice.created_at):
        if raw is not None:
            return as_utc(raw)
    return None


def days_past_due(reference: datetime, now: datetime) -> int:
    """Whole days from *reference* to *now*, floored."""
    return (now - reference) // ONE_DAY


# ─── Rows ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class AgingRow:
    id: str
    estate_id: str | None
    estate_label: str
    status: InvoiceStatus
    invoice_number: str | None
    amount_cents: int
    reference_date: datetime
    days_past_due: int

    @property
    def bucket(self) -> AgingBucket:
        return bucket_for(self.days_past_due)

    @property
    def display_number(self) -> str:
        return self.invoice_number or f"Invoice {self.id[-6:].upper()}"

    @property
    def days_past_due_label(self) -> str:
        if self.days_past_due > 0:
            return f"{self.days_past_due} days"
        return "Not yet due"


def build_aging_row(
    invoice: Invoice, estate_labels: dict[str, str], now: datetime
) -> AgingRow | None:
    """Project one invoice into the report, or None when it is excluded.

    Excluded: statuses other than SENT/UNPAID/PARTIAL, a missing, zero,
    negative or non-finite amount, and a missing or unreadable reference date.
    """
    try:
        status = InvoiceStatus(invoice.status)
    except ValueError:
        return None
    if status not in OUTSTANDING_STATUSES:
        return None

    amount_cents = to_cents(invoice_amount(invoice))
    if amount_cents <= 0:
        logger.debug("Aging: skipping invoice %s with no positive amount", invoice.id)
        return None

    reference = resolve_reference_date(invoice)
    if reference is None:
        logger.debug("Aging: skipping invoice %s with no reference date", invoice.id)
        return None

    estate_id = str(invoice.estate_id) if invoice.estate_id else None
    return AgingRow(
        id=str(invoice.id),
        estate_id=estate_id,
        estate_label=label_for_invoice(estate_id, estate_labels),
        status=status,
        invoice_number=invoice.invoice_number or None,
        amount_cents=amount_cents,
        reference_date=reference,
        days_past_due=days_past_due(reference, now),
    )


# ─── Aggregation ────────────────────────────────────────────────────────────


def percent_of(part: int, total: int) -> int:
    """Whole percentage of *part* in *total*, halves rounded up; 0 if no total."""
    if total <= 0:
        return 0
    ratio = Decimal(part) * 100 / Decimal(total)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass
class AgingSummary:
    rows: dict[str, list[AgingRow]] = field(
        default_factory=lambda: {b.key: [] for b in AGING_BUCKETS}
    )
    totals: dict[str, int] = field(
        default_factory=lambda: {b.key: 0 for b in AGING_BUCKETS}
    )
    total_outstanding_cents: int = 0

    def percent(self, key: str) -> int:
        return percent_of(self.totals[key], self.total_outstanding_cents)

    @property
    def buckets_with_balance(self) -> int:
        return sum(
            1 for b in AGING_BUCKETS if self.totals[b.key] > 0 and self.rows[b.key]
        )

    @property
    def oldest_days_past_due(self) -> int | None:
        ninety_plus = self.rows[AGE_90_PLUS]
        if not ninety_plus:
            return None
        return max(row.days_past_due for row in ninety_plus)

    @property
    def oldest_label(self) -> str:
        oldest = self.oldest_days_past_due
        if oldest is None:
            return NO_OLDEST
        return f"{oldest} days past due"


def aggregate(rows: Iterable[AgingRow]) -> AgingSummary:
    """Group rows by bucket and total them. Bucket rows are most-overdue first."""
    summary = AgingSummary()
    total = 0
    for row in rows:
        key = row.bucket.key
        summary.rows[key].append(row)
        summary.totals[key] += row.amount_cents
        total += row.amount_cents

    for key in summary.rows:
        summary.rows[key].sort(key=lambda r: r.days_past_due, reverse=True)

    summary.total_outstanding_cents = max(total, 0)
    return summary


def _row_payload(row: AgingRow, currency: str) -> dict[str, Any]:
    return {
        "id": row.id,
        "estate_id": row.estate_id,
        "estate_label": row.estate_label,
        "status": row.status.value,
        "invoice_number": row.invoice_number,
        "display_number": row.display_number,
        "amount_cents": row.amount_cents,
        "amount": format_money(row.amount_cents, currency),
        "reference_date": row.reference_date.isoformat(),
        "days_past_due": row.days_past_due,
        "days_past_due_label": row.days_past_due_label,
    }


def build_report(summary: AgingSummary, now: datetime, currency: str) -> dict[str, Any]:
    buckets = []
    for bucket in AGING_BUCKETS:
        rows = summary.rows[bucket.key]
        total = summary.totals[bucket.key]
        buckets.append(
            {
                "key": bucket.key,
                "label": bucket.label,
                "total_cents": total,
                "total": format_money(total, currency),
                "percent": summary.percent(bucket.key),
                "count": len(rows),
                "rows": [_row_payload(r, currency) for r in rows],
            }
        )

    return {
        "as_of": now.isoformat(),
        "currency": currency,
        "kpi": {
            "total_outstanding_cents": summary.total_outstanding_cents,
            "total_outstanding": format_money(
                summary.total_outstanding_cents, currency
            ),
            "buckets_with_balance": summary.buckets_with_balance,
            "oldest_invoices": summary.oldest_label,
        },
        "buckets": buckets,
    }


def workspace_currency(db: Session, ctx: RequestContext) -> str:
    workspace = (
        db.query(WorkspaceSettings)
        .filter(WorkspaceSettings.owner_id == ctx.user_id)
        .first()
    )
    return resolve_currency(workspace.default_currency if workspace else None)


def get_ar_aging(
    db: Session, ctx: RequestContext, now: datetime | None = None
) -> dict[str, Any]:
    """Compute the AR aging report for the caller's outstanding invoices."""
    now = as_utc(now) or datetime.now(timezone.utc)

    invoices = (
        db.query(Invoice)
        .filter(
            Invoice.owner_id == ctx.user_id,
            Invoice.status.in_(OUTSTANDING_STATUSES),
        )
        .all()
    )
    labels = estate_label_map(db, ctx)
    currency = workspace_currency(db, ctx)

    rows = [
        row
        for row in (build_aging_row(inv, labels, now) for inv in invoices)
        if row is not None
    ]
    summary = aggregate(rows)

    logger.info(
        "AR aging for user %s: %d of %d outstanding invoices included, total %d cents",
        ctx.user_id,
        len(rows),
        len(invoices),
        summary.total_outstanding_cents,
    )
    return build_report(summary, now, currency)
