from __future__ import annotations

from pydantic import BaseModel


# ─── Aging Row ───────────────────────────────────────────────────────────────


class AgingInvoiceRow(BaseModel):
    id: str
    estate_id: str | None
    estate_label: str
    status: str
    invoice_number: str | None
    display_number: str
    amount_cents: int
    amount: str  # formatted in the workspace currency
    reference_date: str
    days_past_due: int
    days_past_due_label: str


# ─── Buckets ─────────────────────────────────────────────────────────────────


class AgingBucketSection(BaseModel):
    key: str
    label: str
    total_cents: int
    total: str
    percent: int  # of total outstanding, 0-100
    count: int
    rows: list[AgingInvoiceRow]


# ─── AR Aging ────────────────────────────────────────────────────────────────


class ARAgingKPI(BaseModel):
    total_outstanding_cents: int
    total_outstanding: str
    buckets_with_balance: int
    oldest_invoices: str  # "<n> days past due" or "None"


class ARAgingResponse(BaseModel):
    as_of: str
    currency: str
    kpi: ARAgingKPI
    buckets: list[AgingBucketSection]
