from __future__ import annotations

from pydantic import BaseModel


class EstateInvoiceItem(BaseModel):
    id: str
    status: str
    invoice_number: str | None
    issue_date: str | None
    due_date: str | None
    notes: str | None
    total: str  # dollars
    balance_due: str


class EstateInvoiceSummary(BaseModel):
    total_invoiced: str
    total_collected: str
    total_outstanding: str


class EstateInvoiceListResponse(BaseModel):
    estate_id: str
    estate_label: str
    invoices: list[EstateInvoiceItem]
    summary: EstateInvoiceSummary
