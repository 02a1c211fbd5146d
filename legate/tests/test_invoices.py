"""Tests for the estate invoice list."""
from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import timedelta
from decimal import Decimal

import pytest
from fastapi import HTTPException
from sqlalchemy.orm import Session

from legate.app.core.context import RequestContext
from legate.app.models import Estate, Invoice, InvoiceStatus, User
from legate.app.services.estates import estate_label
from legate.app.services.invoices import list_estate_invoices
from legate.tests.conftest import NOW


class TestEstateInvoiceList:
    def test_amounts_use_magnitude_heuristic(
        self,
        db: Session,
        owner_ctx: RequestContext,
        estate: Estate,
        make_invoice: Callable[..., Invoice],
    ) -> None:
        make_invoice(total_amount=50_000, estate_id=estate.id, invoice_number="A-1")
        make_invoice(total_amount=250, estate_id=estate.id, invoice_number="A-2")

        result = list_estate_invoices(db, owner_ctx, estate.id, sort_by="invoice-asc", now=NOW)

        totals = [Decimal(i["total"]) for i in result["invoices"]]
        assert totals == [Decimal("500.00"), Decimal("250.00")]
        assert result["estate_label"] == "Estate of Jane Doe"

    def test_summary_totals(
        self,
        db: Session,
        owner_ctx: RequestContext,
        estate: Estate,
        make_invoice: Callable[..., Invoice],
    ) -> None:
        make_invoice(InvoiceStatus.PAID, 100, estate_id=estate.id)
        make_invoice(InvoiceStatus.SENT, 200, estate_id=estate.id)
        make_invoice(InvoiceStatus.DRAFT, 50, estate_id=estate.id)
        make_invoice(InvoiceStatus.VOID, 1_000, estate_id=estate.id)

        result = list_estate_invoices(db, owner_ctx, estate.id, now=NOW)

        summary = result["summary"]
        assert Decimal(summary["total_invoiced"]) == Decimal("350")
        assert Decimal(summary["total_collected"]) == Decimal("100")
        assert Decimal(summary["total_outstanding"]) == Decimal("250")
        paid = next(i for i in result["invoices"] if i["status"] == "PAID")
        assert Decimal(paid["balance_due"]) == Decimal("0")

    def test_unpaid_filter_means_unsettled(
        self,
        db: Session,
        owner_ctx: RequestContext,
        estate: Estate,
        make_invoice: Callable[..., Invoice],
    ) -> None:
        for status in InvoiceStatus:
            make_invoice(status, 100, estate_id=estate.id)

        result = list_estate_invoices(db, owner_ctx, estate.id, status="unpaid", now=NOW)

        assert sorted(i["status"] for i in result["invoices"]) == [
            "DRAFT", "PARTIAL", "SENT", "UNPAID",
        ]

    def test_exact_status_filter(
        self,
        db: Session,
        owner_ctx: RequestContext,
        estate: Estate,
        make_invoice: Callable[..., Invoice],
    ) -> None:
        make_invoice(InvoiceStatus.PAID, 100, estate_id=estate.id)
        make_invoice(InvoiceStatus.SENT, 100, estate_id=estate.id)
        result = list_estate_invoices(db, owner_ctx, estate.id, status="PAID", now=NOW)
        assert [i["status"] for i in result["invoices"]] == ["PAID"]

    def test_search_notes_and_number(
        self,
        db: Session,
        owner_ctx: RequestContext,
        estate: Estate,
        make_invoice: Callable[..., Invoice],
    ) -> None:
        make_invoice(estate_id=estate.id, invoice_number="INV-100", notes="Court filing fees")
        make_invoice(estate_id=estate.id, invoice_number="INV-200", notes="Appraisal")

        by_notes = list_estate_invoices(db, owner_ctx, estate.id, q="court", now=NOW)
        assert [i["invoice_number"] for i in by_notes["invoices"]] == ["INV-100"]

        by_number = list_estate_invoices(db, owner_ctx, estate.id, invoice_number="200", now=NOW)
        assert [i["invoice_number"] for i in by_number["invoices"]] == ["INV-200"]

    def test_timeframe_and_recent_sort(
        self,
        db: Session,
        owner_ctx: RequestContext,
        estate: Estate,
        make_invoice: Callable[..., Invoice],
    ) -> None:
        make_invoice(estate_id=estate.id, invoice_number="OLD", issue_date=NOW - timedelta(days=60))
        make_invoice(estate_id=estate.id, invoice_number="NEW", issue_date=NOW - timedelta(days=2))
        make_invoice(estate_id=estate.id, invoice_number="MID", issue_date=NOW - timedelta(days=20))

        recent = list_estate_invoices(db, owner_ctx, estate.id, timeframe="30d", now=NOW)
        assert [i["invoice_number"] for i in recent["invoices"]] == ["NEW", "MID"]

        this_month = list_estate_invoices(db, owner_ctx, estate.id, timeframe="this-month", now=NOW)
        assert [i["invoice_number"] for i in this_month["invoices"]] == ["NEW"]

        desc = list_estate_invoices(db, owner_ctx, estate.id, sort_by="invoice-desc", now=NOW)
        assert [i["invoice_number"] for i in desc["invoices"]] == ["OLD", "NEW", "MID"]

    def test_collaborator_sees_estate_but_only_own_invoices(
        self,
        db: Session,
        owner_ctx: RequestContext,
        other_user: User,
        shared_estate: Estate,
        make_invoice: Callable[..., Invoice],
    ) -> None:
        make_invoice(estate_id=shared_estate.id, owner_id=other_user.id, invoice_number="THEIRS")
        make_invoice(estate_id=shared_estate.id, invoice_number="MINE")

        result = list_estate_invoices(db, owner_ctx, shared_estate.id, now=NOW)

        assert [i["invoice_number"] for i in result["invoices"]] == ["MINE"]
        assert result["estate_label"] == "Smith Probate"

    def test_inaccessible_estate_is_not_found(
        self, db: Session, other_user: User, estate: Estate,
    ) -> None:
        ctx = RequestContext(user_id=other_user.id)
        with pytest.raises(HTTPException) as exc:
            list_estate_invoices(db, ctx, estate.id)
        assert exc.value.status_code == 404

        with pytest.raises(HTTPException):
            list_estate_invoices(db, ctx, uuid.uuid4())


@pytest.mark.parametrize(
    ("display_name", "case_name", "expected"),
    [
        ("  Estate of Ann  ", "Case 1", "Estate of Ann"),
        ("", "Case 1", "Case 1"),
        (None, "   ", "Estate ABCDEF"),
    ],
)
def test_estate_label_fallbacks(
    display_name: str | None, case_name: str | None, expected: str,
) -> None:
    assert estate_label("0000000000abcdef", display_name, case_name) == expected
