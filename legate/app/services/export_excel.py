"""Excel export of the AR aging report using openpyxl."""
from __future__ import annotations

import io
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

# ── Shared styling constants ────────────────────────────────────────────────

_HEADER_FONT = Font(name="Calibri", bold=True, color="FFFFFF", size=11)
_HEADER_FILL = PatternFill(start_color="1F4E79", end_color="1F4E79", fill_type="solid")
_SECTION_FONT = Font(name="Calibri", bold=True, size=11)
_SECTION_FILL = PatternFill(start_color="D6E4F0", end_color="D6E4F0", fill_type="solid")
_TOTAL_FONT = Font(name="Calibri", bold=True, size=11)
_TOTAL_BORDER = Border(
    top=Side(style="thin"),
    bottom=Side(style="double"),
)
_CURRENCY_FMT = '#,##0.00'
_RIGHT = Alignment(horizontal="right")
_LEFT = Alignment(horizontal="left")

_COLUMNS = ["Invoice", "Estate", "Status", "Reference date", "Days past due", "Amount"]


def _auto_width(ws: Any) -> None:
    """Auto-fit column widths based on content."""
    for col_idx in range(1, ws.max_column + 1):
        max_len = 0
        col_letter = get_column_letter(col_idx)
        for row in ws.iter_rows(min_col=col_idx, max_col=col_idx, values_only=False):
            cell = row[0]
            if cell.value is not None:
                max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[col_letter].width = min(max_len + 4, 40)


def _write_header_row(ws: Any, row: int, values: list[str]) -> None:
    for col, val in enumerate(values, 1):
        cell = ws.cell(row=row, column=col, value=val)
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = _RIGHT if col > 3 else _LEFT


def _write_title(ws: Any, title: str, subtitle: str) -> int:
    """Write report title and subtitle, return next available row."""
    ws.cell(row=1, column=1, value=title).font = Font(name="Calibri", bold=True, size=14)
    ws.cell(row=2, column=1, value=subtitle).font = Font(name="Calibri", size=10, italic=True)
    return 4


def _money_cell(ws: Any, row: int, col: int, cents: int) -> Any:
    c = ws.cell(row=row, column=col, value=cents / 100)
    c.number_format = _CURRENCY_FMT
    c.alignment = _RIGHT
    return c


def _to_workbook(ws: Any, wb: Workbook) -> io.BytesIO:
    _auto_width(ws)
    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)
    return buf


def export_ar_aging_excel(data: dict[str, Any]) -> io.BytesIO:
    """Render a report from ``get_ar_aging`` as an xlsx workbook."""
    wb = Workbook()
    ws = wb.active
    ws.title = "AR Aging"

    currency = data.get("currency", "USD")
    row = _write_title(
        ws,
        "Accounts Receivable Aging",
        f"As of {data['as_of']} · amounts in {currency}",
    )

    # KPI
    kpi = data.get("kpi", {})
    ws.cell(row=row, column=1, value="Total outstanding").font = _SECTION_FONT
    _money_cell(ws, row, 2, kpi.get("total_outstanding_cents", 0))
    row += 1
    ws.cell(row=row, column=1, value="Buckets with balance").font = _SECTION_FONT
    ws.cell(row=row, column=2, value=kpi.get("buckets_with_balance", 0)).alignment = _RIGHT
    row += 1
    ws.cell(row=row, column=1, value="Oldest invoices").font = _SECTION_FONT
    ws.cell(row=row, column=2, value=kpi.get("oldest_invoices", "None")).alignment = _RIGHT
    row += 2

    # One section per bucket
    for bucket in data.get("buckets", []):
        for col in range(1, len(_COLUMNS) + 1):
            ws.cell(row=row, column=col).fill = _SECTION_FILL
        ws.cell(row=row, column=1, value=bucket["label"]).font = _SECTION_FONT
        ws.cell(
            row=row,
            column=len(_COLUMNS),
            value=f"{bucket['percent']}% of outstanding",
        ).alignment = _RIGHT
        row += 1

        if not bucket["rows"]:
            ws.cell(row=row, column=1, value="No invoices currently in this bucket.")
            row += 2
            continue

        _write_header_row(ws, row, _COLUMNS)
        row += 1
        for inv in bucket["rows"]:
            ws.cell(row=row, column=1, value=inv["display_number"])
            ws.cell(row=row, column=2, value=inv["estate_label"])
            ws.cell(row=row, column=3, value=inv["status"])
            ws.cell(row=row, column=4, value=inv["reference_date"][:10]).alignment = _RIGHT
            ws.cell(row=row, column=5, value=inv["days_past_due"]).alignment = _RIGHT
            _money_cell(ws, row, 6, inv["amount_cents"])
            row += 1

        ws.cell(row=row, column=1, value="Total").font = _TOTAL_FONT
        c = _money_cell(ws, row, 6, bucket["total_cents"])
        c.font = _TOTAL_FONT
        c.border = _TOTAL_BORDER
        row += 2

    return _to_workbook(ws, wb)
