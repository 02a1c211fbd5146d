from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from legate.app.api.deps import get_request_context
from legate.app.core.context import RequestContext
from legate.app.core.database import get_db
from legate.app.schemas.aging import ARAgingResponse
from legate.app.services.aging import get_ar_aging
from legate.app.services.export_excel import export_ar_aging_excel

router = APIRouter()

_XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


# ── AR Aging ───────────────────────────────────────────────────────────────


@router.get("/aging", response_model=ARAgingResponse)
def ar_aging(
    as_of: datetime | None = Query(None),
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> dict[str, object]:
    return get_ar_aging(db, ctx, as_of)


@router.get("/aging/export/excel")
def ar_aging_export_excel(
    as_of: datetime | None = Query(None),
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> StreamingResponse:
    data = get_ar_aging(db, ctx, as_of)
    stamp = (as_of or datetime.now(timezone.utc)).strftime("%Y%m%d")
    return StreamingResponse(
        export_ar_aging_excel(data),
        media_type=_XLSX_MIME,
        headers={"Content-Disposition": f'attachment; filename="ar_aging_{stamp}.xlsx"'},
    )
