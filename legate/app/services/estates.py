from __future__ import annotations

from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from legate.app.core.context import RequestContext
from legate.app.models.estate import Estate, EstateCollaborator

UNASSIGNED_LABEL = "Unassigned"


def _short_id(estate_id: object) -> str:
    return str(estate_id)[-6:].upper()


def _clean(value: str | None) -> str:
    return value.strip() if isinstance(value, str) else ""


def estate_label(
    estate_id: object, display_name: str | None, case_name: str | None
) -> str:
    """Human-readable estate name: display name, case name, then a short id."""
    return (
        _clean(display_name)
        or _clean(case_name)
        or f"Estate {_short_id(estate_id)}"
    )


def _accessible_filter(ctx: RequestContext):
    collaborating = select(EstateCollaborator.estate_id).where(
        EstateCollaborator.user_id == ctx.user_id
    )
    return or_(Estate.owner_id == ctx.user_id, Estate.id.in_(collaborating))


def estate_label_map(db: Session, ctx: RequestContext) -> dict[str, str]:
    """Labels for every estate the caller owns or collaborates on."""
    estates = db.query(Estate).filter(_accessible_filter(ctx)).all()
    return {
        str(e.id): estate_label(e.id, e.display_name, e.case_name)
        for e in estates
    }


def label_for_invoice(estate_id: object | None, labels: dict[str, str]) -> str:
    if not estate_id:
        return UNASSIGNED_LABEL
    key = str(estate_id)
    return labels.get(key) or f"Estate {_short_id(key)}"


def get_accessible_estate(
    db: Session, ctx: RequestContext, estate_id: UUID
) -> Estate:
    """Load an estate the caller may view; 404 otherwise."""
    estate = (
        db.query(Estate)
        .filter(Estate.id == estate_id, _accessible_filter(ctx))
        .first()
    )
    if estate is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Estate not found"
        )
    return estate
