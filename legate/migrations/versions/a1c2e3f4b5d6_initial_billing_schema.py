"""initial_billing_schema

Revision ID: a1c2e3f4b5d6
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "a1c2e3f4b5d6"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


_invoice_status = sa.Enum(
    "DRAFT", "SENT", "UNPAID", "PARTIAL", "PAID", "VOID", name="invoicestatus"
)
_estate_role = sa.Enum("OWNER", "EDITOR", "VIEWER", name="estaterole")
_invoice_terms = sa.Enum(
    "DUE_ON_RECEIPT", "NET_15", "NET_30", "NET_45", "NET_60", name="invoiceterms"
)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False, primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "estates",
        sa.Column("id", sa.Uuid(), nullable=False, primary_key=True),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=True),
        sa.Column("case_name", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_estates_owner", "estates", ["owner_id"])

    op.create_table(
        "estate_collaborators",
        sa.Column("id", sa.Uuid(), nullable=False, primary_key=True),
        sa.Column("estate_id", sa.Uuid(), sa.ForeignKey("estates.id"), nullable=False),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("role", _estate_role, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("estate_id", "user_id", name="uq_estate_collaborator"),
    )
    op.create_index("ix_estate_collaborators_user", "estate_collaborators", ["user_id"])

    op.create_table(
        "invoices",
        sa.Column("id", sa.Uuid(), nullable=False, primary_key=True),
        sa.Column("estate_id", sa.Uuid(), sa.ForeignKey("estates.id"), nullable=True),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("status", _invoice_status, nullable=False),
        sa.Column("invoice_number", sa.String(50), nullable=True),
        sa.Column("issue_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("currency", sa.String(3), nullable=False, server_default="USD"),
        sa.Column("subtotal", sa.Numeric(precision=20, scale=4), nullable=True),
        sa.Column("total_amount", sa.Numeric(precision=20, scale=4), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("owner_id", "invoice_number", name="uq_invoices_owner_number"),
    )
    op.create_index("ix_invoices_owner_status", "invoices", ["owner_id", "status"])
    op.create_index("ix_invoices_estate", "invoices", ["estate_id"])

    op.create_table(
        "workspace_settings",
        sa.Column("id", sa.Uuid(), nullable=False, primary_key=True),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False, unique=True),
        sa.Column("firm_name", sa.String(255), nullable=True),
        sa.Column("default_currency", sa.String(3), nullable=True, server_default="USD"),
        sa.Column("default_invoice_terms", _invoice_terms, nullable=False, server_default="NET_30"),
        sa.Column("default_hourly_rate_cents", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("workspace_settings")
    op.drop_index("ix_invoices_estate", table_name="invoices")
    op.drop_index("ix_invoices_owner_status", table_name="invoices")
    op.drop_table("invoices")
    op.drop_index("ix_estate_collaborators_user", table_name="estate_collaborators")
    op.drop_table("estate_collaborators")
    op.drop_index("ix_estates_owner", table_name="estates")
    op.drop_table("estates")
    op.drop_table("users")
    _invoice_terms.drop(op.get_bind(), checkfirst=True)
    _invoice_status.drop(op.get_bind(), checkfirst=True)
    _estate_role.drop(op.get_bind(), checkfirst=True)
