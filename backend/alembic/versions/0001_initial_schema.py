"""Initial schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _document_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def _create_table(name: str, *columns: sa.Column, unique: str | None = None) -> None:
    constraints: list[sa.Constraint] = [sa.PrimaryKeyConstraint("id", name=f"pk_{name}")]
    if unique is not None:
        constraints.append(sa.UniqueConstraint(unique, name=f"uq_{name}_{unique}"))
    op.create_table(name, *_document_columns(), *columns, *constraints)
    op.create_index(f"ix_{name}_created_at", name, ["created_at"])


def upgrade() -> None:
    _create_table(
        "service_requests",
        sa.Column("first_name", sa.String(length=120), nullable=False),
        sa.Column("last_name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=False),
        sa.Column("company", sa.String(length=255)),
        sa.Column("event_date", sa.String(length=64)),
        sa.Column("event_time", sa.String(length=64)),
        sa.Column("venue", sa.String(length=255)),
        sa.Column("city", sa.String(length=120)),
        sa.Column("country", sa.String(length=120)),
        sa.Column("attendees", sa.Integer()),
        sa.Column("selected_services", sa.JSON(), nullable=False),
        sa.Column("event_description", sa.Text()),
        sa.Column("special_requirements", sa.Text()),
        sa.Column("budget", sa.String(length=120)),
        sa.Column("status", sa.String(length=16), nullable=False),
    )
    op.create_index("ix_service_requests_email", "service_requests", ["email"])

    _create_table(
        "quotations",
        sa.Column("request_id", sa.String(length=255)),
        sa.Column("client_name", sa.String(length=255)),
        sa.Column("client_email", sa.String(length=255)),
        sa.Column("event_date", sa.String(length=64)),
        sa.Column("venue", sa.String(length=255)),
        sa.Column("line_items", sa.JSON(), nullable=False),
        sa.Column("discount", sa.Numeric(12, 2), nullable=False),
        sa.Column("notes", sa.Text()),
        sa.Column("valid_until", sa.String(length=64)),
        sa.Column("subtotal", sa.Numeric(12, 2), nullable=False),
        sa.Column("tax", sa.Numeric(12, 2), nullable=False),
        sa.Column("total", sa.Numeric(12, 2), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
    )
    op.create_index("ix_quotations_request_id", "quotations", ["request_id"])

    _create_table(
        "invoices",
        sa.Column("quotation_id", sa.String(length=255), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("due_date", sa.String(length=64)),
        sa.Column("payment_status", sa.String(length=16), nullable=False),
        sa.Column("payment_method", sa.String(length=32)),
        sa.Column("payment_reference", sa.String(length=128)),
        sa.Column("paid_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_invoices_quotation_id", "invoices", ["quotation_id"])

    _create_table(
        "blog_posts",
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("excerpt", sa.String(length=300), nullable=False),
        sa.Column("featured_image", sa.String(length=512), nullable=False),
        sa.Column("author", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=16), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("published", sa.Boolean(), nullable=False),
        sa.Column("published_at", sa.DateTime(timezone=True)),
        sa.Column("views", sa.Integer(), nullable=False),
        unique="slug",
    )

    _create_table(
        "events",
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("event_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True)),
        sa.Column("venue", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=255), nullable=False),
        sa.Column("city", sa.String(length=120), nullable=False),
        sa.Column("featured_image", sa.String(length=512), nullable=False),
        sa.Column("category", sa.String(length=16), nullable=False),
        sa.Column("services", sa.JSON(), nullable=False),
        sa.Column("published", sa.Boolean(), nullable=False),
        sa.Column("featured", sa.Boolean(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("ticket_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        unique="slug",
    )

    _create_table(
        "services",
        sa.Column("service_key", sa.String(length=120), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("features", sa.JSON(), nullable=False),
        sa.Column("icon", sa.String(length=120)),
        sa.Column("image", sa.String(length=512)),
        sa.Column("category", sa.String(length=64), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        unique="service_key",
    )


def downgrade() -> None:
    for table in ("services", "events", "blog_posts", "invoices", "quotations", "service_requests"):
        op.drop_table(table)
