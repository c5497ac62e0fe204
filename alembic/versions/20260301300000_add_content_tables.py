"""Add about_sections, contact_links and page_content tables.

Revision ID: 20260301300000
Revises: 20260301200000
Create Date: 2026-03-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "20260301300000"
down_revision: Union[str, None] = "20260301200000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "about_sections",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("paragraphs", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("image", sa.String(length=500), nullable=False),
        sa.Column("image_alt", sa.String(length=255), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_about_sections_sort_order"), "about_sections", ["sort_order"], unique=False)
    op.create_index(op.f("ix_about_sections_is_published"), "about_sections", ["is_published"], unique=False)

    op.create_table(
        "contact_links",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("platform", sa.String(length=32), nullable=False),
        sa.Column("url", sa.String(length=500), nullable=False),
        sa.Column("label", sa.String(length=255), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("platform", "url", name="uq_contact_links_platform_url"),
    )
    op.create_index(
        "ix_contact_links_is_active_sort_order",
        "contact_links",
        ["is_active", "sort_order"],
        unique=False,
    )

    op.create_table(
        "page_content",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("page", sa.String(length=100), nullable=False),
        sa.Column("section", sa.String(length=100), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("image", sa.String(length=500), nullable=True),
        sa.Column("image_alt", sa.String(length=255), nullable=True),
        sa.Column("metadata", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("page", "section", name="uq_page_content_page_section"),
    )
    op.create_index(op.f("ix_page_content_page"), "page_content", ["page"], unique=False)
    op.create_index(op.f("ix_page_content_is_published"), "page_content", ["is_published"], unique=False)
    op.create_index(op.f("ix_page_content_sort_order"), "page_content", ["sort_order"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_page_content_sort_order"), table_name="page_content")
    op.drop_index(op.f("ix_page_content_is_published"), table_name="page_content")
    op.drop_index(op.f("ix_page_content_page"), table_name="page_content")
    op.drop_table("page_content")
    op.drop_index("ix_contact_links_is_active_sort_order", table_name="contact_links")
    op.drop_table("contact_links")
    op.drop_index(op.f("ix_about_sections_is_published"), table_name="about_sections")
    op.drop_index(op.f("ix_about_sections_sort_order"), table_name="about_sections")
    op.drop_table("about_sections")
