"""Add blog articles, article images, tags and the article/tag join table.

Revision ID: 20260301200000
Revises: 20260301100000
Create Date: 2026-03-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "20260301200000"
down_revision: Union[str, None] = "20260301100000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "blog_articles",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("subtitle", sa.String(length=255), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_blog_articles_slug"), "blog_articles", ["slug"], unique=True)
    op.create_index(op.f("ix_blog_articles_published_at"), "blog_articles", ["published_at"], unique=False)
    op.create_index(op.f("ix_blog_articles_is_published"), "blog_articles", ["is_published"], unique=False)
    op.create_index(op.f("ix_blog_articles_sort_order"), "blog_articles", ["sort_order"], unique=False)

    op.create_table(
        "blog_article_images",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("url", sa.String(length=500), nullable=False),
        sa.Column("alt_text", sa.String(length=255), nullable=True),
        sa.Column("is_cover", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("article_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["article_id"], ["blog_articles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_blog_article_images_is_cover"), "blog_article_images", ["is_cover"], unique=False)
    op.create_index(op.f("ix_blog_article_images_article_id"), "blog_article_images", ["article_id"], unique=False)

    op.create_table(
        "blog_tags",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("slug", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_blog_tags_name"), "blog_tags", ["name"], unique=True)
    op.create_index(op.f("ix_blog_tags_slug"), "blog_tags", ["slug"], unique=True)

    op.create_table(
        "blog_articles_tags",
        sa.Column("article_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("tag_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.ForeignKeyConstraint(["article_id"], ["blog_articles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tag_id"], ["blog_tags.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("article_id", "tag_id"),
    )


def downgrade() -> None:
    op.drop_table("blog_articles_tags")
    op.drop_index(op.f("ix_blog_tags_slug"), table_name="blog_tags")
    op.drop_index(op.f("ix_blog_tags_name"), table_name="blog_tags")
    op.drop_table("blog_tags")
    op.drop_index(op.f("ix_blog_article_images_article_id"), table_name="blog_article_images")
    op.drop_index(op.f("ix_blog_article_images_is_cover"), table_name="blog_article_images")
    op.drop_table("blog_article_images")
    op.drop_index(op.f("ix_blog_articles_sort_order"), table_name="blog_articles")
    op.drop_index(op.f("ix_blog_articles_is_published"), table_name="blog_articles")
    op.drop_index(op.f("ix_blog_articles_published_at"), table_name="blog_articles")
    op.drop_index(op.f("ix_blog_articles_slug"), table_name="blog_articles")
    op.drop_table("blog_articles")
