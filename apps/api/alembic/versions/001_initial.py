"""Initial schema: clients, versions, stored blobs, upload slots, document imports.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "clients",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("client_name", sa.String(255), nullable=False),
        sa.Column("industry", sa.String(255), nullable=True),
        sa.Column("current_version", sa.String(50), nullable=True),
        sa.Column("data", postgresql.JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.Column("updated_by", sa.String(255), nullable=True),
    )
    op.create_index("ix_clients_client_name", "clients", ["client_name"])
    op.create_index("ix_clients_updated_at", "clients", ["updated_at"])

    op.create_table(
        "client_versions",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("client_id", sa.UUID(), sa.ForeignKey("clients.id", ondelete="CASCADE"), nullable=False),
        sa.Column("version_number", sa.String(50), nullable=False),
        sa.Column("version_name", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("data", postgresql.JSONB(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("created_by", sa.String(255), nullable=True),
    )
    op.create_index("ix_client_versions_client_id", "client_versions", ["client_id"])
    op.create_index(
        "ix_client_versions_client_version", "client_versions", ["client_id", "version_number"]
    )

    op.create_table(
        "stored_blobs",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("content", sa.LargeBinary(), nullable=False),
        sa.Column("media_type", sa.String(255), nullable=True),
        sa.Column("size", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
    )

    op.create_table(
        "upload_slots",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("blob_id", sa.UUID(), sa.ForeignKey("stored_blobs.id", ondelete="SET NULL"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("consumed_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "document_imports",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("client_id", sa.UUID(), sa.ForeignKey("clients.id", ondelete="CASCADE"), nullable=False),
        sa.Column("filename", sa.String(1024), nullable=False),
        sa.Column("file_id", sa.UUID(), sa.ForeignKey("stored_blobs.id", ondelete="SET NULL"), nullable=True),
        sa.Column("file_type", sa.String(10), nullable=False),
        sa.Column("source_url", sa.Text(), nullable=True),
        sa.Column("extracted_text", sa.Text(), nullable=True),
        sa.Column("target_sections", postgresql.JSONB(), nullable=True),
        sa.Column("extracted_fields", postgresql.JSONB(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.Column("applied_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("applied_by", sa.String(255), nullable=True),
    )
    op.create_index("ix_document_imports_client_id", "document_imports", ["client_id"])
    op.create_index("ix_document_imports_status", "document_imports", ["status"])


def downgrade() -> None:
    op.drop_table("document_imports")
    op.drop_table("upload_slots")
    op.drop_table("stored_blobs")
    op.drop_table("client_versions")
    op.drop_table("clients")
