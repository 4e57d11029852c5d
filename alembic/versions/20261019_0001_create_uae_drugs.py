"""Create UAE drug registry table.

Revision ID: 20261019_0001
Revises: 
Create Date: 2026-10-19

"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "uae_drugs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("package_name", sa.Text(), nullable=False),
        sa.Column("generic_name", sa.Text(), nullable=True),
        sa.Column("strength", sa.String(length=255), nullable=True),
        sa.Column("dosage_form", sa.String(length=255), nullable=True),
        sa.Column("package_size", sa.String(length=255), nullable=True),
        sa.Column("manufacturer_name", sa.Text(), nullable=True),
        sa.Column("agent_name", sa.Text(), nullable=True),
        sa.Column("price_public", sa.String(length=64), nullable=True),
        sa.Column("price_pharmacy", sa.String(length=64), nullable=True),
        sa.Column("unit_price_public", sa.String(length=64), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=True),
        sa.Column("thiqa", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("basic", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("abm1", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("abm7", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index(op.f("ix_uae_drugs_package_name"), "uae_drugs", ["package_name"], unique=False)
    op.create_index(op.f("ix_uae_drugs_generic_name"), "uae_drugs", ["generic_name"], unique=False)
    op.create_index(op.f("ix_uae_drugs_dosage_form"), "uae_drugs", ["dosage_form"], unique=False)
    op.create_index(op.f("ix_uae_drugs_status"), "uae_drugs", ["status"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_uae_drugs_status"), table_name="uae_drugs")
    op.drop_index(op.f("ix_uae_drugs_dosage_form"), table_name="uae_drugs")
    op.drop_index(op.f("ix_uae_drugs_generic_name"), table_name="uae_drugs")
    op.drop_index(op.f("ix_uae_drugs_package_name"), table_name="uae_drugs")
    op.drop_table("uae_drugs")
