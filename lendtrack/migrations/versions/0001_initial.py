"""Item types, categories, items, loans and item/category links.

Revision ID: 0001_initial
Revises:
Create Date: 2025-08-28 00:43:27

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

CURRENT_LOAN_FK = "items_current_loan_id_fkey"


def upgrade() -> None:
    # items.current_loan_id and loans.item_id reference each other. SQLite
    # accepts the forward reference inline and cannot ALTER in a constraint.
    sqlite = op.get_bind().dialect.name == "sqlite"

    op.create_table(
        "item_types",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("code", sa.String(), nullable=False, unique=True),
        sa.Column("name", sa.String(), nullable=False),
    )
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("parent_id", sa.Integer(),
                  sa.ForeignKey("categories.id", ondelete="RESTRICT"), nullable=True),
        sa.Column("code", sa.String(), nullable=False, unique=True),
        sa.Column("name", sa.String(), nullable=False),
    )
    item_constraints = []
    if sqlite:
        item_constraints.append(sa.ForeignKeyConstraint(
            ["current_loan_id"], ["loans.id"], name=CURRENT_LOAN_FK, ondelete="SET NULL"))
    op.create_table(
        "items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("item_type_id", sa.Integer(),
                  sa.ForeignKey("item_types.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("requested_by", sa.String(), nullable=True),
        sa.Column("current_loan_id", sa.Integer(), nullable=True, unique=True),
        sa.Column("metadata", sa.JSON().with_variant(postgresql.JSONB(), "postgresql"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        *item_constraints,
    )
    op.create_table(
        "loans",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("item_id", sa.Integer(),
                  sa.ForeignKey("items.id", ondelete="CASCADE"), nullable=False),
        sa.Column("patron_name", sa.String(), nullable=False),
        sa.Column("checkout_date", sa.Date(), server_default=sa.func.current_date(), nullable=False),
        sa.Column("returned_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    if not sqlite:
        op.create_foreign_key(
            CURRENT_LOAN_FK, "items", "loans", ["current_loan_id"], ["id"], ondelete="SET NULL")
    op.create_table(
        "item_categories",
        sa.Column("item_id", sa.Integer(),
                  sa.ForeignKey("items.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("category_id", sa.Integer(),
                  sa.ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
    )


def downgrade() -> None:
    if op.get_bind().dialect.name != "sqlite":
        op.drop_constraint(CURRENT_LOAN_FK, "items", type_="foreignkey")
    op.drop_table("item_categories")
    op.drop_table("loans")
    op.drop_table("items")
    op.drop_table("categories")
    op.drop_table("item_types")
