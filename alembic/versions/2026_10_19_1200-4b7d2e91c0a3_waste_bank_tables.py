"""waste bank: users, categories, waste_items, transactions, transaction_items

Revision ID: 4b7d2e91c0a3
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4b7d2e91c0a3"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- USERS ---
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=True),
        sa.Column("address", sa.String(length=512), nullable=True),
        sa.Column("role", sa.String(length=16), nullable=False, server_default="USER"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("role IN ('USER','ADMIN')", name=op.f("ck_users_chk_users_role")),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    # --- CATEGORIES ---
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_categories")),
        sa.UniqueConstraint("name", name="uq_categories_name"),
    )

    # --- WASTE ITEMS ---
    op.create_table(
        "waste_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("price", sa.Numeric(14, 2), nullable=False),
        sa.Column("unit", sa.String(length=32), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("price >= 0", name=op.f("ck_waste_items_chk_waste_items_price")),
        sa.ForeignKeyConstraint(
            ["category_id"],
            ["categories.id"],
            name=op.f("fk_waste_items_category_id_categories"),
            ondelete="RESTRICT",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_waste_items")),
        sa.UniqueConstraint("name", "category_id", name="uq_waste_items_name_category"),
    )
    op.create_index(op.f("ix_waste_items_name"), "waste_items", ["name"])
    op.create_index(op.f("ix_waste_items_category_id"), "waste_items", ["category_id"])
    op.create_index(op.f("ix_waste_items_is_active"), "waste_items", ["is_active"])

    # --- TRANSACTIONS ---
    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="PENDING"),
        sa.Column("total_amount", sa.Numeric(16, 2), nullable=False),
        sa.Column("total_weight", sa.Numeric(14, 2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "status IN ('PENDING','APPROVED','REJECTED','COMPLETED')",
            name=op.f("ck_transactions_chk_transactions_status"),
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name=op.f("fk_transactions_user_id_users"),
            ondelete="RESTRICT",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_transactions")),
    )
    op.create_index(op.f("ix_transactions_user_id"), "transactions", ["user_id"])
    op.create_index(op.f("ix_transactions_status"), "transactions", ["status"])
    op.create_index("ix_transactions_user_created_at", "transactions", ["user_id", "created_at"])

    # --- TRANSACTION ITEMS ---
    op.create_table(
        "transaction_items",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("transaction_id", sa.Integer(), nullable=False),
        sa.Column("waste_item_id", sa.Integer(), nullable=False),
        sa.Column("weight", sa.Numeric(12, 3), nullable=False),
        sa.Column("price", sa.Numeric(14, 2), nullable=False),
        sa.Column("subtotal", sa.Numeric(20, 5), nullable=False),
        sa.CheckConstraint("weight > 0", name=op.f("ck_transaction_items_chk_transaction_items_weight")),
        sa.CheckConstraint("price >= 0", name=op.f("ck_transaction_items_chk_transaction_items_price")),
        sa.ForeignKeyConstraint(
            ["transaction_id"],
            ["transactions.id"],
            name=op.f("fk_transaction_items_transaction_id_transactions"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["waste_item_id"],
            ["waste_items.id"],
            name=op.f("fk_transaction_items_waste_item_id_waste_items"),
            ondelete="RESTRICT",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_transaction_items")),
    )
    op.create_index(op.f("ix_transaction_items_transaction_id"), "transaction_items", ["transaction_id"])
    op.create_index(op.f("ix_transaction_items_waste_item_id"), "transaction_items", ["waste_item_id"])


def downgrade() -> None:
    # порядок важен: сначала зависимые
    op.drop_index(op.f("ix_transaction_items_waste_item_id"), table_name="transaction_items")
    op.drop_index(op.f("ix_transaction_items_transaction_id"), table_name="transaction_items")
    op.drop_table("transaction_items")

    op.drop_index("ix_transactions_user_created_at", table_name="transactions")
    op.drop_index(op.f("ix_transactions_status"), table_name="transactions")
    op.drop_index(op.f("ix_transactions_user_id"), table_name="transactions")
    op.drop_table("transactions")

    op.drop_index(op.f("ix_waste_items_is_active"), table_name="waste_items")
    op.drop_index(op.f("ix_waste_items_category_id"), table_name="waste_items")
    op.drop_index(op.f("ix_waste_items_name"), table_name="waste_items")
    op.drop_table("waste_items")

    op.drop_table("categories")
    op.drop_table("users")
