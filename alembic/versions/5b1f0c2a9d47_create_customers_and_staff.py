"""create_customers_and_staff

Revision ID: 5b1f0c2a9d47
Revises:
Create Date: 2026-10-16 10:12:41.518203
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1f0c2a9d47'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # CUSTOMERS
    op.create_table(
        "customers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("contact", sa.String(length=10), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("photo", sa.String(), nullable=True),
        sa.Column("services", sa.JSON(), nullable=False),
        sa.Column("performed_by", sa.JSON(), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("discount_percent", sa.Numeric(5, 2), nullable=False),
        sa.Column(
            "payment_method",
            sa.Enum("CASH", "UPI", "CARD", name="payment_method"),
            nullable=False,
        ),
        sa.Column("visit_date", sa.DateTime(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("amount >= 0", name="ck_customer_amount_non_negative"),
        sa.CheckConstraint(
            "discount_percent >= 0 AND discount_percent <= 100",
            name="ck_customer_discount_range",
        ),
    )

    op.create_index("ix_customers_id", "customers", ["id"], unique=False)
    op.create_index("ix_customers_contact", "customers", ["contact"], unique=False)
    op.create_index("ix_customers_visit_date", "customers", ["visit_date"], unique=False)

    # STAFF
    op.create_table(
        "staff",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("position", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_index("ix_staff_id", "staff", ["id"], unique=False)
    op.create_index("ix_staff_name", "staff", ["name"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index("ix_staff_name", table_name="staff")
    op.drop_index("ix_staff_id", table_name="staff")
    op.drop_table("staff")

    op.drop_index("ix_customers_visit_date", table_name="customers")
    op.drop_index("ix_customers_contact", table_name="customers")
    op.drop_index("ix_customers_id", table_name="customers")
    op.drop_table("customers")
    sa.Enum(name="payment_method").drop(op.get_bind(), checkfirst=True)
