"""initial_schema

Revision ID: 4b2e9d1a7c30
Revises: 
Create Date: 2026-10-18 10:12:05.183244

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '4b2e9d1a7c30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create products table
    op.create_table('products',
        sa.Column('id', sa.BigInteger(), sa.Identity(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        sa.Column('category', sa.Text(), nullable=False),
        sa.Column('stock', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('status', sa.Text(), nullable=False, server_default=sa.text("'ACTIVE'")),
        sa.Column('owner_id', sa.BigInteger(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('deleted_at', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', name='products_name_key'),
        sa.CheckConstraint('price > 0', name='products_price_positive'),
        sa.CheckConstraint('stock >= 0', name='products_stock_non_negative')
    )

    # Listing filters
    op.create_index('products_category_idx', 'products', ['category'], unique=False)
    op.create_index('products_status_idx', 'products', ['status'], unique=False)


def downgrade() -> None:
    op.drop_index('products_status_idx', table_name='products')
    op.drop_index('products_category_idx', table_name='products')
    op.drop_table('products')
