"""SQLAlchemy models for the Product Catalog schema."""

from sqlalchemy import (
    BigInteger, CheckConstraint, Column, Text, Identity, Integer, Numeric, DateTime,
    Index, UniqueConstraint, text
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func


# Create base class for models
Base = declarative_base()


class Product(Base):
    """Products table model."""
    __tablename__ = 'products'

    id = Column(BigInteger, Identity(), primary_key=True)
    name = Column(Text, nullable=False)
    description = Column(Text)
    price = Column(Numeric(12, 2), nullable=False)
    category = Column(Text, nullable=False)
    stock = Column(Integer, nullable=False, server_default=text('0'))
    status = Column(Text, nullable=False, server_default=text("'ACTIVE'"))
    owner_id = Column(BigInteger)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime(timezone=True))

    __table_args__ = (
        UniqueConstraint('name', name='products_name_key'),
        CheckConstraint('price > 0', name='products_price_positive'),
        CheckConstraint('stock >= 0', name='products_stock_non_negative'),
        Index('products_category_idx', 'category'),
        Index('products_status_idx', 'status'),
    )
