"""Product Catalog store: products over PostgreSQL with cursor pagination."""

__version__ = "0.1.0"
