"""
SQLAlchemy Declarative Base
Defines the base class for all SQLAlchemy models.

The products table is registered on this base, and schema creation runs
Base.metadata.create_all() which only creates missing tables.
"""

from sqlalchemy.orm import declarative_base

# Declarative base class for all models
#
# Usage:
#     from catalog.db.base import Base
#
#     class ProductRecord(Base):
#         __tablename__ = "products"
#         barcode = Column(String, primary_key=True)
#         ...
Base = declarative_base()
