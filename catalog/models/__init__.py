"""
Database Models Module
Contains SQLAlchemy ORM models for the catalog database.

Import Base from here so the products table is registered with SQLAlchemy
and created during Base.metadata.create_all().
"""

from catalog.db.base import Base
from catalog.models.product import ProductRecord

__all__ = [
    "Base",
    "ProductRecord",
]
