"""
Product Model
The single table of the catalog: one row per product, keyed by barcode.
"""

from sqlalchemy import Column, String, Float, Integer

from catalog.core.constants import PRODUCTS_TABLE
from catalog.db.base import Base


class ProductRecord(Base):
    """
    Product Model

    Barcode is the primary key and cannot change after insert.
    Price is stored as supplied by the caller; it is never recomputed here.
    """
    __tablename__ = PRODUCTS_TABLE

    # Primary key: textual barcode, exact case-sensitive match
    barcode = Column(String, primary_key=True)

    # Basic info
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)

    # Pricing
    unit_price = Column(Float, nullable=False)  # before tax
    tax_rate = Column(Integer, nullable=False)  # percent, 0-100
    price = Column(Float, nullable=False)  # unit_price * (1 + tax_rate/100)

    # Stock quantity (null = not tracked)
    stock = Column(Integer, nullable=True)

    def __repr__(self):
        return f"<ProductRecord(barcode={self.barcode}, name='{self.name}')>"
