"""
Pydantic Schemas Module
Contains the product value and the product form schemas.

Pydantic schemas are used for:
- Validating form input before it reaches the catalog
- Materializing database rows into immutable Product values
"""

from catalog.schemas.product import (
    Product,
    ProductForm,
)

__all__ = [
    "Product",
    "ProductForm",
]
