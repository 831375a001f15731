"""
Services Module
Data access and state management for the product catalog.
"""

from catalog.services.product_store import ProductStore
from catalog.services.catalog_state import CatalogStateController, CatalogSnapshot, CatalogStatus

__all__ = [
    "ProductStore",
    "CatalogStateController",
    "CatalogSnapshot",
    "CatalogStatus",
]
