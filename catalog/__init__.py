"""
Product Catalog
Barcode-keyed product catalog backed by a local SQLite database.
"""

__version__ = "1.0.0"
