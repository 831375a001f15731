"""
Application Constants
Defines constant values used throughout the application.

This module contains all application-wide constants including:
- Table name
- Catalog status values
- Error codes
- Product field limits
"""

# Storage
PRODUCTS_TABLE = "products"  # The single table of the catalog

# Catalog Status
STATUS_IDLE = "idle"  # Nothing in progress
STATUS_LOADING = "loading"  # A store operation is running
STATUS_ERROR = "error"  # Last operation failed, message available

# Error Codes
ERROR_DUPLICATE = "duplicate"  # Insert with an existing barcode
ERROR_NOT_FOUND = "not_found"  # Update/delete matched no record
ERROR_STORAGE = "storage"  # Database or I/O fault

# Product Limits
TAX_RATE_MIN = 0  # Percent
TAX_RATE_MAX = 100  # Percent
