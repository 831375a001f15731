"""
Catalog Exceptions
Error taxonomy shared by the product store and the catalog state controller.

Every error carries a short machine-readable code (see core.constants) so the
controller can report a not-found condition differently from a storage fault.
"""

from typing import Optional

from catalog.core.constants import ERROR_DUPLICATE, ERROR_NOT_FOUND, ERROR_STORAGE


class CatalogError(Exception):
    """Base class for all catalog errors."""

    code: str = ERROR_STORAGE

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class DuplicateKeyError(CatalogError):
    """Raised when inserting a product whose barcode is already stored."""

    code = ERROR_DUPLICATE

    def __init__(self, barcode: str):
        self.barcode = barcode
        super().__init__(f"Product with barcode {barcode} already exists")


class NotFoundError(CatalogError):
    """Update or delete targeted a barcode that is not stored."""

    code = ERROR_NOT_FOUND

    def __init__(self, barcode: str):
        self.barcode = barcode
        super().__init__("Product not found")


class StorageError(CatalogError):
    """Exception raised when the underlying database fails."""

    code = ERROR_STORAGE

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
