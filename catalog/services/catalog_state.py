"""
Catalog State Controller
Single source of truth for what the UI currently shows.

Holds three pieces of observable state on top of the product store:
- products: the full product list, replaced only by a complete reload
- selected: the product found by the last search, or None
- status: idle, loading, or error with a message and an error code

Subscribers are plain callables with no arguments. They are called after
every state change and read the new state through snapshot() or the
properties.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from catalog.core.constants import (
    STATUS_IDLE,
    STATUS_LOADING,
    STATUS_ERROR,
)
from catalog.core.exceptions import CatalogError, NotFoundError
from catalog.schemas.product import Product
from catalog.services.error_logging import error_logger
from catalog.services.product_store import ProductStore

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


@dataclass(frozen=True)
class CatalogStatus:
    state: str = STATUS_IDLE
    message: Optional[str] = None
    code: Optional[str] = None  # error code, set only in error state

    @classmethod
    def idle(cls) -> "CatalogStatus":
        return cls(STATUS_IDLE)

    @classmethod
    def loading(cls) -> "CatalogStatus":
        return cls(STATUS_LOADING)

    @classmethod
    def error(cls, message: str, code: str) -> "CatalogStatus":
        return cls(STATUS_ERROR, message, code)

    @property
    def is_idle(self) -> bool:
        return self.state == STATUS_IDLE

    @property
    def is_loading(self) -> bool:
        return self.state == STATUS_LOADING

    @property
    def is_error(self) -> bool:
        return self.state == STATUS_ERROR


@dataclass(frozen=True)
class CatalogSnapshot:
    products: tuple[Product, ...]
    selected: Optional[Product]
    status: CatalogStatus


class CatalogStateController:
    """
    Bridge between the UI and the product store.

    Every mutation goes to the store first; on success the whole product
    list is fetched again. Failures never raise: they become an error
    status and the method returns False (or None for a search). count() is
    the exception: it is a plain read and raises StorageError.
    """

    def __init__(self, store: ProductStore):
        self._store = store
        self._products: tuple[Product, ...] = ()
        self._selected: Optional[Product] = None
        self._status = CatalogStatus.idle()
        self._listeners: list[Listener] = []

    # Observable state

    @property
    def products(self) -> tuple[Product, ...]:
        return self._products

    @property
    def selected(self) -> Optional[Product]:
        return self._selected

    @property
    def status(self) -> CatalogStatus:
        return self._status

    def snapshot(self) -> CatalogSnapshot:
        return CatalogSnapshot(self._products, self._selected, self._status)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispose(self):
        """Drop every listener."""
        logger.debug("[CatalogState] Disposing")
        self._listeners.clear()

    def _notify(self):
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("[CatalogState] Listener failed")

    def _set_status(self, status: CatalogStatus):
        self._status = status
        self._notify()

    def _set_error(self, error: CatalogError, message: str, context: Optional[dict] = None):
        severity = "warning" if isinstance(error, NotFoundError) else "error"
        error_logger.log_error(error, severity=severity, context=context)
        self._set_status(CatalogStatus.error(message, error.code))

    def _finish_loading(self):
        if self._status.is_loading:
            self._set_status(CatalogStatus.idle())

    # Operations

    def reload_all(self) -> bool:
        """
        Fetch every product and replace the list.

        On failure the previous list is kept and the status holds the error.
        """
        logger.info("[CatalogState] Loading all products...")
        self._set_status(CatalogStatus.loading())
        try:
            products = self._store.get_all()
        except CatalogError as e:
            self._set_error(e, f"Failed to load products: {e}")
            return False
        else:
            self._products = tuple(products)
            logger.info(f"[CatalogState] Loaded {len(products)} products")
            return True
        finally:
            self._finish_loading()

    def search_by_barcode(self, text: str) -> Optional[Product]:
        """
        Look up a product and make it the selection.

        A miss selects None and is not an error.
        """
        barcode = text.strip()
        logger.info(f"[CatalogState] Searching for product: {barcode}")

        if self._status.is_error:
            self._status = CatalogStatus.idle()

        if not barcode:
            self._selected = None
            self._notify()
            return None

        try:
            product = self._store.get_by_barcode(barcode)
        except CatalogError as e:
            self._set_error(e, f"Failed to search product: {e}", {"barcode": barcode})
            return None

        if product is not None:
            logger.info(f"[CatalogState] Product found: {product.name}")
        else:
            logger.info("[CatalogState] Product not found")

        self._selected = product
        self._notify()
        return product

    def add(self, product: Product) -> bool:
        """Insert a product, reload, and select it."""
        logger.info(f"[CatalogState] Adding product: {product.barcode}")
        self._set_status(CatalogStatus.loading())
        try:
            self._store.insert(product)
        except CatalogError as e:
            self._set_error(e, f"Failed to add product: {e}", {"barcode": product.barcode})
            return False
        finally:
            self._finish_loading()

        self.reload_all()
        self._selected = product
        self._notify()
        return True

    def update(self, product: Product) -> bool:
        """
        Replace a stored product, reload, and refresh the selection if it
        is the same barcode.
        """
        logger.info(f"[CatalogState] Updating product: {product.barcode}")
        self._set_status(CatalogStatus.loading())
        try:
            affected = self._store.update(product)
        except CatalogError as e:
            self._set_error(e, f"Failed to update product: {e}", {"barcode": product.barcode})
            return False
        finally:
            self._finish_loading()

        if affected == 0:
            self._set_error(NotFoundError(product.barcode), "Product not found", {"barcode": product.barcode})
            return False

        self.reload_all()
        if self._selected is not None and self._selected.barcode == product.barcode:
            self._selected = product
            self._notify()
        return True

    def delete(self, barcode: str) -> bool:
        """Delete a product, clearing the selection if it was selected."""
        logger.info(f"[CatalogState] Deleting product: {barcode}")
        self._set_status(CatalogStatus.loading())
        try:
            affected = self._store.delete(barcode)
        except CatalogError as e:
            self._set_error(e, f"Failed to delete product: {e}", {"barcode": barcode})
            return False
        finally:
            self._finish_loading()

        if affected == 0:
            self._set_error(NotFoundError(barcode), "Product not found", {"barcode": barcode})
            return False

        if self._selected is not None and self._selected.barcode == barcode:
            self._selected = None
        self.reload_all()
        return True

    def clear_selection(self):
        logger.debug("[CatalogState] Clearing selection")
        self._selected = None
        self._notify()

    def clear_error(self):
        if self._status.is_error:
            self._status = CatalogStatus.idle()
        self._notify()

    def count(self) -> int:
        """
        Number of stored products, read straight from the store.

        Unlike the operations above this leaves the status alone and lets
        StorageError propagate to the caller.
        """
        return self._store.count()
