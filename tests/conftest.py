import logging

import pytest

from catalog.schemas.product import Product
from catalog.services.catalog_state import CatalogStateController
from catalog.services.error_logging import error_logger
from catalog.services.product_store import ProductStore


def _make_product(
    barcode: str = "123",
    name: str = "Pen",
    category: str = "Office",
    unit_price: float = 2.0,
    tax_rate: int = 10,
    stock=5,
) -> Product:
    return Product(
        barcode=barcode,
        name=name,
        category=category,
        unit_price=unit_price,
        tax_rate=tax_rate,
        price=Product.calculate_price(unit_price, tax_rate),
        stock=stock,
    )


@pytest.fixture
def make_product():
    return _make_product


@pytest.fixture
def pen() -> Product:
    return _make_product()


@pytest.fixture
def store():
    store = ProductStore("sqlite://")
    store.open()
    yield store
    store.close()


@pytest.fixture
def controller(store):
    controller = CatalogStateController(store)
    yield controller
    controller.dispose()


@pytest.fixture
def restore_logging():
    """Undo handler and level changes made by configure_error_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    error_logger.set_log_dir(None)
