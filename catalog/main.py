"""
Application Entry Point
Composition root of the product catalog.

Builds exactly one ProductStore from settings, opens it at startup, hands
it to one CatalogStateController, and closes it at shutdown.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from catalog.console import run
from catalog.core.config import Settings, settings as default_settings
from catalog.services.catalog_state import CatalogStateController
from catalog.services.error_logging import configure_error_logging
from catalog.services.product_store import ProductStore

logger = logging.getLogger(__name__)


@contextmanager
def open_catalog(settings: Optional[Settings] = None) -> Iterator[CatalogStateController]:
    """
    Open the catalog for the lifetime of the with-block.

    Tasks performed on startup:
    - Open the product database (creates the products table if missing)
    - Create the state controller and load the product list

    On exit the controller drops its listeners and the database connection
    is released, even if the block raised.
    """
    settings = settings or default_settings

    store = ProductStore(settings.DATABASE_URL, echo=settings.DEBUG)
    store.open()
    controller = CatalogStateController(store)
    try:
        controller.reload_all()
        yield controller
    finally:
        controller.dispose()
        store.close()
        logger.info("Catalog closed")


def main(settings: Optional[Settings] = None) -> int:
    """Configure logging, open the catalog and run the console."""
    settings = settings or default_settings
    configure_error_logging(settings.LOG_DIR, settings.LOG_LEVEL, settings.FILE_LOGGING)
    logger.info(f"Starting {settings.PROJECT_NAME}...")

    with open_catalog(settings) as controller:
        run(controller, title=settings.PROJECT_NAME)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
