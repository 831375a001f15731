"""
Product Store - Data Access Layer
Durable CRUD for products in the single products table, addressed by barcode.

The store owns one engine with a single connection. It is opened explicitly
at startup (schema creation runs once, there) and closed at shutdown:

    with ProductStore("sqlite:///./data/products.db") as store:
        store.insert(product)
        store.get_all()

Every SQLAlchemy failure is rolled back and re-raised as StorageError with
the original exception attached. Nothing is retried.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from pydantic import ValidationError
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from catalog.core.exceptions import DuplicateKeyError, StorageError
from catalog.db.session import create_db_engine, create_session_factory, ensure_database_dir
from catalog.models import Base, ProductRecord
from catalog.schemas.product import Product

logger = logging.getLogger(__name__)


def _record_values(product: Product) -> dict:
    """Column values of a product, barcode excluded."""
    return {
        "name": product.name,
        "category": product.category,
        "unit_price": product.unit_price,
        "tax_rate": product.tax_rate,
        "price": product.price,
        "stock": product.stock,
    }


def _to_product(record: ProductRecord) -> Product:
    """Product from a stored row. Rows the schema rejects are a storage fault."""
    try:
        return Product.model_validate(record)
    except ValidationError as e:
        logger.error(f"[ProductStore] Invalid stored product {record.barcode!r}: {e}")
        raise StorageError("Failed to read product", e) from e


class ProductStore:

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.echo = echo
        self._engine: Optional[Engine] = None
        self._session_factory = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Optional[Engine]:
        return self._engine

    def open(self) -> "ProductStore":
        """
        Connect and create the products table if it does not exist.

        Safe to call on an already open store.
        """
        if self.is_open:
            return self

        try:
            ensure_database_dir(self.database_url)
            engine = create_db_engine(self.database_url, echo=self.echo)
            Base.metadata.create_all(bind=engine)
        except (SQLAlchemyError, OSError) as e:
            raise StorageError("Failed to open product database", e) from e

        self._engine = engine
        self._session_factory = create_session_factory(engine)
        logger.info(f"[ProductStore] Opened {engine.url.render_as_string(hide_password=True)}")
        return self

    def close(self):
        """Release the connection. The store can be opened again later."""
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("[ProductStore] Closed")

    def __enter__(self) -> "ProductStore":
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        if self._session_factory is None:
            raise StorageError(f"Failed to {action}: product store is not open")

        db = self._session_factory()
        try:
            yield db
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"[ProductStore] Failed to {action}: {e}")
            raise StorageError(f"Failed to {action}", e) from e
        finally:
            db.close()

    def insert(self, product: Product) -> str:
        """
        Insert a new product.

        Raises DuplicateKeyError if a product with the same barcode exists.
        Returns the barcode of the inserted product.
        """
        with self._session("insert product") as db:
            existing = db.get(ProductRecord, product.barcode)
            if existing is not None:
                raise DuplicateKeyError(product.barcode)

            db.add(ProductRecord(barcode=product.barcode, **_record_values(product)))
            try:
                db.commit()
            except IntegrityError as e:
                # The primary key constraint has the final word on duplicates
                db.rollback()
                if "unique" in str(e.orig).lower():
                    raise DuplicateKeyError(product.barcode) from e
                raise

        logger.info(f"[ProductStore] Inserted {product.barcode}")
        return product.barcode

    def get_by_barcode(self, barcode: str) -> Optional[Product]:
        """Exact, case-sensitive lookup on the trimmed barcode. None if not found."""
        barcode = barcode.strip()
        if not barcode:
            return None

        with self._session("get product") as db:
            record = db.query(ProductRecord).filter(
                ProductRecord.barcode == barcode
            ).first()
            if record is None:
                return None
            return _to_product(record)

    def get_all(self) -> list[Product]:
        """All products ordered by name."""
        with self._session("load products") as db:
            records = db.query(ProductRecord).order_by(
                ProductRecord.name.asc()
            ).all()
            return [_to_product(record) for record in records]

    def update(self, product: Product) -> int:
        """
        Replace every field of the product with the same barcode.

        The barcode itself never changes. Returns the number of rows
        affected: 0 when no product has this barcode.
        """
        with self._session("update product") as db:
            affected = db.query(ProductRecord).filter(
                ProductRecord.barcode == product.barcode
            ).update(_record_values(product), synchronize_session=False)
            db.commit()

        logger.info(f"[ProductStore] Updated {product.barcode} ({affected} row(s))")
        return affected

    def delete(self, barcode: str) -> int:
        """Delete a product by barcode. Returns the number of rows deleted."""
        with self._session("delete product") as db:
            affected = db.query(ProductRecord).filter(
                ProductRecord.barcode == barcode
            ).delete(synchronize_session=False)
            db.commit()

        logger.info(f"[ProductStore] Deleted {barcode} ({affected} row(s))")
        return affected

    def delete_all(self) -> int:
        """Delete every product. Returns the number of rows deleted."""
        with self._session("delete all products") as db:
            affected = db.query(ProductRecord).delete(synchronize_session=False)
            db.commit()

        logger.info(f"[ProductStore] Deleted all products ({affected} row(s))")
        return affected

    def count(self) -> int:
        with self._session("count products") as db:
            return db.query(ProductRecord).count()
