import pytest
from pydantic import ValidationError
from sqlalchemy import inspect, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from catalog.core.exceptions import DuplicateKeyError, StorageError
from catalog.schemas.product import Product
from catalog.services.product_store import ProductStore


def test_insert_then_get_returns_equal_product(store, pen):
    assert store.insert(pen) == "123"

    found = store.get_by_barcode("123")
    assert found == pen


def test_stock_can_be_untracked(store, make_product):
    product = make_product(stock=None)
    store.insert(product)

    assert store.get_by_barcode(product.barcode).stock is None


def test_get_all_orders_by_name(store, make_product):
    store.insert(make_product(barcode="2", name="Stapler"))
    store.insert(make_product(barcode="1", name="Eraser"))
    store.insert(make_product(barcode="3", name="Notebook"))

    assert [p.name for p in store.get_all()] == ["Eraser", "Notebook", "Stapler"]


def test_get_all_on_empty_store(store):
    assert store.get_all() == []
    assert store.count() == 0


def test_duplicate_insert_keeps_existing_record(store, pen, make_product):
    store.insert(pen)

    with pytest.raises(DuplicateKeyError) as exc_info:
        store.insert(make_product(name="Other pen", unit_price=9.0))

    assert exc_info.value.barcode == "123"
    assert exc_info.value.code == "duplicate"
    assert store.get_by_barcode("123") == pen
    assert store.count() == 1


def test_unique_constraint_catches_duplicate_missed_by_precheck(store, pen, monkeypatch):
    store.insert(pen)
    monkeypatch.setattr(Session, "get", lambda self, *args, **kwargs: None)

    with pytest.raises(DuplicateKeyError):
        store.insert(pen)

    monkeypatch.undo()
    assert store.count() == 1


def test_get_by_barcode_misses_return_none(store, pen):
    store.insert(pen)

    assert store.get_by_barcode("") is None
    assert store.get_by_barcode("   ") is None
    assert store.get_by_barcode("999") is None


def test_get_by_barcode_trims_and_is_case_sensitive(store, make_product):
    product = make_product(barcode="ABC-1")
    store.insert(product)

    assert store.get_by_barcode("  ABC-1 ") == product
    assert store.get_by_barcode("abc-1") is None


def test_update_replaces_fields(store, pen):
    store.insert(pen)
    updated = pen.model_copy(update={"name": "Blue pen", "unit_price": 3.0, "price": 3.3, "stock": None})

    assert store.update(updated) == 1
    assert store.get_by_barcode("123") == updated


def test_update_missing_barcode_affects_nothing(store, pen):
    assert store.update(pen) == 0
    assert store.count() == 0


def test_delete(store, pen):
    store.insert(pen)

    assert store.delete("123") == 1
    assert store.get_by_barcode("123") is None
    assert store.delete("123") == 0


def test_delete_on_empty_store(store):
    assert store.delete("999") == 0


def test_count_and_delete_all(store, make_product):
    for i in range(3):
        store.insert(make_product(barcode=str(i), name=f"Item {i}"))

    assert store.count() == 3
    assert store.delete_all() == 3
    assert store.count() == 0


def test_pen_price_update_scenario(store):
    pen = Product(
        barcode="123", name="Pen", category="Office",
        unit_price=2.00, tax_rate=10, price=2.20, stock=5,
    )
    store.insert(pen)
    assert store.get_all() == [pen]

    store.update(pen.model_copy(update={"unit_price": 3.00, "tax_rate": 10, "price": 3.30}))

    assert store.get_by_barcode("123").price == 3.30


def test_price_is_stored_as_given(store, make_product):
    product = make_product().model_copy(update={"price": 99.0})
    store.insert(product)

    assert store.get_by_barcode(product.barcode).price == 99.0


def test_schema(store):
    columns = {c["name"]: c for c in inspect(store.engine).get_columns("products")}

    assert list(columns) == ["barcode", "name", "category", "unit_price", "tax_rate", "price", "stock"]
    assert columns["barcode"]["primary_key"] == 1
    assert columns["stock"]["nullable"] is True
    for name in ("name", "category", "unit_price", "tax_rate", "price"):
        assert columns[name]["nullable"] is False


def test_file_database_persists_across_reopen(tmp_path, pen):
    url = f"sqlite:///{tmp_path / 'nested' / 'products.db'}"

    with ProductStore(url) as store:
        store.insert(pen)

    assert (tmp_path / "nested" / "products.db").exists()

    with ProductStore(url) as store:
        # Schema creation is idempotent and keeps existing rows
        assert store.get_all() == [pen]


def test_open_is_idempotent(store, pen):
    store.insert(pen)
    store.open()

    assert store.count() == 1


def test_closed_store_raises_storage_error(pen):
    store = ProductStore("sqlite://")

    with pytest.raises(StorageError):
        store.get_all()

    store.open()
    store.close()
    assert not store.is_open
    with pytest.raises(StorageError):
        store.insert(pen)


def test_storage_fault_carries_cause(store):
    with store.engine.begin() as conn:
        conn.execute(text("DROP TABLE products"))

    with pytest.raises(StorageError) as exc_info:
        store.get_all()

    assert exc_info.value.code == "storage"
    assert isinstance(exc_info.value.cause, OperationalError)
    assert exc_info.value.__cause__ is exc_info.value.cause


def test_unopenable_database_raises_storage_error(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a folder", encoding="utf-8")
    store = ProductStore(f"sqlite:///{blocker / 'products.db'}")

    with pytest.raises(StorageError):
        store.open()
    assert not store.is_open


def test_padded_barcode_round_trips(store, make_product):
    product = make_product(barcode=" 123 ")
    assert product.barcode == "123"

    store.insert(product)

    assert store.get_by_barcode(product.barcode) == product
    assert store.get_by_barcode(" 123 ") == product


def test_blank_barcode_is_rejected(make_product):
    with pytest.raises(ValidationError):
        make_product(barcode="   ")


def _insert_raw_row(store, **values):
    row = {"barcode": "1", "name": "", "category": "c", "unit_price": 1.0,
           "tax_rate": 500, "price": 1.0, "stock": -3}
    row.update(values)
    with store.engine.begin() as conn:
        conn.execute(
            text(
                "INSERT INTO products (barcode, name, category, unit_price, tax_rate, price, stock) "
                "VALUES (:barcode, :name, :category, :unit_price, :tax_rate, :price, :stock)"
            ),
            row,
        )


def test_invalid_stored_row_is_a_storage_error(store):
    _insert_raw_row(store)

    with pytest.raises(StorageError) as exc_info:
        store.get_all()
    assert isinstance(exc_info.value.cause, ValidationError)
    assert exc_info.value.code == "storage"

    with pytest.raises(StorageError):
        store.get_by_barcode("1")
