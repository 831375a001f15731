import pytest

from catalog import console


def scripted(*answers):
    """An input() replacement that replays answers, then behaves like Ctrl-D."""
    remaining = list(answers)

    def ask(prompt=""):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return ask


def test_add_from_menu_then_list(controller, capsys):
    console.run(controller, ask=scripted(
        "3", "123", "Pen", "Office", "2", "10", "5",
        "1",
        "0",
    ))

    out = capsys.readouterr().out
    assert "Product added successfully" in out
    assert "Final price: 2.20" in out
    assert "Bye!" in out
    [product] = controller.products
    assert product.barcode == "123"
    assert product.price == pytest.approx(2.2)
    assert controller.selected == product


def test_search_miss_offers_to_add(controller, capsys):
    console.run(controller, ask=scripted(
        "2", "999", "y", "Ink", "Office", "1.5", "0", "",
        "0",
    ))

    out = capsys.readouterr().out
    assert "Product Not Found" in out
    product = controller.selected
    assert product.barcode == "999"
    assert product.price == pytest.approx(1.5)
    assert product.stock is None


def test_search_hit(controller, store, pen, capsys):
    store.insert(pen)

    assert console.search_product(controller, scripted("123")) == pen
    assert "Product found: Pen" in capsys.readouterr().out


def test_search_requires_barcode(controller, capsys):
    assert console.search_product(controller, scripted("  ")) is None
    assert "Please enter a barcode" in capsys.readouterr().out


def test_invalid_form_can_be_abandoned(controller, capsys):
    added = console.add_product(controller, scripted("", "", "", "abc", "200", "", "n"))

    out = capsys.readouterr().out
    assert added is False
    assert "Please fix the errors in the form" in out
    assert "Barcode is required" in out
    assert "Please enter a valid number" in out
    assert "Tax rate must be between 0 and 100" in out
    assert controller.count() == 0


def test_invalid_form_can_be_retried(controller):
    added = console.add_product(controller, scripted(
        "123", "Pen", "Office", "0", "10", "",
        "y",
        "123", "Pen", "Office", "2", "10", "",
    ))

    assert added is True
    assert controller.count() == 1


def test_duplicate_add_shows_error(controller, store, pen, capsys):
    store.insert(pen)

    added = console.add_product(controller, scripted("123", "Pen", "Office", "2", "10", ""))

    assert added is False
    assert "already exists" in capsys.readouterr().out


def test_edit_keeps_blank_fields(controller, store, pen):
    store.insert(pen)
    controller.search_by_barcode("123")

    # Barcode prompt defaults to the selection; only the unit price changes
    assert console.edit_product(controller, scripted("", "", "", "3", "", "")) is True

    updated = store.get_by_barcode("123")
    assert updated.name == "Pen"
    assert updated.unit_price == 3.0
    assert updated.price == pytest.approx(3.3)
    assert updated.stock == 5
    assert controller.selected == updated


def test_edit_can_stop_tracking_stock(controller, store, pen):
    store.insert(pen)

    console.edit_product(controller, scripted("123", "", "", "", "", "-"))

    assert store.get_by_barcode("123").stock is None


def test_edit_unknown_barcode(controller, capsys):
    assert console.edit_product(controller, scripted("999")) is False
    assert "Product not found" in capsys.readouterr().out


def test_delete_requires_confirmation(controller, store, pen, capsys):
    store.insert(pen)

    assert console.delete_product(controller, scripted("123", "")) is False
    assert "Delete cancelled" in capsys.readouterr().out
    assert store.count() == 1

    assert console.delete_product(controller, scripted("123", "y")) is True
    assert store.count() == 0
    assert controller.selected is None


def test_menu_shows_count_and_errors(controller, store, pen, capsys):
    store.insert(pen)
    controller.delete("999")

    console.show_menu(controller, "Product Manager")

    out = capsys.readouterr().out
    assert "Products in catalog: " in out
    assert "Product not found" in out


def test_empty_list_hint(controller, capsys):
    console.show_products(controller)

    assert "No products yet" in capsys.readouterr().out


def test_invalid_choice_and_end_of_input(controller, capsys):
    console.run(controller, ask=scripted("42"))

    out = capsys.readouterr().out
    assert "Invalid choice: 42" in out
    assert "Bye!" in out
