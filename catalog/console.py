"""
Product Manager - Console Interface
Interactive terminal front end for the product catalog.

Lists products, searches by barcode (offering to add a missing one), and
runs the add/edit form and delete confirmation. All input parsing and the
taxed price calculation happen here, before a Product reaches the catalog.
"""

import os
import platform
from typing import Callable, Optional

from catalog.schemas.product import Product, ProductForm
from catalog.services.catalog_state import CatalogStateController
from catalog.core.exceptions import CatalogError

# Enable ANSI colors on Windows
if platform.system() == "Windows":
    os.system("")  # Enables ANSI escape sequences in Windows terminal

InputFn = Callable[[str], str]


# Colors
class Colors:
    RED = "\033[0;31m"
    GREEN = "\033[0;32m"
    YELLOW = "\033[1;33m"
    BLUE = "\033[0;34m"
    CYAN = "\033[0;36m"
    BOLD = "\033[1m"
    NC = "\033[0m"  # No Color


# Form fields in display order: (field, label)
FORM_FIELDS = [
    ("barcode", "Barcode"),
    ("name", "Product Name"),
    ("category", "Category"),
    ("unit_price", "Unit Price"),
    ("tax_rate", "Tax Rate (%)"),
    ("stock", "Stock Quantity (Optional)"),
]

# Typed into the stock field of the edit form to stop tracking stock
CLEAR_VALUE = "-"


def print_header(title: str):
    print(f"{Colors.GREEN}{Colors.BOLD}  {title}{Colors.NC}")
    print(f"{Colors.CYAN}{'═' * 60}{Colors.NC}")
    print()


def print_status(msg: str):
    print(f"{Colors.BLUE}[INFO]{Colors.NC} {msg}")


def print_success(msg: str):
    print(f"{Colors.GREEN}[OK]{Colors.NC} {msg}")


def print_error(msg: str):
    print(f"{Colors.RED}[ERROR]{Colors.NC} {msg}")


def print_warning(msg: str):
    print(f"{Colors.YELLOW}[WARN]{Colors.NC} {msg}")


def confirm(prompt: str, ask: InputFn, default: bool = True) -> bool:
    suffix = "(Y/n)" if default else "(y/N)"
    answer = ask(f"  {prompt} {suffix}: ").strip().lower()
    if not answer:
        return default
    return answer in ("y", "yes")


def show_products(controller: CatalogStateController):
    """Print the product list, marking the selected product."""
    products = controller.products
    if not products:
        print_status("No products yet. Search a barcode or add one to get started.")
        return

    selected = controller.selected
    print(f"{Colors.BOLD}  Products ({len(products)}){Colors.NC}")
    for product in products:
        marker = f"{Colors.GREEN}▶{Colors.NC}" if selected and selected.barcode == product.barcode else " "
        print(f"  {marker} {product}")
    print()


def fill_form(ask: InputFn, product: Optional[Product] = None, barcode: str = "") -> Optional[Product]:
    """
    Prompt for every form field until the form is valid.

    When editing, the barcode is fixed and an empty answer keeps the
    current value. A barcode passed for a new product is fixed as well.
    Returns None if the user gives up.
    """
    values = ProductForm.from_product(product).model_dump() if product else {"barcode": barcode}
    editing = product is not None
    barcode_fixed = editing or bool(barcode)

    while True:
        for field, label in FORM_FIELDS:
            if barcode_fixed and field == "barcode":
                print(f"  {label}: {values['barcode']}")
                continue
            current = values.get(field, "")
            hint = f" [{current}]" if editing and current else ""
            answer = ask(f"  {label}{hint}: ").strip()
            if editing and not answer:
                continue
            if field == "stock" and answer == CLEAR_VALUE:
                answer = ""
            values[field] = answer

        form, errors = ProductForm.check(**values)
        if form is not None:
            new_product = form.to_product()
            print_status(f"Final price: {new_product.price:.2f} (including {new_product.tax_rate}% tax)")
            return new_product

        print_error("Please fix the errors in the form")
        for field, label in FORM_FIELDS:
            if field in errors:
                print(f"    {label}: {errors[field]}")
        if not confirm("Try again?", ask):
            return None


def add_product(controller: CatalogStateController, ask: InputFn, barcode: str = "") -> bool:
    print(f"{Colors.BOLD}  Add Product{Colors.NC}")
    product = fill_form(ask, barcode=barcode)
    if product is None:
        return False

    if controller.add(product):
        print_success("Product added successfully")
        return True
    print_error(controller.status.message or "Failed to save product")
    return False


def search_product(controller: CatalogStateController, ask: InputFn) -> Optional[Product]:
    barcode = ask("  Barcode: ").strip()
    if not barcode:
        print_error("Please enter a barcode")
        return None

    product = controller.search_by_barcode(barcode)
    if product is not None:
        print_success(f"Product found: {product.name}")
        print(f"    {product}")
        return product

    if controller.status.is_error:
        print_error(controller.status.message)
        return None

    print_warning("Product Not Found")
    if confirm("Would you like to add a new product with this barcode?", ask):
        add_product(controller, ask, barcode=barcode)
    return controller.selected


def _pick_product(controller: CatalogStateController, ask: InputFn) -> Optional[Product]:
    """The selected product, or one looked up by barcode."""
    selected = controller.selected
    prompt = f"  Barcode [{selected.barcode}]: " if selected else "  Barcode: "
    barcode = ask(prompt).strip()
    if not barcode and selected:
        return selected
    if not barcode:
        print_error("Please enter a barcode")
        return None

    product = controller.search_by_barcode(barcode)
    if product is None:
        print_error(controller.status.message if controller.status.is_error else "Product not found")
    return product


def edit_product(controller: CatalogStateController, ask: InputFn) -> bool:
    print(f"{Colors.BOLD}  Edit Product{Colors.NC}")
    product = _pick_product(controller, ask)
    if product is None:
        return False

    updated = fill_form(ask, product)
    if updated is None:
        return False

    if controller.update(updated):
        print_success("Product updated successfully")
        return True
    print_error(controller.status.message or "Failed to save product")
    return False


def delete_product(controller: CatalogStateController, ask: InputFn) -> bool:
    print(f"{Colors.BOLD}  Delete Product{Colors.NC}")
    product = _pick_product(controller, ask)
    if product is None:
        return False

    if not confirm(f"Are you sure you want to delete \"{product.name}\"?", ask, default=False):
        print_status("Delete cancelled")
        return False

    if controller.delete(product.barcode):
        print_success("Product deleted successfully")
        return True
    print_error(controller.status.message or "Failed to delete product")
    return False


def show_menu(controller: CatalogStateController, title: str):
    print_header(title)
    try:
        total = controller.count()
        print(f"  Products in catalog: {Colors.BOLD}{total}{Colors.NC}")
    except CatalogError as e:
        print_error(str(e))
    if controller.selected:
        print(f"  Selected: {controller.selected}")
    if controller.status.is_error:
        print_error(controller.status.message)
    print()
    print(f"{Colors.CYAN}{'═' * 60}{Colors.NC}")
    print()
    print(f"  {Colors.BOLD}CATALOG{Colors.NC}")
    print(f"    {Colors.GREEN}1{Colors.NC}) List products")
    print(f"    {Colors.GREEN}2{Colors.NC}) Search by barcode")
    print()
    print(f"  {Colors.BOLD}EDIT{Colors.NC}")
    print(f"    {Colors.YELLOW}3{Colors.NC}) Add product")
    print(f"    {Colors.YELLOW}4{Colors.NC}) Edit product")
    print(f"    {Colors.YELLOW}5{Colors.NC}) Delete product")
    print()
    print(f"  {Colors.BOLD}OTHER{Colors.NC}")
    print(f"    6) Clear selection")
    print(f"    {Colors.RED}0{Colors.NC})  Exit")
    print()


def run(controller: CatalogStateController, title: str = "Product Manager", ask: InputFn = input):
    """Main menu loop. Returns when the user exits or input ends."""
    actions = {
        "1": lambda: show_products(controller),
        "2": lambda: search_product(controller, ask),
        "3": lambda: add_product(controller, ask),
        "4": lambda: edit_product(controller, ask),
        "5": lambda: delete_product(controller, ask),
        "6": controller.clear_selection,
    }

    while True:
        show_menu(controller, title)
        try:
            choice = ask("  Choice: ").strip()
            if choice == "0":
                print_status("Bye!")
                return
            action = actions.get(choice)
            if action is None:
                print_warning(f"Invalid choice: {choice}")
                continue
            controller.clear_error()
            action()
        except (EOFError, KeyboardInterrupt):
            print()
            print_status("Bye!")
            return
