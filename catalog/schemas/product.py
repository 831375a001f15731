"""
Product Schemas
Pydantic models for the product value and the product entry form.

Product is the value handed to the store and read back from it.
ProductForm holds raw text as typed by a user and turns it into a Product,
computing the taxed price on the way.
"""

import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from catalog.core.constants import TAX_RATE_MIN, TAX_RATE_MAX


class Product(BaseModel):
    """Schema for a catalog product"""
    barcode: str = Field(..., min_length=1, description="Unique barcode (primary key)")
    name: str = Field(..., min_length=1, description="Product name")
    category: str = Field(..., min_length=1, description="Category (e.g., Electronics, Food)")
    unit_price: float = Field(..., ge=0, allow_inf_nan=False, description="Unit price before tax")
    tax_rate: int = Field(..., ge=TAX_RATE_MIN, le=TAX_RATE_MAX, description="Tax rate in percent")
    price: float = Field(..., allow_inf_nan=False, description="Final price including tax")
    stock: Optional[int] = Field(None, ge=0, description="Stock quantity, None if not tracked")

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator('barcode')
    @classmethod
    def validate_barcode(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Barcode is required")
        return v.strip()

    @staticmethod
    def calculate_price(unit_price: float, tax_rate: int) -> float:
        """
        Price including tax.

        Formula: price = unit_price * (1 + tax_rate/100)
        """
        return unit_price * (1 + tax_rate / 100)

    def __str__(self):
        stock = self.stock if self.stock is not None else "-"
        return (
            f"{self.barcode}  {self.name} [{self.category}]  "
            f"{self.unit_price:.2f} + {self.tax_rate}% = {self.price:.2f}  stock: {stock}"
        )


def _parse_number(value: str) -> Optional[float]:
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def _parse_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except ValueError:
        return None


class ProductForm(BaseModel):
    """
    Schema for the add/edit product form.

    Every field is the raw text of an input box. Validation messages are the
    ones shown next to the field; stock may be left empty.
    """
    barcode: str = ""
    name: str = ""
    category: str = ""
    unit_price: str = ""
    tax_rate: str = ""
    stock: str = ""

    model_config = ConfigDict(validate_default=True)

    @field_validator('barcode')
    @classmethod
    def validate_barcode(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Barcode is required")
        return v.strip()

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Product name is required")
        return v.strip()

    @field_validator('category')
    @classmethod
    def validate_category(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Category is required")
        return v.strip()

    @field_validator('unit_price')
    @classmethod
    def validate_unit_price(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Unit price is required")
        price = _parse_number(v)
        if price is None:
            raise ValueError("Please enter a valid number")
        if price <= 0:
            raise ValueError("Price must be greater than 0")
        # Taxed price must stay finite at the highest tax rate
        if not math.isfinite(Product.calculate_price(price, TAX_RATE_MAX)):
            raise ValueError("Please enter a valid number")
        return v

    @field_validator('tax_rate')
    @classmethod
    def validate_tax_rate(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Tax rate is required")
        tax_rate = _parse_int(v)
        if tax_rate is None:
            raise ValueError("Please enter a valid number")
        if tax_rate < TAX_RATE_MIN or tax_rate > TAX_RATE_MAX:
            raise ValueError(f"Tax rate must be between {TAX_RATE_MIN} and {TAX_RATE_MAX}")
        return v

    @field_validator('stock')
    @classmethod
    def validate_stock(cls, v: str) -> str:
        v = v.strip()
        if v:
            stock = _parse_int(v)
            if stock is None:
                raise ValueError("Please enter a valid number")
            if stock < 0:
                raise ValueError("Stock cannot be negative")
        return v

    @classmethod
    def check(cls, **fields: str) -> tuple[Optional["ProductForm"], dict[str, str]]:
        """
        Validate raw field values.

        Returns (form, {}) when valid, or (None, {field: message}) with the
        first message for every invalid field.
        """
        try:
            return cls(**fields), {}
        except ValidationError as e:
            errors: dict[str, str] = {}
            for err in e.errors():
                field = str(err["loc"][0]) if err["loc"] else "__root__"
                cause = err.get("ctx", {}).get("error")
                errors.setdefault(field, str(cause) if cause else err["msg"])
            return None, errors

    @classmethod
    def from_product(cls, product: Product) -> "ProductForm":
        """Pre-fill the form for editing an existing product."""
        return cls.model_construct(
            barcode=product.barcode,
            name=product.name,
            category=product.category,
            unit_price=str(product.unit_price),
            tax_rate=str(product.tax_rate),
            stock="" if product.stock is None else str(product.stock),
        )

    def to_product(self) -> Product:
        unit_price = float(self.unit_price)
        tax_rate = int(self.tax_rate)
        return Product(
            barcode=self.barcode,
            name=self.name,
            category=self.category,
            unit_price=unit_price,
            tax_rate=tax_rate,
            price=Product.calculate_price(unit_price, tax_rate),
            stock=int(self.stock) if self.stock else None,
        )
