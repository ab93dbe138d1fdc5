"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from vegefood.catalog.models import Product
from vegefood.services.money import to_decimal, to_float, multiply


class CouponKind(str, Enum):
    """What a coupon does to the order."""
    PERCENT = "percent"  # percentage off the subtotal
    FREE_SHIPPING = "free_shipping"  # waives shipping, no price discount


@dataclass
class CartLine:
    """A product snapshot and its quantity in the cart or saved items."""
    product: Product
    quantity: int

    @property
    def product_id(self) -> int:
        return self.product.id

    @property
    def line_total(self) -> Decimal:
        return multiply(self.product.price, self.quantity)

    def to_dict(self) -> dict:
        return {
            "product": self.product.to_dict(),
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLine":
        quantity = int(data["quantity"])
        if quantity < 1:
            raise ValueError(f"quantity must be positive, got {quantity}")
        return cls(product=Product.model_validate(data["product"]), quantity=quantity)


@dataclass(frozen=True)
class Coupon:
    """Coupon from the fixed coupon catalog."""
    code: str
    discount_percent: Decimal
    description: str
    kind: CouponKind = CouponKind.PERCENT

    @property
    def is_free_shipping(self) -> bool:
        return self.kind is CouponKind.FREE_SHIPPING

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "discount": to_float(self.discount_percent),
            "description": self.description,
            "kind": self.kind.value,
        }


@dataclass(frozen=True)
class ShippingOption:
    """Shipping method with a flat cost."""
    method: str
    cost: Decimal
    estimated_days: str

    def to_dict(self) -> dict:
        return {
            "method": self.method,
            "cost": to_float(self.cost),
            "estimatedDays": self.estimated_days,
        }


@dataclass
class CartSummary:
    """Snapshot of the cart and its totals, rounded for display."""
    items: List[CartLine]
    saved_items: List[CartLine]
    cart_count: int
    saved_count: int
    subtotal: Decimal
    discount: Decimal
    shipping_cost: Decimal
    tax: Decimal
    total: Decimal
    coupon: Optional[Coupon] = None
    shipping: Optional[ShippingOption] = None
    is_empty: bool = field(init=False)

    def __post_init__(self):
        self.is_empty = not self.items
        for name in ("subtotal", "discount", "shipping_cost", "tax", "total"):
            setattr(self, name, to_decimal(getattr(self, name)))

    def to_dict(self) -> dict:
        return {
            "is_empty": self.is_empty,
            "items": [
                {**line.to_dict(), "line_total": to_float(line.line_total)}
                for line in self.items
            ],
            "saved_items": [line.to_dict() for line in self.saved_items],
            "cart_count": self.cart_count,
            "saved_count": self.saved_count,
            "subtotal": to_float(self.subtotal),
            "discount": to_float(self.discount),
            "shipping_cost": to_float(self.shipping_cost),
            "tax": to_float(self.tax),
            "total": to_float(self.total),
            "coupon": self.coupon.to_dict() if self.coupon else None,
            "shipping": self.shipping.to_dict() if self.shipping else None,
        }
