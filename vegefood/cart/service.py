"""Cart service: cart, saved items, coupon and shipping state with derived totals."""
from decimal import Decimal
from typing import List, Optional

from vegefood.catalog.models import Product
from vegefood.db import Storage, StorageKeys
from vegefood.errors import (
    ERROR_EMPTY_COUPON,
    ERROR_INVALID_COUPON,
    MESSAGE_COUPON_REMOVED,
    OperationResult,
)
from vegefood.logging import get_logger, sanitize_string_for_logging
from vegefood.services.money import multiply, percent, round_money, subtract
from vegefood.state import StateHolder
from .models import CartLine, CartSummary, Coupon, ShippingOption
from .offers import (
    DEFAULT_SHIPPING,
    SHIPPING_OPTIONS,
    TAX_RATE,
    find_coupon,
    find_shipping_option,
)

logger = get_logger(__name__)


def _find_line(lines: List[CartLine], product_id: int) -> Optional[CartLine]:
    return next((line for line in lines if line.product_id == product_id), None)


def _merge_line(lines: List[CartLine], product: Product, quantity: int) -> List[CartLine]:
    """Return a new list with `quantity` of `product` added, one line per product id."""
    merged = []
    found = False
    for line in lines:
        if line.product_id == product.id:
            merged.append(CartLine(product=line.product, quantity=line.quantity + quantity))
            found = True
        else:
            merged.append(line)
    if not found:
        merged.append(CartLine(product=product, quantity=quantity))
    return merged


class CartService:
    """
    Owns the cart, saved items, applied coupon and shipping selection.

    State lives in four StateHolders. Every mutation writes the new value to
    storage and then publishes it to listeners. Totals are computed from the
    current state on every read:

        subtotal = sum(price * quantity)
        discount = subtotal * percent / 100   (0 without coupon or for free shipping)
        shipping = selected option cost       (0 with a free-shipping coupon)
        tax      = (subtotal - discount) * 0.10
        total    = subtotal - discount + shipping + tax
    """

    def __init__(self, storage: Storage, hydrate: bool = True):
        self.storage = storage
        self.cart_items: StateHolder[List[CartLine]] = StateHolder([])
        self.saved_items: StateHolder[List[CartLine]] = StateHolder([])
        self.applied_coupon: StateHolder[Optional[Coupon]] = StateHolder(None)
        self.shipping_method: StateHolder[ShippingOption] = StateHolder(DEFAULT_SHIPPING)
        if hydrate:
            self.hydrate()

    # ==================== HYDRATION ====================

    def hydrate(self) -> None:
        """Load state from storage, substituting defaults for missing or corrupt values."""
        self.cart_items.publish(self._load_lines(StorageKeys.CART))
        self.saved_items.publish(self._load_lines(StorageKeys.SAVED_ITEMS))
        self.applied_coupon.publish(self._load_coupon())
        self.shipping_method.publish(self._load_shipping())

    def _load_lines(self, key: str) -> List[CartLine]:
        data = self.storage.read_json(key, default=[])
        if not isinstance(data, list):
            logger.warning(f"Discarding non-list value under {key}")
            self.storage.remove_item(key)
            return []

        lines: List[CartLine] = []
        try:
            for raw in data:
                line = CartLine.from_dict(raw)
                lines = _merge_line(lines, line.product, line.quantity)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Corrupted {key} data: {e}")
            self.storage.remove_item(key)
            return []
        return lines

    def _load_coupon(self) -> Optional[Coupon]:
        data = self.storage.read_json(StorageKeys.APPLIED_COUPON)
        if data is None:
            return None
        code = data.get("code") if isinstance(data, dict) else None
        coupon = find_coupon(code) if isinstance(code, str) else None
        if coupon is None:
            logger.warning("Discarding unknown stored coupon")
            self.storage.remove_item(StorageKeys.APPLIED_COUPON)
        return coupon

    def _load_shipping(self) -> ShippingOption:
        data = self.storage.read_json(StorageKeys.SHIPPING_METHOD)
        if data is None:
            return DEFAULT_SHIPPING
        method = data.get("method") if isinstance(data, dict) else None
        option = find_shipping_option(method)
        if option is None:
            logger.warning("Unknown stored shipping method, using default")
            return DEFAULT_SHIPPING
        return option

    # ==================== READ ACCESS ====================

    @property
    def items(self) -> List[CartLine]:
        return list(self.cart_items.value)

    @property
    def saved(self) -> List[CartLine]:
        return list(self.saved_items.value)

    @property
    def coupon(self) -> Optional[Coupon]:
        return self.applied_coupon.value

    @property
    def shipping(self) -> ShippingOption:
        return self.shipping_method.value

    @property
    def cart_count(self) -> int:
        return sum(line.quantity for line in self.cart_items.value)

    @property
    def saved_count(self) -> int:
        return sum(line.quantity for line in self.saved_items.value)

    # ==================== DERIVED TOTALS ====================

    @property
    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self.cart_items.value), Decimal("0"))

    @property
    def discount(self) -> Decimal:
        coupon = self.coupon
        if coupon is None or coupon.is_free_shipping:
            return Decimal("0")
        return percent(self.subtotal, coupon.discount_percent)

    @property
    def shipping_cost(self) -> Decimal:
        coupon = self.coupon
        if coupon is not None and coupon.is_free_shipping:
            return Decimal("0")
        return self.shipping.cost

    @property
    def tax(self) -> Decimal:
        return multiply(subtract(self.subtotal, self.discount), TAX_RATE)

    @property
    def total(self) -> Decimal:
        return self.subtotal - self.discount + self.shipping_cost + self.tax

    def summary(self) -> CartSummary:
        """Totals snapshot rounded to cents."""
        return CartSummary(
            items=self.items,
            saved_items=self.saved,
            cart_count=self.cart_count,
            saved_count=self.saved_count,
            subtotal=round_money(self.subtotal),
            discount=round_money(self.discount),
            shipping_cost=round_money(self.shipping_cost),
            tax=round_money(self.tax),
            total=round_money(self.total),
            coupon=self.coupon,
            shipping=self.shipping,
        )

    # ==================== CART OPERATIONS ====================

    def add_to_cart(self, product: Product, quantity: int = 1) -> None:
        """Add `quantity` of `product`, merging with an existing line."""
        if not isinstance(quantity, int) or quantity < 1:
            raise ValueError("quantity must be a positive integer")
        self._update_cart(_merge_line(self.cart_items.value, product, quantity))

    def update_quantity(self, product_id: int, quantity: int) -> None:
        """Set a line's quantity exactly; zero or less removes the line."""
        if _find_line(self.cart_items.value, product_id) is None:
            return
        if quantity <= 0:
            self.remove_from_cart(product_id)
            return
        self._update_cart([
            CartLine(product=line.product, quantity=quantity) if line.product_id == product_id else line
            for line in self.cart_items.value
        ])

    def remove_from_cart(self, product_id: int) -> None:
        self._update_cart([line for line in self.cart_items.value if line.product_id != product_id])

    def clear_cart(self) -> None:
        """Empty the cart and drop the coupon. Saved items and shipping stay."""
        self._update_cart([])
        self.remove_coupon()

    def _update_cart(self, lines: List[CartLine]) -> None:
        self.storage.write_json(StorageKeys.CART, [line.to_dict() for line in lines])
        self.cart_items.publish(lines)

    # ==================== SAVE FOR LATER ====================

    def save_for_later(self, product_id: int) -> None:
        """Move a cart line to saved items, summing with an existing saved line."""
        line = _find_line(self.cart_items.value, product_id)
        if line is None:
            return
        saved = _merge_line(self.saved_items.value, line.product, line.quantity)
        self._update_cart([item for item in self.cart_items.value if item.product_id != product_id])
        self._update_saved_items(saved)

    def move_to_cart(self, product_id: int) -> None:
        """Move a saved line back into the cart through add_to_cart."""
        line = _find_line(self.saved_items.value, product_id)
        if line is None:
            return
        self.add_to_cart(line.product, line.quantity)
        self.remove_from_saved(product_id)

    def remove_from_saved(self, product_id: int) -> None:
        self._update_saved_items([line for line in self.saved_items.value if line.product_id != product_id])

    def _update_saved_items(self, lines: List[CartLine]) -> None:
        self.storage.write_json(StorageKeys.SAVED_ITEMS, [line.to_dict() for line in lines])
        self.saved_items.publish(lines)

    # ==================== COUPONS ====================

    def apply_coupon(self, code: str) -> OperationResult:
        """Apply a coupon by code, replacing any coupon already applied."""
        if not code or not code.strip():
            return OperationResult.fail(ERROR_EMPTY_COUPON)

        coupon = find_coupon(code)
        if coupon is None:
            logger.info(f"Rejected coupon code {sanitize_string_for_logging(code, 20)}")
            return OperationResult.fail(ERROR_INVALID_COUPON)

        self.storage.write_json(StorageKeys.APPLIED_COUPON, coupon.to_dict())
        self.applied_coupon.publish(coupon)
        return OperationResult.ok(f"Coupon applied: {coupon.description}")

    def remove_coupon(self) -> OperationResult:
        self.storage.remove_item(StorageKeys.APPLIED_COUPON)
        self.applied_coupon.publish(None)
        return OperationResult.ok(MESSAGE_COUPON_REMOVED)

    # ==================== SHIPPING ====================

    def get_shipping_options(self) -> List[ShippingOption]:
        return list(SHIPPING_OPTIONS)

    def set_shipping_method(self, method: str) -> None:
        """Select a shipping option by key; unknown keys are ignored."""
        option = find_shipping_option(method)
        if option is None:
            return
        self.storage.write_json(StorageKeys.SHIPPING_METHOD, option.to_dict())
        self.shipping_method.publish(option)
