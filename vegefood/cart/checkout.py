"""
Checkout - turns the current cart into an order confirmation.

There is no payment processing; placing an order snapshots the totals and
clears the cart.
"""
import re
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from vegefood.auth.validators import EMAIL_PATTERN
from vegefood.errors import (
    ERROR_CART_EMPTY,
    ERROR_FIELDS_REQUIRED,
    ERROR_INVALID_CARD,
    ERROR_INVALID_EMAIL,
    ERROR_INVALID_ZIP,
    CheckoutError,
)
from vegefood.logging import get_logger
from .models import CartSummary
from .service import CartService

logger = get_logger(__name__)

CARD_NUMBER_PATTERN = re.compile(r"^\d{13,19}$")
ZIP_CODE_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 -]{1,9}$")


@dataclass
class CheckoutForm:
    first_name: str
    last_name: str
    email: str
    address: str
    city: str
    zip_code: str
    card_number: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def card_last4(self) -> str:
        digits = _digits(self.card_number)
        return digits[-4:]


@dataclass
class OrderConfirmation:
    """Receipt for a placed order."""
    order_ref: str
    customer_name: str
    email: str
    shipping_address: str
    summary: CartSummary
    card_last4: str
    placed_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict:
        return {
            "order_ref": self.order_ref,
            "customer_name": self.customer_name,
            "email": self.email,
            "shipping_address": self.shipping_address,
            "card_last4": self.card_last4,
            "placed_at": self.placed_at,
            "summary": self.summary.to_dict(),
        }


def _digits(value: str) -> str:
    return re.sub(r"[\s-]", "", value or "")


def validate_checkout_form(form: CheckoutForm) -> Optional[str]:
    """Return the first user-facing problem with the form, or None."""
    required = (
        form.first_name, form.last_name, form.email,
        form.address, form.city, form.zip_code, form.card_number,
    )
    if any(not (value or "").strip() for value in required):
        return ERROR_FIELDS_REQUIRED
    if not EMAIL_PATTERN.match(form.email.strip()):
        return ERROR_INVALID_EMAIL
    if not ZIP_CODE_PATTERN.match(form.zip_code.strip()):
        return ERROR_INVALID_ZIP
    if not CARD_NUMBER_PATTERN.match(_digits(form.card_number)):
        return ERROR_INVALID_CARD
    return None


def place_order(cart: CartService, form: CheckoutForm) -> OrderConfirmation:
    """
    Place an order for the current cart.

    Raises:
        CheckoutError: cart is empty or the form is invalid

    On success the cart (and its coupon) is cleared.
    """
    if not cart.items:
        raise CheckoutError(ERROR_CART_EMPTY)

    error = validate_checkout_form(form)
    if error:
        raise CheckoutError(error)

    confirmation = OrderConfirmation(
        order_ref=secrets.token_hex(6).upper(),
        customer_name=form.full_name,
        email=form.email.strip(),
        shipping_address=f"{form.address.strip()}, {form.city.strip()} {form.zip_code.strip()}",
        summary=cart.summary(),
        card_last4=form.card_last4,
    )
    cart.clear_cart()
    logger.info(f"Order {confirmation.order_ref} placed")
    return confirmation
