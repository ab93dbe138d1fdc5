"""Cart package: models, offers, cart service and checkout."""
from .models import CartLine, CartSummary, Coupon, CouponKind, ShippingOption
from .offers import COUPONS, SHIPPING_OPTIONS, TAX_RATE, find_coupon, find_shipping_option
from .service import CartService
from .checkout import CheckoutForm, OrderConfirmation, place_order, validate_checkout_form

__all__ = [
    "CartLine",
    "CartSummary",
    "Coupon",
    "CouponKind",
    "ShippingOption",
    "COUPONS",
    "SHIPPING_OPTIONS",
    "TAX_RATE",
    "find_coupon",
    "find_shipping_option",
    "CartService",
    "CheckoutForm",
    "OrderConfirmation",
    "place_order",
    "validate_checkout_form",
]
