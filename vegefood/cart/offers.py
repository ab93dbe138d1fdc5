"""Fixed coupon and shipping catalogs."""
from decimal import Decimal
from typing import List, Optional

from .models import Coupon, CouponKind, ShippingOption

TAX_RATE = Decimal("0.10")

COUPONS: List[Coupon] = [
    Coupon("SAVE10", Decimal("10"), "10% off your order"),
    Coupon("SAVE20", Decimal("20"), "20% off your order"),
    Coupon("WELCOME", Decimal("15"), "15% off for new customers"),
    Coupon("FREESHIP", Decimal("0"), "Free shipping", CouponKind.FREE_SHIPPING),
]

SHIPPING_OPTIONS: List[ShippingOption] = [
    ShippingOption("Standard", Decimal("5"), "5-7 business days"),
    ShippingOption("Express", Decimal("15"), "2-3 business days"),
    ShippingOption("Overnight", Decimal("25"), "1 business day"),
]

DEFAULT_SHIPPING = SHIPPING_OPTIONS[0]


def find_coupon(code: Optional[str]) -> Optional[Coupon]:
    """Case-insensitive coupon lookup."""
    if not code:
        return None
    wanted = code.strip().upper()
    return next((c for c in COUPONS if c.code.upper() == wanted), None)


def find_shipping_option(method: Optional[str]) -> Optional[ShippingOption]:
    """Exact-match lookup by method key."""
    return next((o for o in SHIPPING_OPTIONS if o.method == method), None)
