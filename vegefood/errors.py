"""
Common Error Constants

Centralized user-facing messages and the result type returned by
business operations that can fail without raising.
"""
from dataclasses import dataclass, asdict

# Auth errors
ERROR_DUPLICATE_EMAIL = "User with this email already exists"
ERROR_WEAK_PASSWORD = "Password must be at least 6 characters"
ERROR_INVALID_CREDENTIALS = "Invalid email or password"
ERROR_LOGIN_REQUIRED = "Login required"

# Form validation errors
ERROR_FIELDS_REQUIRED = "All fields are required"
ERROR_FILL_ALL_FIELDS = "Please fill in all fields"
ERROR_INVALID_EMAIL = "Please enter a valid email address"
ERROR_PASSWORD_MISMATCH = "Passwords do not match"

# Cart errors
ERROR_INVALID_COUPON = "Invalid coupon code"
ERROR_EMPTY_COUPON = "Please enter a coupon code"
ERROR_CART_EMPTY = "Your cart is empty"
ERROR_INVALID_CARD = "Please enter a valid card number"
ERROR_INVALID_ZIP = "Please enter a valid zip code"

# Catalog errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"
ERROR_PRODUCT_OUT_OF_STOCK = "Product out of stock"

# Success messages
MESSAGE_REGISTERED = "Registration successful! Please login."
MESSAGE_LOGGED_IN = "Login successful!"
MESSAGE_LOGGED_OUT = "Logged out"
MESSAGE_COUPON_REMOVED = "Coupon removed"


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a business operation that reports failure instead of raising."""
    success: bool
    message: str

    @classmethod
    def ok(cls, message: str) -> "OperationResult":
        return cls(success=True, message=message)

    @classmethod
    def fail(cls, message: str) -> "OperationResult":
        return cls(success=False, message=message)

    def to_dict(self) -> dict:
        return asdict(self)


class CatalogError(Exception):
    """Static catalog data could not be fetched or parsed."""


class CheckoutError(Exception):
    """Order could not be placed; the message is user-facing."""
