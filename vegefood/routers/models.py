"""
WebApp API Pydantic Models

Request bodies for the storefront endpoints.
"""
from pydantic import BaseModel, Field


# ==================== AUTH MODELS ====================

class RegisterRequest(BaseModel):
    username: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


# ==================== CART MODELS ====================

class AddToCartRequest(BaseModel):
    product_id: int
    quantity: int = Field(default=1, ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int  # 0 or less removes the line


class ApplyCouponRequest(BaseModel):
    code: str = ""


class ShippingMethodRequest(BaseModel):
    method: str


# ==================== CHECKOUT MODELS ====================

class CheckoutRequest(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    address: str = ""
    city: str = ""
    zip_code: str = ""
    card_number: str = ""
