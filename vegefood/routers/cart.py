"""
Cart Router

Cart, saved items, coupon, shipping and checkout endpoints. Every route
requires a logged-in session; responses carry the full cart summary.
"""
from fastapi import APIRouter, Depends, HTTPException

from vegefood.auth import User
from vegefood.cart import CartService, CheckoutForm, place_order
from vegefood.catalog import CatalogProvider
from vegefood.errors import ERROR_PRODUCT_NOT_FOUND, ERROR_PRODUCT_OUT_OF_STOCK, CheckoutError
from .auth import result_response
from .deps import get_cart_service, get_catalog, require_session
from .models import (
    AddToCartRequest,
    ApplyCouponRequest,
    CheckoutRequest,
    ShippingMethodRequest,
    UpdateCartItemRequest,
)

router = APIRouter(tags=["cart"])


@router.get("/cart")
async def get_cart(user: User = Depends(require_session), cart: CartService = Depends(get_cart_service)):
    return cart.summary().to_dict()


@router.post("/cart/items")
async def add_to_cart(
    request: AddToCartRequest,
    user: User = Depends(require_session),
    cart: CartService = Depends(get_cart_service),
    catalog: CatalogProvider = Depends(get_catalog),
):
    """Add a catalog product to the cart."""
    product = await catalog.get_product_by_id(request.product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)
    if not product.in_stock:
        raise HTTPException(status_code=400, detail=ERROR_PRODUCT_OUT_OF_STOCK)

    cart.add_to_cart(product, request.quantity)
    return cart.summary().to_dict()


@router.put("/cart/items/{product_id}")
async def update_cart_item(
    product_id: int,
    request: UpdateCartItemRequest,
    user: User = Depends(require_session),
    cart: CartService = Depends(get_cart_service),
):
    """Set item quantity (0 = remove)."""
    cart.update_quantity(product_id, request.quantity)
    return cart.summary().to_dict()


@router.delete("/cart/items/{product_id}")
async def remove_cart_item(
    product_id: int,
    user: User = Depends(require_session),
    cart: CartService = Depends(get_cart_service),
):
    cart.remove_from_cart(product_id)
    return cart.summary().to_dict()


@router.post("/cart/items/{product_id}/save")
async def save_for_later(
    product_id: int,
    user: User = Depends(require_session),
    cart: CartService = Depends(get_cart_service),
):
    cart.save_for_later(product_id)
    return cart.summary().to_dict()


@router.post("/cart/saved/{product_id}/move")
async def move_to_cart(
    product_id: int,
    user: User = Depends(require_session),
    cart: CartService = Depends(get_cart_service),
):
    cart.move_to_cart(product_id)
    return cart.summary().to_dict()


@router.delete("/cart/saved/{product_id}")
async def remove_saved_item(
    product_id: int,
    user: User = Depends(require_session),
    cart: CartService = Depends(get_cart_service),
):
    cart.remove_from_saved(product_id)
    return cart.summary().to_dict()


@router.post("/cart/coupon")
async def apply_coupon(
    request: ApplyCouponRequest,
    user: User = Depends(require_session),
    cart: CartService = Depends(get_cart_service),
):
    result = cart.apply_coupon(request.code)
    if not result.success:
        return result_response(result)
    return {**result.to_dict(), "cart": cart.summary().to_dict()}


@router.delete("/cart/coupon")
async def remove_coupon(user: User = Depends(require_session), cart: CartService = Depends(get_cart_service)):
    result = cart.remove_coupon()
    return {**result.to_dict(), "cart": cart.summary().to_dict()}


@router.get("/cart/shipping")
async def get_shipping_options(user: User = Depends(require_session), cart: CartService = Depends(get_cart_service)):
    return {
        "options": [option.to_dict() for option in cart.get_shipping_options()],
        "selected": cart.shipping.method,
    }


@router.put("/cart/shipping")
async def set_shipping_method(
    request: ShippingMethodRequest,
    user: User = Depends(require_session),
    cart: CartService = Depends(get_cart_service),
):
    """Select shipping; unknown methods leave the selection unchanged."""
    cart.set_shipping_method(request.method)
    return cart.summary().to_dict()


@router.delete("/cart")
async def clear_cart(user: User = Depends(require_session), cart: CartService = Depends(get_cart_service)):
    cart.clear_cart()
    return cart.summary().to_dict()


@router.post("/checkout")
async def checkout(
    request: CheckoutRequest,
    user: User = Depends(require_session),
    cart: CartService = Depends(get_cart_service),
):
    form = CheckoutForm(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        address=request.address,
        city=request.city,
        zip_code=request.zip_code,
        card_number=request.card_number,
    )
    try:
        confirmation = place_order(cart, form)
    except CheckoutError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return confirmation.to_dict()
