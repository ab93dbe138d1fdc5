"""Storefront API routers, mounted under /api."""
from fastapi import APIRouter

from .auth import router as auth_router
from .cart import router as cart_router
from .catalog import router as catalog_router

router = APIRouter(prefix="/api")

router.include_router(catalog_router)
router.include_router(auth_router)
router.include_router(cart_router)

__all__ = ["router"]
