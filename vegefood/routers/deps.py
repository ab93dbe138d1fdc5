"""
Shared Dependencies for Routers

Services are built per request on top of the caller's storage namespace,
selected by the X-Client-Id header.
"""
import re
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException

from vegefood.auth import AuthService, User
from vegefood.cart import CartService
from vegefood.catalog import CatalogProvider
from vegefood.db import NamespacedStorage, Storage, get_storage
from vegefood.errors import ERROR_LOGIN_REQUIRED

DEFAULT_CLIENT_ID = "anonymous"
CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{1,64}$")


@lru_cache(maxsize=1)
def get_catalog() -> CatalogProvider:
    """Get CatalogProvider singleton (lazy loaded)"""
    return CatalogProvider()


def get_client_storage(x_client_id: Optional[str] = Header(default=None)) -> Storage:
    client_id = (x_client_id or DEFAULT_CLIENT_ID).strip()
    if not CLIENT_ID_PATTERN.match(client_id):
        raise HTTPException(status_code=400, detail="Invalid X-Client-Id header")
    return NamespacedStorage(get_storage(), client_id)


def get_auth_service(storage: Storage = Depends(get_client_storage)) -> AuthService:
    return AuthService(storage)


def get_cart_service(storage: Storage = Depends(get_client_storage)) -> CartService:
    return CartService(storage)


def require_session(auth: AuthService = Depends(get_auth_service)) -> User:
    """Guard for cart and checkout routes: 401 unless a session exists."""
    if not auth.is_authenticated:
        raise HTTPException(status_code=401, detail=ERROR_LOGIN_REQUIRED)
    return auth.current_user_value
