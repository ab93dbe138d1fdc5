"""
Storage Module - durable key/value storage for storefront state

The storefront keeps its state the way a browser keeps localStorage:
string keys mapping to JSON blobs. Two backends are provided:
- MemoryStorage: process-local dict (default, tests)
- RedisStorage: Upstash Redis via the REST client

Each client gets its own key space through NamespacedStorage, so one
backend can serve many storefront sessions.
"""

import json
import os
from typing import Any, Dict, Optional

from upstash_redis import Redis

from vegefood.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)


DEFAULT_KEY_PREFIX = "vegefood:"


def _key_prefix() -> str:
    """Prefix for every key written by this app (STOREFRONT_KEY_PREFIX)."""
    return os.environ.get("STOREFRONT_KEY_PREFIX", DEFAULT_KEY_PREFIX)


class StorageKeys:
    """Keys under which storefront state is persisted."""

    # Session / identity
    CURRENT_USER = "currentUser"
    AUTH_TOKEN = "authToken"
    REGISTERED_USERS = "registeredUsers"

    # Cart state
    CART = "cart"
    SAVED_ITEMS = "savedItems"
    APPLIED_COUPON = "appliedCoupon"
    SHIPPING_METHOD = "shippingMethod"

    @staticmethod
    def namespace_prefix(namespace: str) -> str:
        return f"{_key_prefix()}{namespace}:"


class Storage:
    """
    Base class for string-keyed storage.

    Subclasses implement get_item/set_item/remove_item. The JSON helpers
    treat missing or unparsable values as "not set" and never raise.
    """

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError

    def read_json(self, key: str, default: Any = None) -> Any:
        """Read and decode a JSON value, falling back to `default`."""
        raw = self.get_item(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Corrupted value under {sanitize_string_for_logging(key)}: {e}")
            return default

    def write_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value))


class MemoryStorage(Storage):
    """In-process storage backed by a dict."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class RedisStorage(Storage):
    """Storage on top of the synchronous Upstash Redis client."""

    def __init__(self, client: Redis):
        self.client = client

    def get_item(self, key: str) -> Optional[str]:
        return self.client.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.client.set(key, value)

    def remove_item(self, key: str) -> None:
        self.client.delete(key)


class NamespacedStorage(Storage):
    """View of another storage where every key is prefixed with a namespace."""

    def __init__(self, backend: Storage, namespace: str):
        self.backend = backend
        self.namespace = namespace
        self._prefix = StorageKeys.namespace_prefix(namespace)

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get_item(self, key: str) -> Optional[str]:
        return self.backend.get_item(self._key(key))

    def set_item(self, key: str, value: str) -> None:
        self.backend.set_item(self._key(key), value)

    def remove_item(self, key: str) -> None:
        self.backend.remove_item(self._key(key))


# Singleton instance
_storage: Optional[Storage] = None


def get_storage() -> Storage:
    """
    Get the process-wide storage backend (singleton).

    Uses Upstash Redis when both UPSTASH_REDIS_REST_URL and
    UPSTASH_REDIS_REST_TOKEN are set, in-memory storage when neither is.
    """
    global _storage

    if _storage is None:
        # Upstash Redis - standard env var names per docs
        url = os.environ.get("UPSTASH_REDIS_REST_URL", "")
        token = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")
        if url and token:
            _storage = RedisStorage(Redis(url=url, token=token))
            logger.info("Using Upstash Redis storage")
        elif url or token:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must both be set")
        else:
            _storage = MemoryStorage()
            logger.info("Redis not configured, using in-memory storage")

    return _storage


def set_storage(storage: Optional[Storage]) -> None:
    """Replace the storage singleton (None resets it)."""
    global _storage
    _storage = storage
