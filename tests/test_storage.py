"""Tests for storage, state holders and money helpers"""
from decimal import Decimal
from unittest.mock import Mock

import pytest

from vegefood.db import (
    MemoryStorage,
    NamespacedStorage,
    RedisStorage,
    StorageKeys,
    get_storage,
    set_storage,
)
from vegefood.logging import sanitize_string_for_logging
from vegefood.services.money import parse_decimal, percent, round_money, to_decimal
from vegefood.state import StateHolder


class TestStorage:
    """Tests for storage backends."""

    def test_read_json_defaults(self):
        storage = MemoryStorage({"bad": "{oops"})
        assert storage.read_json("missing", default=[]) == []
        assert storage.read_json("bad", default="fallback") == "fallback"

    def test_write_and_read_json(self):
        storage = MemoryStorage()
        storage.write_json("cart", [{"quantity": 1}])
        assert storage.read_json("cart") == [{"quantity": 1}]

    def test_namespaces_are_isolated(self):
        backend = MemoryStorage()
        alice = NamespacedStorage(backend, "alice")
        bob = NamespacedStorage(backend, "bob")

        alice.set_item(StorageKeys.CART, "[]")

        assert bob.get_item(StorageKeys.CART) is None
        assert backend.keys() == [f"{StorageKeys.namespace_prefix('alice')}cart"]

        alice.remove_item(StorageKeys.CART)
        assert backend.keys() == []

    def test_redis_storage_delegates(self):
        client = Mock()
        client.get.return_value = '"Express"'
        storage = RedisStorage(client)

        assert storage.read_json("shippingMethod") == "Express"
        storage.set_item("cart", "[]")
        storage.remove_item("cart")

        client.get.assert_called_once_with("shippingMethod")
        client.set.assert_called_once_with("cart", "[]")
        client.delete.assert_called_once_with("cart")


class TestStateHolder:
    """Tests for StateHolder."""

    def test_publish_notifies_in_order(self):
        holder = StateHolder(0)
        calls = []
        holder.subscribe(lambda v: calls.append(("a", v)))
        holder.subscribe(lambda v: calls.append(("b", v)), emit_current=False)

        holder.publish(1)

        assert holder.value == 1
        assert calls == [("a", 0), ("a", 1), ("b", 1)]

    def test_unsubscribe(self):
        holder = StateHolder("x")
        calls = []
        unsubscribe = holder.subscribe(calls.append, emit_current=False)

        unsubscribe()
        holder.publish("y")

        assert calls == []
        assert holder.listener_count == 0


class TestMoney:
    """Tests for money helpers."""

    def test_to_decimal(self):
        assert to_decimal(0.1) == Decimal("0.1")
        assert to_decimal(None) == Decimal("0")
        assert to_decimal("abc") == Decimal("0")

    def test_round_money_half_up(self):
        assert round_money("2.005") == Decimal("2.01")

    def test_percent(self):
        assert percent(25, 20) == Decimal("5")

    def test_parse_decimal_accepts_numbers(self):
        assert parse_decimal("2.49") == Decimal("2.49")
        assert parse_decimal(0.1) == Decimal("0.1")
        assert parse_decimal(3) == Decimal("3")

    @pytest.mark.parametrize("value", ["free!", "", None, True, "NaN", "Infinity", [1]])
    def test_parse_decimal_rejects_non_numbers(self, value):
        with pytest.raises(ValueError):
            parse_decimal(value)


class TestStorageSettings:
    """Storage settings are read from the environment when used."""

    def test_key_prefix_follows_environment(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_KEY_PREFIX", "shop:")
        backend = MemoryStorage()

        NamespacedStorage(backend, "alice").set_item(StorageKeys.CART, "[]")

        assert backend.keys() == ["shop:alice:cart"]

    def test_default_key_prefix(self, monkeypatch):
        monkeypatch.delenv("STOREFRONT_KEY_PREFIX", raising=False)
        assert StorageKeys.namespace_prefix("bob") == "vegefood:bob:"

    def test_partial_redis_config_is_rejected(self, monkeypatch):
        monkeypatch.setenv("UPSTASH_REDIS_REST_URL", "https://example.upstash.io")
        monkeypatch.delenv("UPSTASH_REDIS_REST_TOKEN", raising=False)
        set_storage(None)
        try:
            with pytest.raises(ValueError):
                get_storage()
        finally:
            set_storage(None)

    def test_memory_storage_without_redis_config(self, monkeypatch):
        monkeypatch.delenv("UPSTASH_REDIS_REST_URL", raising=False)
        monkeypatch.delenv("UPSTASH_REDIS_REST_TOKEN", raising=False)
        set_storage(None)
        try:
            assert isinstance(get_storage(), MemoryStorage)
        finally:
            set_storage(None)


class TestLogSanitizing:
    """Tests for log sanitizers."""

    def test_escapes_line_breaks(self):
        assert sanitize_string_for_logging("a@b.co\nINFO fake") == "a@b.co\\nINFO fake"

    def test_truncates_long_values(self):
        assert sanitize_string_for_logging("x" * 30, max_length=10) == "x" * 10 + "..."

    def test_empty_value(self):
        assert sanitize_string_for_logging(None) == "N/A"
