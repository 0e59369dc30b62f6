"""Key-value storage for a customer device's local state.

Each device owns a namespace; values are JSON blobs stored under the
fixed keys below. Backends raise ``StorageError`` on any failure so the
services can decide whether to degrade (reads) or surface it (writes).
"""
import json
import logging
from typing import Any, Dict, Optional

import redis
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from models import db
from models.kv import KeyValueEntry
from app.services.errors import CorruptValueError, StorageError
from app.utils.db import transactional

logger = logging.getLogger(__name__)

CART_KEY = "cart"
SAVED_ITEMS_KEY = "savedItems"
FAVORITES_KEY = "favorites"
ADDRESSES_KEY = "addresses"
PAYMENT_METHODS_KEY = "paymentMethods"
ORDERS_KEY = "orders"
SEARCH_HISTORY_KEY = "searchHistory"
USER_TOKEN_KEY = "userToken"
USER_DATA_KEY = "userData"


def _decode(raw: Optional[str], key: str) -> Any:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        raise CorruptValueError(f"Stored value for '{key}' is corrupt") from e


class KeyValueStore:
    namespace: str = ""

    def get(self, key: str) -> Any:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """Dict-backed store; values are kept serialised like the durable backends."""

    def __init__(self, data: Optional[Dict[str, str]] = None, namespace: str = "memory"):
        self._data = data if data is not None else {}
        self.namespace = namespace

    def get(self, key):
        return _decode(self._data.get(key), key)

    def set(self, key, value):
        self._data[key] = json.dumps(value)

    def remove(self, key):
        self._data.pop(key, None)


class SqlStore(KeyValueStore):
    def __init__(self, namespace: str):
        self.namespace = namespace

    def get(self, key):
        try:
            entry = db.session.get(KeyValueEntry, (self.namespace, key))
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read '{key}'") from e
        return _decode(entry.value if entry else None, key)

    def set(self, key, value):
        try:
            with transactional(f"Failed to write '{key}'"):
                entry = db.session.get(KeyValueEntry, (self.namespace, key))
                if entry:
                    entry.value = json.dumps(value)
                else:
                    db.session.add(KeyValueEntry(namespace=self.namespace, key=key, value=json.dumps(value)))
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to write '{key}'") from e

    def remove(self, key):
        try:
            with transactional(f"Failed to remove '{key}'"):
                KeyValueEntry.query.filter_by(namespace=self.namespace, key=key).delete()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to remove '{key}'") from e


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.ConnectionError),
    )


class RedisStore(KeyValueStore):
    def __init__(self, client, namespace: str, prefix: str = "kv"):
        self.client = client
        self.namespace = namespace
        self.prefix = prefix

    def _key(self, key):
        return f"{self.prefix}:{self.namespace}:{key}"

    @redis_retry()
    def _get_raw(self, key):
        return self.client.get(self._key(key))

    def get(self, key):
        try:
            raw = self._get_raw(key)
        except redis.RedisError as e:
            raise StorageError(f"Failed to read '{key}'") from e
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return _decode(raw, key)

    def set(self, key, value):
        try:
            self.client.set(self._key(key), json.dumps(value))
        except redis.RedisError as e:
            raise StorageError(f"Failed to write '{key}'") from e

    def remove(self, key):
        try:
            self.client.delete(self._key(key))
        except redis.RedisError as e:
            raise StorageError(f"Failed to remove '{key}'") from e


def get_store(namespace: str) -> KeyValueStore:
    """Return the configured store for one device namespace."""
    backend = current_app.config.get("KV_BACKEND", "sql")
    if backend == "memory":
        spaces = current_app.extensions.setdefault("kv_memory", {})
        return MemoryStore(spaces.setdefault(namespace, {}), namespace=namespace)
    if backend == "redis":
        client = current_app.extensions.get("kv_redis")
        if client is None:
            client = redis.from_url(current_app.config["REDIS_URL"], socket_connect_timeout=1)
            current_app.extensions["kv_redis"] = client
        return RedisStore(client, namespace, prefix=current_app.config.get("KV_REDIS_PREFIX", "kv"))
    if backend == "sql":
        return SqlStore(namespace)
    raise RuntimeError(f"Unknown KV_BACKEND '{backend}'")


ALL_KEYS = (
    CART_KEY,
    SAVED_ITEMS_KEY,
    FAVORITES_KEY,
    ADDRESSES_KEY,
    PAYMENT_METHODS_KEY,
    ORDERS_KEY,
    SEARCH_HISTORY_KEY,
    USER_TOKEN_KEY,
    USER_DATA_KEY,
)


def read_list(store: KeyValueStore, key: str) -> list:
    """Read a list value; failed or missing reads count as empty."""
    try:
        value = store.get(key)
    except StorageError as e:
        logger.warning("Treating '%s' as empty after read failure: %s", key, e)
        return []
    return value if isinstance(value, list) else []


def load_list(store: KeyValueStore, key: str) -> list:
    """Read a list value for a read-modify-write.

    A corrupt value counts as empty so the write can replace it; any other
    read failure propagates so stored data is never overwritten blind.
    """
    try:
        value = store.get(key)
    except CorruptValueError as e:
        logger.warning("Replacing corrupt '%s': %s", key, e)
        return []
    return value if isinstance(value, list) else []
