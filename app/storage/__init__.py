from .kv import (
    KeyValueStore,
    MemoryStore,
    SqlStore,
    RedisStore,
    get_store,
    read_list,
    load_list,
)

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "SqlStore",
    "RedisStore",
    "get_store",
    "read_list",
    "load_list",
]
