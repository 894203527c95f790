"""
CacheTool — Redis Proxy

Redis server statistics and control.

The commands are issued by the redis-py client of the target runtime, so the
adapter's interpreter needs the ``redis`` package and network access to the
server. Responses are decoded as UTF-8 strings.

Example:
    proxy = RedisProxy("redis://localhost:6379/0")
    cachetool.add_proxy(proxy)
    cachetool.call("redis_dbsize")
"""

from typing import Any

from ..code import Code
from .interface import AbstractProxy


class RedisProxy(AbstractProxy):
    """Proxy for a Redis server reachable from the adapter's runtime."""

    def __init__(self, redis_url: str, socket_timeout: int = 5) -> None:
        """
        Initialize the proxy.

        Args:
            redis_url: Connection URL, e.g. redis://localhost:6379/0
            socket_timeout: Socket timeout in seconds
        """
        super().__init__()
        if not redis_url:
            raise ValueError("redis_url is required")
        self.redis_url = redis_url
        self.socket_timeout = socket_timeout

    def get_functions(self) -> list[str]:
        return [
            "redis_dbsize",
            "redis_delete",
            "redis_exists",
            "redis_flushdb",
            "redis_get",
            "redis_info",
            "redis_keys",
            "redis_set",
        ]

    def _client_code(self) -> Code:
        code = Code()
        code.add_statement("import redis")
        code.add_statement(
            f"client = redis.Redis.from_url({Code.literal(self.redis_url)}, "
            f"decode_responses=True, socket_timeout={Code.literal(self.socket_timeout)})"
        )
        return code

    def redis_info(self, section: str | None = None) -> dict[str, Any]:
        """Return the INFO document, optionally restricted to one section."""
        code = self._client_code()
        if section:
            code.add_statement(f"return client.info({Code.literal(section)})")
        else:
            code.add_statement("return client.info()")

        return self._run(code)

    def redis_dbsize(self) -> int:
        """Return the number of keys in the selected database."""
        code = self._client_code()
        code.add_statement("return client.dbsize()")

        return self._run(code)

    def redis_get(self, key: str) -> str | None:
        """Return the value stored at key, or None."""
        code = self._client_code()
        code.add_statement(f"return client.get({Code.literal(key)})")

        return self._run(code)

    def redis_set(self, key: str, value: str | int | float, ttl: int | None = None) -> bool:
        """Store a value, with an optional expiry in seconds."""
        code = self._client_code()
        code.add_statement(
            f"return bool(client.set({Code.literal(key)}, {Code.literal(value)}, ex={Code.literal(ttl or None)}))"
        )

        return self._run(code)

    def redis_delete(self, *keys: str) -> int:
        """Delete keys. Returns the number removed."""
        if not keys:
            return 0
        code = self._client_code()
        code.add_statement(f"return client.delete(*{Code.literal(list(keys))})")

        return self._run(code)

    def redis_exists(self, *keys: str) -> int:
        """Return how many of the given keys exist."""
        if not keys:
            return 0
        code = self._client_code()
        code.add_statement(f"return client.exists(*{Code.literal(list(keys))})")

        return self._run(code)

    def redis_keys(self, pattern: str = "*") -> list[str]:
        """Return the keys matching a glob-style pattern, sorted."""
        code = self._client_code()
        code.add_statement(f"return sorted(client.scan_iter(match={Code.literal(pattern)}))")

        return self._run(code)

    def redis_flushdb(self) -> bool:
        """Remove every key of the selected database."""
        code = self._client_code()
        code.add_statement("return bool(client.flushdb())")

        return self._run(code)
