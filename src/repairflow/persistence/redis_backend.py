"""Redis checkpoint store implementing ICheckpointStore."""

from __future__ import annotations

import redis

from repairflow.core.exceptions import CheckpointStoreError


class RedisCheckpointStore:
    """Production ICheckpointStore keeping one Redis list per order."""

    KEY_PREFIX = "checkpoint"

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0,
                 ttl_seconds: int = 0) -> None:
        self._host = host
        self._port = port
        self._db = db
        self._ttl = ttl_seconds
        # Checkpoints are raw bytes
        self._client = redis.Redis(host=host, port=port, db=db, decode_responses=False)

    def _key(self, order_number: int) -> str:
        return f"{self.KEY_PREFIX}:{order_number}"

    def store(self, order_number: int, data: bytes) -> str:
        key = self._key(order_number)
        try:
            length = self._client.rpush(key, data)
            if self._ttl:
                self._client.expire(key, self._ttl)
        except Exception as exc:
            raise CheckpointStoreError(f"Redis RPUSH failed for key={key!r}: {exc}") from exc
        return f"{key}:{length - 1}"

    def latest(self, order_number: int) -> bytes | None:
        key = self._key(order_number)
        try:
            return self._client.lindex(key, -1)
        except Exception as exc:
            raise CheckpointStoreError(f"Redis LINDEX failed for key={key!r}: {exc}") from exc

    def history(self, order_number: int) -> list[bytes]:
        key = self._key(order_number)
        try:
            return list(self._client.lrange(key, 0, -1))
        except Exception as exc:
            raise CheckpointStoreError(f"Redis LRANGE failed for key={key!r}: {exc}") from exc
