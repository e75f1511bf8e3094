"""Unit tests for RedisCheckpointStore using fakeredis."""

from __future__ import annotations

from unittest.mock import patch

import fakeredis
import pytest

from repairflow.core.exceptions import CheckpointStoreError
from repairflow.core.protocols import ICheckpointStore
from repairflow.persistence.redis_backend import RedisCheckpointStore


@pytest.fixture
def fake_server():
    return fakeredis.FakeServer()


def _backend(fake_server, ttl_seconds: int = 0) -> RedisCheckpointStore:
    with patch("redis.Redis", return_value=fakeredis.FakeRedis(server=fake_server)):
        return RedisCheckpointStore(host="localhost", port=6379, db=0, ttl_seconds=ttl_seconds)


@pytest.fixture
def backend(fake_server):
    return _backend(fake_server)


class TestStore:
    def test_satisfies_protocol(self, backend):
        assert isinstance(backend, ICheckpointStore)

    def test_returns_key_with_index(self, backend):
        assert backend.store(4, b"{}") == "checkpoint:4:0"
        assert backend.store(4, b"{}") == "checkpoint:4:1"

    def test_no_expiry_by_default(self, backend):
        backend.store(4, b"{}")
        assert backend._client.ttl("checkpoint:4") == -1

    def test_ttl_applied(self, fake_server):
        backend = _backend(fake_server, ttl_seconds=3600)
        backend.store(4, b"{}")
        assert 0 < backend._client.ttl("checkpoint:4") <= 3600


class TestLatest:
    def test_returns_none_on_miss(self, backend):
        assert backend.latest(99) is None

    def test_returns_last_stored_bytes(self, backend):
        backend.store(4, b'{"a": 1}')
        backend.store(4, b'{"a": 2}')
        assert backend.latest(4) == b'{"a": 2}'


class TestHistory:
    def test_preserves_order(self, backend):
        for payload in (b"1", b"2", b"3"):
            backend.store(7, payload)
        assert backend.history(7) == [b"1", b"2", b"3"]

    def test_empty_for_unknown_order(self, backend):
        assert backend.history(8) == []


class TestErrorWrapping:
    def test_store_wraps_redis_error(self):
        b = RedisCheckpointStore.__new__(RedisCheckpointStore)
        b._client = None  # will cause AttributeError -> CheckpointStoreError
        b._ttl = 0
        with pytest.raises(CheckpointStoreError):
            b.store(1, b"x")

    def test_latest_wraps_redis_error(self):
        b = RedisCheckpointStore.__new__(RedisCheckpointStore)
        b._client = None
        with pytest.raises(CheckpointStoreError):
            b.latest(1)
