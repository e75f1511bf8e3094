"""Unit tests for S3CheckpointStore using moto."""

from __future__ import annotations

import boto3
import pytest
from moto import mock_aws

from repairflow.core.exceptions import CheckpointStoreError
from repairflow.persistence.s3_backend import S3CheckpointStore

BUCKET = "test-checkpoints"


@pytest.fixture
def s3_backend():
    with mock_aws():
        client = boto3.client("s3", region_name="us-east-1")
        client.create_bucket(Bucket=BUCKET)
        yield S3CheckpointStore(bucket=BUCKET, region="us-east-1", prefix="ckpt/")


class TestStore:
    def test_store_returns_sequenced_key(self, s3_backend):
        assert s3_backend.store(4, b"{}") == "ckpt/4/000000.json"
        assert s3_backend.store(4, b"{}") == "ckpt/4/000001.json"

    def test_orders_do_not_share_sequence(self, s3_backend):
        s3_backend.store(4, b"{}")
        assert s3_backend.store(40, b"{}") == "ckpt/40/000000.json"


class TestLatest:
    def test_returns_none_on_miss(self, s3_backend):
        assert s3_backend.latest(4) is None

    def test_returns_last_stored(self, s3_backend):
        s3_backend.store(4, b"first")
        s3_backend.store(4, b"second")
        assert s3_backend.latest(4) == b"second"


class TestHistory:
    def test_preserves_order(self, s3_backend):
        for payload in (b"a", b"b", b"c"):
            s3_backend.store(12, payload)
        assert s3_backend.history(12) == [b"a", b"b", b"c"]

    def test_prefix_of_other_order_not_included(self, s3_backend):
        s3_backend.store(1, b"one")
        s3_backend.store(10, b"ten")
        assert s3_backend.history(1) == [b"one"]


class TestErrors:
    def test_missing_bucket_raises_store_error(self):
        with mock_aws():
            backend = S3CheckpointStore(bucket="no-such-bucket", region="us-east-1")
            with pytest.raises(CheckpointStoreError):
                backend.store(1, b"x")
