"""S3 checkpoint store implementing ICheckpointStore."""

from __future__ import annotations

import boto3
from botocore.exceptions import ClientError

from repairflow.core.exceptions import CheckpointStoreError


class S3CheckpointStore:
    """Production ICheckpointStore writing one object per checkpoint.

    Keys are ``{prefix}/{order_number}/{sequence:06d}.json`` so a plain
    lexicographic listing returns checkpoints in the order they were taken.
    """

    def __init__(self, bucket: str, region: str = "us-east-1",
                 endpoint_url: str | None = None, prefix: str = "checkpoints") -> None:
        self._bucket = bucket
        self._region = region
        self._endpoint_url = endpoint_url
        self._prefix = prefix.rstrip("/")
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("s3", **kwargs)

    def _order_prefix(self, order_number: int) -> str:
        return f"{self._prefix}/{order_number}/"

    def _list_keys(self, order_number: int) -> list[str]:
        prefix = self._order_prefix(order_number)
        try:
            keys: list[str] = []
            paginator = self._client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self._bucket, Prefix=prefix):
                for obj in page.get("Contents", []):
                    keys.append(obj["Key"])
            return sorted(keys)
        except ClientError as exc:
            raise CheckpointStoreError(f"S3 list failed for prefix={prefix!r}: {exc}") from exc

    def _read(self, key: str) -> bytes:
        try:
            resp = self._client.get_object(Bucket=self._bucket, Key=key)
            return resp["Body"].read()
        except ClientError as exc:
            raise CheckpointStoreError(f"S3 read failed for {key!r}: {exc}") from exc

    def store(self, order_number: int, data: bytes) -> str:
        key = f"{self._order_prefix(order_number)}{len(self._list_keys(order_number)):06d}.json"
        try:
            self._client.put_object(
                Bucket=self._bucket, Key=key, Body=data, ContentType="application/json",
            )
            return key
        except ClientError as exc:
            raise CheckpointStoreError(f"S3 write failed for {key!r}: {exc}") from exc

    def latest(self, order_number: int) -> bytes | None:
        keys = self._list_keys(order_number)
        return self._read(keys[-1]) if keys else None

    def history(self, order_number: int) -> list[bytes]:
        return [self._read(key) for key in self._list_keys(order_number)]
