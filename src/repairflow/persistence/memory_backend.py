"""In-memory checkpoint store for unit tests and local runs."""

from __future__ import annotations


class MemoryCheckpointStore:
    """Dict-backed ICheckpointStore."""

    def __init__(self) -> None:
        self._records: dict[int, list[bytes]] = {}

    def store(self, order_number: int, data: bytes) -> str:
        records = self._records.setdefault(order_number, [])
        records.append(data)
        return f"memory://{order_number}/{len(records) - 1}"

    def latest(self, order_number: int) -> bytes | None:
        records = self._records.get(order_number)
        return records[-1] if records else None

    def history(self, order_number: int) -> list[bytes]:
        return list(self._records.get(order_number, []))

