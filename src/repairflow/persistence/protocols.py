"""Re-export persistence protocols from core for convenience."""

from __future__ import annotations

from repairflow.core.protocols import ICheckpointStore

__all__ = ["ICheckpointStore"]
