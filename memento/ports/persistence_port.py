"""Persistence port — abstract interface for record collections.

Records are plain dicts carrying an "id" key. Writes report ok/fail as a
bool; nothing beyond last-write-wins on a collection is guaranteed.
"""

from __future__ import annotations

from typing import Protocol


class RecordStorePort(Protocol):
    """Abstract record store used by core services."""

    def list(self, kind: str) -> list[dict]: ...

    def append(self, kind: str, record: dict) -> bool: ...

    def remove(self, kind: str, record_id: str) -> bool: ...

    def update(self, kind: str, record_id: str, patch: dict) -> bool: ...
