"""Explicit outcome of a booking operation."""

from typing import Any

from pydantic import BaseModel, ConfigDict

from core.errors import BookingSyncError


class SyncResult(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    ok: bool
    data: Any = None
    error: BookingSyncError | None = None

    @classmethod
    def success(cls, data: Any = None) -> "SyncResult":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: BookingSyncError) -> "SyncResult":
        return cls(ok=False, error=error)
