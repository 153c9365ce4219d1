# =============================================================================
# core/models/result.py - Normalized Result Pair
# =============================================================================
# Boundaries that must never raise (listing from the API client, auth calls,
# profile sync) return a ServiceResult instead: the data, or a fallback value
# plus the error that caused it.
#
# Usage:
#   result = posts_client.list()
#   if not result.ok:
#       show(result.error)
#   render(result.data)
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """Data and error pair; `error` is None on success."""
    data: T
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        return cls(data=data, error=None)

    @classmethod
    def failure(cls, error: Exception, data: T) -> ServiceResult[T]:
        """Failed result; `data` is the empty value callers can still render."""
        return cls(data=data, error=error)
