"""Consistency strategies: which data source a repository consults, and in what order."""

from __future__ import annotations

from enum import StrEnum


class ConsistencyStrategy(StrEnum):
    """Per-repository read/write policy, fixed at construction time."""

    REMOTE_ONLY = "remote_only"
    LOCAL_ONLY = "local_only"
    REMOTE_WITH_LOCAL_CACHE = "remote_with_local_cache"
    LOCAL_WITH_REMOTE_FALLBACK = "local_with_remote_fallback"

    @property
    def needs_remote(self) -> bool:
        return self is not ConsistencyStrategy.LOCAL_ONLY

    @property
    def needs_local(self) -> bool:
        return self is not ConsistencyStrategy.REMOTE_ONLY

    @property
    def is_hybrid(self) -> bool:
        return self.needs_remote and self.needs_local
