"""Data-source contracts consumed by the repository orchestrator.

Concrete sources (HTTP clients, key-value stores, databases) live outside
this package and satisfy these protocols structurally. Any exception they
raise is classified at the orchestrator boundary.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class RemoteDataSource[M](Protocol):
    """Network-backed source speaking wire models.

    Methods raise transport errors (``TransportError``, ``httpx.HTTPError``,
    or ``FailureError``) on failure.
    """

    async def get_all(self) -> Sequence[M]: ...

    async def get_by_id(self, id: str) -> M | None: ...

    async def create(self, model: M) -> M | None: ...

    async def update(self, model: M) -> M | None: ...

    async def delete(self, id: str) -> None: ...

    async def search(self, query: str) -> Sequence[M]: ...

    async def get_paginated(
        self,
        page: int,
        limit: int,
        sort_by: str | None = None,
        descending: bool = False,
    ) -> Sequence[M]: ...


class LocalDataSource[E](Protocol):
    """On-device store holding entities.

    ``get_by_id`` may return ``None`` for a missing key; any exception is
    treated as a cache-layer failure.
    """

    async def get_all(self) -> Sequence[E]: ...

    async def get_by_id(self, id: str) -> E | None: ...

    async def save(self, entity: E) -> None: ...

    async def save_all(self, entities: Sequence[E]) -> None: ...

    async def delete(self, id: str) -> None: ...
