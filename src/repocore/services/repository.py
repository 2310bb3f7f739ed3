"""BaseRepository: strategy-driven orchestration of remote and local sources.

Every operation returns a Result. Remote failures are surfaced verbatim
(already classified). Local failures are never surfaced when a remote
outcome is available:

* during reads they are logged and treated as a cache miss;
* after a successful remote write they are logged, reported to the
  optional ``on_cache_error`` observer, and swallowed.

Cache writes that follow a remote success are best-effort but awaited, so
the enclosing call does not finish before the write does.

Usage::

    class UserRepository(BaseRepository[User, UserModel]):
        def to_model(self, entity: User) -> UserModel:
            return UserModel(id=entity.id, name=entity.name)

    repo = UserRepository(remote, local, strategy=ConsistencyStrategy.REMOTE_ONLY)
    result = await repo.get_all()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING, Any, Self

import structlog

from repocore.domain.entities import EntityModel
from repocore.domain.failures import CacheFailure, ConfigurationFailure
from repocore.domain.protocols import LocalDataSource, RemoteDataSource
from repocore.domain.result import Error, Result, Success
from repocore.domain.strategy import ConsistencyStrategy
from repocore.network.classifier import format_trace
from repocore.services.guards import safe_call, safe_remote_call, safe_void_call

if TYPE_CHECKING:
    from repocore.config.settings import RepocoreSettings

log = structlog.get_logger(__name__)

type CacheErrorHandler = Callable[[str, CacheFailure], None]

_MIRRORING = (
    ConsistencyStrategy.REMOTE_WITH_LOCAL_CACHE,
    ConsistencyStrategy.LOCAL_WITH_REMOTE_FALLBACK,
)


class RepositoryConfigurationError(Exception):
    """Raised at construction when the strategy's data sources are missing."""

    def __init__(self, failure: ConfigurationFailure) -> None:
        super().__init__(failure.message)
        self.failure = failure


def resolve_strategy(
    strategy: ConsistencyStrategy,
    *,
    has_remote: bool,
    has_local: bool,
) -> Result[ConsistencyStrategy]:
    """Return the strategy that can actually run with the supplied sources.

    Single-source strategies require their source. Hybrid strategies degrade
    to the single-source strategy of whichever source is present, and fail
    only when neither is.
    """
    if strategy is ConsistencyStrategy.REMOTE_ONLY and not has_remote:
        return Error(ConfigurationFailure(message="Strategy remote_only requires a remote data source."))
    if strategy is ConsistencyStrategy.LOCAL_ONLY and not has_local:
        return Error(ConfigurationFailure(message="Strategy local_only requires a local data source."))
    if not strategy.is_hybrid or (has_remote and has_local):
        return Success(strategy)
    if has_remote:
        return Success(ConsistencyStrategy.REMOTE_ONLY)
    if has_local:
        return Success(ConsistencyStrategy.LOCAL_ONLY)
    return Error(
        ConfigurationFailure(
            message=f"Strategy {strategy.value} requires remote and local data sources; none supplied."
        )
    )


class BaseRepository[E, M: EntityModel[Any]](ABC):
    """Abstract repository over a remote source of models and a local store of entities.

    Subclasses implement :meth:`to_model`. Construction raises
    :class:`RepositoryConfigurationError` when the strategy cannot run;
    :meth:`build` returns the same condition as an ``Error`` instead.

    Parameters:
        remote: Source of truth speaking wire models.
        local: Entity cache.
        strategy: Consistency strategy, fixed for the repository's lifetime.
        on_cache_error: Observer called with ``(operation, failure)`` when a
            best-effort cache write fails.
    """

    def __init__(
        self,
        remote: RemoteDataSource[M] | None = None,
        local: LocalDataSource[E] | None = None,
        *,
        strategy: ConsistencyStrategy = ConsistencyStrategy.REMOTE_WITH_LOCAL_CACHE,
        on_cache_error: CacheErrorHandler | None = None,
    ) -> None:
        resolved = resolve_strategy(strategy, has_remote=remote is not None, has_local=local is not None)
        if resolved.is_error:
            raise RepositoryConfigurationError(resolved.failure)

        self._remote = remote
        self._local = local
        self._strategy = strategy
        self._effective = resolved.data
        self._on_cache_error = on_cache_error

        if self._effective is not strategy:
            log.warning(
                "repository.strategy_degraded",
                repository=type(self).__name__,
                requested=strategy.value,
                effective=self._effective.value,
            )

    @classmethod
    def build(cls, *args: Any, **kwargs: Any) -> Result[Self]:
        """Construct a repository, returning a configuration failure instead of raising."""
        try:
            return Success(cls(*args, **kwargs))
        except RepositoryConfigurationError as exc:
            return Error(exc.failure)

    @classmethod
    def from_settings(
        cls,
        settings: RepocoreSettings,
        remote: RemoteDataSource[M] | None = None,
        local: LocalDataSource[E] | None = None,
        *,
        on_cache_error: CacheErrorHandler | None = None,
    ) -> Self:
        """Construct a repository whose strategy comes from *settings*."""
        return cls(remote, local, strategy=settings.strategy, on_cache_error=on_cache_error)

    @property
    def strategy(self) -> ConsistencyStrategy:
        """The strategy requested at construction."""
        return self._strategy

    @property
    def effective_strategy(self) -> ConsistencyStrategy:
        """The strategy actually in force after degradation."""
        return self._effective

    @abstractmethod
    def to_model(self, entity: E) -> M:
        """Convert a domain entity into the model sent to the remote source."""

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_all(self) -> Result[list[E]]:
        match self._effective:
            case ConsistencyStrategy.LOCAL_ONLY:
                local = await self._call_local("get_all", self._local_source.get_all)
                return local.map(list)
            case ConsistencyStrategy.REMOTE_ONLY:
                return await self._fetch_list(self._remote_source.get_all)
            case ConsistencyStrategy.REMOTE_WITH_LOCAL_CACHE:
                result = await self._fetch_list(self._remote_source.get_all)
                if result.is_success:
                    await self._best_effort("get_all", lambda: self._local_source.save_all(result.data))
                return result
            case ConsistencyStrategy.LOCAL_WITH_REMOTE_FALLBACK:
                local = await self._call_local("get_all", self._local_source.get_all)
                if local.is_success and local.data:
                    return Success(list(local.data))
                return await self._fetch_list(self._remote_source.get_all)

    async def get_by_id(self, id: str) -> Result[E]:
        read_local = lambda: self._local_source.get_by_id(id)  # noqa: E731
        read_remote = lambda: self._remote_source.get_by_id(id)  # noqa: E731

        match self._effective:
            case ConsistencyStrategy.LOCAL_ONLY:
                local = await self._call_local("get_by_id", read_local)
                if local.is_error:
                    return local
                if local.data is None:
                    return Error(CacheFailure(message=f"Entity {id!r} is not in the local cache."))
                return Success(local.data)
            case ConsistencyStrategy.REMOTE_ONLY:
                return await self._fetch_one(read_remote)
            case ConsistencyStrategy.REMOTE_WITH_LOCAL_CACHE:
                result = await self._fetch_one(read_remote)
                if result.is_success:
                    await self._best_effort("get_by_id", lambda: self._local_source.save(result.data))
                return result
            case ConsistencyStrategy.LOCAL_WITH_REMOTE_FALLBACK:
                local = await self._call_local("get_by_id", read_local)
                if local.is_success and local.data is not None:
                    return Success(local.data)
                return await self._fetch_one(read_remote)

    async def search(self, query: str) -> Result[list[E]]:
        """Query the remote source; on success the result set replaces the cache."""
        if self._effective is ConsistencyStrategy.LOCAL_ONLY:
            return self._remote_required("search")
        result = await self._fetch_list(lambda: self._remote_source.search(query))
        if result.is_success and self._mirrors:
            await self.replace_cache("search", result.data)
        return result

    async def get_paginated(
        self,
        page: int,
        limit: int,
        sort_by: str | None = None,
        descending: bool = False,
    ) -> Result[list[E]]:
        """Fetch one page from the remote source; on success the page replaces the cache."""
        if self._effective is ConsistencyStrategy.LOCAL_ONLY:
            return self._remote_required("get_paginated")
        result = await self._fetch_list(
            lambda: self._remote_source.get_paginated(page, limit, sort_by=sort_by, descending=descending)
        )
        if result.is_success and self._mirrors:
            await self.replace_cache("get_paginated", result.data)
        return result

    async def replace_cache(self, operation: str, entities: list[E]) -> None:
        """Overwrite the local cache with a search or page result set.

        This is a placeholder policy: a page or a search hit list is not the
        whole collection. Override for keyed, per-page, or no caching.
        """
        await self._best_effort(operation, lambda: self._local_source.save_all(entities))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, entity: E) -> Result[E]:
        if self._effective is ConsistencyStrategy.LOCAL_ONLY:
            return await self._write_local("create", entity)
        result = await self._fetch_one(lambda: self._remote_source.create(self.to_model(entity)))
        if result.is_success and self._mirrors:
            await self._best_effort("create", lambda: self._local_source.save(result.data))
        return result

    async def update(self, entity: E) -> Result[E]:
        if self._effective is ConsistencyStrategy.LOCAL_ONLY:
            return await self._write_local("update", entity)
        result = await self._fetch_one(lambda: self._remote_source.update(self.to_model(entity)))
        if result.is_success and self._mirrors:
            await self._best_effort("update", lambda: self._local_source.save(result.data))
        return result

    async def delete(self, id: str) -> Result[None]:
        if self._effective is ConsistencyStrategy.LOCAL_ONLY:
            local = await self._call_local("delete", lambda: self._local_source.delete(id))
            return local.map(lambda _: None)
        result = await safe_void_call(lambda: self._remote_source.delete(id))
        if result.is_error:
            return result
        if self._mirrors:
            await self._best_effort("delete", lambda: self._local_source.delete(id))
        return result

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @property
    def _mirrors(self) -> bool:
        return self._effective in _MIRRORING

    @property
    def _remote_source(self) -> RemoteDataSource[M]:
        assert self._remote is not None
        return self._remote

    @property
    def _local_source(self) -> LocalDataSource[E]:
        assert self._local is not None
        return self._local

    async def _fetch_list(self, call: Callable[[], Awaitable[Sequence[M]]]) -> Result[list[E]]:
        """Call the remote source and convert every model to an entity."""
        return await safe_remote_call(
            lambda: safe_call(call),
            on_success=lambda models: [model.to_entity() for model in models],
        )

    async def _fetch_one(self, call: Callable[[], Awaitable[M | None]]) -> Result[E]:
        return await safe_remote_call(
            lambda: safe_call(call),
            on_success=lambda model: model.to_entity(),
        )

    async def _call_local[T](self, operation: str, call: Callable[[], Awaitable[T]]) -> Result[T]:
        """Run a local call, converting any exception into a logged CacheFailure."""
        try:
            value = await call()
        except Exception as exc:
            log.warning("cache.read_failed", operation=operation, error=str(exc))
            return Error(self._cache_failure(operation, exc))
        return Success(value)

    async def _write_local(self, operation: str, entity: E) -> Result[E]:
        saved = await self._call_local(operation, lambda: self._local_source.save(entity))
        return saved.map(lambda _: entity)

    async def _best_effort(self, operation: str, call: Callable[[], Awaitable[Any]]) -> None:
        """Await a cache write whose failure must not affect the operation's Result."""
        try:
            await call()
        except Exception as exc:
            failure = self._cache_failure(operation, exc)
            log.warning("cache.write_failed", operation=operation, error=str(exc))
            self._report_cache_error(operation, failure)
            return
        log.debug("cache.write_succeeded", operation=operation)

    def _report_cache_error(self, operation: str, failure: CacheFailure) -> None:
        if self._on_cache_error is None:
            return
        try:
            self._on_cache_error(operation, failure)
        except Exception:
            log.warning("cache.observer_failed", operation=operation, exc_info=True)

    @staticmethod
    def _cache_failure(operation: str, exc: Exception) -> CacheFailure:
        return CacheFailure(
            message=f"Local {operation} failed: {exc}",
            cause=exc,
            trace=format_trace(exc),
        )

    def _remote_required(self, operation: str) -> Result[list[E]]:
        return Error(
            ConfigurationFailure(
                message=f"{operation} requires a remote data source (strategy {self._effective.value})."
            )
        )
