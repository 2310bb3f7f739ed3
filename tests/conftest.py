"""Shared pytest fixtures for repocore tests.

Test doubles live in :mod:`tests.fakes` so fixtures and test modules share
one copy of each class.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from repocore.domain.strategy import ConsistencyStrategy
from tests.fakes import FakeLocal, FakeRemote, UserModel, UserRepository


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote([UserModel(id="1", name="Ada"), UserModel(id="2", name="Grace")])


@pytest.fixture
def local() -> FakeLocal:
    return FakeLocal()


@pytest.fixture
def make_repo(remote: FakeRemote, local: FakeLocal) -> Callable[..., UserRepository]:
    """Factory building a UserRepository over the shared fakes."""

    def _make(strategy: ConsistencyStrategy, **kwargs: Any) -> UserRepository:
        return UserRepository(remote, local, strategy=strategy, **kwargs)

    return _make
