"""Tests for Entity, WireModel, and ConsistencyStrategy."""

import pytest
from pydantic import ValidationError

from repocore.domain.entities import EntityModel, WireModel
from repocore.domain.strategy import ConsistencyStrategy
from tests.fakes import User, UserModel


class TestEntity:
    def test_value_equality(self) -> None:
        assert User(id="1", name="A") == User(id="1", name="A")
        assert User(id="1", name="A") != User(id="1", name="B")

    def test_frozen(self) -> None:
        user = User(id="1", name="A")
        with pytest.raises(ValidationError):
            user.name = "B"  # type: ignore[misc]


class TestWireModel:
    def test_round_trip_shape(self) -> None:
        model = UserModel.from_wire({"id": "7", "name": "Linus"})
        assert model.to_wire() == {"id": "7", "name": "Linus"}
        assert model.to_entity() == User(id="7", name="Linus")

    def test_satisfies_entity_model_protocol(self) -> None:
        assert isinstance(UserModel(id="1"), EntityModel)

    def test_to_entity_required(self) -> None:
        class Bare(WireModel):
            id: str

        with pytest.raises(TypeError, match="Bare"):
            Bare(id="1")  # type: ignore[abstract]


class TestConsistencyStrategy:
    @pytest.mark.parametrize(
        ("strategy", "remote", "local"),
        [
            (ConsistencyStrategy.REMOTE_ONLY, True, False),
            (ConsistencyStrategy.LOCAL_ONLY, False, True),
            (ConsistencyStrategy.REMOTE_WITH_LOCAL_CACHE, True, True),
            (ConsistencyStrategy.LOCAL_WITH_REMOTE_FALLBACK, True, True),
        ],
    )
    def test_requirements(self, strategy: ConsistencyStrategy, remote: bool, local: bool) -> None:
        assert strategy.needs_remote is remote
        assert strategy.needs_local is local
        assert strategy.is_hybrid is (remote and local)

    def test_from_string(self) -> None:
        assert ConsistencyStrategy("local_only") is ConsistencyStrategy.LOCAL_ONLY
