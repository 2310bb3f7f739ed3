"""Tests for RepocoreSettings: init kwargs, env vars, TOML source."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from repocore.config.settings import RepocoreSettings, SettingsFileError
from repocore.domain.strategy import ConsistencyStrategy


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("REPOCORE_STRATEGY", "REPOCORE_VERBOSE", "REPOCORE_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_all_defaults(self) -> None:
        settings = RepocoreSettings.load()
        assert settings.strategy is ConsistencyStrategy.REMOTE_WITH_LOCAL_CACHE
        assert settings.verbose is False
        assert settings.log_json is False

    def test_frozen(self) -> None:
        settings = RepocoreSettings.load()
        with pytest.raises(ValidationError):
            settings.verbose = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_repocore_table(self, tmp_path: Path) -> None:
        toml = tmp_path / "app.toml"
        toml.write_text('[repocore]\nstrategy = "local_only"\nverbose = true\n')
        settings = RepocoreSettings.load(toml)
        assert settings.strategy is ConsistencyStrategy.LOCAL_ONLY
        assert settings.verbose is True
        assert settings.log_json is False

    def test_other_tables_ignored(self, tmp_path: Path) -> None:
        toml = tmp_path / "app.toml"
        toml.write_text('[other]\nstrategy = "local_only"\n')
        assert RepocoreSettings.load(toml).strategy is ConsistencyStrategy.REMOTE_WITH_LOCAL_CACHE

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        settings = RepocoreSettings.load(tmp_path / "absent.toml")
        assert settings.strategy is ConsistencyStrategy.REMOTE_WITH_LOCAL_CACHE

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        toml = tmp_path / "bad.toml"
        toml.write_text("[repocore\nstrategy = ")
        with pytest.raises(SettingsFileError, match="Invalid TOML"):
            RepocoreSettings.load(toml)

    def test_invalid_strategy_rejected(self, tmp_path: Path) -> None:
        toml = tmp_path / "app.toml"
        toml.write_text('[repocore]\nstrategy = "eventually"\n')
        with pytest.raises(ValueError):
            RepocoreSettings.load(toml)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        toml = tmp_path / "app.toml"
        toml.write_text('[repocore]\nstrategy = "local_only"\n')
        monkeypatch.setenv("REPOCORE_STRATEGY", "remote_only")
        assert RepocoreSettings.load(toml).strategy is ConsistencyStrategy.REMOTE_ONLY

    def test_init_overrides_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REPOCORE_VERBOSE", "true")
        assert RepocoreSettings.load(verbose=False).verbose is False
