"""Repository settings: init kwargs, env vars, and an optional TOML file.

Priority chain (highest to lowest):
  1. Init kwargs: values passed by the embedding application
  2. Env vars   : ``REPOCORE_*`` prefix
  3. TOML file  : ``[repocore]`` table of an explicitly named file
  4. Code defaults
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from repocore.domain.strategy import ConsistencyStrategy


class SettingsFileError(ValueError):
    """Raised when a settings TOML file cannot be parsed."""


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read the ``[repocore]`` table from a TOML file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                document = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise SettingsFileError(msg) from exc
            section = document.get("repocore", {})
            if isinstance(section, dict):
                self._data = section

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class RepocoreSettings(BaseSettings):
    """Settings consumed by repositories and logging setup.

    Attributes:
        strategy: Default consistency strategy for repositories built
            through ``BaseRepository.from_settings``.
        verbose: Enable DEBUG-level logging for the ``repocore`` logger.
        log_json: Render log lines as JSON instead of console output.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "REPOCORE_",
    }

    strategy: ConsistencyStrategy = ConsistencyStrategy.REMOTE_WITH_LOCAL_CACHE
    verbose: bool = False
    log_json: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def load(cls, config_path: str | Path | None = None, **overrides: Any) -> RepocoreSettings:
        """Build settings, reading *config_path* when given.

        A missing file is ignored; a malformed one raises
        :class:`SettingsFileError`.
        """
        _tls.toml_path = Path(config_path) if config_path else None
        try:
            return cls(**overrides)
        finally:
            _tls.toml_path = None
