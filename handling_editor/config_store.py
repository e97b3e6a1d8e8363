"""QObject-based singleton store for editor settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from PyQt5 import QtCore

from handling_core.dialects import GameDialect
from handling_core.storage import DEFAULT_ENCODING
from handling_editor.config_backend import EDITOR_SECTION, ConfigBackend

_TRUE_WORDS = {"1", "true", "yes", "on"}


@dataclass
class EditorConfig:
    game: GameDialect = GameDialect.GTA3
    encoding: str = DEFAULT_ENCODING
    backup_on_save: bool = True
    archive_entry: str = "handling.cfg"
    last_file: str = ""


class ConfigStore(QtCore.QObject):
    config_changed = QtCore.pyqtSignal(object)

    def __init__(self, backend: Optional[ConfigBackend] = None) -> None:
        super().__init__()
        self._backend = backend or ConfigBackend()
        self._config = EditorConfig()
        self.reload()

    @property
    def config(self) -> EditorConfig:
        return self._config

    @property
    def backend(self) -> ConfigBackend:
        return self._backend

    def reload(self) -> EditorConfig:
        data = self._backend.load()
        cfg = EditorConfig()

        game = self._backend.get_option(data, "game", fallback=cfg.game.name)
        cfg.game = GameDialect.from_name(game)
        cfg.encoding = self._backend.get_option(data, "encoding", fallback=cfg.encoding) or cfg.encoding
        backup = self._backend.get_option(data, "backup_on_save", fallback="")
        if backup:
            cfg.backup_on_save = backup.strip().lower() in _TRUE_WORDS
        cfg.archive_entry = (
            self._backend.get_option(data, "archive_entry", fallback=cfg.archive_entry)
            or cfg.archive_entry
        )
        cfg.last_file = self._backend.get_option(data, "last_file", fallback=cfg.last_file)

        self._config = cfg
        self.config_changed.emit(cfg)
        return cfg

    def save(self, section_updates: Mapping[str, Mapping[str, object]]) -> EditorConfig:
        self._backend.save(section_updates)
        return self.reload()

    def save_editor(self, **values: object) -> EditorConfig:
        """Persist ``[editor]`` keys, e.g. ``save_editor(game="GTASA")``."""

        normalized = {
            key: value.name if isinstance(value, GameDialect) else value
            for key, value in values.items()
        }
        return self.save({EDITOR_SECTION: normalized})


_CONFIG_STORE: Optional[ConfigStore] = None


def get_config_store() -> ConfigStore:
    global _CONFIG_STORE
    if _CONFIG_STORE is None:
        _CONFIG_STORE = ConfigStore()
    return _CONFIG_STORE


__all__ = ["ConfigStore", "EditorConfig", "get_config_store"]
