"""Editing session shared by the command line tools and any Qt front-end.

The session owns the decoded vehicles of one ``handling.cfg`` (plain or
inside a ``.DAT`` archive), tracks unsaved edits and writes them back.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional, Tuple

from PyQt5 import QtCore

from handling_core.category import VehicleCategory
from handling_core.dat.archive import DatArchive
from handling_core.decoder import (
    DecodeResult,
    coerce_field_value,
    decode_bytes,
    decode_text,
    decode_tokens,
    parse_file,
    parse_pasted_line,
)
from handling_core.dialects import GameDialect
from handling_core.errors import HandlingParseError
from handling_core.field_definitions import FieldDefinition, fields_for_dialect, get_field_definition
from handling_core.storage import ArchiveStore, backup_file, read_bytes, write_all, write_bytes
from handling_core.tokenizer import tokenize
from handling_core.vehicle import VehicleHandling
from handling_core.writer import merge_bytes, merge_text
from handling_editor.config_store import EditorConfig

logger = logging.getLogger(__name__)

APP_NAME = "GTA Handling Editor"
IDLE_STATUS = "Select a game and load a handling.cfg file to begin"

_CATEGORY_FIELDS = frozenset({"identifier", "model_flags"})


class EditorSession(QtCore.QObject):
    vehicles_loaded = QtCore.pyqtSignal(int)
    vehicle_changed = QtCore.pyqtSignal(object)
    unsaved_changes_changed = QtCore.pyqtSignal(bool)
    status_changed = QtCore.pyqtSignal(str)

    def __init__(
        self,
        config: EditorConfig | None = None,
        archive_store: ArchiveStore | None = None,
        parent: QtCore.QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._config = config or EditorConfig()
        self._archive_store: ArchiveStore = archive_store or DatArchive()
        self._dialect = self._config.game
        self._result: Optional[DecodeResult] = None
        self._path: Optional[Path] = None
        self._archive_entry: Optional[str] = None
        self._dirty = False
        self._status = IDLE_STATUS

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def config(self) -> EditorConfig:
        return self._config

    @property
    def dialect(self) -> GameDialect:
        return self._dialect

    @property
    def vehicles(self) -> List[VehicleHandling]:
        if self._result is None:
            return []
        return list(self._result.vehicles)

    @property
    def decode_result(self) -> Optional[DecodeResult]:
        return self._result

    @property
    def path(self) -> Optional[Path]:
        return self._path

    @property
    def archive_entry(self) -> Optional[str]:
        """Name of the edited entry when the file came from an archive."""

        return self._archive_entry

    @property
    def is_loaded(self) -> bool:
        return self._result is not None

    @property
    def has_unsaved_changes(self) -> bool:
        return self._dirty

    @property
    def status_message(self) -> str:
        return self._status

    @property
    def window_title(self) -> str:
        if self._path is None:
            return APP_NAME
        name = self._path.name
        if self._archive_entry:
            name = f"{name} [{self._archive_entry}]"
        dirty_marker = "*" if self._dirty else ""
        return f"{APP_NAME} - {name}{dirty_marker} [{self._dialect.display_name}]"

    def _set_status(self, message: str) -> None:
        self._status = message
        self.status_changed.emit(message)

    def _refresh_dirty(self) -> None:
        dirty = any(vehicle.is_modified for vehicle in self.vehicles)
        if dirty != self._dirty:
            self._dirty = dirty
            self.unsaved_changes_changed.emit(dirty)

    def _require_loaded(self) -> DecodeResult:
        if self._result is None:
            raise ValueError("No handling file loaded.")
        return self._result

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def _install(self, result: DecodeResult, path: Path, archive_entry: str | None) -> None:
        self._result = result
        self._path = path
        self._archive_entry = archive_entry
        self._refresh_dirty()
        self.vehicles_loaded.emit(result.vehicle_count)
        if archive_entry is None:
            self._set_status(result.summary())
        else:
            self._set_status(f"Loaded {result.vehicle_count} vehicles from {archive_entry}")

    def load_file(self, path: str | Path) -> DecodeResult:
        """Load a plain ``handling.cfg``; raises :class:`HandlingParseError`."""

        file_path = Path(path)
        try:
            result = parse_file(file_path, self._dialect, encoding=self._config.encoding)
        except HandlingParseError as exc:
            self._set_status(f"Failed to load: {exc.kind.title}")
            raise
        self._install(result, file_path, None)
        self._config.last_file = str(file_path)
        return result

    def load_archive(self, path: str | Path) -> DecodeResult:
        """Load the handling entry of a ``.DAT`` archive."""

        archive_path = Path(path)
        try:
            if not archive_path.exists():
                raise HandlingParseError.file_not_found(str(archive_path))
            try:
                archive_bytes = read_bytes(archive_path)
                entry_name, payload = self._archive_store.extract_named_entry(
                    archive_bytes, self._config.archive_entry
                )
            except (OSError, ValueError) as exc:
                raise HandlingParseError.file_unreadable(str(archive_path), exc) from exc
            result = decode_bytes(
                payload,
                self._dialect,
                encoding=self._config.encoding,
                source=f"{archive_path}:{entry_name}",
            )
        except HandlingParseError as exc:
            self._set_status(f"Failed to load: {exc.kind.title}")
            raise
        self._install(result, archive_path, entry_name)
        self._config.last_file = str(archive_path)
        return result

    def set_dialect(self, dialect: GameDialect) -> None:
        """Switch the game; any loaded data is discarded."""

        if dialect is self._dialect:
            return
        self.clear()
        self._dialect = dialect
        logger.info("Game set to %s", dialect.display_name)

    def clear(self) -> None:
        had_data = self._result is not None
        self._result = None
        self._path = None
        self._archive_entry = None
        self._refresh_dirty()
        if had_data:
            self.vehicles_loaded.emit(0)
        self._set_status(IDLE_STATUS)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def find(self, identifier: str) -> Optional[VehicleHandling]:
        """Return the first vehicle named *identifier* (case-insensitive)."""

        wanted = identifier.strip().upper()
        for vehicle in self.vehicles:
            if vehicle.identifier.upper() == wanted:
                return vehicle
        return None

    def grouped_vehicles(self, search: str = "") -> List[Tuple[VehicleCategory, List[VehicleHandling]]]:
        needle = search.strip().lower()
        groups: List[Tuple[VehicleCategory, List[VehicleHandling]]] = []
        for category in VehicleCategory:
            members = [
                vehicle
                for vehicle in self.vehicles
                if vehicle.category is category and needle in vehicle.identifier.lower()
            ]
            if members:
                members.sort(key=lambda vehicle: vehicle.identifier)
                groups.append((category, members))
        return groups

    def copy_candidates(self, target: VehicleHandling) -> List[VehicleHandling]:
        """Vehicles of the same category as *target* that values can be copied from."""

        candidates = [
            vehicle
            for vehicle in self.vehicles
            if vehicle is not target and vehicle.category is target.category
        ]
        return sorted(candidates, key=lambda vehicle: vehicle.identifier)

    def out_of_range(self, vehicle: VehicleHandling) -> List[Tuple[FieldDefinition, Any]]:
        """Numeric values outside their advisory bounds; purely informational."""

        flagged: List[Tuple[FieldDefinition, Any]] = []
        for definition in fields_for_dialect(self._dialect):
            if not definition.is_numeric:
                continue
            value = getattr(vehicle, definition.name)
            if not definition.is_in_range(value):
                flagged.append((definition, value))
        return flagged

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    def _after_edit(self, vehicle: VehicleHandling, message: str) -> None:
        self.vehicle_changed.emit(vehicle)
        self._refresh_dirty()
        self._set_status(message)

    def set_value(self, vehicle: VehicleHandling, attribute: str, value: Any) -> Any:
        """Assign *value* (or text to be parsed) to *attribute* of *vehicle*."""

        self._require_loaded()
        definition = get_field_definition(attribute)
        if definition is None:
            raise KeyError(attribute)
        if not definition.is_available_for(self._dialect):
            raise ValueError(f"{definition.display_name} is not used by {self._dialect.full_name}")

        coerced = coerce_field_value(definition, value)
        setattr(vehicle, attribute, coerced)
        if attribute in _CATEGORY_FIELDS:
            vehicle.determine_category()
        self._after_edit(vehicle, f"Editing: {vehicle.identifier}")
        return coerced

    def copy_values(self, source: VehicleHandling, target: VehicleHandling) -> None:
        self._require_loaded()
        target.copy_values_from(source)
        target.determine_category()
        self._after_edit(target, f"Copied values from {source.identifier} to {target.identifier}")

    def copy_from_line(self, text: str, target: VehicleHandling) -> VehicleHandling:
        """Copy values from a pasted handling line into *target*."""

        self._require_loaded()
        source = parse_pasted_line(text, self._dialect)
        target.copy_values_from(source)
        target.determine_category()
        self._after_edit(target, f"Copied values from {source.identifier} to {target.identifier}")
        return source

    def reset_vehicle(self, vehicle: VehicleHandling) -> None:
        """Restore *vehicle* to the values of the line it was decoded from."""

        self._require_loaded()
        if not vehicle.raw_line:
            raise ValueError(f"{vehicle.identifier} has no original line to reset from")
        original = decode_tokens(tokenize(vehicle.raw_line), vehicle.dialect)
        vehicle.identifier = original.identifier
        vehicle.copy_values_from(original)
        vehicle.determine_category()
        vehicle.is_modified = False
        self._after_edit(vehicle, f"Reset {vehicle.identifier} to original values")

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------
    def _backup(self, path: Path) -> None:
        if not self._config.backup_on_save:
            return
        try:
            backup_file(path)
        except OSError as exc:
            logger.warning("Could not back up %s: %s", path, exc)

    def _write(self, target: Path) -> str:
        result = self._require_loaded()
        if self._archive_entry is None:
            text = merge_text(result, dialect=self._dialect)
            self._backup(target)
            write_all(target, text, encoding=self._config.encoding)
            return text

        payload = merge_bytes(result, dialect=self._dialect, encoding=self._config.encoding)
        source_archive = self._path if self._path is not None else target
        archive_bytes = read_bytes(source_archive)
        self._backup(target)
        write_bytes(
            target,
            self._archive_store.replace_named_entry(archive_bytes, self._archive_entry, payload),
        )
        return payload.decode(self._config.encoding)

    def _rebaseline(self, text: str, target: Path) -> None:
        # Saved lines become the new originals for later saves and resets.
        source = str(target) if self._archive_entry is None else f"{target}:{self._archive_entry}"
        result = decode_text(text, self._dialect, source=source)
        self._result = result
        self._path = target
        self._refresh_dirty()
        self.vehicles_loaded.emit(result.vehicle_count)
        self._set_status(f"Saved to {target.name}")

    def save(self) -> Path:
        if self._path is None:
            raise ValueError("No handling file loaded.")
        return self.save_as(self._path)

    def save_as(self, path: str | Path) -> Path:
        target = Path(path)
        text = self._write(target)
        self._rebaseline(text, target)
        self._config.last_file = str(target)
        return target


__all__ = ["APP_NAME", "EditorSession", "IDLE_STATUS"]
