"""
Memento — Notification Preferences.

Settings are one record per user, overwritten wholesale on every update.
Partial changes go through `apply_settings_patch`, which names exactly
which fields may change and re-validates the merged result.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from memento.data.models import UserSettings
from memento.errors import PersistenceError, ValidationError

if TYPE_CHECKING:
    from memento.ports.persistence_port import RecordStorePort

logger = logging.getLogger(__name__)

KIND = "settings"

# Stored camelCase key -> model field name
_FIELD_ALIASES = {
    field.alias: name for name, field in UserSettings.model_fields.items()
}


def _normalize_key(key: str) -> str:
    if key in UserSettings.model_fields:
        return key
    if key in _FIELD_ALIASES:
        return _FIELD_ALIASES[key]
    raise ValidationError(f"Unknown setting: {key!r}")


def apply_settings_patch(current: UserSettings, patch: dict) -> UserSettings:
    """Merge `patch` into `current` and validate the result.

    Keys may be field names (notification_volume) or stored keys
    (notificationVolume). `current` is left untouched.

    Raises:
        ValidationError: Unknown key, or a merged value out of range.
    """
    changes = {_normalize_key(key): value for key, value in patch.items()}
    merged = {**current.model_dump(), **changes}
    try:
        return UserSettings.model_validate(merged)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid settings: {exc.errors()[0]['msg']}") from exc


class PreferencesService:
    """Loads and updates the settings singleton."""

    def __init__(self, store: RecordStorePort) -> None:
        self._store = store

    def load(self) -> UserSettings:
        """Stored settings, or defaults when none were saved."""
        records = self._store.list(KIND)
        if not records:
            return UserSettings()
        record = {k: v for k, v in records[0].items() if k != "id"}
        try:
            return UserSettings.model_validate(record)
        except PydanticValidationError as exc:
            logger.warning("Stored settings invalid, using defaults: %s", exc)
            return UserSettings()

    def update(self, patch: dict) -> UserSettings:
        """Apply a partial change and overwrite the stored record."""
        exists = bool(self._store.list(KIND))
        updated = apply_settings_patch(self.load(), patch)
        record = updated.to_record()
        if exists:
            ok = self._store.update(KIND, record["id"], record)
        else:
            ok = self._store.append(KIND, record)
        if not ok:
            raise PersistenceError("Failed to store settings")
        logger.info("Settings updated: %s", ", ".join(sorted(patch)))
        return updated
