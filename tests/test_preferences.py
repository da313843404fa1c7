"""Tests for memento.core.preferences — settings merge and storage."""

import pytest

from memento.core.preferences import PreferencesService, apply_settings_patch
from memento.data.models import UserSettings
from memento.errors import ValidationError


class TestApplySettingsPatch:
    def test_field_name_key(self):
        updated = apply_settings_patch(UserSettings(), {"notification_volume": 0.3})
        assert updated.notification_volume == 0.3
        assert updated.enable_voice_notifications is True

    def test_stored_key(self):
        updated = apply_settings_patch(UserSettings(), {"enableVibration": False})
        assert updated.enable_vibration is False

    def test_does_not_mutate_current(self):
        current = UserSettings()
        apply_settings_patch(current, {"enableVoiceNotifications": False})
        assert current.enable_voice_notifications is True

    def test_empty_patch_returns_equal_settings(self):
        current = UserSettings(notification_volume=0.4)
        assert apply_settings_patch(current, {}) == current

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError):
            apply_settings_patch(UserSettings(), {"theme": "dark"})

    @pytest.mark.parametrize("volume", [-0.1, 1.5])
    def test_volume_out_of_range_rejected(self, volume):
        with pytest.raises(ValidationError):
            apply_settings_patch(UserSettings(), {"notificationVolume": volume})

    @pytest.mark.parametrize("volume", [0.0, 1.0])
    def test_volume_bounds_accepted(self, volume):
        assert apply_settings_patch(UserSettings(), {"notificationVolume": volume}).notification_volume == volume


class TestPreferencesService:
    def test_defaults_when_nothing_stored(self, store):
        settings = PreferencesService(store).load()
        assert settings == UserSettings()
        assert settings.notification_volume == 0.7

    def test_update_persists(self, store):
        service = PreferencesService(store)
        service.update({"enableVibration": False})
        service.update({"notificationVolume": 0.5})

        loaded = service.load()
        assert loaded.enable_vibration is False
        assert loaded.notification_volume == 0.5
        assert len(store.list("settings")) == 1

    def test_stored_record_uses_camel_case_keys(self, store):
        PreferencesService(store).update({"enable_voice_notifications": False})
        assert store.list("settings")[0] == {
            "id": "settings",
            "enableVoiceNotifications": False,
            "enableVibration": True,
            "notificationVolume": 0.7,
        }

    def test_invalid_update_leaves_store_untouched(self, store):
        service = PreferencesService(store)
        with pytest.raises(ValidationError):
            service.update({"notificationVolume": 3})
        assert store.list("settings") == []

    def test_corrupt_record_falls_back_to_defaults(self, store):
        store.append("settings", {"id": "settings", "notificationVolume": "loud"})
        assert PreferencesService(store).load() == UserSettings()
