import json
import logging

import pytest

from settings import ConfigurationError, TrainerSettings, load_settings


def write_settings(tmp_path, data):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(data))
    return str(path)


def test_defaults():
    settings = load_settings()
    assert settings == TrainerSettings()
    assert (settings.dit_duration, settings.dah_duration) == (100, 300)
    assert (settings.intra_char_pause, settings.character_timeout) == (100, 1000)
    assert (settings.sample_rate, settings.frequency, settings.volume) == (44100, 600, 0.5)


def test_overrides(tmp_path):
    settings = load_settings(write_settings(tmp_path, {"frequency": 700, "character_timeout": 1500}))
    assert settings.frequency == 700
    assert settings.character_timeout == 1500
    assert settings.dit_duration == 100


def test_unknown_key_rejected(tmp_path):
    with pytest.raises(ConfigurationError, match="wpm"):
        load_settings(write_settings(tmp_path, {"wpm": 20}))


def test_missing_file_rejected(tmp_path):
    with pytest.raises(ConfigurationError):
        load_settings(str(tmp_path / "missing.json"))


def test_malformed_json_rejected(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    with pytest.raises(ConfigurationError):
        load_settings(str(path))


def test_non_object_rejected(tmp_path):
    with pytest.raises(ConfigurationError):
        load_settings(write_settings(tmp_path, [1, 2]))


@pytest.mark.parametrize("overrides", [
    {"dit_duration": 0},
    {"character_timeout": -5},
    {"intra_char_pause": -1},
    {"volume": 0},
    {"volume": 1.5},
    {"sample_rate": "44100"},
    {"dah_duration": 12.5},
    {"frequency": True},
])
def test_invalid_values_rejected(overrides):
    with pytest.raises(ConfigurationError):
        TrainerSettings(**overrides).validate()


def test_invalid_file_is_not_logged_as_loaded(tmp_path, caplog):
    path = write_settings(tmp_path, {"volume": 3})
    with caplog.at_level(logging.INFO, logger="settings"):
        with pytest.raises(ConfigurationError):
            load_settings(path)
    assert "Loaded settings" not in caplog.text


def test_valid_file_is_logged_as_loaded(tmp_path, caplog):
    path = write_settings(tmp_path, {"volume": 0.25})
    with caplog.at_level(logging.INFO, logger="settings"):
        load_settings(path)
    assert "Loaded settings" in caplog.text
