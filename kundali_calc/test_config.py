"""Settings loading: defaults, YAML file, environment overrides."""

import pytest

from kundali_calc.config import DEFAULT_TZ_OFFSET, Settings, get_settings, load_settings


def test_defaults():
    settings = load_settings()
    assert settings == Settings()
    assert settings.default_tz_offset == DEFAULT_TZ_OFFSET == 5.5
    assert not settings.strict_timezones


def test_yaml_file(tmp_path):
    path = tmp_path / "kundali.yaml"
    path.write_text("environment: development\ndefault_tz_offset: 0\nunused_key: 1\n")
    settings = load_settings(str(path))
    assert settings.environment == "development"
    assert settings.default_tz_offset == 0.0
    assert settings.strict_timezones


def test_yaml_file_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "kundali.yaml"
    path.write_text("log_level: DEBUG\n")
    monkeypatch.setenv("KUNDALI_CONFIG", str(path))
    assert load_settings().log_level == "DEBUG"


def test_empty_yaml_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_settings(str(path)) == Settings()


def test_yaml_must_be_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError):
        load_settings(str(path))


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "kundali.yaml"
    path.write_text("environment: development\n")
    monkeypatch.setenv("KUNDALI_ENV", "Production")
    monkeypatch.setenv("KUNDALI_DEFAULT_TZ_OFFSET", "-3.5")
    monkeypatch.setenv("LOG_LEVEL", "warning")
    settings = load_settings(str(path))
    assert settings.environment == "production"
    assert settings.default_tz_offset == -3.5
    assert settings.log_level == "WARNING"


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("KUNDALI_ENV", "development")
    first = get_settings()
    monkeypatch.setenv("KUNDALI_ENV", "production")
    assert get_settings() is first
    assert first.strict_timezones
