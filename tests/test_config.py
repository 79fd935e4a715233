"""
Tests for settings and preferences.
"""

import pytest
import yaml

from korektor.domain.models import ReportPreferences
from korektor.infra.config import Settings


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep a workspace config/settings.yaml from leaking into the tests"""
    monkeypatch.chdir(tmp_path)
    for name in ("KOREKTOR_PREFERENCES__LICENSE_PLATE", "KOREKTOR_APP_NAME"):
        monkeypatch.delenv(name, raising=False)


def test_defaults(tmp_path):
    settings = Settings(config_dir=tmp_path / "cfg")
    prefs = settings.preferences

    assert prefs.language == "cs"
    assert prefs.sheet_name == "PřekročeníHranic"
    assert prefs.default_identifier == "Report"
    assert prefs.default_stay_minutes == 60
    assert settings.get_export_dir() == tmp_path


def test_yaml_in_config_dir(tmp_path):
    config_dir = tmp_path / "cfg"
    config_dir.mkdir()
    (config_dir / "settings.yaml").write_text(
        yaml.safe_dump({"license_plate": "1AB 2345", "default_stay_minutes": 120}),
        encoding="utf-8",
    )

    settings = Settings(config_dir=config_dir)

    assert settings.preferences.license_plate == "1AB 2345"
    assert settings.preferences.default_stay_minutes == 120


def test_save_preferences_round_trip(tmp_path):
    config_dir = tmp_path / "cfg"
    settings = Settings(config_dir=config_dir)
    settings.preferences = ReportPreferences(driver_name="Jan Novák", export_directory=str(tmp_path / "out"))

    saved = settings.save_preferences()

    assert saved == config_dir / "settings.yaml"
    reloaded = Settings(config_dir=config_dir)
    assert reloaded.preferences.driver_name == "Jan Novák"
    assert reloaded.get_export_dir() == tmp_path / "out"


def test_environment_override(tmp_path, monkeypatch):
    monkeypatch.setenv("KOREKTOR_PREFERENCES__LICENSE_PLATE", "ENV 123")
    settings = Settings(config_dir=tmp_path / "cfg")
    assert settings.preferences.license_plate == "ENV 123"


def test_invalid_stay_minutes_rejected():
    with pytest.raises(ValueError):
        ReportPreferences(default_stay_minutes=0)
