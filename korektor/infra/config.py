"""
Settings for the report core.

Architecture Decision: Why pydantic-settings?
Report preferences are a pydantic model already, so the same validation
applies whether a value comes from code, settings.yaml or a KOREKTOR_*
environment variable (KOREKTOR_PREFERENCES__LANGUAGE=en).
"""

import logging
import os
from pathlib import Path
from typing import Optional
import yaml

from pydantic_settings import BaseSettings, SettingsConfigDict
from korektor.domain.models import ReportPreferences

logger = logging.getLogger(__name__)

SETTINGS_FILE = "settings.yaml"


class Settings(BaseSettings):
    """
    Where preferences live and what they currently are.

    A settings.yaml under ./config wins over the one in config_dir;
    either replaces the defaults as a whole.
    """
    model_config = SettingsConfigDict(
        env_prefix='KOREKTOR_',
        env_file='.env',
        env_file_encoding='utf-8',
        env_nested_delimiter='__'
    )

    app_name: str = "Korektor"
    config_dir: Optional[Path] = None
    preferences: ReportPreferences = ReportPreferences()

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.config_dir is None:
            self.config_dir = self._default_config_dir()
        self._load_yaml_config()

    def _default_config_dir(self) -> Path:
        appdata = os.getenv('APPDATA') if os.name == 'nt' else None
        root = Path(appdata) if appdata else Path.home() / '.config'
        return root / self.app_name.lower()

    def _yaml_path(self) -> Path:
        local = Path("config") / SETTINGS_FILE
        return local if local.exists() else self.config_dir / SETTINGS_FILE

    def _load_yaml_config(self):
        path = self._yaml_path()
        if not path.exists():
            return
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        if data:
            self.preferences = ReportPreferences(**data)
            logger.debug(f"Preferences loaded from {path}")

    def save_preferences(self) -> Path:
        """Write preferences to config_dir/settings.yaml and return its path"""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        path = self.config_dir / SETTINGS_FILE
        with open(path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(self.preferences.model_dump(), f, default_flow_style=False, allow_unicode=True)
        logger.info(f"Preferences saved to {path}")
        return path

    def get_export_dir(self) -> Path:
        """Configured export directory, or the working directory"""
        if self.preferences.export_directory:
            return Path(self.preferences.export_directory)
        return Path.cwd()


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Drop the cached settings and read them again"""
    global _settings
    _settings = Settings()
    return _settings
