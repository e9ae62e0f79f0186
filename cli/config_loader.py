#!/usr/bin/env python3
"""
Configuration Loader
Loads obsidian-tasks settings from config.yaml and .env files

Every key can be overridden from the environment: `scan.include_archive`
becomes OBSIDIAN_TASKS_SCAN_INCLUDE_ARCHIVE.
"""

import logging
import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union
from dotenv import load_dotenv

from tasknotes.collector import DEFAULT_ARCHIVE_FOLDER
from tasknotes.errors import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "OBSIDIAN_TASKS_"
CONFIG_PATH_ENV = "OBSIDIAN_TASKS_CONFIG"
TASKS_PATH_ENV = "TASKNOTES_PATH"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "obsidian-tasks" / "config.yaml"
DEFAULT_LOG_LEVEL = "WARNING"

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigLoader:
    """Loads configuration from config.yaml and .env files"""

    def __init__(self, config_path: Union[str, Path, None] = None, env_path: Union[str, Path, None] = None):
        if env_path is None:
            env_path = Path.cwd() / ".env"
        self.env_path = Path(env_path)
        # .env first so it may point at the config file
        if self.env_path.exists():
            load_dotenv(self.env_path)
        self.env_data = dict(os.environ)

        if config_path is None:
            config_path = self.env_data.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH
        self.config_path = Path(config_path).expanduser()
        self.config_data: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self):
        """Load config.yaml; a missing file means defaults"""
        if not self.config_path.exists():
            logger.debug(f"{self.config_path} not found, using defaults")
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Could not read {self.config_path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"{self.config_path} must contain a mapping at the top level")
        self.config_data = data

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value with environment variable override support"""
        env_key = ENV_PREFIX + key.upper().replace('.', '_')
        if env_key in self.env_data:
            return self.env_data[env_key]

        value = self.config_data
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_bool(self, key: str, default: bool) -> bool:
        value = self.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in TRUE_VALUES:
            return True
        if text in FALSE_VALUES:
            return False
        raise ConfigError(f"{key} must be true or false, got {value!r}")

    def get_tasks_path(self) -> Optional[Path]:
        """Default TaskNotes folder, used when --path is not given"""
        value = self.get('vault.tasks_path') or self.env_data.get(TASKS_PATH_ENV)
        if not value:
            return None
        return Path(str(value)).expanduser()

    def include_archive(self) -> bool:
        return self.get_bool('scan.include_archive', True)

    def get_archive_folder(self) -> str:
        folder = self.get('scan.archive_folder', DEFAULT_ARCHIVE_FOLDER)
        if not isinstance(folder, str) or not folder.strip():
            raise ConfigError(f"scan.archive_folder must be a folder name, got {folder!r}")
        return folder.strip()

    def get_log_level(self) -> str:
        level = str(self.get('logging.level', DEFAULT_LOG_LEVEL)).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigError(f"Unknown logging.level {level!r}")
        return level
