"""Configuration management.

Loads and merges configuration from multiple sources with proper precedence.
"""

import json
import os
from contextvars import ContextVar, Token
from pathlib import Path
from typing import List, Optional

from .config_loader import deep_merge, load_json_file
from .config_schema import ApiConfig, Config, LoggingConfig, ProjectsConfig
from .global_paths import GlobalPath
from ..util.log import Log

log = Log.create({"service": "config"})

__all__ = [
    "ApiConfig",
    "Config",
    "ConfigError",
    "ConfigManager",
    "LoggingConfig",
    "ProjectsConfig",
]

CONFIG_FILENAMES = ["projectsync.json", "projectsync.jsonc"]
ENV_CONFIG_CONTENT = "PROJECTSYNC_CONFIG_CONTENT"


class ConfigError(Exception):
    """Configuration error."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Config error in {path}: {message}")


_config_var: ContextVar['ConfigManager'] = ContextVar('_config_var')


class ConfigManager:
    """Configuration management.

    Instance-based with ContextVar for scoping. Class methods delegate
    to the current instance.

    Sources, lowest precedence first:
    1. Global config (``projectsync.json`` in the user config directory)
    2. Project config (``projectsync.json`` found walking up from the directory)
    3. ``PROJECTSYNC_CONFIG_CONTENT`` environment variable (inline JSON)
    """

    def __init__(self) -> None:
        self._cache: Optional[Config] = None
        self._files: List[str] = []

    @classmethod
    def current(cls) -> 'ConfigManager':
        try:
            return _config_var.get()
        except LookupError:
            instance = cls()
            _config_var.set(instance)
            return instance

    @classmethod
    def provide(cls, instance: 'ConfigManager') -> Token['ConfigManager']:
        return _config_var.set(instance)

    @classmethod
    def restore(cls, token: Token['ConfigManager']) -> None:
        _config_var.reset(token)

    @classmethod
    def reset(cls) -> None:
        """Reset cached configuration."""
        inst = cls.current()
        inst._cache = None
        inst._files = []

    @classmethod
    def load(cls, directory: str = ".") -> Config:
        return cls.current()._load(directory)

    @classmethod
    def get(cls) -> Config:
        inst = cls.current()
        if inst._cache is None:
            return inst._load()
        return inst._cache

    @classmethod
    def files(cls) -> List[str]:
        """Config files that contributed to the cached config."""
        return cls.current()._files.copy()

    def _load(self, directory: str = ".") -> Config:
        if self._cache is not None:
            return self._cache

        result = {}
        files: List[str] = []

        # 1. Global config
        for filename in CONFIG_FILENAMES:
            filepath = os.path.join(GlobalPath.config(), filename)
            data = load_json_file(filepath)
            if data:
                result = deep_merge(result, data)
                files.append(filepath)
                log.info("loaded global config", {"path": filepath})

        # 2. Project config, root first so the nearest file wins
        current = Path(directory).resolve()
        project_configs = []
        while current != current.parent:
            for filename in CONFIG_FILENAMES:
                filepath = current / filename
                if filepath.exists():
                    project_configs.append(str(filepath))
            current = current.parent

        for filepath in reversed(project_configs):
            data = load_json_file(filepath)
            if data:
                result = deep_merge(result, data)
                files.append(filepath)
                log.info("loaded project config", {"path": filepath})

        # 3. Environment variable config
        env_config = os.environ.get(ENV_CONFIG_CONTENT)
        if env_config:
            try:
                data = json.loads(env_config)
            except json.JSONDecodeError as e:
                raise ConfigError(ENV_CONFIG_CONTENT, str(e)) from e
            result = deep_merge(result, data)
            log.info("loaded config from environment", {"var": ENV_CONFIG_CONTENT})

        try:
            config = Config.model_validate(result)
        except ValueError as e:
            raise ConfigError(files[-1] if files else "<defaults>", str(e)) from e

        self._files = files
        self._cache = config
        return self._cache
