"""Configuration management for Gitlet.

This module provides a clean interface for reading and writing
both repository-local and global configuration files.
"""

import os
import configparser
from pathlib import Path
from typing import Optional, Dict

from .errors import ConfigError

DEFAULTS = {
    ('core', 'repositoryformatversion'): '0',
    ('core', 'compression'): '-1',
}

COMPRESSION_LEVELS = range(-1, 10)


def check_value(section: str, key: str, value: str) -> None:
    """
    Reject values the repository cannot use.

    Raises:
        ConfigError: If core.compression is not an integer from -1 to 9
    """
    if (section, key) != ('core', 'compression'):
        return
    try:
        level = int(value)
    except (TypeError, ValueError):
        level = None
    if level not in COMPRESSION_LEVELS:
        raise ConfigError(f"core.compression must be an integer from -1 to 9, got {value!r}")


class Config:
    """
    Manages Gitlet configuration files.

    Configuration is stored in INI format:
    - Global config: ~/.gitletconfig
    - Repository config: .gitlet/config

    Repository config takes precedence over global config.
    Environment variables take highest precedence.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.gitletconfig'

    def __init__(self, repo_config_path: Optional[Path] = None):
        """
        Initialize Config manager.

        Args:
            repo_config_path: Path to repository config file, if in a repo
        """
        self.repo_config_path = repo_config_path
        self._global_config = None
        self._repo_config = None

    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = configparser.ConfigParser()
            if self.GLOBAL_CONFIG_PATH.exists():
                self._global_config.read(self.GLOBAL_CONFIG_PATH)
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = configparser.ConfigParser()
            if self.repo_config_path.exists():
                self._repo_config.read(self.repo_config_path)
        return self._repo_config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Priority order (highest to lowest):
        1. Environment variables (GITLET_<SECTION>_<KEY>)
        2. Repository config
        3. Global config
        4. Fallback value, then the built-in default

        Args:
            section: Config section (e.g., 'core')
            key: Config key (e.g., 'compression')
            fallback: Default value if not found

        Returns:
            Configuration value or fallback
        """
        env_key = f"GITLET_{section.upper()}_{key.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return env_value

        if self.repo_config and self.repo_config.has_option(section, key):
            return self.repo_config.get(section, key)

        if self.global_config.has_option(section, key):
            return self.global_config.get(section, key)

        if fallback is not None:
            return fallback
        return DEFAULTS.get((section, key))

    def get_int(self, section: str, key: str, fallback: Optional[int] = None) -> Optional[int]:
        """
        Get a configuration value as an integer.

        Raises:
            ConfigError: If the stored value is not an integer
        """
        value = self.get(section, key, None if fallback is None else str(fallback))
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            raise ConfigError(f"Config value {section}.{key} is not an integer: {value!r}") from None

    def compression_level(self) -> int:
        """
        The zlib level for new blobs.

        Raises:
            ConfigError: If core.compression is not an integer from -1 to 9
        """
        value = self.get('core', 'compression')
        check_value('core', 'compression', value)
        return int(value)

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """
        Set a configuration value.

        Args:
            section: Config section
            key: Config key
            value: Value to set
            global_config: If True, write to global config; otherwise repo config

        Raises:
            ConfigError: If the value is not valid for the key
        """
        check_value(section, key, value)

        if global_config:
            config = self.global_config
            config_path = self.GLOBAL_CONFIG_PATH
        else:
            if not self.repo_config_path:
                raise ValueError("No repository config path available")
            config = self.repo_config
            config_path = self.repo_config_path

        if not config.has_section(section):
            config.add_section(section)

        config.set(section, key, value)

        with open(config_path, 'w') as f:
            config.write(f)

    def unset(self, section: str, key: str, global_config: bool = False) -> bool:
        """
        Remove a configuration value.

        Returns:
            True if value was removed, False if it didn't exist
        """
        if global_config:
            config = self.global_config
            config_path = self.GLOBAL_CONFIG_PATH
        else:
            if not self.repo_config:
                return False
            config = self.repo_config
            config_path = self.repo_config_path

        if not config.has_option(section, key):
            return False

        config.remove_option(section, key)

        if not config.options(section):
            config.remove_section(section)

        with open(config_path, 'w') as f:
            config.write(f)

        return True

    def list_all(self) -> Dict[str, Dict[str, str]]:
        """
        List all configuration values, repository values overriding global ones.

        Returns:
            Dict of sections to key-value dicts
        """
        result: Dict[str, Dict[str, str]] = {}

        sources = [self.global_config]
        if self.repo_config:
            sources.append(self.repo_config)

        for config in sources:
            for section in config.sections():
                result.setdefault(section, {}).update(config.items(section))

        return result


def get_config(repo=None) -> Config:
    """
    Get a Config instance.

    Args:
        repo: Repository instance, or None for global-only config

    Returns:
        Config instance
    """
    if repo:
        return Config(repo.config_file)
    return Config()
