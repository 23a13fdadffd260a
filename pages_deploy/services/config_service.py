"""Configuration management service"""

import logging
import os
import shutil
from pathlib import Path
from typing import Optional, Union

import yaml

from ..api.exceptions import ConfigError
from ..constants import ENV_CONFIG_PATH, ENV_GITHUB_TOKEN, PROJECT_CONFIG_FILE
from ..models.config import Config

logger = logging.getLogger(__name__)


def find_config_file(explicit: Optional[Union[str, Path]] = None,
                     start: Optional[Path] = None) -> Path:
    """Locate the configuration file

    Lookup order: ``explicit``, ``$PAGES_DEPLOY_CONFIG``, then
    ``.pages-deploy.yaml`` in ``start`` (default: cwd) or any parent.

    Raises:
        ConfigError: If no configuration file is found
    """
    if explicit:
        return Path(explicit)

    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / PROJECT_CONFIG_FILE
        if candidate.is_file():
            return candidate

    raise ConfigError(
        f"No {PROJECT_CONFIG_FILE} found. Create one with 'pages-deploy init', "
        f"pass --config, or set {ENV_CONFIG_PATH}."
    )


class ConfigService:
    """Service for loading and saving pages-deploy configuration"""

    def __init__(self, config_path: Union[str, Path]):
        """Initialize config service

        Args:
            config_path: Path of the YAML configuration file
        """
        self.config_path = Path(config_path)
        self._config: Optional[Config] = None

    @classmethod
    def discover(cls, explicit: Optional[Union[str, Path]] = None) -> 'ConfigService':
        return cls(find_config_file(explicit))

    @property
    def config(self) -> Config:
        """Get current configuration (lazy load)"""
        if self._config is None:
            self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file

        Returns:
            Loaded configuration

        Raises:
            ConfigError: If the file is missing or invalid
        """
        if not self.config_path.exists():
            raise ConfigError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            content = f.read()

        # Expand ${VAR} references such as ${GITHUB_TOKEN}
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {self.config_path}")

        self._config = self.parse(data)
        logger.debug("Loaded configuration from %s (%d sites)",
                     self.config_path, len(self._config.sites))
        return self._config

    @staticmethod
    def parse(data: dict) -> Config:
        """Build a Config from raw data, applying environment fallbacks

        Raises:
            ConfigError: If the data is invalid
        """
        try:
            config = Config.from_dict(data)
        except (ValueError, TypeError) as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

        # An unexpanded ${GITHUB_TOKEN} means the variable was not set
        token = config.repository.token
        if token and token.startswith('${'):
            token = None
        config.repository.token = token or os.environ.get(ENV_GITHUB_TOKEN) or None

        return config

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file

        The access token is written as a ``${GITHUB_TOKEN}`` reference,
        never as a literal value.

        Args:
            config: Configuration to save (uses current if not provided)
        """
        if config:
            self._config = config

        if not self._config:
            raise ValueError("No configuration to save")

        # Create backup
        if self.config_path.exists():
            backup_path = self.config_path.with_suffix('.yaml.bak')
            shutil.copy2(self.config_path, backup_path)

        data = self._config.to_dict()
        data['repository']['token'] = f"${{{ENV_GITHUB_TOKEN}}}"

        with open(self.config_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

        logger.info("Configuration saved to %s", self.config_path)
