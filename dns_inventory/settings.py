"""
Configuration management module for the DNS inventory tools.

This module provides a singleton configuration manager that handles:
- Default configuration values
- YAML configuration file loading
- Configuration validation and type checking
- Test mode configuration isolation

The configuration structure includes:
- Database path
- Inventory rendering options
- Zone import options
- Log level

Command line flags always take precedence over values read here.
"""

#------------------------------------------------------------------------------
# Imports and Configuration
#------------------------------------------------------------------------------

import copy
import os
import yaml
from pathlib import Path
import logging
from typing import Dict, Any

from .constants import (
    DEFAULT_DB_PATH,
    DEFAULT_JSON_INDENT,
    DEFAULT_SKIP_MARKER,
    LOG_LEVELS,
)

logger = logging.getLogger(__name__)

# Environment variable pointing at an alternative config file
CONFIG_ENV_VAR = "DNS_INVENTORY_CONFIG"

#------------------------------------------------------------------------------
# Default Configuration
#------------------------------------------------------------------------------

DEFAULT_CONFIG = {
    "paths": {
        "database": DEFAULT_DB_PATH
    },
    "inventory": {
        "include_empty_groups": False,        # Emit groups without enabled members
        "json_indent": DEFAULT_JSON_INDENT
    },
    "import": {
        "skip_marker": DEFAULT_SKIP_MARKER    # Owner names containing this are ignored
    },
    "logging": {
        "level": "WARNING"
    }
}

#------------------------------------------------------------------------------
# Settings Manager
#------------------------------------------------------------------------------

class Settings:
    """
    Singleton configuration manager.

    Loads defaults, merges an optional YAML file over them and exposes the
    result through dot notation keys. In test mode the file is never read or
    written.
    """

    _instance = None
    _config: Dict[str, Any] = {}
    _test_mode = False
    _test_config = None  # Store test config in memory

    def __new__(cls):
        """
        Create or return the singleton instance.

        Returns:
            Settings: The singleton settings instance
        """
        if cls._instance is None:
            cls._instance = super(Settings, cls).__new__(cls)

            if cls._test_mode:
                cls._instance._config = copy.deepcopy(cls._test_config) if cls._test_config else copy.deepcopy(DEFAULT_CONFIG)
            else:
                cls._instance._config = copy.deepcopy(DEFAULT_CONFIG)
                config_file = cls.config_file()
                # Only load config if it exists, never create it automatically
                if config_file.exists():
                    try:
                        with open(config_file, 'r', encoding='utf-8') as f:
                            loaded_config = yaml.safe_load(f)
                            if loaded_config is not None:
                                cls._instance._merge_config(loaded_config)
                    except (OSError, yaml.YAMLError) as e:
                        logger.error(f"Error loading {config_file}: {str(e)}")
        return cls._instance

    @classmethod
    def config_file(cls) -> Path:
        """Return the config file location (env override, else ./config.yaml)."""
        return Path(os.environ.get(CONFIG_ENV_VAR, "config.yaml"))

    @classmethod
    def _reset(cls):
        """
        Reset the singleton instance (for testing).
        """
        cls._instance = None
        cls._test_mode = False
        cls._test_config = None

    @classmethod
    def set_test_mode(cls, test_config=None):
        """
        Enable test mode with optional test configuration.

        Args:
            test_config: Optional configuration to use in test mode
        """
        cls._test_mode = True
        cls._test_config = copy.deepcopy(test_config) if test_config else copy.deepcopy(DEFAULT_CONFIG)
        cls._instance = None  # Force recreation with test config

    def _merge_config(self, loaded_config: Dict[str, Any]):
        """
        Merge loaded configuration with defaults.

        Nested mappings are merged key by key; anything else replaces the default.
        """
        def merge_dicts(default: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
            result = default.copy()
            for key, value in override.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = merge_dicts(result[key], value)
                else:
                    result[key] = value
            return result

        self._config = merge_dicts(copy.deepcopy(DEFAULT_CONFIG), loaded_config)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key: Configuration key in dot notation (e.g., 'paths.database')
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default if not found

        Example:
            >>> settings.get('inventory.include_empty_groups', False)
            False
        """
        try:
            value = self._config
            for k in key.split('.'):
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def update(self, key: str, value: Any) -> bool:
        """
        Update a configuration value using dot notation.

        Returns:
            bool: True if update successful, False if the key is unknown
            or the value fails validation
        """
        if not self._validate_config_value(key, value):
            return False

        keys = key.split('.')
        config = self._config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value
        return True

    def _validate_config_value(self, key: str, value: Any) -> bool:
        """
        Validate a configuration value based on its key.

        Validates:
        - Key exists in configuration structure
        - Value type is correct
        - Value meets constraints
        """
        config = DEFAULT_CONFIG
        for part in key.split('.'):
            if not isinstance(config, dict) or part not in config:
                return False
            config = config[part]

        if key == "paths.database":
            if not _validate_path(value):
                return False
            return value.lower().endswith('.db')
        elif key == "inventory.include_empty_groups":
            return isinstance(value, bool)
        elif key == "inventory.json_indent":
            return isinstance(value, int) and not isinstance(value, bool) and value > 0
        elif key == "import.skip_marker":
            return isinstance(value, str) and bool(value.strip())
        elif key == "logging.level":
            return isinstance(value, str) and value.upper() in LOG_LEVELS

        # Unknown key
        return False

def _validate_path(path):
    """Validate a file path"""
    if not isinstance(path, str) or not path:
        return False

    path_obj = Path(path)
    for part in path_obj.parts:
        if any(c in part for c in ['<', '>', '"', '|', '?', '*']):
            return False
    return True
