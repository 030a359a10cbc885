"""Configuration Management Package"""

from gcomet.config.settings import (
    Config,
    ConfigError,
    InvalidConfigKey,
    InvalidConfigValue,
    ConfigPersistError,
    DEFAULTS,
    DEFAULT_REMOTE_CONFIG_URL,
    VALID_CONFIG_KEYS,
    SENSITIVE_KEYS,
    display_value,
    parse_config_value,
)
from gcomet.config.remote import RemoteConfig, fetch_remote_config
from gcomet.config.credentials import gh_auth_token
from gcomet.config.manager import ConfigManager

__all__ = [
    "Config",
    "ConfigManager",
    "ConfigError",
    "InvalidConfigKey",
    "InvalidConfigValue",
    "ConfigPersistError",
    "RemoteConfig",
    "fetch_remote_config",
    "gh_auth_token",
    "DEFAULTS",
    "DEFAULT_REMOTE_CONFIG_URL",
    "VALID_CONFIG_KEYS",
    "SENSITIVE_KEYS",
    "display_value",
    "parse_config_value",
]
