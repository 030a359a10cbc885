"""
Config Settings

The persisted configuration record, its defaults, and value validation.

Stored as JSON in ~/.gcomet/config.json using camelCase keys:
{
    "githubToken": "github_pat_...",
    "model": "gpt-4o-mini",
    "alwaysAskBeforeCommit": true,
    "maxDiffSize": 10000,
    "remoteConfigUrl": "https://...",
    "lastRemoteConfigFetch": 1718000000000
}
"""

import sys
from dataclasses import dataclass
from typing import Any, Optional

from gcomet import DEFAULT_MODEL, MODELS, MODEL_NAMES

DEFAULT_REMOTE_CONFIG_URL = "https://raw.githubusercontent.com/your-org/gcomet-config/main/config.json"

# Stored key -> dataclass field
FIELD_NAMES = {
    "githubToken": "github_token",
    "model": "model",
    "alwaysAskBeforeCommit": "always_ask_before_commit",
    "maxDiffSize": "max_diff_size",
    "remoteConfigUrl": "remote_config_url",
    "lastRemoteConfigFetch": "last_remote_config_fetch",
}

# Keys users may get, set and reset. lastRemoteConfigFetch is bookkeeping only.
VALID_CONFIG_KEYS = [
    "model",
    "alwaysAskBeforeCommit",
    "maxDiffSize",
    "githubToken",
    "remoteConfigUrl",
]

SENSITIVE_KEYS = {"githubToken"}

# Keys without an entry here (githubToken) have no default to reset to
DEFAULTS = {
    "model": DEFAULT_MODEL,
    "alwaysAskBeforeCommit": True,
    "maxDiffSize": 10000,
    "remoteConfigUrl": DEFAULT_REMOTE_CONFIG_URL,
}

# Left out of the file when unset. A null remoteConfigUrl is stored so that
# disabling remote overrides survives a reload.
OMIT_WHEN_UNSET = {"githubToken", "lastRemoteConfigFetch"}

# Restored by a bulk reset; the stored token is deliberately left alone
BULK_RESET_KEYS = ["model", "alwaysAskBeforeCommit", "maxDiffSize"]

TRUE_VALUES = {"true", "yes", "on", "1"}
FALSE_VALUES = {"false", "no", "off", "0"}


class ConfigError(Exception):
    """Base class for configuration failures."""
    pass


class InvalidConfigKey(ConfigError):
    """Raised for a key outside VALID_CONFIG_KEYS."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(
            f'Invalid configuration key "{key}". Valid keys: {", ".join(VALID_CONFIG_KEYS)}'
        )


class InvalidConfigValue(ConfigError):
    """Raised when a value fails type, range or enum validation for its key."""

    def __init__(self, key: str, value: Any, reason: str):
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value {display_value(key, value)!r} for {key}: {reason}")


class ConfigPersistError(ConfigError):
    """Raised when the config file cannot be written."""
    pass


def display_value(key: str, value: Any) -> Any:
    """Mask secrets before they reach the terminal."""
    if key in SENSITIVE_KEYS and value:
        return "***hidden***"
    return value


@dataclass
class Config:
    """User configuration with built-in defaults."""
    github_token: Optional[str] = None
    model: str = DEFAULTS["model"]
    always_ask_before_commit: bool = DEFAULTS["alwaysAskBeforeCommit"]
    max_diff_size: int = DEFAULTS["maxDiffSize"]
    remote_config_url: Optional[str] = DEFAULTS["remoteConfigUrl"]
    last_remote_config_fetch: Optional[int] = None

    def to_dict(self) -> dict:
        """Serialize with stored (camelCase) keys."""
        data = {}
        for key, field_name in FIELD_NAMES.items():
            value = getattr(self, field_name)
            if value is not None or key not in OMIT_WHEN_UNSET:
                data[key] = value
        return data

    def validate(self) -> list[str]:
        """Validate values loaded from disk and return a list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if not isinstance(self.model, str) or self.model not in MODELS:
            warnings.append(f"Invalid model '{self.model}', using '{defaults.model}'")
            self.model = defaults.model

        if not isinstance(self.always_ask_before_commit, bool):
            warnings.append(
                f"Invalid alwaysAskBeforeCommit '{self.always_ask_before_commit}', "
                f"using {str(defaults.always_ask_before_commit).lower()}"
            )
            self.always_ask_before_commit = defaults.always_ask_before_commit

        if not _is_non_negative_int(self.max_diff_size):
            warnings.append(f"Invalid maxDiffSize '{self.max_diff_size}', using {defaults.max_diff_size}")
            self.max_diff_size = defaults.max_diff_size

        if self.github_token is not None and not isinstance(self.github_token, str):
            warnings.append("Invalid githubToken, ignoring it")
            self.github_token = None

        if self.remote_config_url is not None and not isinstance(self.remote_config_url, str):
            warnings.append(f"Invalid remoteConfigUrl '{self.remote_config_url}', using default")
            self.remote_config_url = defaults.remote_config_url

        if self.last_remote_config_fetch is not None and not _is_non_negative_int(self.last_remote_config_fetch):
            self.last_remote_config_fetch = None

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """Build from stored keys over the defaults, ignoring unknown keys."""
        kwargs = {FIELD_NAMES[k]: v for k, v in data.items() if k in FIELD_NAMES}
        config = cls(**kwargs)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


def _is_non_negative_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def field_for_key(key: str) -> str:
    """Map a user-facing key to its Config attribute, rejecting unknown keys."""
    if key not in VALID_CONFIG_KEYS:
        raise InvalidConfigKey(key)
    return FIELD_NAMES[key]


def parse_config_value(key: str, value: Any) -> Any:
    """Convert a raw (usually command-line string) value to its typed form.

    Raises:
        InvalidConfigKey: key is not configurable
        InvalidConfigValue: value fails validation for the key
    """
    field_for_key(key)

    if key == "alwaysAskBeforeCommit":
        if isinstance(value, bool):
            return value
        normalized = str(value).strip().lower()
        if normalized in TRUE_VALUES:
            return True
        if normalized in FALSE_VALUES:
            return False
        raise InvalidConfigValue(key, value, "expected true or false")

    if key == "maxDiffSize":
        text = str(value).strip()
        if isinstance(value, bool) or not (text.isascii() and text.isdigit()):
            raise InvalidConfigValue(key, value, "must be a non-negative integer")
        return int(text)

    if key == "model":
        if not isinstance(value, str) or value not in MODELS:
            raise InvalidConfigValue(key, value, f"must be one of: {', '.join(MODEL_NAMES)}")
        return value

    if key == "githubToken":
        if not isinstance(value, str) or not value.strip():
            raise InvalidConfigValue(key, value, "must be a non-empty string")
        return value.strip()

    # remoteConfigUrl - empty disables remote overrides
    if not isinstance(value, str):
        raise InvalidConfigValue(key, value, "must be a URL")
    url = value.strip()
    if not url:
        return None
    if not url.startswith(("http://", "https://")):
        raise InvalidConfigValue(key, value, "must start with http:// or https://")
    return url
