"""
Config Manager

Resolves the effective configuration for one process. Sources, lowest to
highest precedence:

1. Built-in defaults
2. ~/.gcomet/config.json
3. Remote override (refreshed at most once every 24 hours)

The credential has its own chain: GITHUB_TOKEN, then the stored githubToken,
then `gh auth token`.
"""

import json
import os
import time
from pathlib import Path
from typing import Any, Callable, Optional

from gcomet import MODELS
from gcomet.config.credentials import gh_auth_token
from gcomet.config.remote import (
    FETCH_TIMEOUT,
    RemoteConfig,
    fetch_remote_config,
    read_cached_remote_config,
    write_cached_remote_config,
)
from gcomet.config.settings import (
    BULK_RESET_KEYS,
    DEFAULTS,
    Config,
    ConfigPersistError,
    field_for_key,
    parse_config_value,
)
from gcomet.output import debug, print_warning

REMOTE_CACHE_MAX_AGE_MS = 24 * 60 * 60 * 1000


def _now_ms() -> int:
    return int(time.time() * 1000)


class ConfigManager:
    """
    Owns the configuration for one process.

    The file is read once; every later load() returns the same object and
    every mutation is written straight back. Network, clock and credential
    helper are injectable so tests never leave the machine.
    """

    CONFIG_DIRNAME = ".gcomet"
    CONFIG_FILENAME = "config.json"
    REMOTE_CACHE_FILENAME = "remote-config.json"
    TOKEN_ENV_VAR = "GITHUB_TOKEN"

    def __init__(
        self,
        config_dir: Optional[Path] = None,
        fetcher: Optional[Callable[..., Optional[RemoteConfig]]] = None,
        credential_helper: Optional[Callable[[], Optional[str]]] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.config_dir = Path(config_dir) if config_dir else Path.home() / self.CONFIG_DIRNAME
        self._fetch = fetcher or fetch_remote_config
        self._credential_helper = credential_helper or gh_auth_token
        self._clock = clock or _now_ms
        self._config: Optional[Config] = None
        self.remote_config: Optional[RemoteConfig] = None

    @property
    def config_path(self) -> Path:
        return self.config_dir / self.CONFIG_FILENAME

    @property
    def remote_cache_path(self) -> Path:
        return self.config_dir / self.REMOTE_CACHE_FILENAME

    def load(self) -> Config:
        """
        Load configuration, creating the file with defaults on first run.

        Caches the result for subsequent calls.
        """
        if self._config is not None:
            return self._config

        config = self._read_local()
        if config is None:
            self._config = Config()
            self.save()
        else:
            self._config = config

        remote = self._get_remote_config()
        if remote is not None:
            self.remote_config = remote
            self._apply_remote(remote)

        return self._config

    def save(self) -> Path:
        """Write the full configuration, replacing the file."""
        if self._config is None:
            raise ConfigPersistError("Nothing to save: configuration not loaded")
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self._config.to_dict(), f, indent=2)
        except OSError as e:
            raise ConfigPersistError(f"Could not write {self.config_path}: {e}") from e
        return self.config_path

    def get(self, key: str) -> Any:
        field_name = field_for_key(key)
        return getattr(self.load(), field_name)

    def set(self, key: str, value: Any) -> Any:
        """
        Validate, apply and persist one key.

        Returns:
            The parsed value that was stored

        Raises:
            InvalidConfigKey, InvalidConfigValue: nothing is changed
            ConfigPersistError: the in-memory value is rolled back
        """
        field_name = field_for_key(key)
        parsed = parse_config_value(key, value)

        config = self.load()
        previous = getattr(config, field_name)
        setattr(config, field_name, parsed)
        try:
            self.save()
        except ConfigPersistError:
            setattr(config, field_name, previous)
            raise
        return parsed

    def reset(self, key: Optional[str] = None) -> bool:
        """
        Restore defaults.

        With a key, only that key is reset; returns False if it has no default.
        Without a key, the BULK_RESET_KEYS are reset and the token is kept.
        """
        if key is not None:
            field_for_key(key)
            if key not in DEFAULTS:
                return False
            self.set(key, DEFAULTS[key])
            return True

        config = self.load()
        previous = {k: getattr(config, field_for_key(k)) for k in BULK_RESET_KEYS}
        for k in BULK_RESET_KEYS:
            setattr(config, field_for_key(k), DEFAULTS[k])
        try:
            self.save()
        except ConfigPersistError:
            for k, value in previous.items():
                setattr(config, field_for_key(k), value)
            raise
        return True

    def resolve_credential(self) -> Optional[str]:
        """First match wins: environment, stored token, gh CLI."""
        token = os.environ.get(self.TOKEN_ENV_VAR)
        if token:
            debug(f"Using token from {self.TOKEN_ENV_VAR}")
            return token

        config = self.load()
        if config.github_token:
            debug(f"Using token from {self.config_path}")
            return config.github_token

        token = self._credential_helper()
        if token:
            debug("Using token from GitHub CLI")
        return token or None

    def _read_local(self) -> Optional[Config]:
        if not self.config_path.exists():
            return None
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            print_warning(f"Could not load {self.config_path}: {e}. Using defaults.")
            return None
        if not isinstance(data, dict):
            print_warning(f"Ignoring {self.config_path}: expected a JSON object. Using defaults.")
            return None
        return Config.from_dict(data)

    def _get_remote_config(self) -> Optional[RemoteConfig]:
        url = self._config.remote_config_url
        if not url:
            return None

        now = self._clock()
        last_fetch = self._config.last_remote_config_fetch
        if last_fetch is not None and now - last_fetch < REMOTE_CACHE_MAX_AGE_MS:
            cached = read_cached_remote_config(self.remote_cache_path)
            if cached is not None:
                return cached

        remote = self._fetch(url, timeout=FETCH_TIMEOUT)
        if remote is None:
            return None

        write_cached_remote_config(self.remote_cache_path, remote)
        self._config.last_remote_config_fetch = now
        try:
            self.save()
        except ConfigPersistError as e:
            debug(f"Could not record remote config fetch time: {e}")
        return remote

    def _apply_remote(self, remote: RemoteConfig) -> None:
        if not remote.default_model:
            return
        if remote.default_model not in MODELS:
            debug(f"Ignoring unknown remote default model '{remote.default_model}'")
            return
        self._config.model = remote.default_model
