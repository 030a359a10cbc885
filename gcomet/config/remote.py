"""Remote Config - Hosted defaults that can change behavior without a release.

Every function here returns None instead of raising: a missing, slow or
malformed remote document must never stop a commit.
"""

import http.client
import json
import socket
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from gcomet import __version__
from gcomet.output import debug

FETCH_TIMEOUT = 5  # seconds
MAX_DOCUMENT_BYTES = 64 * 1024


@dataclass
class RemoteConfig:
    """Remote override document. minVersion is advisory only."""
    default_model: Optional[str] = None
    min_version: Optional[str] = None
    messages: dict[str, str] = field(default_factory=dict)

    @property
    def warning(self) -> Optional[str]:
        return self.messages.get("warning")

    @property
    def info(self) -> Optional[str]:
        return self.messages.get("info")

    def to_dict(self) -> dict:
        data = {"defaultModel": self.default_model, "minVersion": self.min_version}
        if self.messages:
            data["messages"] = dict(self.messages)
        return data

    @classmethod
    def from_dict(cls, data) -> 'RemoteConfig':
        """Raises ValueError when the document has the wrong shape."""
        if not isinstance(data, dict):
            raise ValueError("remote config must be a JSON object")

        default_model = data.get("defaultModel")
        min_version = data.get("minVersion")
        if default_model is not None and not isinstance(default_model, str):
            raise ValueError("defaultModel must be a string")
        if min_version is not None and not isinstance(min_version, str):
            raise ValueError("minVersion must be a string")

        raw_messages = data.get("messages") or {}
        if not isinstance(raw_messages, dict):
            raise ValueError("messages must be an object")
        messages = {
            kind: text for kind, text in raw_messages.items()
            if kind in ("warning", "info") and isinstance(text, str) and text
        }
        return cls(default_model=default_model, min_version=min_version, messages=messages)


def fetch_remote_config(url: str, timeout: float = FETCH_TIMEOUT) -> Optional[RemoteConfig]:
    """GET the remote document. Single attempt, no retries."""
    req = urllib.request.Request(
        url,
        headers={"Accept": "application/json", "User-Agent": f"gcomet/{__version__}"},
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as response:
            data = json.loads(response.read(MAX_DOCUMENT_BYTES).decode('utf-8'))
        return RemoteConfig.from_dict(data)
    except urllib.error.HTTPError as e:
        debug(f"Remote config fetch failed ({e.code}): {url}")
    except urllib.error.URLError as e:
        debug(f"Remote config unreachable: {e.reason}")
    except socket.timeout:
        debug(f"Remote config fetch timed out after {timeout}s")
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError) as e:
        debug(f"Remote config is malformed: {e}")
    except (http.client.HTTPException, OSError) as e:
        debug(f"Remote config fetch failed: {e!r}")
    return None


def read_cached_remote_config(path: Path) -> Optional[RemoteConfig]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return RemoteConfig.from_dict(json.load(f))
    except FileNotFoundError:
        debug(f"No remote config cache at {path}")
    except (OSError, ValueError) as e:
        debug(f"Could not read remote config cache {path}: {e}")
    return None


def write_cached_remote_config(path: Path, remote: RemoteConfig) -> bool:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(remote.to_dict(), f)
        return True
    except OSError as e:
        debug(f"Could not write remote config cache {path}: {e}")
        return False
