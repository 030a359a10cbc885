"""Credential helper - borrow the token the GitHub CLI already holds."""

import subprocess
from typing import Optional

from gcomet.output import debug

HELPER_TIMEOUT = 10  # seconds


def gh_auth_token(timeout: float = HELPER_TIMEOUT) -> Optional[str]:
    """Return the token from `gh auth token`, or None if gh can't provide one."""
    try:
        result = subprocess.run(
            ['gh', 'auth', 'token'],
            capture_output=True,
            text=True,
            check=True,
            timeout=timeout,
            encoding='utf-8',
            errors='replace',
        )
    except FileNotFoundError:
        debug("GitHub CLI (gh) is not installed")
        return None
    except subprocess.CalledProcessError as e:
        debug(f"gh auth token failed: {(e.stderr or '').strip() or f'exit code {e.returncode}'}")
        return None
    except subprocess.TimeoutExpired:
        debug(f"gh auth token timed out after {timeout}s")
        return None
    except OSError as e:
        debug(f"Could not run gh: {e}")
        return None

    return result.stdout.strip() or None
