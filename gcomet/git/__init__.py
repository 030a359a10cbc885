"""Git Operations Package"""

from gcomet.git.repository import GitRepository, GitError, HOOK_NAME, HOOK_MARKER

__all__ = [
    "GitRepository",
    "GitError",
    "HOOK_NAME",
    "HOOK_MARKER",
]
