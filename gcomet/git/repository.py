"""Git Repository - Staged changes, commits and the prepare-commit-msg hook."""

import os
import stat
import subprocess
from pathlib import Path
from typing import Optional

HOOK_NAME = "prepare-commit-msg"
HOOK_MARKER = "# gcomet prepare-commit-msg hook"

HOOK_SCRIPT = f"""#!/bin/sh
{HOOK_MARKER}
if [ -z "$2" ] || [ "$2" = "template" ]; then
  tmp="$1.gcomet"
  if gcomet generate --force --print > "$tmp" && [ -s "$tmp" ]; then
    mv "$tmp" "$1"
  else
    rm -f "$tmp"
  fi
fi
"""


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class GitRepository:
    """Thin wrapper over the git CLI for the working directory (or `cwd`)."""

    def __init__(self, cwd: Optional[Path] = None):
        self.cwd = Path(cwd) if cwd else None

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr.strip()}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def is_git_repository(self) -> bool:
        try:
            self._run_git('rev-parse', '--git-dir')
            return True
        except GitError:
            return False

    def get_staged_diff(self) -> str:
        """Stat summary followed by the full patch, so secrets in content are visible."""
        return self._run_git('diff', '--cached', '--compact-summary', '--patch')

    def get_last_commit_message(self) -> Optional[str]:
        """None for a fresh repository with no commits."""
        try:
            message = self._run_git('log', '-1', '--pretty=%B').strip()
        except GitError:
            return None
        return message or None

    def get_current_branch(self) -> str:
        try:
            branch = self._run_git('rev-parse', '--abbrev-ref', 'HEAD').strip()
        except GitError:
            return 'main'
        return branch or 'main'

    def has_staged_changes(self) -> bool:
        try:
            return bool(self._run_git('diff', '--cached', '--name-only').strip())
        except GitError:
            return False

    def commit(self, message: str) -> None:
        self._run_git('commit', '-m', message)

    def _hook_path(self) -> Path:
        git_dir = Path(self._run_git('rev-parse', '--git-dir').strip())
        if not git_dir.is_absolute() and self.cwd:
            git_dir = self.cwd / git_dir
        return git_dir / 'hooks' / HOOK_NAME

    def install_hook(self) -> Path:
        """Write the hook script. Refuses to overwrite a hook gcomet didn't write."""
        path = self._hook_path()
        if path.exists() and HOOK_MARKER not in path.read_text(encoding='utf-8', errors='replace'):
            raise GitError(f"A {HOOK_NAME} hook already exists at {path}. Remove it first.")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(HOOK_SCRIPT, encoding='utf-8')
            os.chmod(path, path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        except OSError as e:
            raise GitError(f"Failed to install hook: {e}")
        return path

    def uninstall_hook(self) -> Path:
        path = self._hook_path()
        if not path.exists():
            raise GitError(f"No {HOOK_NAME} hook installed")
        if HOOK_MARKER not in path.read_text(encoding='utf-8', errors='replace'):
            raise GitError(f"The {HOOK_NAME} hook at {path} was not installed by gcomet")
        try:
            path.unlink()
        except OSError as e:
            raise GitError(f"Failed to uninstall hook: {e}")
        return path
