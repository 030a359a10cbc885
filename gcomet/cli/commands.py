"""CLI Commands"""

import getpass
import sys
from typing import Callable, Optional

from gcomet import DEFAULT_MODEL, MODELS, MODEL_NAMES
from gcomet.config import (
    DEFAULTS,
    ConfigError,
    ConfigManager,
    RemoteConfig,
    display_value,
)
from gcomet.config.settings import FIELD_NAMES
from gcomet.git import GitError, GitRepository
from gcomet.llm import CommitMessage, LLMClient, LLMError, NetworkError, SensitiveContentError, get_client
from gcomet.output import (
    Spinner,
    bold,
    colorize_commit_type,
    dim,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from gcomet.security import SensitiveDataScanner
from gcomet.cli.utils import choose, choose_action, confirm, count_changed_files, edit_message

NO_TOKEN_MESSAGE = 'GitHub token not found. Run "gcomet setup" first.'


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------

def _show_remote_messages(remote: Optional[RemoteConfig]) -> None:
    if remote is None:
        return
    if remote.warning:
        print_warning(remote.warning)
    if remote.info:
        print(dim(remote.info), file=sys.stderr)


def _confirm_sensitive(diff: str, scanner: SensitiveDataScanner, force: bool) -> bool:
    """Warn about likely secrets. Returns False if the user backs out."""
    if not scanner.has_sensitive_data(diff):
        return True

    print_warning("Potential sensitive data detected:")
    for finding in scanner.scan(diff):
        print(dim(f"  {finding.preview}"), file=sys.stderr)

    if force:
        return True
    return confirm("Continue anyway?", default=False)


def _display_message(message: CommitMessage) -> None:
    lines = message.text.split('\n')
    width = max((len(line) for line in lines), default=40)
    print(f"\n{dim('─' * width)}")
    print(bold(colorize_commit_type(message.subject)))
    if message.body:
        print()
        print(dim(message.body))
    print(dim('─' * width))


def _commit(repo: GitRepository, text: str) -> int:
    try:
        repo.commit(text)
    except GitError as e:
        print_error(str(e))
        return 1
    print_success("Committed successfully!")
    return 0


def _offer_fallback(repo: GitRepository, diff: str, force: bool, print_only: bool) -> int:
    """After a network failure, offer a generic message instead of nothing."""
    fallback = f"chore: update {count_changed_files(diff)} files"
    if print_only:
        print(fallback)
        return 0
    if not force and not confirm("Generate a basic commit message instead?", default=True):
        return 1
    print_warning(f"Fallback message: {fallback}")
    return _commit(repo, fallback)


def run_generate(
    manager: ConfigManager,
    repo: GitRepository,
    force: bool = False,
    model: Optional[str] = None,
    print_only: bool = False,
    client_factory: Callable[..., LLMClient] = get_client,
    scanner: Optional[SensitiveDataScanner] = None,
) -> int:
    """Generate a message for the staged changes and commit it (or print it)."""
    scanner = scanner or SensitiveDataScanner()

    if not repo.is_git_repository():
        print_error("Not in a Git repository")
        return 1
    if not repo.has_staged_changes():
        print_warning('No staged changes found. Use "git add" first.')
        return 1

    try:
        config = manager.load()
        token = manager.resolve_credential()
    except ConfigError as e:
        print_error(str(e))
        return 1
    _show_remote_messages(manager.remote_config)

    if not token:
        print_error(NO_TOKEN_MESSAGE)
        return 1

    try:
        diff = repo.get_staged_diff()
    except GitError as e:
        print_error(str(e))
        return 1
    last_commit = repo.get_last_commit_message()
    branch = repo.get_current_branch()

    if not _confirm_sensitive(diff, scanner, force):
        print(dim("Cancelled."))
        return 0

    try:
        client = client_factory(token=token, model=model or config.model)
        with Spinner("Generating commit message..."):
            message = client.generate_commit_message(diff, last_commit, branch, config.max_diff_size)
    except SensitiveContentError as e:
        print_error(f"Security Error: {e}")
        return 1
    except NetworkError as e:
        print_error(str(e))
        return _offer_fallback(repo, diff, force, print_only)
    except LLMError as e:
        print_error(str(e))
        return 1

    if print_only:
        print(message.text)
        return 0

    print_success("Commit message generated!")
    _display_message(message)

    text = message.text
    if not force and config.always_ask_before_commit:
        action = choose_action()
        if action == 'cancel':
            print(dim("Cancelled."))
            return 0
        if action == 'edit':
            edited = edit_message(text)
            if not edited:
                print(dim("Empty message, cancelled."))
                return 0
            text = edited

    return _commit(repo, text)


# ---------------------------------------------------------------------------
# hook
# ---------------------------------------------------------------------------

def run_hook_install(repo: GitRepository) -> int:
    if not repo.is_git_repository():
        print_error("Not in a Git repository")
        return 1
    try:
        repo.install_hook()
    except GitError as e:
        print_error(f"Error installing hook: {e}")
        return 1
    print_success("prepare-commit-msg hook installed successfully!")
    print(dim('Now "git commit" will automatically generate commit messages.'))
    return 0


def run_hook_uninstall(repo: GitRepository) -> int:
    if not repo.is_git_repository():
        print_error("Not in a Git repository")
        return 1
    try:
        repo.uninstall_hook()
    except GitError as e:
        print_error(f"Error uninstalling hook: {e}")
        return 1
    print_success("prepare-commit-msg hook uninstalled successfully!")
    return 0


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------

def run_config_set(manager: ConfigManager, key: str, value: str) -> int:
    try:
        parsed = manager.set(key, value)
    except ConfigError as e:
        print_error(str(e))
        return 1
    print_success(f"Set {key} = {display_value(key, parsed)}")
    return 0


def run_config_get(manager: ConfigManager, key: str) -> int:
    try:
        value = manager.get(key)
    except ConfigError as e:
        print_error(str(e))
        return 1
    shown = display_value(key, value)
    print(f"{key} = {'not set' if shown is None else shown}")
    return 0


def run_config_list(manager: ConfigManager) -> int:
    try:
        config = manager.load()
    except ConfigError as e:
        print_error(str(e))
        return 1

    print_info("Current configuration:")
    for key, field_name in FIELD_NAMES.items():
        shown = display_value(key, getattr(config, field_name))
        print(f"  {key} = {'not set' if shown is None else shown}")
    print(dim(f"\n  Stored in {manager.config_path}"))
    return 0


def run_config_reset(manager: ConfigManager, key: Optional[str] = None) -> int:
    try:
        restored = manager.reset(key)
    except ConfigError as e:
        print_error(str(e))
        return 1

    if key is None:
        print_success("Reset all configuration to defaults")
        print_warning('GitHub token was not reset. Run "gcomet setup" to reconfigure.')
    elif restored:
        print_success(f"Reset {key} to default value: {DEFAULTS[key]}")
    else:
        print_warning(f"No default value for {key}")
    return 0


# ---------------------------------------------------------------------------
# setup
# ---------------------------------------------------------------------------

def _ask_token(existing: Optional[str]) -> Optional[str]:
    if existing and confirm("GitHub token found. Use existing token?", default=True):
        return existing

    if not existing:
        print('You need a GitHub Personal Access Token with "models:read" scope.')
        print(dim("Create one at: https://github.com/settings/tokens\n"))
    try:
        token = getpass.getpass("Enter your GitHub Personal Access Token: ").strip()
    except (KeyboardInterrupt, EOFError):
        print()
        return None
    return token or None


def run_setup(manager: ConfigManager) -> int:
    """Quick setup wizard."""
    print(f"{bold('gcomet setup wizard')}\n")

    try:
        token = _ask_token(manager.resolve_credential())
        if not token:
            print_error("No token entered. Setup cancelled.")
            return 1
        manager.set('githubToken', token)

        options = [(name, MODELS[name][2]) for name in MODEL_NAMES]
        model = choose("Choose default AI model:", options, default=MODEL_NAMES.index(DEFAULT_MODEL))
        if model is None:
            print(dim("Cancelled."))
            return 1
        manager.set('model', model)

        always_ask = confirm("Always ask before committing?", default=True)
        manager.set('alwaysAskBeforeCommit', always_ask)
    except ConfigError as e:
        print_error(f"Setup failed: {e}")
        return 1

    print()
    print_success("Setup completed successfully!")
    print(dim("\nTry it out:"))
    print("  git add .")
    print("  gcomet generate")
    print(dim("\nOr install the Git hook:"))
    print("  gcomet hook install")
    return 0


__all__ = [
    "run_generate",
    "run_hook_install",
    "run_hook_uninstall",
    "run_config_set",
    "run_config_get",
    "run_config_list",
    "run_config_reset",
    "run_setup",
    "NO_TOKEN_MESSAGE",
]
