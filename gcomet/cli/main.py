"""CLI Main Entry Point"""

import argparse
import sys

from gcomet.config import ConfigManager
from gcomet.git import GitRepository
from gcomet.output import dim, set_verbose

from gcomet.cli.args import parse_args
from gcomet.cli.commands import (
    run_config_get,
    run_config_list,
    run_config_reset,
    run_config_set,
    run_generate,
    run_hook_install,
    run_hook_uninstall,
    run_setup,
)


def dispatch(args: argparse.Namespace, manager: ConfigManager, repo: GitRepository) -> int:
    """Route parsed arguments to a command. Returns the exit code."""
    if args.command == 'hook':
        if args.hook_action == 'install':
            return run_hook_install(repo)
        return run_hook_uninstall(repo)

    if args.command == 'config':
        if args.config_action == 'set':
            return run_config_set(manager, args.key, args.value)
        if args.config_action == 'get':
            return run_config_get(manager, args.key)
        if args.config_action == 'list':
            return run_config_list(manager)
        return run_config_reset(manager, args.key)

    if args.command == 'setup':
        return run_setup(manager)

    return run_generate(
        manager,
        repo,
        force=args.force,
        model=args.model,
        print_only=args.print_only,
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    if args.verbose:
        set_verbose(True)

    # One resolver per process, shared by every command
    manager = ConfigManager()
    repo = GitRepository()

    try:
        return dispatch(args, manager, repo)
    except KeyboardInterrupt:
        print(dim("\nCancelled."))
        return 130


def run() -> None:
    sys.exit(main())
