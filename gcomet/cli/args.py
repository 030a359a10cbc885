"""CLI Argument Parsing"""

import argparse
import argcomplete

from gcomet import MODEL_NAMES, __version__
from gcomet.config import VALID_CONFIG_KEYS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gcomet',
        description='AI-powered Git commit message generator',
        epilog='Example: git add . && gcomet'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--verbose', action='store_true', help='Show debug info (config sources, remote fetches)')

    # Running bare `gcomet` behaves like `gcomet generate`
    parser.set_defaults(command=None, force=False, model=None, print_only=False)
    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')

    generate = subparsers.add_parser('generate', aliases=['gen'], help='Generate a commit message for staged changes')
    generate.add_argument('-f', '--force', action='store_true', help='Skip confirmation prompts')
    generate.add_argument('-m', '--model', type=str, choices=MODEL_NAMES, help='Override default AI model')
    generate.add_argument('--print', dest='print_only', action='store_true', help='Print the message instead of committing')

    hook = subparsers.add_parser('hook', help='Manage Git hooks')
    hook_actions = hook.add_subparsers(dest='hook_action', metavar='ACTION', required=True)
    hook_actions.add_parser('install', help='Install prepare-commit-msg hook')
    hook_actions.add_parser('uninstall', help='Uninstall prepare-commit-msg hook')

    config = subparsers.add_parser('config', help='Manage configuration')
    config_actions = config.add_subparsers(dest='config_action', metavar='ACTION', required=True)
    config_set = config_actions.add_parser('set', help='Set configuration value')
    config_set.add_argument('key', metavar='KEY', help=f"One of: {', '.join(VALID_CONFIG_KEYS)}")
    config_set.add_argument('value', metavar='VALUE', help='Configuration value')
    config_get = config_actions.add_parser('get', help='Get configuration value')
    config_get.add_argument('key', metavar='KEY', help='Configuration key')
    config_actions.add_parser('list', help='List all configuration')
    config_reset = config_actions.add_parser('reset', help='Reset one key, or everything except the token')
    config_reset.add_argument('key', nargs='?', metavar='KEY', help='Configuration key')

    subparsers.add_parser('setup', help='Initial setup wizard')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args(argv)
    if args.command == 'gen':
        args.command = 'generate'
    return args
