"""CLI Utility Functions"""

import os
import re
import subprocess
import sys
import tempfile

from gcomet.output import bold, dim, info

STAT_TOTAL = re.compile(r'^\s*\d+ files? changed')

ACTIONS = [
    ('commit', 'Commit with this message'),
    ('edit', 'Edit the message'),
    ('cancel', 'Cancel'),
]


def confirm(question: str, default: bool = False) -> bool:
    """Ask a yes/no question. EOF or Ctrl-C counts as no."""
    suffix = '[Y/n]' if default else '[y/N]'
    while True:
        try:
            answer = input(f"{question} {dim(suffix)} ").strip().lower()
        except (KeyboardInterrupt, EOFError):
            print()
            return False
        if not answer:
            return default
        if answer in ('y', 'yes'):
            return True
        if answer in ('n', 'no'):
            return False
        print("Please answer y or n")


def choose(question: str, options: list[tuple[str, str]], default: int = 0) -> str | None:
    """Show numbered options and return the chosen key, or None if cancelled."""
    print(f"\n{bold(question)}")
    for i, (_, label) in enumerate(options, 1):
        print(f"  {info(f'{i}.')} {label}")

    while True:
        try:
            choice = input(f"Select [1-{len(options)}] (Enter for {default + 1}): ").strip()
        except (KeyboardInterrupt, EOFError):
            print()
            return None
        if not choice:
            return options[default][0]
        if choice.isdigit() and 1 <= int(choice) <= len(options):
            return options[int(choice) - 1][0]
        print(f"Enter 1-{len(options)}")


def choose_action() -> str:
    return choose("What would you like to do?", ACTIONS) or 'cancel'


def edit_message(message: str) -> str | None:
    """Open message in user's editor. Returns edited text or None on failure."""
    editor = os.environ.get('VISUAL') or os.environ.get('EDITOR')
    if not editor:
        editor = 'notepad' if sys.platform == 'win32' else 'vi'

    tmp = tempfile.NamedTemporaryFile(mode='w', suffix='.gitcommit', delete=False, encoding='utf-8')
    try:
        tmp.write(message)
        tmp.close()
        subprocess.run([editor, tmp.name], check=True)
        with open(tmp.name, 'r', encoding='utf-8') as f:
            edited = f.read().strip()
        return edited if edited else None
    except (subprocess.CalledProcessError, OSError):
        return None
    finally:
        try:
            os.unlink(tmp.name)
        except OSError as e:
            print(f"Warning: Could not delete temp file {tmp.name}: {e}", file=sys.stderr)


def count_changed_files(diff: str) -> int:
    """Count file rows in the stat block that heads a --compact-summary diff."""
    count = 0
    for line in diff.splitlines():
        if STAT_TOTAL.match(line):
            break
        if " | " in line:
            count += 1
    return max(1, count)
