"""
gcomet

AI-generated commit messages for staged git changes, powered by GitHub Models.
"""

__version__ = "1.0.0"

# Supported models - single source of truth
# Used by: config (validation), llm (API id mapping), cli (argparse, setup)
# name -> (tier, GitHub Models id, description)
MODELS = {
    'gpt-4o-mini': ('fast', 'openai/gpt-4o-mini', 'GPT-4o Mini (fast, recommended)'),
    'gpt-4o': ('accurate', 'openai/gpt-4o', 'GPT-4o (slower, more accurate)'),
    'gpt-3.5-turbo': ('legacy', 'openai/gpt-3.5-turbo', 'GPT-3.5 Turbo (fastest)'),
}

MODEL_NAMES = list(MODELS.keys())

DEFAULT_MODEL = 'gpt-4o-mini'

COMMIT_TYPES = {
    'feat': 'A new feature or capability',
    'fix': 'A bug fix',
    'docs': 'Documentation only changes',
    'style': 'Formatting, whitespace, no code change',
    'refactor': 'Code restructuring without behavior change',
    'perf': 'Performance improvement',
    'test': 'Adding or updating tests',
    'build': 'Build system or external dependency changes',
    'ci': 'CI/CD configuration changes',
    'chore': 'Maintenance tasks, dependencies, tooling',
}

COMMIT_TYPE_NAMES = list(COMMIT_TYPES.keys())
