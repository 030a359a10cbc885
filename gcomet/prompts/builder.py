"""Prompt Builder - Construct the user prompt for commit message generation."""

from dataclasses import dataclass
from typing import Optional

TRUNCATION_NOTE = "\n... (truncated)"

# Branches that carry no information about the change
DEFAULT_BRANCHES = {"main", "master"}


@dataclass
class PromptConfig:
    """Repository context that shapes the prompt."""
    last_commit: Optional[str] = None
    branch: Optional[str] = None
    max_diff_size: int = 10000  # characters of diff sent; 0 sends everything


class PromptBuilder:
    """Constructs the user message sent alongside the system prompt."""

    def build(self, diff: str, config: Optional[PromptConfig] = None) -> str:
        config = config or PromptConfig()
        sections = [
            "Generate a commit message for these staged changes:",
            self._build_diff_section(diff, config.max_diff_size),
            self._build_context_section(config),
            "Generate ONE commit message following Conventional Commits format.",
        ]
        return "\n\n".join(filter(None, sections))

    def _build_diff_section(self, diff: str, max_diff_size: int) -> str:
        return f"DIFF:\n{truncate_diff(diff, max_diff_size)}"

    def _build_context_section(self, config: PromptConfig) -> str:
        lines = []
        if config.last_commit:
            lines.append(f"LAST COMMIT: {config.last_commit.strip()}")
        if config.branch and config.branch not in DEFAULT_BRANCHES:
            lines.append(f"BRANCH: {config.branch}")
        return "\n".join(lines)


def truncate_diff(diff: str, max_diff_size: int) -> str:
    if max_diff_size <= 0 or len(diff) <= max_diff_size:
        return diff
    return diff[:max_diff_size] + TRUNCATION_NOTE
