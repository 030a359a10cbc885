"""LLM Base Classes and Shared Code"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from gcomet import COMMIT_TYPE_NAMES

SENSITIVE_MARKER = "⚠️ SENSITIVE DATA DETECTED"

SYSTEM_PROMPT = f"""You are an expert Git commit message generator. Follow these rules strictly:

1. ALWAYS use Conventional Commits format: type(scope): description
2. Available types: {', '.join(COMMIT_TYPE_NAMES)}
3. Use imperative mood (Add, Fix, Update, not Added, Fixed, Updated)
4. Keep subject line ≤50 characters, no trailing period
5. Generate exactly ONE commit message
6. Write in English only
7. Be concise and professional
8. If you detect sensitive information (keys, passwords, tokens), start your response with "{SENSITIVE_MARKER}"

Examples:
- feat(auth): add password validation
- fix(api): handle null response error
- docs: update installation guide
- refactor(utils): extract helper functions"""

TYPES_PATTERN = '|'.join(COMMIT_TYPE_NAMES)


@dataclass
class CommitMessage:
    """Subject line plus optional body."""
    subject: str
    body: Optional[str] = None

    @property
    def text(self) -> str:
        if self.body:
            return f"{self.subject}\n\n{self.body}"
        return self.subject


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class AuthenticationError(LLMError):
    """Token rejected (401)."""
    pass


class PermissionDeniedError(LLMError):
    """Token lacks the models:read scope (403)."""
    pass


class RateLimitError(LLMError):
    pass


class NetworkError(LLMError):
    """Transport failure or timeout before a response arrived."""
    pass


class EmptyResponseError(LLMError):
    pass


class SensitiveContentError(LLMError):
    """The model flagged the diff as containing secrets."""
    pass


def parse_commit_message(content: str) -> CommitMessage:
    """Extract the commit message from a model reply.

    Skips chatty preamble up to the first conventional-commit line and strips
    code fences. Blank lines are dropped; everything after the subject is body.
    """
    lines = [
        line for line in content.strip().split('\n')
        if line.strip() and not line.strip().startswith('```')
    ]

    start_idx = 0
    for i, line in enumerate(lines):
        if re.match(rf'^[`\s]*({TYPES_PATTERN})[\(!:]', line):
            start_idx = i
            break
    lines = [line.rstrip() for line in lines[start_idx:]]

    if not lines:
        raise EmptyResponseError("No response from AI model")

    subject = lines[0].strip('`').strip()
    body = '\n'.join(lines[1:]) or None
    return CommitMessage(subject=subject, body=body)


class LLMClient(ABC):
    """Abstract base for commit message generators."""

    @abstractmethod
    def generate_commit_message(
        self,
        diff: str,
        last_commit: Optional[str],
        branch: str,
        max_diff_size: int = 0,
    ) -> CommitMessage:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass
