"""Sensitive Data Scanner - Flag likely secrets in a diff before it leaves the machine.

Heuristic only: false positives are expected and the user can override them,
and secrets that match none of the patterns slip through.
"""

import re
from dataclasses import dataclass

PREVIEW_LENGTH = 50
ELLIPSIS = '...'

# (label, pattern) - evaluated in order, all case-insensitive
SENSITIVE_PATTERNS = [
    ('api_key', r'api[_-]?key[_-]?=?["\s]*([a-zA-Z0-9_-]{20,})'),
    ('secret_key', r'secret[_-]?key[_-]?=?["\s]*([a-zA-Z0-9_-]{20,})'),
    ('password', r'password[_-]?=?["\s]*([^\s"\']{8,})'),
    ('token', r'token[_-]?=?["\s]*([a-zA-Z0-9_-]{20,})'),
    ('private_key', r'private[_-]?key'),
    ('private_key_block', r'-----BEGIN[\s\S]*PRIVATE KEY[\s\S]*-----'),
    ('github_fine_grained_pat', r'github_pat_[a-zA-Z0-9_]{82}'),
    ('github_classic_pat', r'ghp_[a-zA-Z0-9]{36}'),
    ('aws_access_key_id', r'aws_access_key_id'),
    ('aws_secret_access_key', r'aws_secret_access_key'),
]


@dataclass(frozen=True)
class Finding:
    """One match, cut down so the full secret is never echoed."""
    label: str
    preview: str

    def __str__(self) -> str:
        return self.preview


def make_preview(match: str) -> str:
    return match[:PREVIEW_LENGTH] + ELLIPSIS


class SensitiveDataScanner:
    """Runs the pattern table against arbitrary text. Stateless."""

    def __init__(self):
        self._patterns = [
            (label, re.compile(pattern, re.IGNORECASE))
            for label, pattern in SENSITIVE_PATTERNS
        ]

    def scan(self, text: str) -> list[Finding]:
        findings = []
        for label, pattern in self._patterns:
            for match in pattern.finditer(text):
                findings.append(Finding(label=label, preview=make_preview(match.group(0))))
        return findings

    def has_sensitive_data(self, text: str) -> bool:
        return any(pattern.search(text) for _, pattern in self._patterns)
