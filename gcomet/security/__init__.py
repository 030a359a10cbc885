"""Sensitive Data Scanning Package"""

from gcomet.security.scanner import (
    SensitiveDataScanner,
    Finding,
    SENSITIVE_PATTERNS,
    PREVIEW_LENGTH,
)

__all__ = [
    "SensitiveDataScanner",
    "Finding",
    "SENSITIVE_PATTERNS",
    "PREVIEW_LENGTH",
]
