"""LLM Client Package"""

from gcomet.llm.base import (
    LLMClient,
    LLMError,
    AuthenticationError,
    PermissionDeniedError,
    RateLimitError,
    NetworkError,
    EmptyResponseError,
    SensitiveContentError,
    CommitMessage,
    SYSTEM_PROMPT,
    parse_commit_message,
)
from gcomet.llm.github import GitHubModelsClient, model_id


def get_client(token: str, model: str | None = None) -> LLMClient:
    """Get the commit message generator for a resolved token and model."""
    return GitHubModelsClient(token=token, model=model)


__all__ = [
    "LLMClient",
    "LLMError",
    "AuthenticationError",
    "PermissionDeniedError",
    "RateLimitError",
    "NetworkError",
    "EmptyResponseError",
    "SensitiveContentError",
    "CommitMessage",
    "GitHubModelsClient",
    "get_client",
    "model_id",
    "SYSTEM_PROMPT",
    "parse_commit_message",
]
