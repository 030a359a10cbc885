"""GitHub Models LLM Client"""

import http.client
import json
import os
import socket
import urllib.error
import urllib.request
from typing import Optional

from gcomet import DEFAULT_MODEL, MODELS
from gcomet.llm.base import (
    SENSITIVE_MARKER,
    SYSTEM_PROMPT,
    AuthenticationError,
    CommitMessage,
    EmptyResponseError,
    LLMClient,
    LLMError,
    NetworkError,
    PermissionDeniedError,
    RateLimitError,
    SensitiveContentError,
    parse_commit_message,
)
from gcomet.prompts import PromptBuilder, PromptConfig


def model_id(model: str) -> str:
    """Map a configured model name to its GitHub Models id, falling back to the fast tier."""
    entry = MODELS.get(model) or MODELS[DEFAULT_MODEL]
    return entry[1]


class GitHubModelsClient(LLMClient):
    """GitHub Models chat completions client. Requires a token with models:read."""

    ENDPOINT = "https://models.github.ai/inference"
    DEFAULT_TIMEOUT = 60
    MAX_TOKENS = 200
    TEMPERATURE = 0.3

    def __init__(self, token: str, model: Optional[str] = None, endpoint: Optional[str] = None):
        if not token:
            raise AuthenticationError("No GitHub token provided. Run 'gcomet setup' first.")
        self.token = token
        self.model = model or DEFAULT_MODEL
        self.endpoint = (endpoint or self.ENDPOINT).rstrip('/')
        self.timeout = int(os.environ.get("GCOMET_TIMEOUT", self.DEFAULT_TIMEOUT))

    @property
    def name(self) -> str:
        return f"GitHub Models ({model_id(self.model)})"

    def _call_api(self, prompt: str) -> dict:
        """Make a single chat completions call."""
        payload = {
            "model": model_id(self.model),
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": self.MAX_TOKENS,
            "temperature": self.TEMPERATURE,
        }
        req = urllib.request.Request(
            f"{self.endpoint}/chat/completions",
            data=json.dumps(payload).encode('utf-8'),
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
                "Authorization": f"Bearer {self.token}",
            },
        )
        with urllib.request.urlopen(req, timeout=self.timeout) as response:
            return json.loads(response.read().decode('utf-8'))

    def generate_commit_message(
        self,
        diff: str,
        last_commit: Optional[str],
        branch: str,
        max_diff_size: int = 0,
    ) -> CommitMessage:
        prompt = PromptBuilder().build(
            diff, PromptConfig(last_commit=last_commit, branch=branch, max_diff_size=max_diff_size)
        )

        try:
            result = self._call_api(prompt)
        except urllib.error.HTTPError as e:
            raise self._http_error(e)
        except urllib.error.URLError as e:
            if isinstance(e.reason, socket.timeout):
                raise NetworkError(f"Request timed out after {self.timeout}s. Increase it with GCOMET_TIMEOUT.")
            raise NetworkError("Network error. Please check your internet connection and try again.")
        except socket.timeout:
            raise NetworkError(f"Request timed out after {self.timeout}s. Increase it with GCOMET_TIMEOUT.")
        except json.JSONDecodeError:
            raise LLMError("Invalid response from GitHub Models.")
        except (http.client.HTTPException, OSError) as e:
            raise NetworkError(f"Connection to GitHub Models lost: {e}")

        content = self._extract_content(result)
        if not content:
            raise EmptyResponseError("No response from AI model")
        if content.startswith(SENSITIVE_MARKER):
            raise SensitiveContentError("Sensitive data detected in diff. Please review your staged changes.")

        return parse_commit_message(content)

    @staticmethod
    def _extract_content(result: dict) -> str:
        try:
            return (result["choices"][0]["message"]["content"] or "").strip()
        except (KeyError, IndexError, TypeError):
            return ""

    @staticmethod
    def _http_error(e: urllib.error.HTTPError) -> LLMError:
        if e.code == 401:
            return AuthenticationError('Invalid GitHub token. Please run "gcomet setup" to reconfigure.')
        if e.code == 403:
            return PermissionDeniedError('GitHub token does not have required "models:read" permissions.')
        if e.code == 429:
            return RateLimitError("Rate limit exceeded. Please wait a moment and try again.")

        message = e.reason
        try:
            body = json.loads(e.read().decode('utf-8'))
            message = body.get("error", {}).get("message") or message
        except (ValueError, AttributeError, OSError):
            pass
        return LLMError(f"GitHub Models API error ({e.code}): {message}")
