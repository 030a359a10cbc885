"""
Tests for prompt construction, reply parsing and the GitHub Models client.

Run with:
    pytest tests/test_llm.py -v
"""

import io
import json
import socket
import urllib.error

import pytest

from gcomet.llm import (
    AuthenticationError,
    CommitMessage,
    EmptyResponseError,
    GitHubModelsClient,
    LLMError,
    NetworkError,
    PermissionDeniedError,
    RateLimitError,
    SensitiveContentError,
    model_id,
    parse_commit_message,
)
from gcomet.llm.base import SENSITIVE_MARKER
from gcomet.prompts import PromptBuilder, PromptConfig, truncate_diff


def chat_reply(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def http_error(code, body=b""):
    return urllib.error.HTTPError(
        "https://models.github.ai/inference/chat/completions", code, "error", None, io.BytesIO(body)
    )


# ---------------------------------------------------------------------------
# PromptBuilder
# ---------------------------------------------------------------------------

class TestPromptBuilder:

    @pytest.fixture
    def builder(self):
        return PromptBuilder()

    def test_contains_diff(self, builder):
        prompt = builder.build("+print('hi')")
        assert "DIFF:\n+print('hi')" in prompt
        assert prompt.startswith("Generate a commit message")
        assert prompt.endswith("Conventional Commits format.")

    def test_last_commit_included(self, builder):
        prompt = builder.build("diff", PromptConfig(last_commit="fix(api): handle timeout\n"))
        assert "LAST COMMIT: fix(api): handle timeout" in prompt

    def test_feature_branch_included(self, builder):
        prompt = builder.build("diff", PromptConfig(branch="feature/login"))
        assert "BRANCH: feature/login" in prompt

    @pytest.mark.parametrize("branch", ["main", "master", None])
    def test_default_branch_omitted(self, builder, branch):
        assert "BRANCH:" not in builder.build("diff", PromptConfig(branch=branch))

    def test_long_diff_truncated(self, builder):
        prompt = builder.build("x" * 50, PromptConfig(max_diff_size=10))
        assert "x" * 10 + "\n... (truncated)" in prompt
        assert "x" * 11 not in prompt


class TestTruncateDiff:

    def test_short_diff_untouched(self):
        assert truncate_diff("abc", 10) == "abc"

    def test_zero_disables_truncation(self):
        assert truncate_diff("a" * 100, 0) == "a" * 100

    def test_exact_limit_untouched(self):
        assert truncate_diff("abcde", 5) == "abcde"


# ---------------------------------------------------------------------------
# parse_commit_message
# ---------------------------------------------------------------------------

class TestParseCommitMessage:

    def test_subject_only(self):
        assert parse_commit_message("chore: bump version") == CommitMessage("chore: bump version")

    def test_subject_and_body(self):
        message = parse_commit_message("feat(auth): add login\n\n- add endpoint\n- validate creds")
        assert message.subject == "feat(auth): add login"
        assert message.body == "- add endpoint\n- validate creds"
        assert message.text == "feat(auth): add login\n\n- add endpoint\n- validate creds"

    def test_strips_preamble(self):
        message = parse_commit_message("Sure! Here's a commit message:\n\nfeat(cli): add verbose flag")
        assert message.subject == "feat(cli): add verbose flag"
        assert message.body is None

    def test_strips_code_fences(self):
        message = parse_commit_message("```\nfix(api): handle timeout\n```")
        assert message == CommitMessage("fix(api): handle timeout")

    def test_strips_inline_backticks(self):
        assert parse_commit_message("`docs: update guide`").subject == "docs: update guide"

    def test_non_conventional_reply_kept(self):
        assert parse_commit_message("Update readme").subject == "Update readme"

    def test_blank_reply(self):
        with pytest.raises(EmptyResponseError):
            parse_commit_message("  \n```\n```")


# ---------------------------------------------------------------------------
# GitHubModelsClient
# ---------------------------------------------------------------------------

class TestModelId:

    @pytest.mark.parametrize("name, expected", [
        ("gpt-4o-mini", "openai/gpt-4o-mini"),
        ("gpt-4o", "openai/gpt-4o"),
        ("gpt-3.5-turbo", "openai/gpt-3.5-turbo"),
        ("something-else", "openai/gpt-4o-mini"),
    ])
    def test_mapping(self, name, expected):
        assert model_id(name) == expected


class TestGitHubModelsClient:

    @pytest.fixture
    def client(self):
        return GitHubModelsClient(token="ghp_test", model="gpt-4o")

    def _reply_with(self, monkeypatch, client, result=None, exc=None):
        def _call_api(prompt):
            if exc is not None:
                raise exc
            return result
        monkeypatch.setattr(client, "_call_api", _call_api)

    def test_requires_token(self):
        with pytest.raises(AuthenticationError):
            GitHubModelsClient(token="")

    def test_name(self, client):
        assert client.name == "GitHub Models (openai/gpt-4o)"

    def test_request_shape(self, client, monkeypatch):
        captured = {}

        def _urlopen(req, timeout=None):
            captured["url"] = req.full_url
            captured["auth"] = req.get_header("Authorization")
            captured["payload"] = json.loads(req.data.decode())
            return io.BytesIO(json.dumps(chat_reply("feat: add thing")).encode())

        monkeypatch.setattr("urllib.request.urlopen", _urlopen)
        message = client.generate_commit_message("+x", "fix: old", "feature/x", 100)

        assert message.subject == "feat: add thing"
        assert captured["url"] == "https://models.github.ai/inference/chat/completions"
        assert captured["auth"] == "Bearer ghp_test"
        payload = captured["payload"]
        assert payload["model"] == "openai/gpt-4o"
        assert payload["max_tokens"] == 200
        assert payload["temperature"] == 0.3
        assert [m["role"] for m in payload["messages"]] == ["system", "user"]
        assert "BRANCH: feature/x" in payload["messages"][1]["content"]
        assert "LAST COMMIT: fix: old" in payload["messages"][1]["content"]

    def test_parses_reply(self, client, monkeypatch):
        self._reply_with(monkeypatch, client, chat_reply("fix(db): close cursor\n\n- release on error"))
        message = client.generate_commit_message("diff", None, "main")
        assert message == CommitMessage("fix(db): close cursor", "- release on error")

    @pytest.mark.parametrize("result", [
        chat_reply(""),
        chat_reply(None),
        {"choices": []},
        {},
    ])
    def test_empty_reply(self, client, monkeypatch, result):
        self._reply_with(monkeypatch, client, result)
        with pytest.raises(EmptyResponseError):
            client.generate_commit_message("diff", None, "main")

    def test_sensitive_marker(self, client, monkeypatch):
        self._reply_with(monkeypatch, client, chat_reply(f"{SENSITIVE_MARKER}: api key in config.py"))
        with pytest.raises(SensitiveContentError):
            client.generate_commit_message("diff", None, "main")

    @pytest.mark.parametrize("code, error_type", [
        (401, AuthenticationError),
        (403, PermissionDeniedError),
        (429, RateLimitError),
    ])
    def test_http_status_mapping(self, client, monkeypatch, code, error_type):
        self._reply_with(monkeypatch, client, exc=http_error(code))
        with pytest.raises(error_type):
            client.generate_commit_message("diff", None, "main")

    def test_other_http_errors_carry_api_message(self, client, monkeypatch):
        body = json.dumps({"error": {"message": "model overloaded"}}).encode()
        self._reply_with(monkeypatch, client, exc=http_error(503, body))
        with pytest.raises(LLMError, match="model overloaded"):
            client.generate_commit_message("diff", None, "main")

    @pytest.mark.parametrize("exc", [
        urllib.error.URLError(ConnectionRefusedError("refused")),
        urllib.error.URLError(socket.timeout("timed out")),
        socket.timeout("timed out"),
        ConnectionResetError("reset"),
    ])
    def test_transport_errors(self, client, monkeypatch, exc):
        self._reply_with(monkeypatch, client, exc=exc)
        with pytest.raises(NetworkError):
            client.generate_commit_message("diff", None, "main")

    def test_all_errors_share_base(self):
        for error_type in (AuthenticationError, PermissionDeniedError, RateLimitError,
                           NetworkError, EmptyResponseError, SensitiveContentError):
            assert issubclass(error_type, LLMError)
