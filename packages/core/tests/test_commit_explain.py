"""Tests for commit message generation and explanations."""

import pytest

from ghai_core.commit import MAX_DIFF_CHARS, build_system_prompt, generate_commit_message
from ghai_core.errors import NothingStagedError
from ghai_core.explain import KIND_CODE, KIND_GIT, detect_kind, explain


class StubProvider:
    def __init__(self, reply):
        self.reply = reply
        self.calls = []

    def chat(self, system_prompt, user_prompt):
        self.calls.append((system_prompt, user_prompt))
        return self.reply


class TestGenerateCommitMessage:
    def test_empty_diff_raises(self):
        with pytest.raises(NothingStagedError):
            generate_commit_message(StubProvider("x"), "   \n")

    def test_strips_reply(self):
        provider = StubProvider("\nfeat(auth): add login\n\n")
        assert generate_commit_message(provider, "+x", "en") == "feat(auth): add login"

    def test_long_diff_truncated(self):
        provider = StubProvider("msg")
        generate_commit_message(provider, "+" * (MAX_DIFF_CHARS + 10))
        assert "... (diff truncated)" in provider.calls[0][1]

    def test_chinese_prompt_requires_chinese(self):
        assert "中文" in build_system_prompt("zh", "conventional")

    def test_simple_style_in_english(self):
        prompt = build_system_prompt("en", "simple")
        assert "one-line" in prompt
        assert "Conventional Commits" not in prompt


class TestExplain:
    def test_detects_git_command(self):
        assert detect_kind("git rebase -i HEAD~3") == KIND_GIT
        assert detect_kind("  git status") == KIND_GIT

    def test_detects_code(self):
        assert detect_kind("for i in range(3): print(i)") == KIND_CODE
        assert detect_kind("gitignore rules") == KIND_CODE

    def test_explain_git_command_prompt(self):
        provider = StubProvider("It rewrites history.")
        assert explain(provider, "git rebase -i", language="en", detail="simple") == "It rewrites history."
        system, user = provider.calls[0]
        assert "Git expert" in system
        assert "Please answer in English." in system
        assert user.startswith("Explain this Git command")

    def test_explain_code_is_fenced(self):
        provider = StubProvider("ok")
        explain(provider, "x = 1", KIND_CODE)
        assert "```\nx = 1\n```" in provider.calls[0][1]
