"""Tests for the pull request review service."""

from unittest.mock import MagicMock

import pytest

from ghai_core.models import FileChange, ParsedReview, PullRequestInfo
from ghai_core.review import (
    MAX_DIFF_CHARS,
    build_system_prompt,
    build_user_prompt,
    determine_event,
    format_review_markdown,
    post_review,
    review_pull_request,
)

ZH_RESPONSE = """## 总结
添加登录功能

## 评分
85/100

## 问题
- 缺少单元测试

## 建议
- 添加测试覆盖
"""


def make_pr(diff="--- a.py\n+x = 1", body="Adds login"):
    return PullRequestInfo(
        number=123,
        title="Add login",
        body=body,
        author="octocat",
        state="open",
        base_ref="main",
        head_ref="feature/login",
        files=(FileChange("a.py", "modified", additions=10, deletions=2, patch="+x = 1"),),
        diff=diff,
    )


class StubProvider:
    def __init__(self, reply):
        self.reply = reply
        self.calls = []

    def chat(self, system_prompt, user_prompt):
        self.calls.append((system_prompt, user_prompt))
        return self.reply


class TestPrompts:
    @pytest.mark.parametrize(
        "focus, needle",
        [("security", "安全"), ("performance", "性能"), ("style", "风格"), ("all", "全面")],
    )
    def test_focus_instruction_in_chinese_prompt(self, focus, needle):
        assert needle in build_system_prompt(focus, "zh")

    def test_unknown_focus_falls_back_to_full_review(self):
        assert "Full review" in build_system_prompt("vibes", "en")

    def test_english_prompt_uses_english_headers(self):
        prompt = build_system_prompt("all", "en")
        assert "## Summary" in prompt
        assert "## Suggestions" in prompt

    def test_user_prompt_contains_pr_details(self):
        prompt = build_user_prompt(make_pr())
        assert "Add login" in prompt
        assert "octocat" in prompt
        assert "feature/login -> main" in prompt
        assert "Lines changed: 12" in prompt

    def test_user_prompt_marks_missing_description(self):
        assert "(no description)" in build_user_prompt(make_pr(body=""))

    def test_diff_is_truncated(self):
        prompt = build_user_prompt(make_pr(diff="x" * (MAX_DIFF_CHARS + 500)))
        assert "... (truncated)" in prompt
        assert "x" * (MAX_DIFF_CHARS + 1) not in prompt


class TestReviewPullRequest:
    def test_parses_model_response(self):
        provider = StubProvider(ZH_RESPONSE)
        result = review_pull_request(provider, make_pr(), "security", "zh")
        assert result.summary == "添加登录功能"
        assert result.score == 85
        assert result.issues == ("缺少单元测试",)
        assert result.suggestions == ("添加测试覆盖",)
        assert "安全" in provider.calls[0][0]

    def test_unparseable_response_still_returns_result(self):
        result = review_pull_request(StubProvider("Sorry, I can't help."), make_pr())
        assert result.score == 70
        assert result.issues == ()

    def test_provider_error_propagates(self):
        provider = MagicMock()
        provider.chat.side_effect = RuntimeError("rate limited")
        with pytest.raises(RuntimeError, match="rate limited"):
            review_pull_request(provider, make_pr())


class TestDetermineEvent:
    def test_approve_at_threshold(self):
        assert determine_event(ParsedReview(score=80)) == "APPROVE"

    def test_comment_below_threshold(self):
        assert determine_event(ParsedReview(score=79)) == "COMMENT"

    def test_default_score_is_not_approved(self):
        assert determine_event(ParsedReview()) == "COMMENT"

    def test_custom_threshold(self):
        assert determine_event(ParsedReview(score=75), threshold=70) == "APPROVE"


class TestFormatReviewMarkdown:
    def test_includes_score_and_lists(self):
        body = format_review_markdown(ParsedReview("ok", 90, ("bug",), ("fix",)))
        assert "**Score**: 90/100" in body
        assert "- bug" in body
        assert "- fix" in body

    def test_omits_empty_sections(self):
        body = format_review_markdown(ParsedReview(summary="fine", score=95))
        assert "Issues" not in body
        assert "Suggestions" not in body


class TestPostReview:
    def test_posts_with_selected_event(self):
        repo = MagicMock()
        event = post_review(repo, 7, ParsedReview(score=92))
        assert event == "APPROVE"
        repo.get_pull.assert_called_once_with(7)
        kwargs = repo.get_pull.return_value.create_review.call_args.kwargs
        assert kwargs["event"] == "APPROVE"
        assert "92/100" in kwargs["body"]
