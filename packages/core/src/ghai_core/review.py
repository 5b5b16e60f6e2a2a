"""Pull request review: prompt assembly, response parsing and posting."""

from __future__ import annotations

import logging

from ghai_core.gh.client import create_review
from ghai_core.models import ParsedReview, PullRequestInfo
from ghai_core.parsing import REVIEW_SECTIONS, parse_review
from ghai_core.providers.base import BaseChatProvider
from ghai_core.utils.text import truncate

logger = logging.getLogger(__name__)

MAX_DIFF_CHARS = 6000
DEFAULT_APPROVE_THRESHOLD = 80

FOCUS_CHOICES = ("security", "performance", "style", "all")

_FOCUS_INSTRUCTIONS = {
    "zh": {
        "security": "重点关注安全问题：SQL注入、XSS、敏感信息泄露等",
        "performance": "重点关注性能问题：N+1查询、内存泄漏、算法复杂度等",
        "style": "重点关注代码风格：命名规范、代码结构、注释等",
        "all": "全面审查：安全、性能、代码风格、最佳实践",
    },
    "en": {
        "security": "Focus on security: SQL injection, XSS, leaked secrets and similar",
        "performance": "Focus on performance: N+1 queries, memory leaks, algorithmic complexity",
        "style": "Focus on style: naming, structure, comments",
        "all": "Full review: security, performance, style and best practices",
    },
}


def _lang(language: str) -> str:
    return language if language in REVIEW_SECTIONS else "zh"


def build_system_prompt(focus: str = "all", language: str = "zh") -> str:
    lang = _lang(language)
    instructions = _FOCUS_INSTRUCTIONS[lang]
    focus_instruction = instructions.get(focus.lower(), instructions["all"])
    summary_h, score_h, issues_h, suggestions_h = REVIEW_SECTIONS[lang]

    if lang == "zh":
        return f"""你是一个资深的代码审查专家，擅长发现代码中的问题和改进点。

审查重点：{focus_instruction}

请按以下格式输出审查结果：

{summary_h}
[一句话总结这个 PR]

{score_h}
[0-100 分数]

{issues_h}
- [问题1]
- [问题2]

{suggestions_h}
- [建议1]
- [建议2]

注意：
1. 客观公正，有理有据
2. 问题要具体到文件和行号（如果可能）
3. 建议要可操作"""

    return f"""You are a senior code reviewer who is good at spotting problems and improvements.

Review focus: {focus_instruction}

Answer in exactly this format:

{summary_h}
[one-sentence summary of the PR]

{score_h}
[score from 0 to 100]

{issues_h}
- [issue 1]
- [issue 2]

{suggestions_h}
- [suggestion 1]
- [suggestion 2]

Notes:
1. Be objective and back every point with evidence
2. Point to files and line numbers where possible
3. Keep suggestions actionable"""


def build_user_prompt(pr: PullRequestInfo) -> str:
    return f"""Please review the following pull request:

## PR
- Title: {pr.title}
- Author: {pr.author}
- Branch: {pr.head_ref} -> {pr.base_ref}
- Files changed: {len(pr.files)}
- Lines changed: {pr.total_changes}

## Description
{pr.body or "(no description)"}

## Changes
```diff
{truncate(pr.diff, MAX_DIFF_CHARS)}
```"""


def review_pull_request(
    provider: BaseChatProvider,
    pr: PullRequestInfo,
    focus: str = "all",
    language: str = "zh",
) -> ParsedReview:
    """Ask the model to review ``pr`` and parse its sectioned answer."""
    raw = provider.chat(build_system_prompt(focus, language), build_user_prompt(pr))
    result = parse_review(raw, _lang(language))
    logger.debug("PR #%d scored %d with %d issue(s)", pr.number, result.score, len(result.issues))
    return result


def determine_event(result: ParsedReview, threshold: int = DEFAULT_APPROVE_THRESHOLD) -> str:
    """Approve at or above ``threshold``; otherwise leave a plain comment."""
    return "APPROVE" if result.score >= threshold else "COMMENT"


def format_review_markdown(result: ParsedReview) -> str:
    """Render a ParsedReview as the GitHub review body."""
    lines = ["## 🤖 AI Code Review\n", f"**Score**: {result.score}/100\n", "### Summary", result.summary or "-", ""]

    if result.issues:
        lines.append("### ⚠️ Issues")
        lines.extend(f"- {issue}" for issue in result.issues)
        lines.append("")

    if result.suggestions:
        lines.append("### 💡 Suggestions")
        lines.extend(f"- {suggestion}" for suggestion in result.suggestions)
        lines.append("")

    lines.append("---\n*Generated by ghai*")
    return "\n".join(lines)


def post_review(repo, pr_number: int, result: ParsedReview, threshold: int = DEFAULT_APPROVE_THRESHOLD) -> str:
    """Post ``result`` as a pull request review and return the event used."""
    event = determine_event(result, threshold)
    create_review(repo, pr_number, format_review_markdown(result), event)
    return event
