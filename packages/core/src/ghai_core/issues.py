"""Issue triage: classification, reply suggestions and open-issue summaries."""

from __future__ import annotations

from ghai_core.gh.client import get_open_issues
from ghai_core.models import ParsedClassification
from ghai_core.parsing import parse_classification
from ghai_core.providers.base import BaseChatProvider

MAX_SUMMARIZED_ISSUES = 20
NO_OPEN_ISSUES = "🎉 No open issues!"

_CLASSIFY_SYSTEM = """你是一个项目管理专家，擅长对 GitHub Issue 进行分类。

请分析 Issue 并输出：
1. 类型: bug/feature/enhancement/question/documentation/other
2. 优先级: low/medium/high/critical
3. 建议标签: 最多3个相关标签
4. 分类理由: 简短说明

格式：
类型: xxx
优先级: xxx
标签: xxx, xxx
理由: xxx"""

_CLASSIFY_SYSTEM_EN = """You are a project manager who triages GitHub issues.

Analyse the issue and answer with:
1. Type: bug/feature/enhancement/question/documentation/other
2. Priority: low/medium/high/critical
3. Labels: up to 3 relevant labels
4. Reasoning: a short justification

Format:
Type: xxx
Priority: xxx
Labels: xxx, xxx
Reasoning: xxx"""

_REPLY_SYSTEM = """You are a friendly, professional open-source maintainer.
Write a reply to this issue that:
1. is polite and welcoming
2. is technically accurate
3. for a bug, acknowledges it and states the next step
4. for a feature request, thanks the author and explains how it will be considered
5. asks for more information politely when needed

Output only the reply text."""

_SUMMARY_SYSTEM = """You are a project manager. Summarise the issues below with:
1. an overview of the overall state
2. counts by type
3. issues worth handling first, if you can tell
4. a closing summary with recommendations

Use clear headings."""


def _language_line(language: str) -> str:
    return "请用中文回答。" if language == "zh" else "Answer in English."


def _issue_prompt(issue) -> str:
    return f"Title: {issue.title}\n\nBody:\n{issue.body or '(empty)'}"


def classify_issue(provider: BaseChatProvider, issue, language: str = "zh") -> ParsedClassification:
    system = _CLASSIFY_SYSTEM if language == "zh" else _CLASSIFY_SYSTEM_EN
    raw = provider.chat(system, "Classify this issue:\n\n" + _issue_prompt(issue))
    return parse_classification(raw)


def suggest_reply(provider: BaseChatProvider, issue, language: str = "zh") -> str:
    system = f"{_REPLY_SYSTEM}\n{_language_line(language)}"
    return provider.chat(system, _issue_prompt(issue) + "\n\nWrite the reply:")


def summarize_open_issues(provider: BaseChatProvider, repo, language: str = "zh") -> str:
    """Summarise up to MAX_SUMMARIZED_ISSUES open issues of ``repo``.

    Returns a fixed message without calling the model when nothing is open.
    """
    issues = get_open_issues(repo)
    if not issues:
        return NO_OPEN_ISSUES

    issue_list = "\n".join(f"- #{i.number}: {i.title}" for i in issues[:MAX_SUMMARIZED_ISSUES])
    user = f"""Repository: {repo.full_name}
Open issues: {len(issues)}

Issues:
{issue_list}

Summarise:"""
    return provider.chat(f"{_SUMMARY_SYSTEM}\n{_language_line(language)}", user)
