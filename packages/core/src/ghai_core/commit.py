"""Commit message generation from the staged diff."""

from __future__ import annotations

from ghai_core.errors import NothingStagedError
from ghai_core.providers.base import BaseChatProvider
from ghai_core.utils.text import truncate

MAX_DIFF_CHARS = 4000
STYLE_CHOICES = ("conventional", "simple")

_CONVENTIONAL = """Use the Conventional Commits format:
<type>(<scope>): <subject>

<body>

Types: feat, fix, docs, style, refactor, test, chore"""


def build_system_prompt(language: str = "zh", style: str = "conventional") -> str:
    if style == "conventional":
        style_instruction = _CONVENTIONAL
    elif language == "zh":
        style_instruction = "生成简洁的一行 commit message。"
    else:
        style_instruction = "Generate a concise one-line commit message."

    if language == "zh":
        return f"""你是一个专业的软件工程师，擅长写清晰、规范的 Git commit message。

**重要：必须使用中文生成 commit message 的 subject 和 body 部分。**

{style_instruction}

规则：
1. type 和 scope 保持英文（如 feat, fix, chore）
2. subject 和 body 必须用中文
3. subject 不超过 50 个字符
4. body 解释"为什么"而不是"做了什么"
5. 不要在末尾加句号"""

    return f"""You are a professional software engineer skilled at writing clear, standard Git commit messages.

{style_instruction}

Rules:
1. Subject should not exceed 50 characters
2. Body explains "why" not "what"
3. Use imperative mood (e.g., "Add feature" not "Added feature")
4. Do not end with a period"""


def build_user_prompt(diff: str) -> str:
    return f"""Write a commit message for this staged diff:

```diff
{truncate(diff, MAX_DIFF_CHARS, "... (diff truncated)")}
```

Output only the commit message, nothing else."""


def generate_commit_message(
    provider: BaseChatProvider,
    diff: str,
    language: str = "zh",
    style: str = "conventional",
) -> str:
    if not diff.strip():
        raise NothingStagedError("No staged changes. Stage files with `git add` first.")
    return provider.chat(build_system_prompt(language, style), build_user_prompt(diff)).strip()
