"""Explanations of git commands and code snippets."""

from __future__ import annotations

KIND_GIT = "git-command"
KIND_CODE = "code"
DETAIL_CHOICES = ("simple", "detailed")

_KIND_CONTEXT = {
    KIND_GIT: """You are a Git expert who explains commands and workflows.
Cover:
1. what the command does
2. what each option means
3. the resulting state of the repository
4. risks, if any
5. related alternative commands""",
    KIND_CODE: """You are a senior software engineer who explains code in any language.
Cover:
1. what the code does
2. the key logic
3. design patterns, if any are used
4. potential problems, if any""",
}


def detect_kind(text: str) -> str:
    return KIND_GIT if text.strip().startswith("git ") else KIND_CODE


def build_system_prompt(kind: str, language: str = "zh", detail: str = "detailed") -> str:
    context = _KIND_CONTEXT.get(kind, "You are a technical expert who explains technical concepts.")
    lang_instruction = "请用中文回答。" if language == "zh" else "Please answer in English."
    if detail == "detailed":
        detail_instruction = "Give a detailed explanation: how it works, when to use it, caveats and examples."
    else:
        detail_instruction = "Give a short explanation of the core behaviour in one or two sentences."
    return f"{context}\n\n{lang_instruction}\n{detail_instruction}"


def build_user_prompt(content: str, kind: str) -> str:
    if kind == KIND_GIT:
        return f"Explain this Git command:\n\n{content}"
    if kind == KIND_CODE:
        return f"Explain this code:\n\n```\n{content}\n```"
    return f"Explain:\n\n{content}"


def explain(provider, content: str, kind: str | None = None, language: str = "zh", detail: str = "detailed") -> str:
    kind = kind or detect_kind(content)
    return provider.chat(build_system_prompt(kind, language, detail), build_user_prompt(content, kind))
