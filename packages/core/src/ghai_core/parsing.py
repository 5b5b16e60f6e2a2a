"""Best-effort extraction of structured fields from free-form model output.

Models do not reliably follow an output format, so every function here is
total over ``str``: a missing header, key or number degrades to an empty value
or a documented default instead of raising. Only a ``None`` argument is
treated as a programming error.

Review responses are sectioned by markdown headers::

    ## Summary
    One sentence.
    ## Score
    85/100
    ## Issues
    - first issue
    ## Suggestions
    - first suggestion

Classification responses are flat ``key: value`` lines.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

from ghai_core.models import DEFAULT_SCORE, MAX_SCORE, ParsedClassification, ParsedReview

logger = logging.getLogger(__name__)

# Only ASCII digits: "85/100" must yield 85, and full-width or other
# Unicode digits are not part of the score format.
_DIGITS_RE = re.compile(r"[0-9]+")
_LABEL_SPLIT_RE = re.compile(r"[,，]")
_KEY_SEPARATORS = (":", "：")

REVIEW_SECTIONS: dict[str, tuple[str, str, str, str]] = {
    # summary, score, issues, suggestions
    "zh": ("## 总结", "## 评分", "## 问题", "## 建议"),
    "en": ("## Summary", "## Score", "## Issues", "## Suggestions"),
}

CLASSIFICATION_KEYS: dict[str, tuple[str, str]] = {
    "type": ("类型", "Type"),
    "priority": ("优先级", "Priority"),
    "labels": ("标签", "Labels"),
    "reasoning": ("理由", "Reasoning"),
}


def _require_text(text: Optional[str], name: str = "text") -> str:
    if text is None:
        raise TypeError(f"{name} must be a str, not None")
    return text


def extract_section(text: str, start: str, end: Optional[str] = None) -> str:
    """Return the stripped text between ``start`` and ``end``.

    ``end`` is searched for only after ``start``; when it is ``None`` or not
    found the section runs to the end of the text. A missing ``start`` yields
    an empty string.
    """
    text = _require_text(text)
    start_idx = text.find(start)
    if start_idx == -1:
        return ""
    start_idx += len(start)

    end_idx = text.find(end, start_idx) if end else -1
    if end_idx == -1:
        end_idx = len(text)
    return text[start_idx:end_idx].strip()


def split_sections(text: str, boundaries: Iterable[tuple[str, Optional[str]]]) -> dict[str, str]:
    """Split ``text`` into sections keyed by header label.

    ``boundaries`` is an ordered sequence of ``(label, next_label)`` pairs;
    ``next_label`` may be ``None`` for the last section.
    """
    text = _require_text(text)
    return {label: extract_section(text, label, next_label) for label, next_label in boundaries}


def extract_list(section_text: str) -> list[str]:
    """Return the bullet items of a section, marker stripped, in source order."""
    section_text = _require_text(section_text, "section_text")
    items = []
    for line in section_text.splitlines():
        line = line.strip()
        if not line.startswith("-"):
            continue
        item = line[1:].strip()
        if item:
            items.append(item)
    return items


def extract_score(section_text: str, default: int = DEFAULT_SCORE, maximum: int = MAX_SCORE) -> int:
    """Return the first integer in ``section_text`` clamped to ``[0, maximum]``.

    Falls back to ``default`` when the section holds no number.
    """
    section_text = _require_text(section_text, "section_text")
    match = _DIGITS_RE.search(section_text)
    if match is None:
        logger.debug("No score found in %r; using default %d", section_text[:80], default)
        return default
    try:
        score = int(match.group())
    except ValueError:
        return default
    return max(0, min(score, maximum))


def extract_key_value(text: str, key: str) -> str:
    """Return the value of the first ``key: value`` line, or ``""``.

    ``:`` and the full-width ``：`` are interchangeable separators. The value
    is everything after the earliest separator on the matching line.
    """
    text = _require_text(text)
    markers = tuple(key + sep for sep in _KEY_SEPARATORS)
    for line in text.splitlines():
        if not any(marker in line for marker in markers):
            continue
        positions = [pos for pos in (line.find(sep) for sep in _KEY_SEPARATORS) if pos != -1]
        return line[min(positions) + 1 :].strip()
    return ""


def split_labels(value: str) -> list[str]:
    """Split a comma-separated label value; ``,`` and ``，`` are equivalent."""
    value = _require_text(value, "value")
    return [token.strip() for token in _LABEL_SPLIT_RE.split(value) if token.strip()]


def parse_review(text: str, language: str = "zh") -> ParsedReview:
    """Parse a sectioned review response into a ParsedReview.

    Unknown languages fall back to the Chinese headers, which is the default
    prompt language.
    """
    summary_h, score_h, issues_h, suggestions_h = REVIEW_SECTIONS.get(language, REVIEW_SECTIONS["zh"])
    sections = split_sections(
        text,
        [
            (summary_h, score_h),
            (score_h, issues_h),
            (issues_h, suggestions_h),
            (suggestions_h, None),
        ],
    )
    return ParsedReview(
        summary=sections[summary_h],
        score=extract_score(sections[score_h]),
        issues=tuple(extract_list(sections[issues_h])),
        suggestions=tuple(extract_list(sections[suggestions_h])),
    )


def _first_value(text: str, keys: tuple[str, ...]) -> str:
    for key in keys:
        value = extract_key_value(text, key)
        if value:
            return value
    return ""


def parse_classification(text: str) -> ParsedClassification:
    """Parse ``key: value`` classification output in either language."""
    text = _require_text(text)
    return ParsedClassification(
        type=_first_value(text, CLASSIFICATION_KEYS["type"]),
        priority=_first_value(text, CLASSIFICATION_KEYS["priority"]),
        labels=tuple(split_labels(_first_value(text, CLASSIFICATION_KEYS["labels"]))),
        reasoning=_first_value(text, CLASSIFICATION_KEYS["reasoning"]),
    )
