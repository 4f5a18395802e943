"""Best-effort policy filter for incoming questions.

Rejects blank questions, requests for answer keys, solutions or
translations (English and Russian wording), and overly long questions. The
patterns are trivially bypassed by rephrasing; this is a guard rail, not a
security boundary.
"""

from __future__ import annotations

import re
from typing import Sequence

from tutor_proxy.core.errors import (
    EmptyQuestionError,
    ForbiddenContentError,
    QuestionTooLongError,
)

DEFAULT_MAX_WORDS = 120

# Order only decides which pattern gets reported, not whether a question passes.
FORBIDDEN_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"answer\s*key",
        r"решен",
        r"translate",
        r"перевод",
        r"реш(ени|ать)",
    )
)

_WHITESPACE = re.compile(r"\s+")


def count_words(text: str) -> int:
    """Number of whitespace-delimited tokens in ``text``."""
    stripped = text.strip()
    if not stripped:
        return 0
    return len(_WHITESPACE.split(stripped))


def validate_question(
    question: str,
    *,
    max_words: int = DEFAULT_MAX_WORDS,
    patterns: Sequence[re.Pattern[str]] = FORBIDDEN_PATTERNS,
) -> str:
    """Check ``question`` and return it trimmed.

    Checks run in order and stop at the first failure: blank, forbidden
    pattern, too many words.

    Raises:
        EmptyQuestionError: Nothing left after trimming.
        ForbiddenContentError: A forbidden pattern matched.
        QuestionTooLongError: More than ``max_words`` words.
    """
    trimmed = question.strip()
    if not trimmed:
        raise EmptyQuestionError()

    for pattern in patterns:
        if pattern.search(question):
            raise ForbiddenContentError(pattern=pattern.pattern)

    words = count_words(trimmed)
    if words > max_words:
        raise QuestionTooLongError(max_words=max_words, actual_words=words)

    return trimmed
