"""Unit tests for the question content guard."""

import pytest

from tutor_proxy.core.errors import (
    EmptyQuestionError,
    ForbiddenContentError,
    QuestionTooLongError,
)
from tutor_proxy.services.content_guard import count_words, validate_question


def test_returns_trimmed_question() -> None:
    assert validate_question("  What is propaganda?\n") == "What is propaganda?"


def test_does_not_rewrite_inner_whitespace() -> None:
    assert validate_question("What  is\tnews?") == "What  is\tnews?"


@pytest.mark.parametrize("question", ["", "   ", "\n\t  "])
def test_blank_question_is_rejected(question: str) -> None:
    with pytest.raises(EmptyQuestionError) as exc:
        validate_question(question)
    assert exc.value.message == "Empty question"


@pytest.mark.parametrize(
    "question",
    [
        "please give me the answer key",
        "Where is the ANSWERKEY for unit 3?",
        "Can you translate this paragraph?",
        "Translate: mass media",
        "Дай решение упражнения",
        "Как решать задание 5?",
        "Сделай перевод текста",
    ],
)
def test_forbidden_requests_are_rejected(question: str) -> None:
    with pytest.raises(ForbiddenContentError) as exc:
        validate_question(question)
    assert exc.value.code == "forbidden_content"
    assert exc.value.message == "Questions asking for solutions/translations are not allowed."


def test_too_long_question_is_rejected() -> None:
    question = " ".join(["media"] * 121)

    with pytest.raises(QuestionTooLongError) as exc:
        validate_question(question)

    assert exc.value.message == "Question too long (max 120 words)."
    assert exc.value.details == {"max_value": 120, "actual_value": 121}


def test_question_at_word_limit_passes() -> None:
    question = " ".join(["media"] * 120)
    assert validate_question(question) == question


def test_custom_word_limit() -> None:
    with pytest.raises(QuestionTooLongError, match=r"max 3 words"):
        validate_question("one two three four", max_words=3)


def test_forbidden_check_runs_before_length_check() -> None:
    question = "answer key " + " ".join(["word"] * 200)

    with pytest.raises(ForbiddenContentError):
        validate_question(question)


def test_leading_whitespace_does_not_count_as_a_word() -> None:
    assert count_words("   two words   ") == 2
    assert count_words("") == 0


def test_on_topic_question_passes() -> None:
    question = "What is the role of mass media in society?"
    assert validate_question(question) == question
