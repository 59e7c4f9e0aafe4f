"""
Attempt grading.

Scores an attempt by comparing each recorded answer against the question's
correct answer:
- mcq: the correct answer may be stored as an option index or as the option
  text; both resolve to the same option. A submitted value is correct when it
  is that index or, as text, the option itself.
- short / code: submitted and expected strings are compared after
  normalization (trim, lowercase, collapse whitespace).

Grading never raises on malformed question data; such questions are simply
marked incorrect.
"""
import math
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional


_WHITESPACE = re.compile(r"\s+")


def normalize_text(value: Any) -> str:
    """Trim, lowercase and collapse runs of whitespace to a single space."""
    return _WHITESPACE.sub(" ", str(value).strip().lower())


def parse_index(value: Any) -> Optional[int]:
    """
    Read value as a whole number, or return None.

    Accepts ints and numeric strings such as "2", " 2 " or "2.0".
    Blank strings, booleans, fractions and non-finite numbers are not indexes.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    return int(number)


def resolve_correct_index(correct_answer: Any, options: Any) -> Optional[int]:
    """
    Resolve an mcq correct answer to the index of an existing option.

    A numeric answer is taken as the index; anything else is matched against
    the options by normalized text (first match wins). Returns None when the
    answer is missing or does not designate one of the options, or when the
    designated option is not a string.
    """
    if correct_answer is None or not isinstance(options, list):
        return None

    index = parse_index(correct_answer)
    if index is None:
        wanted = normalize_text(correct_answer)
        for position, option in enumerate(options):
            if isinstance(option, str) and normalize_text(option) == wanted:
                return position
        return None

    if 0 <= index < len(options) and isinstance(options[index], str):
        return index
    return None


@dataclass
class QuestionGrade:
    """Outcome for one question."""
    question_id: int
    correct: bool
    expected: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "questionId": self.question_id,
            "correct": self.correct,
            "expected": self.expected,
        }


@dataclass
class GradingResult:
    """Score plus per-question details, in question order."""
    score: int = 0
    details: list[QuestionGrade] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.details)

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "details": [detail.to_dict() for detail in self.details],
        }


def grade_mcq(question, submitted: Optional[str]) -> QuestionGrade:
    index = resolve_correct_index(question.correct_answer, question.options)
    if index is None:
        return QuestionGrade(question.id, False)

    expected = question.options[index]
    if submitted is None:
        return QuestionGrade(question.id, False, expected)

    submitted_index = parse_index(submitted)
    if submitted_index is not None:
        correct = submitted_index == index
    else:
        correct = normalize_text(submitted) == normalize_text(expected)
    return QuestionGrade(question.id, correct, expected)


def grade_text(question, submitted: Optional[str]) -> QuestionGrade:
    expected = question.correct_answer if question.correct_answer is not None else ""
    if submitted is None:
        return QuestionGrade(question.id, False, expected)
    correct = normalize_text(submitted) == normalize_text(expected)
    return QuestionGrade(question.id, correct, expected)


GRADERS = {
    "mcq": grade_mcq,
    "short": grade_text,
    "code": grade_text,
}


def grade_question(question, submitted: Optional[str]) -> QuestionGrade:
    """
    Grade a single question.

    Args:
        question: Object exposing id, type, options and correct_answer
            (a Question model or anything shaped like it)
        submitted: The recorded answer, or None if the taker skipped it

    Returns:
        QuestionGrade for the question
    """
    grader = GRADERS.get(question.type)
    if grader is None:
        return QuestionGrade(question.id, False)
    return grader(question, submitted)


def grade_attempt(questions: Iterable, answers: Mapping[int, str]) -> GradingResult:
    """
    Grade every question of a quiz against the recorded answers.

    Args:
        questions: The quiz's questions in display order
        answers: Submitted values keyed by question id; ids that are not
            among the questions are ignored

    Returns:
        GradingResult whose details follow the order of ``questions``
    """
    result = GradingResult()
    for question in questions:
        grade = grade_question(question, answers.get(question.id))
        if grade.correct:
            result.score += 1
        result.details.append(grade)
    return result
