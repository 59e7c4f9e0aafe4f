"""
Request payload validation for quiz authoring.

Validators return ``(cleaned, error_message)``; error_message is None when
the payload is acceptable.
"""
from typing import Any, Optional

from quizmaker.quiz.models import QUESTION_TYPES


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


# Distinguishes "key absent" from an explicit JSON null
MISSING = _Missing()

# Signed 64-bit range shared by SQLite INTEGER and BIGINT columns
DB_INT_MIN = -(2 ** 63)
DB_INT_MAX = 2 ** 63 - 1


def get_json_body(request) -> dict:
    """Request JSON as a dict; anything else (absent, malformed, list) is treated as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    return None


def coerce_optional_int(value: Any) -> tuple[Optional[int], Optional[str]]:
    """Accept null, ints and integer strings that fit a database integer column."""
    if value is None:
        return None, None
    number = _to_int(value)
    if number is None:
        return None, "must be an integer"
    if not DB_INT_MIN <= number <= DB_INT_MAX:
        return None, "is out of range"
    return number, None


def answer_key_text(value: Any) -> str:
    """Correct answers are stored as text; integral floats keep their integer form."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def validate_options(options: Any) -> Optional[str]:
    if not isinstance(options, list) or not all(isinstance(option, str) for option in options):
        return "options must be a list of strings"
    return None


def validate_quiz_create(data: dict) -> tuple[dict, Optional[str]]:
    title = data.get("title")
    description = data.get("description")
    if not title or not description:
        return {}, "title and description are required"
    if not isinstance(title, str) or not isinstance(description, str):
        return {}, "title and description must be strings"

    time_limit, error = coerce_optional_int(data.get("timeLimitSeconds"))
    if error:
        return {}, f"timeLimitSeconds {error}"

    return {
        "title": title,
        "description": description,
        "time_limit_seconds": time_limit,
        "is_published": bool(data.get("isPublished")),
    }, None


def validate_quiz_update(data: dict) -> tuple[dict, Optional[str]]:
    """Only keys present with a non-null value are changed."""
    changes = {}
    for key, column in (("title", "title"), ("description", "description")):
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            return {}, f"{key} must be a string"
        changes[column] = value

    if data.get("timeLimitSeconds") is not None:
        time_limit, error = coerce_optional_int(data["timeLimitSeconds"])
        if error:
            return {}, f"timeLimitSeconds {error}"
        changes["time_limit_seconds"] = time_limit

    if data.get("isPublished") is not None:
        changes["is_published"] = bool(data["isPublished"])

    return changes, None


def validate_question_create(data: dict) -> tuple[dict, Optional[str]]:
    """
    Validate a new question.

    - mcq needs a list of at least two options and a correct answer
      (index or option text); numeric answers are stored as text.
    - short and code need a string (or null, stored as "") correct answer.
    """
    question_type = data.get("type")
    prompt = data.get("prompt")
    if not question_type or not prompt:
        return {}, "type and prompt are required"
    if not isinstance(prompt, str):
        return {}, "prompt must be a string"
    if question_type not in QUESTION_TYPES:
        return {}, "invalid type"

    options = None
    correct_answer = data.get("correctAnswer", MISSING)

    if question_type == "mcq":
        options = data.get("options")
        if not isinstance(options, list) or len(options) < 2:
            return {}, "mcq requires options (>=2)"
        error = validate_options(options)
        if error:
            return {}, error
        if correct_answer is MISSING or correct_answer is None:
            return {}, "mcq requires correctAnswer (index or text)"
        correct_answer = answer_key_text(correct_answer)
    else:
        if correct_answer is MISSING or not (correct_answer is None or isinstance(correct_answer, str)):
            return {}, f"{question_type} requires correctAnswer (string)"
        correct_answer = correct_answer or ""

    position, error = coerce_optional_int(data.get("position"))
    if error:
        return {}, f"position {error}"

    return {
        "type": question_type,
        "prompt": prompt,
        "options": options,
        "correct_answer": correct_answer,
        "position": position,
    }, None


def validate_question_update(data: dict) -> tuple[dict, Optional[str]]:
    """
    Partial question update. Absent or null fields are left unchanged,
    except ``options`` where an explicit null clears the list.
    """
    changes = {}

    question_type = data.get("type")
    if question_type:
        if question_type not in QUESTION_TYPES:
            return {}, "invalid type"
        changes["type"] = question_type

    if data.get("prompt") is not None:
        if not isinstance(data["prompt"], str):
            return {}, "prompt must be a string"
        changes["prompt"] = data["prompt"]

    options = data.get("options", MISSING)
    if options is not MISSING:
        if options is not None:
            if not isinstance(options, list):
                return {}, "options must be array or null"
            error = validate_options(options)
            if error:
                return {}, error
        changes["options"] = options

    if data.get("correctAnswer") is not None:
        changes["correct_answer"] = answer_key_text(data["correctAnswer"])

    if data.get("position") is not None:
        position, error = coerce_optional_int(data["position"])
        if error:
            return {}, f"position {error}"
        changes["position"] = position

    return changes, None
