"""
Database models for quiz functionality.

Supports three question types:
- mcq: Multiple choice, correct_answer holds an option index or the option text
- short: Short text answer, compared after normalization
- code: Code answer, compared after normalization like short answers
"""
from datetime import datetime, timezone

from quizmaker import db


QUESTION_TYPES = ("mcq", "short", "code")
MAX_EVENT_LENGTH = 255


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _isoformat(value):
    return value.isoformat() if value else None


class Quiz(db.Model):
    """Model for a quiz authored by a creator."""
    __tablename__ = "quizzes"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    time_limit_seconds = db.Column(db.Integer, nullable=True)  # Optional time limit
    is_published = db.Column(db.Boolean, default=False, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)

    # Relationships
    questions = db.relationship("Question", backref="quiz", lazy="dynamic", cascade="all, delete-orphan")
    attempts = db.relationship("Attempt", backref="quiz", lazy="dynamic", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Quiz {self.id}: {self.title}>"

    def ordered_questions(self) -> list["Question"]:
        """Questions in display order: position, then id."""
        return self.questions.order_by(Question.position, Question.id).all()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "timeLimitSeconds": self.time_limit_seconds,
            "isPublished": bool(self.is_published),
            "createdAt": _isoformat(self.created_at),
        }


class Question(db.Model):
    """
    Model for quiz questions.

    correct_answer is stored as text for every type. For mcq it is either
    the option index ("2") or the option text; the grading engine resolves
    both forms to the same option.
    """
    __tablename__ = "questions"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    type = db.Column(db.String(16), nullable=False)
    prompt = db.Column(db.Text, nullable=False)
    options = db.Column(db.JSON, nullable=True)  # List of option strings, mcq only
    correct_answer = db.Column(db.Text, nullable=True)
    position = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    answers = db.relationship("AttemptAnswer", backref="question", lazy="dynamic", cascade="all, delete-orphan")

    __table_args__ = (
        db.Index("ix_questions_quiz_position", "quiz_id", "position"),
    )

    def __repr__(self) -> str:
        return f"<Question {self.id}: {self.type}>"

    def public_correct_answer(self):
        """
        The correct answer as exposed to creators.
        MCQ answers stored as a non-negative integer string come back as an int.
        """
        answer = self.correct_answer
        if self.type == "mcq" and answer is not None:
            text = str(answer).strip()
            if text.isascii() and text.isdecimal():
                return int(text)
        return answer

    def to_dict(self, include_answer: bool = True) -> dict:
        data = {
            "id": self.id,
            "quizId": self.quiz_id,
            "type": self.type,
            "prompt": self.prompt,
            "options": self.options if isinstance(self.options, list) else None,
            "position": self.position,
        }
        if include_answer:
            data["correctAnswer"] = self.public_correct_answer()
        return data


class Attempt(db.Model):
    """
    A taker's session on a quiz.
    submitted_at stays null until the attempt is graded; it is set exactly once.
    """
    __tablename__ = "attempts"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    started_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    submitted_at = db.Column(db.DateTime, nullable=True)
    score = db.Column(db.Integer, nullable=True)

    answers = db.relationship("AttemptAnswer", backref="attempt", lazy="dynamic", cascade="all, delete-orphan")
    events = db.relationship("AttemptEvent", backref="attempt", lazy="dynamic", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Attempt {self.id}: Quiz {self.quiz_id}>"

    @property
    def is_submitted(self) -> bool:
        return self.submitted_at is not None

    def answer_map(self) -> dict[int, str]:
        """Recorded answers keyed by question id."""
        return {answer.question_id: answer.value for answer in self.answers}

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "quizId": self.quiz_id,
            "startedAt": _isoformat(self.started_at),
            "submittedAt": _isoformat(self.submitted_at),
            "score": self.score,
            "answers": [
                {"questionId": question_id, "value": value}
                for question_id, value in self.answer_map().items()
            ],
        }


class AttemptAnswer(db.Model):
    """The latest value a taker submitted for one question of an attempt."""
    __tablename__ = "attempt_answers"

    id = db.Column(db.Integer, primary_key=True)
    attempt_id = db.Column(db.Integer, db.ForeignKey("attempts.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id = db.Column(db.Integer, db.ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)
    value = db.Column(db.Text, nullable=False)
    answered_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint("attempt_id", "question_id", name="uq_attempt_question"),
    )

    def __repr__(self) -> str:
        return f"<AttemptAnswer {self.id}: Question {self.question_id}>"


class AttemptEvent(db.Model):
    """Anti-cheat telemetry reported by the client (tab switches, pastes)."""
    __tablename__ = "attempt_events"

    id = db.Column(db.Integer, primary_key=True)
    attempt_id = db.Column(db.Integer, db.ForeignKey("attempts.id", ondelete="CASCADE"), nullable=False, index=True)
    event = db.Column(db.String(MAX_EVENT_LENGTH), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<AttemptEvent {self.id}: {self.event}>"
