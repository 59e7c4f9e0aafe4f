"""
Sample data for local development.

Run with ``flask --app quizmaker seed`` from the project root.
"""
import click
from flask import current_app
from flask.cli import with_appcontext

from quizmaker import db
from quizmaker.quiz.models import Quiz, Question


SAMPLE_QUIZ = {
    "title": "JavaScript Basics",
    "description": "A quick quiz on core JavaScript concepts",
    "time_limit_seconds": 300,
    "is_published": True,
}

SAMPLE_QUESTIONS = [
    {
        "type": "mcq",
        "prompt": "Which of the following is NOT a primitive type in JavaScript?",
        "options": ["string", "number", "boolean", "array"],
        "correct_answer": "3",
    },
    {
        "type": "short",
        "prompt": "What keyword declares a block-scoped variable introduced in ES6?",
        "correct_answer": "let",
    },
    {
        "type": "code",
        "prompt": "Write an expression that returns the sum of a and b.",
        "correct_answer": "a + b",
    },
]


def seed_sample_quiz() -> Quiz | None:
    """
    Insert the sample quiz and its questions.
    Returns None when a quiz with the same title already exists.
    """
    if Quiz.query.filter_by(title=SAMPLE_QUIZ["title"]).first():
        return None

    quiz = Quiz(**SAMPLE_QUIZ)
    db.session.add(quiz)
    db.session.flush()

    for position, fields in enumerate(SAMPLE_QUESTIONS):
        db.session.add(Question(quiz_id=quiz.id, position=position, **fields))

    db.session.commit()
    return quiz


@click.command("seed")
@with_appcontext
def seed_command():
    """Load a published sample quiz into the database."""
    quiz = seed_sample_quiz()
    if quiz is None:
        click.echo(f"Quiz '{SAMPLE_QUIZ['title']}' already exists. Skipping.")
        return
    current_app.logger.info(f"seed: created quiz {quiz.id}")
    click.echo(f"Created quiz '{quiz.title}' (ID: {quiz.id}) with {len(SAMPLE_QUESTIONS)} questions")
