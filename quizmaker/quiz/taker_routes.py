"""
Taker routes for quiz functionality.

Takers can:
- Start an attempt on a published quiz
- Save answers while the attempt is open
- Report anti-cheat events (tab switches, pastes)
- Submit the attempt for grading
"""
import json

from flask import jsonify, request, current_app
from flask_login import login_required
from sqlalchemy.exc import IntegrityError
from quizmaker import db
from quizmaker.quiz import quiz_bp
from quizmaker.quiz.grading import grade_attempt
from quizmaker.quiz.models import Quiz, Question, Attempt, AttemptAnswer, AttemptEvent, MAX_EVENT_LENGTH, utcnow
from quizmaker.quiz.validators import get_json_body, coerce_optional_int
from quizmaker.security import SecurityLogger


def _answer_text(value) -> str:
    """Answers are stored as text whatever JSON type the client sent."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value)


def _find_answer(attempt_id, question_id):
    return AttemptAnswer.query.filter_by(
        attempt_id=attempt_id,
        question_id=question_id
    ).first()


@quiz_bp.route('/attempts', methods=['POST'])
@login_required
def start_attempt():
    """
    Start a new attempt on a published quiz.

    The response carries a snapshot of the quiz whose questions omit
    their correct answers.
    """
    try:
        data = get_json_body(request)
        quiz_id, error = coerce_optional_int(data.get('quizId'))
        if error:
            current_app.logger.warning(f"start_attempt: bad quizId: {error}")
            return jsonify({'error': f'quizId {error}'}), 400
        if not quiz_id:
            current_app.logger.warning("start_attempt: missing quizId")
            return jsonify({'error': 'quizId required'}), 400

        quiz = db.session.get(Quiz, quiz_id)
        if not quiz:
            current_app.logger.warning(f"start_attempt: quiz not found: {quiz_id}")
            return jsonify({'error': 'Quiz not found'}), 404
        if not quiz.is_published:
            current_app.logger.warning(f"start_attempt: quiz not published: {quiz_id}")
            return jsonify({'error': 'Quiz is not published'}), 400

        attempt = Attempt(quiz_id=quiz.id, started_at=utcnow())
        db.session.add(attempt)
        db.session.commit()

        questions = quiz.ordered_questions()
        data = attempt.to_dict()
        data['quiz'] = {
            'id': quiz.id,
            'title': quiz.title,
            'description': quiz.description,
            'timeLimitSeconds': quiz.time_limit_seconds,
            'questions': [question.to_dict(include_answer=False) for question in questions],
        }

        current_app.logger.info(f"start_attempt: created attempt {attempt.id} for quiz {quiz.id}")
        return jsonify(data), 201

    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error in start_attempt")
        return jsonify({'error': 'Failed to start attempt'}), 500


@quiz_bp.route('/attempts/<int:attempt_id>/answer', methods=['POST'])
@login_required
def save_answer(attempt_id):
    """
    Save or overwrite the answer to one question of an open attempt.

    Request body:
    {
        "questionId": 12,
        "value": "Paris"
    }
    """
    try:
        data = get_json_body(request)
        question_id, error = coerce_optional_int(data.get('questionId'))
        value = data.get('value')
        if error or not question_id or value is None:
            return jsonify({'error': 'questionId and value required'}), 400

        attempt = db.session.get(Attempt, attempt_id)
        if not attempt:
            return jsonify({'error': 'Attempt not found'}), 404
        if attempt.is_submitted:
            return jsonify({'error': 'Attempt already submitted'}), 400

        question = db.session.get(Question, question_id)
        if not question:
            return jsonify({'error': 'Question not found'}), 404
        if question.quiz_id != attempt.quiz_id:
            return jsonify({'error': "Question does not belong to this attempt's quiz"}), 400

        text = _answer_text(value)
        answer = _find_answer(attempt_id, question_id)

        if answer:
            answer.value = text
            db.session.commit()
        else:
            db.session.add(AttemptAnswer(
                attempt_id=attempt_id,
                question_id=question_id,
                value=text,
            ))
            try:
                db.session.commit()
            except IntegrityError:
                # Another request stored this answer first; overwrite it
                db.session.rollback()
                current_app.logger.info(
                    f"save_answer: concurrent insert for attempt {attempt_id}, question {question_id}"
                )
                _find_answer(attempt_id, question_id).value = text
                db.session.commit()

        return jsonify({'ok': True}), 200

    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error in save_answer")
        return jsonify({'error': 'Failed to save answer'}), 500


@quiz_bp.route('/attempts/<int:attempt_id>/submit', methods=['POST'])
@login_required
def submit_attempt(attempt_id):
    """
    Grade an attempt and close it.

    Grading happens once: the score is only recorded if submitted_at is
    still null when the update runs, so a repeated submit gets a 400.
    """
    try:
        attempt = db.session.get(Attempt, attempt_id)
        if not attempt:
            current_app.logger.warning(f"submit_attempt: attempt not found: {attempt_id}")
            return jsonify({'error': 'Attempt not found'}), 404
        if attempt.is_submitted:
            current_app.logger.warning(f"submit_attempt: attempt already submitted: {attempt_id}")
            return jsonify({'error': 'Attempt already submitted'}), 400

        questions = attempt.quiz.ordered_questions()
        current_app.logger.info(f"submit_attempt: grading {len(questions)} questions for attempt {attempt_id}")

        result = grade_attempt(questions, attempt.answer_map())

        claimed = Attempt.query.filter(
            Attempt.id == attempt_id,
            Attempt.submitted_at.is_(None),
        ).update(
            {'submitted_at': utcnow(), 'score': result.score},
            synchronize_session=False,
        )
        if not claimed:
            db.session.rollback()
            current_app.logger.warning(f"submit_attempt: lost submit race for attempt {attempt_id}")
            return jsonify({'error': 'Attempt already submitted'}), 400

        db.session.commit()

        current_app.logger.info(
            f"submit_attempt: attempt {attempt_id} scored {result.score}/{result.total}"
        )
        return jsonify(result.to_dict()), 200

    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error in submit_attempt")
        return jsonify({'error': 'Failed to submit attempt'}), 500


@quiz_bp.route('/attempts/<int:attempt_id>/events', methods=['POST'])
@login_required
def track_event(attempt_id):
    """
    Record an anti-cheat event reported by the client.

    Request body:
    {
        "event": "tab_hidden"
    }
    """
    try:
        event = get_json_body(request).get('event')
        if not event or not isinstance(event, str):
            return jsonify({'error': 'event is required and must be a string'}), 400
        if len(event) > MAX_EVENT_LENGTH:
            return jsonify({'error': f'event must be at most {MAX_EVENT_LENGTH} characters'}), 400

        attempt = db.session.get(Attempt, attempt_id)
        if not attempt:
            return jsonify({'error': 'Attempt not found'}), 404
        if attempt.is_submitted:
            return jsonify({'error': 'Attempt already submitted'}), 400

        db.session.add(AttemptEvent(attempt_id=attempt_id, event=event))
        db.session.commit()

        SecurityLogger.log_suspicious_activity(event, {
            'attempt_id': attempt_id,
            'quiz_id': attempt.quiz_id,
        })
        return jsonify({'ok': True}), 201

    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error in track_event")
        return jsonify({'error': 'Failed to track event'}), 500
