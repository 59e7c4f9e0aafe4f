"""
Creator routes for quiz management.

Creators can:
- List, create and update quizzes
- Add, edit, reorder and delete questions
"""
from flask import jsonify, request, current_app
from flask_login import login_required
from sqlalchemy import func
from quizmaker import db
from quizmaker.quiz import quiz_bp
from quizmaker.quiz.models import Quiz, Question
from quizmaker.quiz.validators import (
    get_json_body,
    validate_quiz_create,
    validate_quiz_update,
    validate_question_create,
    validate_question_update,
)


@quiz_bp.route('/quizzes', methods=['GET'])
@login_required
def list_quizzes():
    """List all quizzes, newest first."""
    try:
        quizzes = Quiz.query.order_by(Quiz.created_at.desc(), Quiz.id.desc()).all()
        current_app.logger.info(f"list_quizzes: found {len(quizzes)} quizzes")
        return jsonify([quiz.to_dict() for quiz in quizzes]), 200

    except Exception:
        current_app.logger.exception("Error in list_quizzes")
        return jsonify({'error': 'Failed to list quizzes'}), 500


@quiz_bp.route('/quizzes', methods=['POST'])
@login_required
def create_quiz():
    """
    Create a new quiz.

    Request body:
    {
        "title": "Quiz Title",
        "description": "What the quiz covers",
        "timeLimitSeconds": 300,  // Optional
        "isPublished": false  // Optional
    }
    """
    try:
        fields, error = validate_quiz_create(get_json_body(request))
        if error:
            current_app.logger.warning(f"create_quiz rejected: {error}")
            return jsonify({'error': error}), 400

        quiz = Quiz(**fields)
        db.session.add(quiz)
        db.session.commit()

        current_app.logger.info(f"create_quiz: created quiz {quiz.id}")
        return jsonify(quiz.to_dict()), 201

    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error in create_quiz")
        return jsonify({'error': 'Failed to create quiz'}), 500


@quiz_bp.route('/quizzes/<int:quiz_id>', methods=['GET'])
@login_required
def get_quiz(quiz_id):
    """
    Get a quiz with all of its questions (creator view, answers included).
    """
    try:
        quiz = db.session.get(Quiz, quiz_id)
        if not quiz:
            current_app.logger.warning(f"get_quiz: quiz not found: {quiz_id}")
            return jsonify({'error': 'Quiz not found'}), 404

        questions = quiz.ordered_questions()
        current_app.logger.info(f"get_quiz: quiz {quiz_id} has {len(questions)} questions")

        data = quiz.to_dict()
        data['questions'] = [question.to_dict() for question in questions]
        return jsonify(data), 200

    except Exception:
        current_app.logger.exception("Error in get_quiz")
        return jsonify({'error': 'Failed to fetch quiz'}), 500


@quiz_bp.route('/quizzes/<int:quiz_id>', methods=['PATCH'])
@login_required
def update_quiz(quiz_id):
    """Update quiz metadata. Fields that are absent or null are left as they are."""
    try:
        quiz = db.session.get(Quiz, quiz_id)
        if not quiz:
            return jsonify({'error': 'Quiz not found'}), 404

        changes, error = validate_quiz_update(get_json_body(request))
        if error:
            return jsonify({'error': error}), 400

        for attr, value in changes.items():
            setattr(quiz, attr, value)
        db.session.commit()

        current_app.logger.info(f"update_quiz: updated quiz {quiz_id} fields={sorted(changes)}")
        return jsonify(quiz.to_dict()), 200

    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error in update_quiz")
        return jsonify({'error': 'Failed to update quiz'}), 500


@quiz_bp.route('/quizzes/<int:quiz_id>/questions', methods=['POST'])
@login_required
def create_question(quiz_id):
    """
    Add a question to a quiz.

    Request body:
    {
        "type": "mcq",  // mcq, short or code
        "prompt": "Question text",
        "options": ["A", "B", "C"],  // Required for mcq (at least 2)
        "correctAnswer": 1,  // Option index or option text for mcq, string otherwise
        "position": 0  // Optional, defaults to the end of the quiz
    }
    """
    try:
        quiz = db.session.get(Quiz, quiz_id)
        if not quiz:
            current_app.logger.warning(f"create_question: quiz not found: {quiz_id}")
            return jsonify({'error': 'Quiz not found'}), 404

        fields, error = validate_question_create(get_json_body(request))
        if error:
            current_app.logger.warning(f"create_question rejected for quiz {quiz_id}: {error}")
            return jsonify({'error': error}), 400

        if fields['position'] is None:
            max_position = db.session.query(
                func.coalesce(func.max(Question.position), -1)
            ).filter(Question.quiz_id == quiz_id).scalar()
            fields['position'] = max_position + 1

        question = Question(quiz_id=quiz_id, **fields)
        db.session.add(question)
        db.session.commit()

        current_app.logger.info(
            f"create_question: created question {question.id} ({question.type}) in quiz {quiz_id}"
        )
        return jsonify(question.to_dict()), 201

    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error in create_question")
        return jsonify({'error': 'Failed to create question'}), 500


@quiz_bp.route('/questions/<int:question_id>', methods=['PATCH'])
@login_required
def update_question(question_id):
    """Update a question, including moving it to another position."""
    try:
        question = db.session.get(Question, question_id)
        if not question:
            return jsonify({'error': 'Question not found'}), 404

        changes, error = validate_question_update(get_json_body(request))
        if error:
            return jsonify({'error': error}), 400

        for attr, value in changes.items():
            setattr(question, attr, value)
        db.session.commit()

        current_app.logger.info(f"update_question: updated question {question_id} fields={sorted(changes)}")
        return jsonify(question.to_dict()), 200

    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error in update_question")
        return jsonify({'error': 'Failed to update question'}), 500


@quiz_bp.route('/questions/<int:question_id>', methods=['DELETE'])
@login_required
def delete_question(question_id):
    """Delete a question (and any answers recorded for it)."""
    try:
        question = db.session.get(Question, question_id)
        if not question:
            return jsonify({'error': 'Question not found'}), 404

        db.session.delete(question)
        db.session.commit()

        current_app.logger.info(f"delete_question: deleted question {question_id}")
        return '', 204

    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error in delete_question")
        return jsonify({'error': 'Failed to delete question'}), 500
