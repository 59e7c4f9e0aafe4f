"""
Quiz module: authoring quizzes and taking graded attempts.

Creators build quizzes and questions; takers start attempts, record answers,
report anti-cheat events and submit for server-side grading.
"""
from flask import Blueprint

quiz_bp = Blueprint('quiz', __name__)

from quizmaker.quiz import creator_routes  # noqa: E402,F401
from quizmaker.quiz import taker_routes  # noqa: E402,F401
