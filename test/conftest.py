"""
Pytest configuration and fixtures for testing.
Each test gets a fresh application bound to an in-memory SQLite database.
"""
import os

import pytest

# Set test environment variables BEFORE the package reads them
os.environ.setdefault('SECRET_KEY', 'sfndsfojoriwew09rjfjndsknfkj')
os.environ['FLASK_ENV'] = 'testing'
os.environ['API_PREFIX'] = ''
os.environ['CORS_ALLOWED_ORIGINS'] = '*'

from quizmaker import create_app, db  # noqa: E402


TEST_TOKEN = 'test-token'


@pytest.fixture(scope='function')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'API_TOKEN': TEST_TOKEN,
    })

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def auth_headers():
    """Authorization header accepted by the API."""
    return {'Authorization': f'Bearer {TEST_TOKEN}'}


@pytest.fixture
def create_quiz(client, auth_headers):
    """Factory creating a quiz through the API and returning its JSON."""
    def _create(**overrides):
        payload = {
            'title': 'Capitals',
            'description': 'European capital cities',
            'isPublished': True,
        }
        payload.update(overrides)
        response = client.post('/quizzes', json=payload, headers=auth_headers)
        assert response.status_code == 201
        return response.get_json()
    return _create


@pytest.fixture
def add_question(client, auth_headers):
    """Factory adding a question to a quiz through the API and returning its JSON."""
    def _add(quiz_id, **payload):
        response = client.post(f'/quizzes/{quiz_id}/questions', json=payload, headers=auth_headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()
    return _add


@pytest.fixture
def capitals_quiz(create_quiz, add_question):
    """A published quiz with one question of each type."""
    quiz = create_quiz()
    mcq = add_question(
        quiz['id'], type='mcq', prompt='Capital of Germany?',
        options=['Paris', 'Berlin', 'Madrid'], correctAnswer=1,
    )
    short = add_question(quiz['id'], type='short', prompt='Capital of France?', correctAnswer='Paris')
    code = add_question(quiz['id'], type='code', prompt='Sum a and b', correctAnswer='return a + b')
    return {'quiz': quiz, 'mcq': mcq, 'short': short, 'code': code}
