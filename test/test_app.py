"""
Test cases for configuration, response headers and the seed command.
"""
import pytest

from quizmaker.config import Config
from quizmaker.security import SecurityHeaders


class TestConfig:
    """Test cases for environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv('API_TOKEN', raising=False)
        monkeypatch.delenv('DATABASE_URL', raising=False)
        monkeypatch.delenv('MAX_CONTENT_LENGTH', raising=False)
        cfg = Config()
        assert cfg.API_TOKEN == 'dev-token'
        assert cfg.SQLALCHEMY_DATABASE_URI == 'sqlite:///quizmaker.db'
        assert cfg.is_sqlite
        assert cfg.MAX_CONTENT_LENGTH == 1048576

    def test_legacy_postgres_scheme(self, monkeypatch):
        monkeypatch.setenv('DATABASE_URL', 'postgres://user:pw@db/quiz')
        cfg = Config()
        assert cfg.SQLALCHEMY_DATABASE_URI == 'postgresql://user:pw@db/quiz'
        assert not cfg.is_sqlite

    def test_cors_origins_split(self, monkeypatch):
        monkeypatch.setenv('CORS_ALLOWED_ORIGINS', 'http://localhost:5173, https://quiz.example.com')
        assert Config().CORS_ALLOWED_ORIGINS == ['http://localhost:5173', 'https://quiz.example.com']

    def test_production_requires_real_token(self, monkeypatch):
        monkeypatch.setenv('FLASK_ENV', 'production')
        monkeypatch.setenv('SECRET_KEY', 'prod-secret')
        monkeypatch.delenv('API_TOKEN', raising=False)
        with pytest.raises(ValueError):
            Config().validate()

    def test_production_requires_secret_key(self, monkeypatch):
        monkeypatch.setenv('FLASK_ENV', 'production')
        monkeypatch.setenv('SECRET_KEY', '')
        monkeypatch.setenv('API_TOKEN', 'prod-token')
        with pytest.raises(ValueError):
            Config().validate()

    def test_production_valid(self, monkeypatch):
        monkeypatch.setenv('FLASK_ENV', 'production')
        monkeypatch.setenv('SECRET_KEY', 'prod-secret')
        monkeypatch.setenv('API_TOKEN', 'prod-token')
        Config().validate()


class TestSecurityHeaders:
    """Test cases for response headers."""

    def test_hardening_headers(self, client, auth_headers):
        response = client.get('/quizzes', headers=auth_headers)
        assert response.headers['X-Content-Type-Options'] == 'nosniff'
        assert response.headers['X-Frame-Options'] == 'DENY'

    def test_cors_on_unauthorized_response(self, client):
        response = client.get('/quizzes', headers={'Origin': 'http://localhost:5173'})
        assert response.status_code == 401
        assert response.headers['Access-Control-Allow-Origin'] == '*'

    def test_preflight_without_token(self, client):
        response = client.options('/quizzes', headers={
            'Origin': 'http://localhost:5173',
            'Access-Control-Request-Method': 'POST',
        })
        assert response.status_code == 200
        assert 'Authorization' in response.headers['Access-Control-Allow-Headers']

    @pytest.mark.parametrize('origin,allowed,expected', [
        ('http://a.test', ['*'], '*'),
        ('http://a.test', ['http://a.test'], 'http://a.test'),
        ('http://b.test', ['http://a.test'], None),
        ('', ['http://a.test'], None),
    ])
    def test_resolve_origin(self, origin, allowed, expected):
        assert SecurityHeaders.resolve_origin(origin, allowed) == expected


class TestSeedCommand:
    """Test cases for the sample-data command."""

    def test_seed_creates_published_quiz_once(self, app, client, auth_headers):
        runner = app.test_cli_runner()

        result = runner.invoke(args=['seed'])
        assert 'Created quiz' in result.output

        result = runner.invoke(args=['seed'])
        assert 'already exists' in result.output

        quizzes = client.get('/quizzes', headers=auth_headers).get_json()
        assert len(quizzes) == 1
        assert quizzes[0]['isPublished'] is True

        attempt = client.post('/attempts', json={'quizId': quizzes[0]['id']}, headers=auth_headers)
        assert attempt.status_code == 201
        assert len(attempt.get_json()['quiz']['questions']) == 3
