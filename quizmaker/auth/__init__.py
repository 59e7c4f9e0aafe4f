"""
Bearer-token authentication for the quiz API.

The API has no user accounts: every client presents the shared
``API_TOKEN`` and is treated as the same authenticated client.
"""
from flask import Flask, jsonify, request, current_app
from flask_login import UserMixin

from quizmaker import login_manager
from quizmaker.auth.utils import extract_bearer_token, token_matches


class ApiClient(UserMixin):
    """The caller identified by a valid bearer token."""

    id = "api-client"

    def get_id(self) -> str:
        return self.id


def init_auth(app: Flask) -> None:
    """Wire the Flask-Login loaders used by ``@login_required`` routes."""
    # Stateless API: never derive identity from the session cookie
    login_manager.session_protection = None

    @login_manager.user_loader
    def load_user(user_id):
        return None

    @login_manager.request_loader
    def load_user_from_request(req):
        from quizmaker.security import SecurityLogger

        header = req.headers.get("Authorization", "")
        token = extract_bearer_token(header)
        if token is None:
            SecurityLogger.log_unauthorized_access(req.path)
            return None
        if not token_matches(token, current_app.config["API_TOKEN"]):
            SecurityLogger.log_invalid_token(req.path)
            return None
        return ApiClient()

    @login_manager.unauthorized_handler
    def unauthorized():
        if extract_bearer_token(request.headers.get("Authorization", "")) is None:
            return jsonify({"error": "Missing or invalid Authorization header"}), 401
        return jsonify({"error": "Invalid token"}), 401
