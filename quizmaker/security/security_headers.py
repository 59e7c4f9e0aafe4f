"""
Security headers module.

This module provides middleware to add security and CORS headers to all
API responses.
"""

from flask import request, current_app


class SecurityHeaders:
    """
    Security headers middleware.

    Adds hardening headers to every JSON response and answers
    cross-origin requests from the configured client origins.
    """

    ALLOWED_METHODS = "GET, POST, PATCH, DELETE, OPTIONS"
    ALLOWED_HEADERS = "Authorization, Content-Type"

    @staticmethod
    def resolve_origin(origin: str, allowed: list[str]) -> str | None:
        """
        Pick the value for Access-Control-Allow-Origin.

        Args:
            origin: Origin header sent by the browser (may be empty)
            allowed: Configured origins; "*" allows any

        Returns:
            Header value, or None when the origin is not allowed
        """
        if "*" in allowed:
            return "*"
        if origin and origin in allowed:
            return origin
        return None

    @staticmethod
    def init_app(app):
        """
        Initialize security headers for the Flask app.

        Args:
            app: Flask application instance
        """
        @app.after_request
        def add_security_headers(response):
            """Add security headers to all responses."""
            # The API only serves JSON; nothing may be framed or scripted
            response.headers['Content-Security-Policy'] = "default-src 'none'; frame-ancestors 'none'"
            response.headers['X-Content-Type-Options'] = 'nosniff'
            response.headers['X-Frame-Options'] = 'DENY'
            response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'

            allow_origin = SecurityHeaders.resolve_origin(
                request.headers.get('Origin', ''),
                current_app.config.get('CORS_ALLOWED_ORIGINS', []),
            )
            if allow_origin:
                response.headers['Access-Control-Allow-Origin'] = allow_origin
                response.headers['Access-Control-Allow-Methods'] = SecurityHeaders.ALLOWED_METHODS
                response.headers['Access-Control-Allow-Headers'] = SecurityHeaders.ALLOWED_HEADERS
                if allow_origin != '*':
                    response.headers['Vary'] = 'Origin'

            if 'Server' in response.headers:
                del response.headers['Server']

            return response
