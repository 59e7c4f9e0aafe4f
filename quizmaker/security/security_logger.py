"""
Security logging module.

This module provides specialized logging for security events
such as rejected API tokens and anti-cheat telemetry from quiz takers.
"""

from flask import request, current_app
from datetime import datetime, timezone
import json


class SecurityLogger:
    """
    Security event logger.

    Logs security-related events for monitoring and auditing.
    """

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    @staticmethod
    def log_invalid_token(resource: str):
        """
        Log a request that presented a bearer token which did not match.

        Args:
            resource: Path that was requested
        """
        current_app.logger.warning(
            f"SECURITY: Invalid token - Resource: {resource}, "
            f"IP: {request.remote_addr}, Time: {SecurityLogger._now()}"
        )

    @staticmethod
    def log_unauthorized_access(resource: str):
        """
        Log a request without a usable Authorization header.

        Args:
            resource: Path that was requested
        """
        current_app.logger.warning(
            f"SECURITY: Missing or invalid Authorization header - "
            f"Resource: {resource}, IP: {request.remote_addr}, "
            f"Time: {SecurityLogger._now()}"
        )

    @staticmethod
    def log_suspicious_activity(activity_type: str, details: dict):
        """
        Log suspicious activity reported during a quiz attempt.

        Args:
            activity_type: Event name sent by the client (e.g. "paste")
            details: Additional details as dictionary
        """
        current_app.logger.warning(
            f"SECURITY: Suspicious activity - Type: {activity_type}, "
            f"IP: {request.remote_addr}, Details: {json.dumps(details)}, "
            f"Time: {SecurityLogger._now()}"
        )
