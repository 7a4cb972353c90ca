"""
Audit logging module.

Logs access decisions and attempt persistence events for monitoring
and auditing. Safe to call outside a request (remote address is then omitted).
"""

from flask import request, current_app, has_request_context
from datetime import datetime


def _remote_addr():
    return request.remote_addr if has_request_context() else None


class AuditLogger:
    """
    Audit event logger.

    All messages are prefixed with ``AUDIT:`` so they can be filtered.
    """

    @staticmethod
    def log_failed_login(email: str, reason: str = "Invalid credentials"):
        current_app.logger.warning(
            f"AUDIT: Failed login attempt - Email: {email}, "
            f"IP: {_remote_addr()}, Reason: {reason}, "
            f"Time: {datetime.utcnow().isoformat()}"
        )

    @staticmethod
    def log_successful_login(user_id: int, email: str):
        current_app.logger.info(
            f"AUDIT: Successful login - User ID: {user_id}, "
            f"Email: {email}, IP: {_remote_addr()}, "
            f"Time: {datetime.utcnow().isoformat()}"
        )

    @staticmethod
    def log_access_denied(user_id: int, resource: str, reason: str):
        """
        Log a refused read or write.

        Args:
            user_id: ID of the caller
            resource: What was requested, e.g. ``attempt:12``
            reason: Why it was refused
        """
        current_app.logger.warning(
            f"AUDIT: Access denied - User ID: {user_id}, "
            f"Resource: {resource}, Reason: {reason}, IP: {_remote_addr()}"
        )

    @staticmethod
    def log_attempt_recorded(attempt_id: int, user_id: int, quiz_id: int, score: int):
        current_app.logger.info(
            f"AUDIT: Attempt recorded - Attempt ID: {attempt_id}, "
            f"User ID: {user_id}, Quiz ID: {quiz_id}, Score: {score}"
        )

    @staticmethod
    def log_persistence_failure(operation: str, error: Exception):
        current_app.logger.error(
            f"AUDIT: Persistence failure - Operation: {operation}, "
            f"Error: {error}, IP: {_remote_addr()}"
        )
