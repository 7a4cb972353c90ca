"""
Error taxonomy shared by the quiz workflow.

Services raise these; the application error handler turns them into
``{"success": false, "error": ...}`` JSON responses with the matching status.
"""


class QuizHubError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {'success': False, 'error': self.message}


class NotFound(QuizHubError):
    """Quiz, question or attempt is absent, or not visible to the caller."""

    status_code = 404
    default_message = "Not found"


class Forbidden(QuizHubError):
    """Role or ownership mismatch."""

    status_code = 403
    default_message = "Access denied"


class ValidationFailure(QuizHubError):
    status_code = 400
    default_message = "Invalid request"


class PersistenceFailure(QuizHubError):
    """A store write failed and was rolled back as a whole."""

    status_code = 500
    default_message = "Could not save to the database"
