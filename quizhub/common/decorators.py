from functools import wraps
from flask_login import current_user

from quizhub.common.audit_logger import AuditLogger
from quizhub.common.errors import Forbidden


def role_required(role: str):
    """Decorator factory requiring an authenticated user with the given role."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                from quizhub import login_manager
                return login_manager.unauthorized()
            if current_user.role != role:
                AuditLogger.log_access_denied(current_user.id, f.__name__, f"role '{current_user.role}' is not '{role}'")
                raise Forbidden(f"Access denied. {role.capitalize()}s only.")
            return f(*args, **kwargs)
        return decorated_function
    return decorator


instructor_required = role_required('instructor')
student_required = role_required('student')
