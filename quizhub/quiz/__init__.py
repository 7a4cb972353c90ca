"""
Quiz module for authoring quizzes and taking them.

Instructors create quizzes and questions; students submit answers which are
scored, recorded and can be reviewed afterwards.
"""
from flask import Blueprint
from quizhub.config import config

quiz_bp = Blueprint('quiz', __name__, url_prefix=config.QUIZ_URL_PREFIX)

from quizhub.quiz import instructor_routes  # noqa: E402,F401
from quizhub.quiz import student_routes  # noqa: E402,F401
