"""
Instructor routes for quiz management.

Instructors can:
- Create, edit, publish and delete their own quizzes
- Add and remove questions while the quiz has no attempts
- View attempts and statistics for their quizzes
"""
from flask import jsonify, request, current_app
from flask_login import current_user

from quizhub import db
from quizhub.common.decorators import instructor_required
from quizhub.common.errors import Forbidden, NotFound, ValidationFailure
from quizhub.quiz import quiz_bp
from quizhub.quiz.analytics import summarize_quiz
from quizhub.quiz.answer_key import get_quiz_for_instructor
from quizhub.quiz.models import Quiz, Question, Attempt, OPTION_LABELS
from quizhub.quiz.recorder import unit_of_work
from quizhub.auth.models import User


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _text(data: dict, key: str) -> str:
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ''


def _parse_time_limit(raw):
    """Optional time limit in seconds; must be a positive integer when given."""
    if raw is None or raw == '':
        return None
    try:
        seconds = int(raw)
    except (TypeError, ValueError):
        raise ValidationFailure("time_limit must be a whole number of seconds")
    if seconds <= 0:
        raise ValidationFailure("time_limit must be greater than 0")
    return seconds


def _ensure_questions_editable(quiz: Quiz):
    if quiz.has_attempts():
        raise Forbidden("Questions cannot be changed once the quiz has attempts")


@quiz_bp.route('/instructor/quizzes', methods=['GET'])
@instructor_required
def list_instructor_quizzes():
    """List the current instructor's quizzes, newest first."""
    quizzes = (
        Quiz.query.filter_by(instructor_id=current_user.id)
        .order_by(Quiz.created_at.desc(), Quiz.id.desc())
        .all()
    )
    return jsonify({
        'success': True,
        'quizzes': [quiz.to_dict() for quiz in quizzes]
    }), 200


@quiz_bp.route('/instructor/quizzes', methods=['POST'])
@instructor_required
def create_quiz():
    """
    Create a new quiz.

    Request body:
    {
        "title": "Quiz Title",
        "description": "Optional description",
        "time_limit": 600  // Optional, seconds
    }
    """
    data = _json_body()

    title = _text(data, 'title')
    if not title:
        raise ValidationFailure("Title is required.")

    quiz = Quiz(
        instructor_id=current_user.id,
        title=title,
        description=_text(data, 'description') or None,
        time_limit=_parse_time_limit(data.get('time_limit')),
        is_published=False,
    )
    with unit_of_work("quiz") as session:
        session.add(quiz)

    current_app.logger.info(f"Instructor {current_user.id} created quiz {quiz.id}")
    return jsonify({
        'success': True,
        'message': 'Quiz created successfully',
        'quiz': quiz.to_dict()
    }), 201


@quiz_bp.route('/instructor/quizzes/<int:quiz_id>', methods=['GET'])
@instructor_required
def get_instructor_quiz(quiz_id):
    """Quiz details including questions and their correct options."""
    quiz = get_quiz_for_instructor(quiz_id, current_user.id)
    quiz_data = quiz.to_dict()
    quiz_data['questions'] = [
        question.to_dict(include_answer=True)
        for question in quiz.questions.order_by(Question.id.asc()).all()
    ]
    quiz_data['has_attempts'] = quiz.has_attempts()
    return jsonify({
        'success': True,
        'quiz': quiz_data
    }), 200


@quiz_bp.route('/instructor/quizzes/<int:quiz_id>', methods=['PUT', 'PATCH'])
@instructor_required
def update_quiz(quiz_id):
    """Update title, description, time limit or publication status."""
    quiz = get_quiz_for_instructor(quiz_id, current_user.id)
    data = _json_body()

    with unit_of_work("quiz"):
        if 'title' in data:
            title = _text(data, 'title')
            if not title:
                raise ValidationFailure("Title is required.")
            quiz.title = title
        if 'description' in data:
            quiz.description = _text(data, 'description') or None
        if 'time_limit' in data:
            quiz.time_limit = _parse_time_limit(data['time_limit'])
        if 'is_published' in data:
            quiz.is_published = bool(data['is_published'])

    return jsonify({
        'success': True,
        'message': 'Quiz updated successfully',
        'quiz': quiz.to_dict()
    }), 200


@quiz_bp.route('/instructor/quizzes/<int:quiz_id>', methods=['DELETE'])
@instructor_required
def delete_quiz(quiz_id):
    """Delete a quiz together with its questions and attempts."""
    quiz = get_quiz_for_instructor(quiz_id, current_user.id)
    with unit_of_work("quiz deletion") as session:
        session.delete(quiz)

    current_app.logger.info(f"Instructor {current_user.id} deleted quiz {quiz_id}")
    return jsonify({
        'success': True,
        'message': 'Quiz deleted successfully'
    }), 200


@quiz_bp.route('/instructor/quizzes/<int:quiz_id>/questions', methods=['POST'])
@instructor_required
def add_question(quiz_id):
    """
    Add a question to a quiz.

    Request body:
    {
        "question_text": "What is 2+2?",
        "option_a": "3", "option_b": "4", "option_c": "5", "option_d": "22",
        "correct_option": "B",
        "points": 1  // Optional, default 1
    }
    """
    quiz = get_quiz_for_instructor(quiz_id, current_user.id)
    _ensure_questions_editable(quiz)
    data = _json_body()

    question_text = _text(data, 'question_text')
    if not question_text:
        raise ValidationFailure("question_text is required")

    options = {}
    for label in OPTION_LABELS:
        field = f"option_{label.lower()}"
        value = _text(data, field)
        if not value:
            raise ValidationFailure(f"{field} is required")
        options[field] = value

    correct_option = _text(data, 'correct_option')
    if correct_option not in OPTION_LABELS:
        raise ValidationFailure("correct_option must be one of A, B, C, D")

    raw_points = data.get('points', 1)
    try:
        points = int(raw_points) if raw_points not in (None, '') else 1
    except (TypeError, ValueError):
        raise ValidationFailure("points must be a whole number")
    if points <= 0:
        raise ValidationFailure("points must be greater than 0")

    question = Question(
        quiz_id=quiz.id,
        question_text=question_text,
        correct_option=correct_option,
        points=points,
        **options
    )
    with unit_of_work("question") as session:
        session.add(question)

    return jsonify({
        'success': True,
        'message': 'Question added successfully',
        'question': question.to_dict(include_answer=True)
    }), 201


@quiz_bp.route('/instructor/questions/<int:question_id>', methods=['DELETE'])
@instructor_required
def delete_question(question_id):
    """Delete a question; refused once the quiz has attempts."""
    question = db.session.get(Question, question_id)
    if question is None or question.quiz.instructor_id != current_user.id:
        raise NotFound("Question not found or not authorized")
    _ensure_questions_editable(question.quiz)

    with unit_of_work("question deletion") as session:
        session.delete(question)

    return jsonify({
        'success': True,
        'message': 'Question deleted successfully'
    }), 200


@quiz_bp.route('/instructor/quizzes/<int:quiz_id>/attempts', methods=['GET'])
@instructor_required
def list_quiz_attempts(quiz_id):
    """All attempts on one of the instructor's quizzes, newest first."""
    quiz = get_quiz_for_instructor(quiz_id, current_user.id)
    rows = (
        db.session.query(Attempt, User.name, User.email)
        .join(User, Attempt.user_id == User.id)
        .filter(Attempt.quiz_id == quiz.id)
        .order_by(Attempt.created_at.desc(), Attempt.id.desc())
        .all()
    )

    attempts_data = []
    for attempt, student_name, student_email in rows:
        attempt_data = attempt.to_dict()
        attempt_data['student_name'] = student_name
        attempt_data['student_email'] = student_email
        attempts_data.append(attempt_data)

    return jsonify({
        'success': True,
        'quiz_id': quiz.id,
        'quiz_title': quiz.title,
        'attempts': attempts_data
    }), 200


@quiz_bp.route('/instructor/quizzes/<int:quiz_id>/stats', methods=['GET'])
@instructor_required
def quiz_stats(quiz_id):
    quiz = get_quiz_for_instructor(quiz_id, current_user.id)
    return jsonify({
        'success': True,
        'stats': summarize_quiz(quiz.id)
    }), 200
