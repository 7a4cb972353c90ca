"""
Student routes for quiz functionality.

Students can:
- List published quizzes and fetch one to take it
- Submit answers (JSON or form post) and get their score
- Review their own attempts
"""
from flask import jsonify, request, current_app
from flask_login import login_required, current_user

from quizhub.auth.utils import current_principal
from quizhub.common.decorators import student_required
from quizhub.quiz import quiz_bp
from quizhub.quiz import recorder, reconstructor, scoring
from quizhub.quiz.answer_key import get_published_quiz, resolve
from quizhub.quiz.models import Quiz, Question, Attempt
from quizhub.quiz.submission import Submission


@quiz_bp.route('/quizzes', methods=['GET'])
@login_required
def list_published_quizzes():
    """List every published quiz, newest first."""
    quizzes = Quiz.query.filter_by(is_published=True).order_by(Quiz.created_at.desc(), Quiz.id.desc()).all()
    return jsonify({
        'success': True,
        'quizzes': [quiz.to_dict() for quiz in quizzes]
    }), 200


@quiz_bp.route('/quizzes/<int:quiz_id>', methods=['GET'])
@login_required
def get_quiz_for_taking(quiz_id):
    """
    Get a published quiz with its questions.
    Correct options are not included.
    """
    quiz = get_published_quiz(quiz_id)
    questions = quiz.questions.order_by(Question.id.asc()).all()
    return jsonify({
        'success': True,
        'quiz': {
            'id': quiz.id,
            'title': quiz.title,
            'description': quiz.description,
            'time_limit': quiz.time_limit,
        },
        'questions': [question.to_dict() for question in questions]
    }), 200


@quiz_bp.route('/quizzes/<int:quiz_id>/submit', methods=['POST'])
@student_required
def submit_quiz(quiz_id):
    """
    Score and record a submission.

    JSON body: {"answers": {"<question_id>": "A", ...}, "time_taken": 42}
    Form post: question_<id>=A fields plus optional time_taken
    """
    get_published_quiz(quiz_id)

    if request.is_json:
        submission = Submission.from_json(request.get_json(silent=True))
    else:
        submission = Submission.from_form(request.form)

    if submission.dropped:
        current_app.logger.warning(
            f"Submission for quiz {quiz_id} by user {current_user.id} "
            f"had unreadable entries, treated as unanswered: {', '.join(submission.dropped)}"
        )

    answer_key = resolve(quiz_id)
    result = scoring.score(answer_key, submission)
    attempt_id = recorder.record(current_user.id, quiz_id, result, submission.time_taken)

    return jsonify({
        'success': True,
        'attemptId': attempt_id,
        'score': result.percentage,
        'totalPoints': result.total_points,
        'maxPoints': result.max_points,
        'correctAnswers': result.correct_count,
        'totalQuestions': result.question_count,
        'details': result.to_dict()['per_question'],
    }), 201


@quiz_bp.route('/attempts', methods=['GET'])
@student_required
def list_my_attempts():
    """Attempt history of the current student, newest first."""
    rows = (
        Attempt.query
        .join(Quiz, Attempt.quiz_id == Quiz.id)
        .add_columns(Quiz.title)
        .filter(Attempt.user_id == current_user.id)
        .order_by(Attempt.created_at.desc(), Attempt.id.desc())
        .all()
    )
    attempts_data = []
    for attempt, quiz_title in rows:
        attempt_data = attempt.to_dict()
        attempt_data['quiz_title'] = quiz_title
        attempts_data.append(attempt_data)

    return jsonify({
        'success': True,
        'attempts': attempts_data
    }), 200


@quiz_bp.route('/attempts/<int:attempt_id>', methods=['GET'])
@login_required
def get_attempt(attempt_id):
    """Review one attempt. Visible to its student and to the quiz's instructor."""
    view = reconstructor.load(attempt_id, current_principal())
    return jsonify({
        'success': True,
        'attempt': view.to_dict()
    }), 200
