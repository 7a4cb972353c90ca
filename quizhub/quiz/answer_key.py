"""Answer key resolution and the quiz lookups shared by the routes."""
from dataclasses import dataclass

from quizhub import db
from quizhub.common.errors import NotFound
from quizhub.quiz.models import Quiz, Question, effective_points


@dataclass(frozen=True)
class AnswerKeyEntry:
    question_id: int
    correct_option: str
    points: int


def resolve(quiz_id: int) -> list[AnswerKeyEntry]:
    """
    Load the answer key of a quiz, ordered by ascending question id.

    Raises:
        NotFound: if no quiz has this id
    """
    if db.session.get(Quiz, quiz_id) is None:
        raise NotFound("Quiz not found")

    rows = (
        db.session.query(Question.id, Question.correct_option, Question.points)
        .filter(Question.quiz_id == quiz_id)
        .order_by(Question.id.asc())
        .all()
    )
    return [
        AnswerKeyEntry(question_id=row.id, correct_option=row.correct_option, points=effective_points(row.points))
        for row in rows
    ]


def get_published_quiz(quiz_id: int) -> Quiz:
    quiz = Quiz.query.filter_by(id=quiz_id, is_published=True).first()
    if quiz is None:
        raise NotFound("Quiz not found or not published")
    return quiz


def get_quiz_for_instructor(quiz_id: int, instructor_id: int) -> Quiz:
    """Quizzes owned by someone else are reported as missing."""
    quiz = Quiz.query.filter_by(id=quiz_id, instructor_id=instructor_id).first()
    if quiz is None:
        raise NotFound("Quiz not found or access denied")
    return quiz
