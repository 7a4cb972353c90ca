"""Aggregate statistics over the recorded attempts of one quiz."""
from sqlalchemy import case, func

from quizhub import db
from quizhub.quiz.models import Attempt, AttemptDetail, Question


def summarize_quiz(quiz_id: int) -> dict:
    """
    Summarise all attempts of a quiz.

    Returns a dict with attempt and student counts, average/best/worst score
    (None when there are no attempts) and, per question in id order, how many
    details were recorded and what share of them were correct.
    """
    count, students, average, best, worst = (
        db.session.query(
            func.count(Attempt.id),
            func.count(func.distinct(Attempt.user_id)),
            func.avg(Attempt.score),
            func.max(Attempt.score),
            func.min(Attempt.score),
        )
        .filter(Attempt.quiz_id == quiz_id)
        .one()
    )

    # Outer join so questions nobody has answered yet still show up
    per_question_rows = (
        db.session.query(
            Question.id,
            Question.question_text,
            func.count(AttemptDetail.id),
            func.coalesce(func.sum(case((AttemptDetail.is_correct.is_(True), 1), else_=0)), 0),
        )
        .outerjoin(AttemptDetail, AttemptDetail.question_id == Question.id)
        .filter(Question.quiz_id == quiz_id)
        .group_by(Question.id, Question.question_text)
        .order_by(Question.id.asc())
        .all()
    )

    questions = []
    for question_id, question_text, answered, correct in per_question_rows:
        correct = int(correct)
        questions.append({
            'question_id': question_id,
            'question_text': question_text,
            'responses': answered,
            'correct': correct,
            'correct_rate': round(correct / answered, 4) if answered else 0.0,
        })

    return {
        'quiz_id': quiz_id,
        'attempt_count': count,
        'student_count': students,
        'average_score': round(float(average), 2) if average is not None else None,
        'best_score': best,
        'worst_score': worst,
        'questions': questions,
    }
