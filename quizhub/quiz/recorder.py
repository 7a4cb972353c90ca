"""
Attempt recorder.

An Attempt and its AttemptDetail rows are written as one unit of work:
they are committed together or rolled back together, so no reader ever sees
an attempt with a partial set of details.
"""
from contextlib import contextmanager
from typing import Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from quizhub import db
from quizhub.common.audit_logger import AuditLogger
from quizhub.common.errors import PersistenceFailure
from quizhub.quiz.models import Attempt, AttemptDetail
from quizhub.quiz.scoring import ScoreResult


@contextmanager
def unit_of_work(operation: str):
    """
    Commit everything added to the session inside the block, or nothing.

    Store errors are rolled back and re-raised as ``PersistenceFailure``.
    Any other interruption is rolled back and propagated unchanged.
    """
    try:
        yield db.session
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        AuditLogger.log_persistence_failure(operation, e)
        raise PersistenceFailure(f"Could not save {operation}") from e
    except BaseException:
        db.session.rollback()
        raise


def record(user_id: int, quiz_id: int, result: ScoreResult, time_taken: Optional[int] = None) -> int:
    """
    Persist a scored attempt.

    Args:
        user_id: ID of the student who submitted
        quiz_id: ID of the quiz that was scored
        result: Output of ``scoring.score``
        time_taken: Elapsed seconds, if the client reported it

    Returns:
        ID of the new attempt

    Raises:
        PersistenceFailure: if any row could not be written; nothing is kept
    """
    with unit_of_work("attempt") as session:
        attempt = Attempt(
            user_id=user_id,
            quiz_id=quiz_id,
            score=result.percentage,
            total_points=result.total_points,
            max_points=result.max_points,
            time_taken=time_taken,
        )
        session.add(attempt)
        for entry in result.per_question:
            session.add(AttemptDetail(
                attempt=attempt,
                question_id=entry.question_id,
                student_answer=entry.selected_option,
                is_correct=entry.is_correct,
                points_earned=entry.points_earned,
            ))
        # Flush inside the block so insert errors roll back the whole unit
        session.flush()
        attempt_id = attempt.id

    current_app.logger.debug(f"Attempt {attempt_id} written with {result.question_count} details")
    AuditLogger.log_attempt_recorded(attempt_id, user_id, quiz_id, result.percentage)
    return attempt_id
