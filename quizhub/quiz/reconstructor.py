"""
Attempt reconstructor.

Re-joins an attempt with its details and the questions they refer to, for
review by the student who made it or the instructor who owns the quiz.
"""
from dataclasses import dataclass, asdict
from typing import Optional

from quizhub import db
from quizhub.auth.utils import Principal
from quizhub.common.audit_logger import AuditLogger
from quizhub.common.errors import Forbidden, NotFound
from quizhub.quiz.models import Attempt, AttemptDetail, Question, Quiz, effective_points

REVIEW_ROLES = ('student', 'instructor')


@dataclass(frozen=True)
class DetailView:
    question_id: int
    question_text: str
    options: dict
    correct_option: str
    points: int
    student_answer: Optional[str]
    is_correct: bool
    points_earned: int


@dataclass(frozen=True)
class AttemptView:
    attempt_id: int
    user_id: int
    quiz_id: int
    quiz_title: str
    score: int
    total_points: int
    max_points: int
    time_taken: Optional[int]
    created_at: Optional[str]
    details: tuple

    @property
    def correct_count(self) -> int:
        return sum(1 for detail in self.details if detail.is_correct)

    def to_dict(self) -> dict:
        data = asdict(self)
        data['details'] = [asdict(detail) for detail in self.details]
        data['correct_count'] = self.correct_count
        return data


def _can_view(attempt: Attempt, quiz: Quiz, principal: Principal) -> bool:
    if principal.role == 'instructor':
        return quiz.instructor_id == principal.user_id
    return attempt.user_id == principal.user_id


def load(attempt_id: int, principal: Principal) -> AttemptView:
    """
    Rebuild an attempt for review.

    Raises:
        Forbidden: if the principal's role may not review attempts at all
        NotFound: if the attempt does not exist or is outside the
            principal's scope (the two are not distinguished)
    """
    if principal.role not in REVIEW_ROLES:
        AuditLogger.log_access_denied(principal.user_id, f"attempt:{attempt_id}", f"role '{principal.role}'")
        raise Forbidden("Access denied")

    attempt = db.session.get(Attempt, attempt_id)
    quiz = db.session.get(Quiz, attempt.quiz_id) if attempt is not None else None
    if attempt is None or quiz is None or not _can_view(attempt, quiz, principal):
        if attempt is not None:
            AuditLogger.log_access_denied(principal.user_id, f"attempt:{attempt_id}", "not owner")
        raise NotFound("Attempt not found")

    rows = (
        db.session.query(AttemptDetail, Question)
        .join(Question, AttemptDetail.question_id == Question.id)
        .filter(AttemptDetail.attempt_id == attempt.id)
        .order_by(AttemptDetail.question_id.asc())
        .all()
    )
    details = tuple(
        DetailView(
            question_id=question.id,
            question_text=question.question_text,
            options=question.options(),
            correct_option=question.correct_option,
            points=effective_points(question.points),
            student_answer=detail.student_answer,
            is_correct=detail.is_correct,
            points_earned=detail.points_earned,
        )
        for detail, question in rows
    )

    return AttemptView(
        attempt_id=attempt.id,
        user_id=attempt.user_id,
        quiz_id=attempt.quiz_id,
        quiz_title=quiz.title,
        score=attempt.score,
        total_points=attempt.total_points,
        max_points=attempt.max_points,
        time_taken=attempt.time_taken,
        created_at=attempt.created_at.isoformat() if attempt.created_at else None,
        details=details,
    )
