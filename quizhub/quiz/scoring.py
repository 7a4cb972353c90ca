"""
Scoring engine.

``score`` is a pure function: the same answer key and submission always give
an equal ``ScoreResult``. It performs no I/O and never raises for missing or
malformed answers; those simply count as unanswered.

Percentages are rounded half up (12.5 -> 13) using ``decimal`` so that the
result does not depend on float representation or banker's rounding.
"""
from dataclasses import dataclass, asdict
from decimal import Decimal, ROUND_HALF_UP
from typing import Mapping, Optional, Sequence, Union

from quizhub.quiz.answer_key import AnswerKeyEntry
from quizhub.quiz.models import effective_points
from quizhub.quiz.submission import Submission


@dataclass(frozen=True)
class QuestionResult:
    question_id: int
    correct_option: str
    selected_option: Optional[str]
    is_correct: bool
    points_earned: int
    points: int


@dataclass(frozen=True)
class ScoreResult:
    per_question: tuple
    correct_count: int
    total_points: int
    max_points: int
    percentage: int

    @property
    def question_count(self) -> int:
        return len(self.per_question)

    def to_dict(self) -> dict:
        return {
            'per_question': [asdict(entry) for entry in self.per_question],
            'correct_count': self.correct_count,
            'total_points': self.total_points,
            'max_points': self.max_points,
            'percentage': self.percentage,
        }


def percentage(total_points: int, max_points: int) -> int:
    """Integer percentage rounded half up; 0 when nothing could be scored."""
    if max_points <= 0:
        return 0
    value = Decimal(total_points) * 100 / Decimal(max_points)
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _selection(submission, question_id: int) -> Optional[str]:
    if isinstance(submission, Submission):
        return submission.selection_for(question_id)
    if isinstance(submission, Mapping):
        value = submission.get(question_id)
        return value if isinstance(value, str) else None
    return None


def score(answer_key: Sequence[AnswerKeyEntry],
          submission: Union[Submission, Mapping[int, str], None]) -> ScoreResult:
    """
    Score a submission against an answer key.

    Args:
        answer_key: Entries in the order they should be reported
        submission: A ``Submission`` or a plain ``{question_id: label}`` dict

    Returns:
        ScoreResult with one QuestionResult per key entry, in key order
    """
    results = []
    correct_count = 0
    total_points = 0
    max_points = 0

    for entry in answer_key:
        points = effective_points(entry.points)
        selected = _selection(submission, entry.question_id)
        is_correct = selected is not None and selected == entry.correct_option

        max_points += points
        if is_correct:
            correct_count += 1
            total_points += points

        results.append(QuestionResult(
            question_id=entry.question_id,
            correct_option=entry.correct_option,
            selected_option=selected,
            is_correct=is_correct,
            points_earned=points if is_correct else 0,
            points=points,
        ))

    return ScoreResult(
        per_question=tuple(results),
        correct_count=correct_count,
        total_points=total_points,
        max_points=max_points,
        percentage=percentage(total_points, max_points),
    )
