"""
Normalisation of submitted answers.

Both entry points (JSON body and form post) are reduced to one
``Submission``: question id -> option label, plus the optional elapsed time.
Entries that cannot be understood are dropped and reported, never fatal.
"""
from dataclasses import dataclass, field
from typing import Mapping, Optional

from quizhub.quiz.models import OPTION_LABELS

FORM_FIELD_PREFIX = "question_"
# Largest value the attempts.time_taken INTEGER column holds
MAX_TIME_TAKEN = 2**31 - 1


def _parse_question_id(raw) -> Optional[int]:
    try:
        question_id = int(str(raw).strip())
    except (TypeError, ValueError):
        return None
    return question_id if question_id > 0 else None


def _parse_time_taken(raw) -> Optional[int]:
    if raw is None or raw == '':
        return None
    if isinstance(raw, bool):
        return None
    try:
        seconds = int(raw)
    except (TypeError, ValueError):
        return None
    return seconds if 0 <= seconds <= MAX_TIME_TAKEN else None


@dataclass(frozen=True)
class Submission:
    """A student's answers, keyed by question id."""

    answers: Mapping[int, str] = field(default_factory=dict)
    time_taken: Optional[int] = None
    dropped: tuple = ()

    def selection_for(self, question_id: int) -> Optional[str]:
        """Selected label for a question, or None when unanswered."""
        return self.answers.get(question_id)

    @classmethod
    def from_mapping(cls, raw_answers, time_taken=None) -> "Submission":
        """
        Build a submission from a raw ``{question_id: label}`` mapping.

        Keys may be strings (JSON object keys always are). Labels must be
        exactly one of A, B, C, D; anything else counts as no answer.
        """
        answers = {}
        dropped = []
        if isinstance(raw_answers, Mapping):
            for raw_key, raw_value in raw_answers.items():
                question_id = _parse_question_id(raw_key)
                if question_id is None:
                    dropped.append(str(raw_key))
                    continue
                if raw_value is None or raw_value == '':
                    continue
                if not isinstance(raw_value, str) or raw_value not in OPTION_LABELS:
                    dropped.append(str(raw_key))
                    continue
                answers[question_id] = raw_value
        elif raw_answers is not None:
            dropped.append('answers')
        return cls(answers=answers, time_taken=_parse_time_taken(time_taken), dropped=tuple(dropped))

    @classmethod
    def from_json(cls, payload) -> "Submission":
        """Build from ``{"answers": {...}, "time_taken": 42}``."""
        if not isinstance(payload, Mapping):
            return cls(dropped=('body',))
        return cls.from_mapping(payload.get('answers'), payload.get('time_taken'))

    @classmethod
    def from_form(cls, form) -> "Submission":
        """Build from form fields named ``question_<id>``."""
        raw_answers = {
            key[len(FORM_FIELD_PREFIX):]: value
            for key, value in form.items()
            if key.startswith(FORM_FIELD_PREFIX)
        }
        return cls.from_mapping(raw_answers, form.get('time_taken'))
