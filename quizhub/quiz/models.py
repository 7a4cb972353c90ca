"""
Database models for quiz functionality.

A quiz holds multiple choice questions with four options labelled A-D.
Each submission produces one Attempt plus one AttemptDetail per question.
"""
from datetime import datetime
from quizhub import db


OPTION_LABELS = ('A', 'B', 'C', 'D')
DEFAULT_POINTS = 1


def effective_points(points) -> int:
    """Point value of a question; unset or non-positive values count as 1."""
    if points is None:
        return DEFAULT_POINTS
    points = int(points)
    return points if points > 0 else DEFAULT_POINTS


class Quiz(db.Model):
    """Model for quizzes authored by an instructor."""
    __tablename__ = "quizzes"

    id = db.Column(db.Integer, primary_key=True)
    instructor_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete='CASCADE'), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    time_limit = db.Column(db.Integer, nullable=True)  # Seconds
    is_published = db.Column(db.Boolean, default=False, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    # Relationships
    instructor = db.relationship("User", foreign_keys=[instructor_id], backref="quizzes")
    questions = db.relationship("Question", backref="quiz", lazy="dynamic", cascade="all", order_by="Question.id")
    attempts = db.relationship("Attempt", backref="quiz", lazy="dynamic", cascade="all")

    def __repr__(self) -> str:
        return f"<Quiz {self.id}: {self.title}>"

    def get_total_points(self) -> int:
        """Calculate total points for all questions."""
        return sum(effective_points(q.points) for q in self.questions)

    def get_question_count(self) -> int:
        return self.questions.count()

    def has_attempts(self) -> bool:
        """The question set is frozen once any attempt exists."""
        return self.attempts.count() > 0

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'time_limit': self.time_limit,
            'is_published': self.is_published,
            'instructor_id': self.instructor_id,
            'question_count': self.get_question_count(),
            'total_points': self.get_total_points(),
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


class Question(db.Model):
    """Multiple choice question; correct_option is one of A, B, C, D."""
    __tablename__ = "questions"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id", ondelete='CASCADE'), nullable=False, index=True)
    question_text = db.Column(db.Text, nullable=False)
    option_a = db.Column(db.Text, nullable=False)
    option_b = db.Column(db.Text, nullable=False)
    option_c = db.Column(db.Text, nullable=False)
    option_d = db.Column(db.Text, nullable=False)
    correct_option = db.Column(db.String(1), nullable=False)
    points = db.Column(db.Integer, nullable=False, default=DEFAULT_POINTS)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.CheckConstraint("correct_option IN ('A', 'B', 'C', 'D')", name='ck_questions_correct_option'),
    )

    def __repr__(self) -> str:
        return f"<Question {self.id}: quiz {self.quiz_id}>"

    def options(self) -> dict:
        return {
            'A': self.option_a,
            'B': self.option_b,
            'C': self.option_c,
            'D': self.option_d,
        }

    def to_dict(self, include_answer: bool = False) -> dict:
        data = {
            'id': self.id,
            'quiz_id': self.quiz_id,
            'question_text': self.question_text,
            'options': self.options(),
            'points': effective_points(self.points),
        }
        if include_answer:
            data['correct_option'] = self.correct_option
        return data


class Attempt(db.Model):
    """One scored submission of a quiz by a user."""
    __tablename__ = "attempts"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete='CASCADE'), nullable=False, index=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id", ondelete='CASCADE'), nullable=False, index=True)
    score = db.Column(db.Integer, nullable=False, default=0)  # Percentage 0-100
    total_points = db.Column(db.Integer, nullable=False, default=0)
    max_points = db.Column(db.Integer, nullable=False, default=0)
    time_taken = db.Column(db.Integer, nullable=True)  # Seconds
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    # Relationships
    user = db.relationship("User", foreign_keys=[user_id], backref="attempts")
    details = db.relationship("AttemptDetail", backref="attempt", lazy="dynamic", cascade="all, delete-orphan", order_by="AttemptDetail.question_id")

    __table_args__ = (
        db.Index('ix_attempts_user_quiz', 'user_id', 'quiz_id'),
    )

    def __repr__(self) -> str:
        return f"<Attempt {self.id}: User {self.user_id}, Quiz {self.quiz_id}>"

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'user_id': self.user_id,
            'quiz_id': self.quiz_id,
            'score': self.score,
            'total_points': self.total_points,
            'max_points': self.max_points,
            'time_taken': self.time_taken,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


class AttemptDetail(db.Model):
    """Per-question record owned by an Attempt."""
    __tablename__ = "attempt_details"

    id = db.Column(db.Integer, primary_key=True)
    attempt_id = db.Column(db.Integer, db.ForeignKey("attempts.id", ondelete='CASCADE'), nullable=False, index=True)
    question_id = db.Column(db.Integer, db.ForeignKey("questions.id", ondelete='CASCADE'), nullable=False, index=True)
    student_answer = db.Column(db.String(1), nullable=True)  # Null when unanswered
    is_correct = db.Column(db.Boolean, nullable=False, default=False)
    points_earned = db.Column(db.Integer, nullable=False, default=0)

    question = db.relationship("Question", foreign_keys=[question_id])

    __table_args__ = (
        db.UniqueConstraint('attempt_id', 'question_id', name='uq_attempt_question'),
    )

    def __repr__(self) -> str:
        return f"<AttemptDetail {self.id}: Question {self.question_id}>"
