"""Create users, quizzes, questions, attempts and attempt_details tables

Revision ID: 3f2a9c1d7e40
Revises:
Create Date: 2026-10-19 10:12:03.418275

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision = '3f2a9c1d7e40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    inspector = inspect(op.get_bind())
    tables = inspector.get_table_names()

    if 'users' not in tables:
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=255), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('password_hash', sa.String(length=255), nullable=False),
            sa.Column('role', sa.String(length=20), nullable=False, server_default='student'),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_users_email', 'users', ['email'], unique=True)

    if 'quizzes' not in tables:
        op.create_table('quizzes',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('instructor_id', sa.Integer(), nullable=False),
            sa.Column('title', sa.String(length=255), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('time_limit', sa.Integer(), nullable=True),
            sa.Column('is_published', sa.Boolean(), nullable=False, server_default='0'),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['instructor_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_quizzes_instructor_id', 'quizzes', ['instructor_id'], unique=False)
        op.create_index('ix_quizzes_is_published', 'quizzes', ['is_published'], unique=False)
        op.create_index('ix_quizzes_created_at', 'quizzes', ['created_at'], unique=False)

    if 'questions' not in tables:
        op.create_table('questions',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('quiz_id', sa.Integer(), nullable=False),
            sa.Column('question_text', sa.Text(), nullable=False),
            sa.Column('option_a', sa.Text(), nullable=False),
            sa.Column('option_b', sa.Text(), nullable=False),
            sa.Column('option_c', sa.Text(), nullable=False),
            sa.Column('option_d', sa.Text(), nullable=False),
            sa.Column('correct_option', sa.String(length=1), nullable=False),
            sa.Column('points', sa.Integer(), nullable=False, server_default='1'),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.CheckConstraint("correct_option IN ('A', 'B', 'C', 'D')", name='ck_questions_correct_option'),
            sa.ForeignKeyConstraint(['quiz_id'], ['quizzes.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_questions_quiz_id', 'questions', ['quiz_id'], unique=False)

    if 'attempts' not in tables:
        op.create_table('attempts',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('quiz_id', sa.Integer(), nullable=False),
            sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('total_points', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('max_points', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('time_taken', sa.Integer(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['quiz_id'], ['quizzes.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_attempts_user_id', 'attempts', ['user_id'], unique=False)
        op.create_index('ix_attempts_quiz_id', 'attempts', ['quiz_id'], unique=False)
        op.create_index('ix_attempts_created_at', 'attempts', ['created_at'], unique=False)
        op.create_index('ix_attempts_user_quiz', 'attempts', ['user_id', 'quiz_id'], unique=False)

    if 'attempt_details' not in tables:
        op.create_table('attempt_details',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('attempt_id', sa.Integer(), nullable=False),
            sa.Column('question_id', sa.Integer(), nullable=False),
            sa.Column('student_answer', sa.String(length=1), nullable=True),
            sa.Column('is_correct', sa.Boolean(), nullable=False, server_default='0'),
            sa.Column('points_earned', sa.Integer(), nullable=False, server_default='0'),
            sa.ForeignKeyConstraint(['attempt_id'], ['attempts.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['question_id'], ['questions.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('attempt_id', 'question_id', name='uq_attempt_question')
        )
        op.create_index('ix_attempt_details_attempt_id', 'attempt_details', ['attempt_id'], unique=False)
        op.create_index('ix_attempt_details_question_id', 'attempt_details', ['question_id'], unique=False)


def downgrade():
    op.drop_index('ix_attempt_details_question_id', table_name='attempt_details')
    op.drop_index('ix_attempt_details_attempt_id', table_name='attempt_details')
    op.drop_table('attempt_details')

    op.drop_index('ix_attempts_user_quiz', table_name='attempts')
    op.drop_index('ix_attempts_created_at', table_name='attempts')
    op.drop_index('ix_attempts_quiz_id', table_name='attempts')
    op.drop_index('ix_attempts_user_id', table_name='attempts')
    op.drop_table('attempts')

    op.drop_index('ix_questions_quiz_id', table_name='questions')
    op.drop_table('questions')

    op.drop_index('ix_quizzes_created_at', table_name='quizzes')
    op.drop_index('ix_quizzes_is_published', table_name='quizzes')
    op.drop_index('ix_quizzes_instructor_id', table_name='quizzes')
    op.drop_table('quizzes')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
