"""
Pytest configuration and fixtures for testing.
Every test gets a fresh application backed by an in-memory SQLite database.
"""
import os
from types import SimpleNamespace

import pytest

# Set test environment variables BEFORE the application package is imported
os.environ['FLASK_ENV'] = 'testing'
os.environ['SECRET_KEY'] = 'test-secret-key-not-for-production'
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['MIN_PASSWORD_LENGTH'] = '8'

from quizhub import create_app, db
from quizhub.auth.models import User
from quizhub.auth.utils import hash_password
from quizhub.quiz.models import Quiz, Question

PASSWORD = 'password123'
# Hashing is slow on purpose; do it once for the whole session
PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture
def app():
    """Create application for testing."""
    app = create_app()
    app.config['TESTING'] = True
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def app_ctx(app):
    """Push an application context for tests that call services directly."""
    with app.app_context():
        yield app


def _create_user(name, email, role):
    user = User(name=name, email=email, password_hash=PASSWORD_HASH, role=role)
    db.session.add(user)
    db.session.commit()
    return user.id


@pytest.fixture
def users(app):
    """Two instructors and two students, returned by id."""
    with app.app_context():
        return SimpleNamespace(
            instructor=_create_user('Ines Instructor', 'ines@example.com', 'instructor'),
            other_instructor=_create_user('Omar Instructor', 'omar@example.com', 'instructor'),
            student=_create_user('Sam Student', 'sam@example.com', 'student'),
            other_student=_create_user('Tara Student', 'tara@example.com', 'student'),
        )


@pytest.fixture
def make_quiz(app):
    """
    Factory creating a quiz with questions.

    ``questions`` is a list of ``(correct_option, points)`` tuples.
    Returns ``(quiz_id, [question_id, ...])`` with ids in creation order.
    """
    def _make_quiz(instructor_id, questions=(), published=True, title='Sample quiz'):
        with app.app_context():
            quiz = Quiz(instructor_id=instructor_id, title=title, is_published=published)
            db.session.add(quiz)
            db.session.flush()
            question_ids = []
            for index, (correct_option, points) in enumerate(questions, start=1):
                question = Question(
                    quiz_id=quiz.id,
                    question_text=f'Question {index}?',
                    option_a='Alpha',
                    option_b='Bravo',
                    option_c='Charlie',
                    option_d='Delta',
                    correct_option=correct_option,
                    points=points,
                )
                db.session.add(question)
                db.session.flush()
                question_ids.append(question.id)
            db.session.commit()
            return quiz.id, question_ids
    return _make_quiz


def _login(client, email, password=PASSWORD):
    return client.post('/api/auth/login', json={'email': email, 'password': password})


@pytest.fixture
def student_client(app, users):
    client = app.test_client()
    response = _login(client, 'sam@example.com')
    assert response.status_code == 200
    return client


@pytest.fixture
def instructor_client(app, users):
    client = app.test_client()
    response = _login(client, 'ines@example.com')
    assert response.status_code == 200
    return client


@pytest.fixture
def login():
    """Log a test client in; returns the login response."""
    return _login
