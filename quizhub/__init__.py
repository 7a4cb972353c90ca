import sqlite3

from flask import Flask, jsonify, request
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from dotenv import load_dotenv
from flask_migrate import Migrate
from flask_compress import Compress
from sqlalchemy import event
from sqlalchemy.engine import Engine

# Load environment variables early so config is available for blueprint creation
load_dotenv()

from quizhub.config import config

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
compress = Compress()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores foreign keys unless asked per connection."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_app() -> Flask:
    """
    Application factory for the Flask app.
    Loads environment variables, configures the database,
    and registers blueprints.
    """
    # Re-initialize config to ensure latest .env values are loaded
    from quizhub.config import Config
    global config
    config = Config()

    config.validate()

    app = Flask(__name__)

    app.config["SECRET_KEY"] = config.SECRET_KEY
    app.config["DEBUG"] = config.FLASK_DEBUG
    app.config["SQLALCHEMY_DATABASE_URI"] = config.SQLALCHEMY_DATABASE_URI
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = config.SQLALCHEMY_TRACK_MODIFICATIONS
    app.config["SQLALCHEMY_ECHO"] = config.SQLALCHEMY_ECHO
    if config.is_mysql:
        # Connection pooling only applies to the MySQL server; sqlite uses a static pool
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {
            "pool_size": 10,
            "pool_recycle": 3600,
            "pool_pre_ping": True,
            "max_overflow": 20,
            "isolation_level": "READ COMMITTED",
            "connect_args": {
                "connect_timeout": 5,
                "read_timeout": 10,
                "write_timeout": 10,
                "charset": "utf8mb4",
                "autocommit": False,
            }
        }

    app.config["COMPRESS_MIMETYPES"] = ['application/json']
    app.config["COMPRESS_LEVEL"] = 6
    app.config["COMPRESS_MIN_SIZE"] = 500
    app.config["SESSION_COOKIE_SECURE"] = config.SESSION_COOKIE_SECURE
    app.config["SESSION_COOKIE_HTTPONLY"] = config.SESSION_COOKIE_HTTPONLY
    app.config["SESSION_COOKIE_SAMESITE"] = config.SESSION_COOKIE_SAMESITE

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    compress.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        from quizhub.auth.models import User
        try:
            return db.session.get(User, int(user_id))
        except (ValueError, TypeError):
            return None

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'success': False, 'error': 'Authentication required'}), 401

    @app.route("/")
    def index():
        return jsonify({
            "status": "ok",
            "message": "QuizHub API is running",
            "auth_prefix": config.AUTH_URL_PREFIX,
            "quiz_prefix": config.QUIZ_URL_PREFIX,
        }), 200

    # Register blueprints
    from quizhub.auth import auth_bp
    app.register_blueprint(auth_bp)

    from quizhub.quiz import quiz_bp
    app.register_blueprint(quiz_bp)

    from quizhub.common.errors import QuizHubError

    @app.errorhandler(QuizHubError)
    def handle_quizhub_error(e):
        """Render domain errors as JSON with their HTTP status."""
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(404)
    def handle_404(e):
        app.logger.warning(f"404 error: {request.method} {request.path}")
        return jsonify({
            'success': False,
            'error': f'Route not found: {request.method} {request.path}',
            'path': request.path,
            'method': request.method
        }), 404

    @app.errorhandler(405)
    def handle_405(e):
        app.logger.warning(f"405 error: {request.method} {request.path}")
        return jsonify({
            'success': False,
            'error': f'Method not allowed: {request.method} {request.path}',
            'path': request.path,
            'method': request.method
        }), 405

    # Create tables if they do not exist
    with app.app_context():
        from quizhub.auth.models import User  # noqa: F401
        from quizhub.quiz.models import Quiz, Question, Attempt, AttemptDetail  # noqa: F401
        db.create_all()

    app.logger.info("QuizHub application initialized")
    return app
