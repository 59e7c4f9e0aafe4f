import time

from flask import Flask, jsonify, request, g
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from dotenv import load_dotenv
from flask_migrate import Migrate
from flask_compress import Compress

# Load environment variables early so config is available for blueprint creation
load_dotenv()

from quizmaker.config import config

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
compress = Compress()


def create_app(test_config: dict | None = None) -> Flask:
    """
    Application factory for the quiz API.
    Loads environment variables, configures the database,
    and registers blueprints.

    Args:
        test_config: Optional mapping applied on top of the environment
            configuration (used by the test suite).
    """
    # Re-initialize config to ensure latest .env values are loaded
    from quizmaker.config import Config
    global config
    config = Config()

    # Validate configuration
    config.validate()

    app = Flask(__name__)

    app.config["SECRET_KEY"] = config.SECRET_KEY
    app.config["API_TOKEN"] = config.API_TOKEN
    app.config["API_PREFIX"] = config.API_PREFIX
    app.config["CORS_ALLOWED_ORIGINS"] = config.CORS_ALLOWED_ORIGINS
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_CONTENT_LENGTH
    app.config["SQLALCHEMY_DATABASE_URI"] = config.SQLALCHEMY_DATABASE_URI
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = config.SQLALCHEMY_TRACK_MODIFICATIONS
    app.config["SQLALCHEMY_ECHO"] = config.SQLALCHEMY_ECHO
    if not config.is_sqlite:
        # Connection pooling for server databases
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {
            "pool_size": 10,
            "pool_recycle": 3600,
            "pool_pre_ping": True,
            "max_overflow": 20,
        }

    # Response compression settings
    app.config["COMPRESS_MIMETYPES"] = ["application/json"]
    app.config["COMPRESS_LEVEL"] = 6
    app.config["COMPRESS_MIN_SIZE"] = 500

    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(config.LOG_LEVEL)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    compress.init_app(app)

    from quizmaker.auth import init_auth
    init_auth(app)

    # Initialize security features
    from quizmaker.security import init_security
    init_security(app)

    @app.before_request
    def start_request_timer():
        g.request_started = time.perf_counter()
        app.logger.info(f"{request.method} {request.path}")

    @app.after_request
    def log_request(response):
        started = g.get("request_started")
        if started is not None:
            duration_ms = (time.perf_counter() - started) * 1000
            app.logger.info(
                f"{request.method} {request.path} - {response.status_code} ({duration_ms:.0f}ms)"
            )
        return response

    # Register quiz blueprint
    from quizmaker.quiz import quiz_bp
    app.register_blueprint(quiz_bp, url_prefix=app.config["API_PREFIX"] or None)

    @app.errorhandler(404)
    def handle_404(e):
        """Unknown routes return JSON like every other API error."""
        app.logger.warning(f"404 error: {request.method} {request.path}")
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def handle_405(e):
        app.logger.warning(f"405 error: {request.method} {request.path}")
        return jsonify({"error": f"Method not allowed: {request.method} {request.path}"}), 405

    @app.errorhandler(413)
    def handle_413(e):
        return jsonify({"error": "Request body too large"}), 413

    from quizmaker.seed import seed_command
    app.cli.add_command(seed_command)

    # Create tables if they do not exist
    with app.app_context():
        from quizmaker.quiz import models  # noqa: F401
        db.create_all()

    return app
