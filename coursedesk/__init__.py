"""App factory for coursedesk (Flask)."""
from time import perf_counter

from flask import Flask, g, jsonify, request
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect
from flask_jwt_extended import JWTManager
from werkzeug.exceptions import HTTPException
from .config import Config


db = SQLAlchemy()
login_manager = LoginManager()
csrf = CSRFProtect()
jwt = JWTManager()

def create_app(config_object: type = Config) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_object)
    _configure_logging(app)
    db.init_app(app)
    login_manager.init_app(app); csrf.init_app(app); jwt.init_app(app)

    @login_manager.unauthorized_handler
    def _unauthorized():
        return jsonify(ok=False, error="Unauthorized", message="Login required."), 401

    @app.errorhandler(HTTPException)
    def _http_error(e):
        return jsonify(ok=False, error=e.name, message=e.description, category="error"), e.code

    from .auth import auth_bp
    from .main import main_bp
    from .student.routes import student_bp
    from .professor.routes import professor_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(student_bp, url_prefix="/student")
    app.register_blueprint(professor_bp, url_prefix="/professor")

    from .services import build_services
    with app.app_context():
        db.create_all()
        if app.config.get("SEED_ON_STARTUP"):
            _seed(app)
    app.extensions["coursedesk"] = build_services(db.session, app.config)

    @app.cli.command("seed")
    def seed_command():
        _seed(app); print("Seed loaded.")

    @app.cli.command("reset-db")
    def reset_db_command():
        """Drop every table, recreate the schema and reload the sample data."""
        with app.app_context():
            db.drop_all()
            db.create_all()
            _seed(app)
        print("Store recreated and seed loaded.")

    @app.before_request
    def _rq_start():
        g._rq_t0 = perf_counter()

    @app.after_request
    def _rq_stop(response):
        t0 = getattr(g, "_rq_t0", None)
        if t0 is None:
            return response
        duration_ms = int((perf_counter() - t0) * 1000)
        app.logger.info("%s %s -> %s (%d ms)", request.method, request.path,
                        response.status_code, duration_ms)
        return response

    return app

def _configure_logging(app: Flask) -> None:
    # app.logger is the "coursedesk" logger; module loggers propagate into it.
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

def _seed(app: Flask) -> None:
    from .seed import run_seed
    run_seed(include_acknowledgments=app.config.get("SEED_ACKNOWLEDGMENTS", True))
