import os
import logging
from dotenv import load_dotenv
load_dotenv()
from flask import Flask, jsonify
from flask_cors import CORS
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException
from config import config_dict, CurrentConfig
from models import db
from routes.authentication import auth_bp
from routes.classrooms import class_bp
from routes.quizzes import quiz_bp
from utils.errors import ApiError, InternalFailure
from utils.logging_config import configure_logging

logger = logging.getLogger(__name__)
migrate = Migrate()


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        kind = "NotFound" if error.code == 404 else type(error).__name__
        return jsonify({"error": error.description, "kind": kind}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        logger.exception("Unhandled error")
        failure = InternalFailure()
        return jsonify(failure.to_dict()), failure.status_code


def create_app(config_name=None, config_overrides=None):
    config_name = config_name or os.environ.get("FLASK_ENV", "production")
    app = Flask(__name__)
    app.config.from_object(config_dict.get(config_name, CurrentConfig))
    app.config.update(config_overrides or {})

    configure_logging(app.config["LOG_LEVEL"])
    logger.info("Starting quiz backend with %s config", config_name)

    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}}, supports_credentials=True)

    db.init_app(app)
    migrate.init_app(app, db)

    @app.route('/')
    def home():
        return "Welcome to the Quiz App!"

    app.register_blueprint(auth_bp, url_prefix='/api/user')
    app.register_blueprint(class_bp, url_prefix='/api/classes')
    app.register_blueprint(quiz_bp, url_prefix='/api/classes')
    register_error_handlers(app)

    with app.app_context():
        db.create_all()

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=app.config.get('DEBUG', False))
