import logging
import os
from dotenv import load_dotenv
load_dotenv()
from flask import Flask, jsonify
from flask_cors import CORS
from flask_migrate import Migrate
from sqlalchemy import text
from config import config_dict
from manage import register_commands
from models import db
from routes.authentication import auth_bp
from routes.courses import course_bp
from routes.purchases import purchase_bp
from routes.progress import progress_bp
from utils.helpers import error_response, register_error_handlers
from utils.logging_config import configure_logging

logger = logging.getLogger(__name__)

migrate = Migrate()


def create_app(config_name=None):
    """Build the Flask application for the given environment name."""
    config_name = (config_name or os.environ.get("FLASK_ENV", "production")).lower()

    app = Flask(__name__)
    app.config.from_object(config_dict.get(config_name, config_dict["production"]))
    app.url_map.strict_slashes = False

    configure_logging(app.config["LOG_LEVEL"])
    logger.info("Starting LMS backend (%s)", config_name)

    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}}, supports_credentials=True)

    db.init_app(app)
    migrate.init_app(app, db)

    app.register_blueprint(auth_bp, url_prefix='/api/v1/user')
    app.register_blueprint(course_bp, url_prefix='/api/v1/course')
    app.register_blueprint(purchase_bp, url_prefix='/api/v1/purchase')
    app.register_blueprint(progress_bp, url_prefix='/api/v1/progress')

    register_error_handlers(app)
    register_commands(app)

    @app.route('/')
    def home():
        return jsonify({"success": True, "message": "Welcome to the LMS API!"})

    @app.route('/api/v1/health')
    def health():
        try:
            db.session.execute(text("SELECT 1"))
        except Exception as e:
            logger.error("Health check failed: %s", e)
            return error_response("Database unavailable", 503)
        return jsonify({"success": True, "status": "ok"})

    return app


app = create_app()

if __name__ == '__main__':
    app.run(debug=app.config['DEBUG'])
