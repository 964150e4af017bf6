from flask import Flask, session, request

from config import Config
from utils.db import init_db_connection
from utils.logger import configure_logging, get_logger
from utils.messages import MESSAGE_NOT_LOGGED_IN_YET
from utils.responses import register_error_handlers, handle_error, STATUS_CODE_BAD_REQUEST
from utils.uploads import configure_cloudinary
from seeds import register_commands

# Import controllers
from controllers.users_controller import users_bp
from controllers.permissions_controller import permissions_bp
from controllers.roles_controller import roles_bp
from controllers.audits_controller import audits_bp
from controllers.profiles_controller import profiles_bp

from controllers.genders_controller import genders_bp
from controllers.countries_controller import countries_bp
from controllers.states_controller import states_bp
from controllers.cities_controller import cities_bp

from controllers.classes_controller import classes_bp
from controllers.sections_controller import sections_bp
from controllers.subjects_controller import subjects_bp
from controllers.students_controller import students_bp
from controllers.exams_controller import exams_bp
from controllers.marks_controller import marks_bp
from controllers.questions_controller import questions_bp

logger = get_logger(__name__)

BLUEPRINTS = [
    users_bp, permissions_bp, roles_bp, audits_bp, profiles_bp,
    genders_bp, countries_bp, states_bp, cities_bp,
    classes_bp, sections_bp, subjects_bp, students_bp, exams_bp, marks_bp, questions_bp,
]

# Routes reachable without a session
PUBLIC_ENDPOINTS = ["users.login", "static"]

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "same-origin",
}


def create_app(config_class=Config):
    app = Flask(__name__)               # Initialize Flask app
    app.config.from_object(config_class)
    configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    init_db_connection(app)             # Initialize MongoDB connection
    configure_cloudinary(app)

    # Register Blueprint
    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint)

    register_error_handlers(app)
    register_commands(app)

    # Global before_request: block every route except login if not logged in.
    # Unknown URLs have no endpoint and fall through to the 404 handler.
    @app.before_request
    def require_login():
        if request.endpoint is None or request.endpoint in PUBLIC_ENDPOINTS:
            return None
        if "user_code" not in session:
            return handle_error(STATUS_CODE_BAD_REQUEST, MESSAGE_NOT_LOGGED_IN_YET)
        return None

    @app.after_request
    def add_security_headers(response):
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    logger.info("Application started with %d blueprints", len(BLUEPRINTS))
    return app


# Run the app
if __name__ == "__main__":
    create_app().run(debug=True)
