import logging

import click
from flask import Flask, g, request, session

from config import Config
from utils import activity_logger, attendance_manager, relationships
from utils.db import init_db_connection
from utils.errors import create_authentication_error, register_error_handlers
from utils.logging_config import configure_logging, set_correlation_id
from utils.seed import initialize_database

# Import controllers
from controllers.auth_controller import auth_bp
from controllers.employee_controller import employee_bp
from controllers.department_controller import department_bp
from controllers.project_controller import project_bp
from controllers.leave_controller import leave_bp
from controllers.attendance_controller import attendance_bp
from controllers.permission_controller import permission_bp
from controllers.activity_controller import activity_bp
from controllers.records_controller import records_bp
from controllers.document_controller import document_bp
from controllers.notification_controller import notification_bp
from controllers.settings_controller import settings_bp

logger = logging.getLogger(__name__)

BLUEPRINTS = (
    auth_bp,
    employee_bp,
    department_bp,
    project_bp,
    leave_bp,
    attendance_bp,
    permission_bp,
    activity_bp,
    records_bp,
    document_bp,
    notification_bp,
    settings_bp,
)


def create_app(config_object=Config):
    app = Flask(__name__)               # Initialize Flask app
    app.config.from_object(config_object)

    configure_logging(app)
    init_db_connection(app)             # Initialize MongoDB connection

    relationships.MAX_WORKERS = app.config["AGGREGATE_MAX_WORKERS"]
    activity_logger.configure(app.config["ACTIVITY_LOG_WORKERS"])
    attendance_manager.DEFAULT_WORKING_HOURS = {
        "start": app.config["DEFAULT_WORK_START"],
        "end": app.config["DEFAULT_WORK_END"],
    }

    # Register Blueprints
    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint)

    register_error_handlers(app)

    @app.before_request
    def assign_request_id():
        g.request_id = set_correlation_id(request.headers.get("X-Request-ID"))

    # Global before_request: block all routes except login if not logged in
    @app.before_request
    def require_login():
        allowed_routes = ["auth.login", "static"]
        if "user_id" not in session and request.endpoint not in allowed_routes:
            raise create_authentication_error("Please log in to access this resource.")
        return None

    @app.after_request
    def echo_request_id(response):
        response.headers["X-Request-ID"] = g.get("request_id", "")
        return response

    @app.cli.command("init-db")
    def init_db_command():
        """Seed roles, departments, catalogs and the admin account."""
        admin_id = initialize_database(
            app.config["ADMIN_EMAIL"],
            app.config["ADMIN_PASSWORD"],
            app.config["ADMIN_DISPLAY_NAME"],
        )
        if admin_id:
            click.echo(f"Database initialized; admin user id {admin_id}")
        else:
            click.echo("Database already initialized")

    logger.info("Application created with %s", getattr(config_object, "__name__", config_object))
    return app


# Run the app
if __name__ == "__main__":
    create_app().run(debug=Config.DEBUG)
