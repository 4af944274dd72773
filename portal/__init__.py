"""
Portal - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask, jsonify, request

from portal.config import Config
from portal.errors import SessionError
from portal.extensions import db, login_manager, sessions


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    _configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    sessions.init_app(app)
    login_manager.init_app(app)
    # Identity comes from our sessions, not Flask's signed cookie
    login_manager.session_protection = None

    from portal.auth import middleware
    middleware.init_app(app, login_manager)

    # Register blueprints
    from portal.auth import auth_bp
    from portal.home import home_bp
    from portal.api import api_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(home_bp)
    app.register_blueprint(api_bp, url_prefix='/api')

    @app.errorhandler(SessionError)
    def handle_session_error(error):
        app.logger.error('Session store failure: %s', error)
        return jsonify(error=error.message), error.status_code

    @app.after_request
    def log_request(response):
        app.logger.info('%s %s %s', request.method, request.path, response.status_code)
        return response

    # Create database tables
    with app.app_context():
        os.makedirs(app.instance_path, exist_ok=True)
        db.create_all()

    return app


def _configure_logging(app):
    level = logging.getLevelName(str(app.config.get('LOG_LEVEL', 'INFO')).upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )
    app.logger.setLevel(level)
    logging.getLogger('portal').setLevel(level)
