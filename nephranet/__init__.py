"""
Nephranet Water Quality Portal - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask, render_template

from nephranet.config import Config
from nephranet.extensions import db, login_manager


def create_app(config_class=Config, store=None, geocoder=None):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)
        store: Reading store; built from config when omitted
        geocoder: Location geocoder; built from config when omitted

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.login_message = 'Please sign in to upload data.'
    login_manager.login_message_category = 'info'

    # External collaborators, passed to services via get_store()/get_geocoder()
    from nephranet.services.store import build_store, STORE_EXTENSION_KEY
    from nephranet.services.geocoding import build_geocoder, GEOCODER_EXTENSION_KEY

    app.extensions[STORE_EXTENSION_KEY] = store if store is not None else build_store(app.config)
    app.extensions[GEOCODER_EXTENSION_KEY] = geocoder if geocoder is not None else build_geocoder(app.config)

    # Register blueprints
    from nephranet.auth import auth_bp
    from nephranet.readings import readings_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(readings_bp)

    # User loader for Flask-Login
    @login_manager.user_loader
    def load_user(user_id):
        from nephranet.models import User
        return db.session.get(User, int(user_id))

    @app.errorhandler(404)
    def not_found(e):
        return render_template('errors/404.html'), 404

    # Create database tables
    with app.app_context():
        uri = app.config['SQLALCHEMY_DATABASE_URI']
        if uri.startswith('sqlite:///') and ':memory:' not in uri:
            db_dir = os.path.dirname(uri[len('sqlite:///'):])
            if db_dir:
                os.makedirs(db_dir, exist_ok=True)
        db.create_all()

    app.logger.info('Nephranet started with %s reading store', type(app.extensions[STORE_EXTENSION_KEY]).__name__)
    return app


def configure_logging(app):
    """Set up root logging from LOG_LEVEL."""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
        level=level
    )
    logging.getLogger().setLevel(level)
