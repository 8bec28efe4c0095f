import os

from flask import Flask
from marshmallow import ValidationError as FormValidationError
from werkzeug.exceptions import RequestEntityTooLarge

from khelbharat.config import config
from khelbharat.extensions import db, ma
from khelbharat.filters import register_filters
from khelbharat.utils.logging import configure_logging


def register_error_handlers(app):
    """Turn domain and form errors into user-facing messages."""
    from domain.athletes.errors import DeleteActiveSelectionError, ValidationError
    from khelbharat.schemas import REQUIRED_MESSAGE
    from khelbharat.utils.decorators import respond

    @app.errorhandler(FormValidationError)
    def form_error(error):
        app.logger.info(f"Rejected form submission: {error.messages}")
        return respond(REQUIRED_MESSAGE, 400, errors=error.messages)

    @app.errorhandler(ValidationError)
    def validation_error(error):
        app.logger.info(f"Rejected change: {error.message} {error.fields}")
        return respond(error.message, 400, errors=error.fields)

    @app.errorhandler(DeleteActiveSelectionError)
    def delete_active_selection(error):
        return respond(str(error), 409, athleteId=error.athlete_id)

    @app.errorhandler(RequestEntityTooLarge)
    def upload_too_large(error):
        return respond("Image is too large.", 413)


def create_app(config_name=None, store=None):
    """
    Build the dashboard app.

    ``store`` is the key-value store behind the athlete and theme slots;
    by default it is the ``storage_slots`` table.
    """
    from domain.athletes import AthleteRegistry, AthleteStorage, ThemeStorage
    from infrastructure.db.init_db import init_db
    from infrastructure.key_value import SQLAlchemyKeyValueStore

    app = Flask(__name__)
    app.config.from_object(config[config_name or os.getenv('FLASK_CONFIG', 'default')])
    configure_logging(app)

    # extensions
    db.init_app(app)
    ma.init_app(app)
    init_db(app)

    if store is None:
        store = SQLAlchemyKeyValueStore(db)
    with app.app_context():
        athlete_storage = AthleteStorage(store, key=app.config['ATHLETE_STORAGE_KEY'])
        theme_storage = ThemeStorage(store, key=app.config['THEME_STORAGE_KEY'])
        theme_storage.load()
        registry = AthleteRegistry(athlete_storage)
    app.extensions['athlete_registry'] = registry
    app.extensions['theme_storage'] = theme_storage
    app.logger.info(f"Loaded {len(registry)} athletes, theme '{theme_storage.current}'")

    register_filters(app)
    register_error_handlers(app)

    from khelbharat.routes.home import home_bp
    from khelbharat.routes.athlete import athlete_bp
    from khelbharat.routes.coach import coach_bp
    from khelbharat.routes.admin import admin_bp

    app.register_blueprint(home_bp)
    app.register_blueprint(athlete_bp, url_prefix="/athlete")
    app.register_blueprint(coach_bp, url_prefix="/coach")
    app.register_blueprint(admin_bp, url_prefix="/admin")

    return app
