from flask import Flask
from healthchain.extensions import db, limiter, cors
from healthchain.services import HealthChain
from healthchain.utils.error_handlers import register_error_handlers
from healthchain.commands import register_commands
import os
from config import config


def create_app(config_name=None, overrides=None):
    app = Flask(__name__)

    config_name = config_name or os.getenv('HEALTHCHAIN_CONFIG', 'default')
    config_class = config[config_name]
    app.config.from_object(config_class)
    if overrides:
        app.config.update(overrides)

    # Initialize app with config (logging, folders)
    config_class.init_app(app)

    # Initialize extensions
    db.init_app(app)
    limiter.init_app(app)
    cors.init_app(app, origins=app.config['ALLOWED_ORIGINS'])

    # The ledger table must exist before the first event is recorded
    with app.app_context():
        from healthchain.models import ledger_models  # noqa: F401
        db.create_all()

    HealthChain.from_app(app)

    # Register blueprints
    from healthchain.api import api_bp
    app.register_blueprint(api_bp, url_prefix='/api')

    # Register error handlers and commands
    register_error_handlers(app)
    register_commands(app)

    return app
