# /config.py
import os
import secrets
import logging
from logging.handlers import RotatingFileHandler

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _parse_directory(value, default):
    """Parses 'id:Name,id:Name' into a list of (id, name) pairs."""
    if not value:
        return default
    entries = []
    for item in value.split(','):
        if ':' not in item:
            continue
        entry_id, name = item.split(':', 1)
        if entry_id.strip():
            entries.append((entry_id.strip(), name.strip()))
    return entries


class Config:
    """HealthChain configuration settings"""
    # Security
    SECRET_KEY = os.environ.get('SECRET_KEY') or secrets.token_hex(32)

    # Storage
    DATA_DIR = os.environ.get('DATA_DIR') or BASE_DIR
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(DATA_DIR, 'uploads')
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', 16 * 1024 * 1024))

    # Ledger database
    SQLALCHEMY_DATABASE_URI = os.environ.get('LEDGER_DATABASE_URL') or \
        'sqlite:///' + os.path.join(DATA_DIR, 'ledger.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Rate Limiting
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = os.environ.get('REDIS_URL') or 'memory://'

    # CORS
    ALLOWED_ORIGINS = os.environ.get('ALLOWED_ORIGINS', '*').split(',')

    # Logging
    LOG_DIR = os.environ.get('LOG_DIR') or os.path.join(BASE_DIR, 'logs')

    # Demo directory seeded at startup
    SEED_PATIENTS = _parse_directory(os.environ.get('SEED_PATIENTS'), [('pat-1', 'John Doe')])
    SEED_PROVIDERS = _parse_directory(os.environ.get('SEED_PROVIDERS'), [('doc-1', 'Dr. Smith')])

    @staticmethod
    def init_app(app):
        """Initialize application-specific configuration"""
        log_dir = app.config['LOG_DIR']
        os.makedirs(log_dir, exist_ok=True)
        os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

        # Configure main application logging
        if not app.debug and not app.testing:
            file_handler = RotatingFileHandler(os.path.join(log_dir, 'app.log'), maxBytes=10240000, backupCount=10)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
            ))
            file_handler.setLevel(logging.INFO)
            app.logger.addHandler(file_handler)
            app.logger.setLevel(logging.INFO)
            app.logger.info('HealthChain application startup')

        # Set up HIPAA audit logger
        audit_logger = logging.getLogger('HIPAA_AUDIT')
        if not audit_logger.handlers:
            audit_handler = RotatingFileHandler(os.path.join(log_dir, 'hipaa_audit.log'), maxBytes=10240000, backupCount=20)
            audit_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(message)s'
            ))
            audit_logger.addHandler(audit_handler)
            audit_logger.setLevel(logging.INFO)
            audit_logger.propagate = False  # Prevent duplicate logs

        app.audit_logger = audit_logger


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True

    @staticmethod
    def init_app(app):
        Config.init_app(app)

        if not app.logger.handlers:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(logging.Formatter(
                '%(asctime)s %(levelname)s: %(message)s'
            ))
            app.logger.addHandler(console_handler)
            app.logger.setLevel(logging.DEBUG)


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    RATELIMIT_ENABLED = False

    @staticmethod
    def init_app(app):
        Config.init_app(app)


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False

    @classmethod
    def init_app(cls, app):
        Config.init_app(app)

        app.logger.info('HealthChain production application startup')

        if not os.environ.get('SECRET_KEY'):
            app.logger.warning('SECRET_KEY not set - a random key is used for this process only')

        if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///:memory:'):
            app.logger.error('In-memory ledger database configured in production!')
            raise ValueError('LEDGER_DATABASE_URL must point at durable storage in production')


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
