from flask import Flask
from flask_sqlalchemy import SQLAlchemy
import logging
import os
import structlog
from dotenv import load_dotenv

# Initialize extensions
db = SQLAlchemy()

def configure_logging(level='INFO'):
    """Route structlog through the stdlib logging backend at the given level."""
    logging.basicConfig(format='%(message)s', level=level)
    logging.getLogger().setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt='iso'),
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=['event']),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

def create_app(config_name='development', overrides=None):
    # Load environment variables
    load_dotenv()

    # Initialize Flask app
    app = Flask(__name__)

    # Configure the app based on environment
    if config_name == 'testing':
        app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite:///:memory:'
        app.config['TESTING'] = True
        app.config['BCRYPT_LOG_ROUNDS'] = 4
    else:
        app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv('DATABASE_URL', 'sqlite:///healthtracker.db')
        app.config['BCRYPT_LOG_ROUNDS'] = int(os.getenv('BCRYPT_LOG_ROUNDS', '12'))

    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['LOG_LEVEL'] = os.getenv('LOG_LEVEL', 'INFO').upper()

    if overrides:
        app.config.update(overrides)

    configure_logging(app.config['LOG_LEVEL'])

    # Initialize extensions with app
    db.init_app(app)

    # Import models and commands after db initialization to avoid circular imports
    from healthtracker.models import user, health_record  # noqa: F401
    from healthtracker.cli import register_commands

    register_commands(app)

    return app

def init_db():
    """Create the users and health_records tables. Needs an app context."""
    db.create_all()
