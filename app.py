"""
QA Broadcast Sender
Main application entry point
"""
import os
import time
import logging
from logging.handlers import RotatingFileHandler
from flask import Flask

from config import config
from models import db
from utils.qa_sender import QASender


def create_app(config_name=None, start_scheduler=True):
    """Application factory pattern"""

    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)

    # Initialize extensions
    db.init_app(app)

    # Setup logging
    setup_logging(app)

    # One sender per app, it owns the send history
    app.qa_sender = QASender.from_config(app.config)  # type: ignore

    if start_scheduler and app.config['SCHEDULER_ENABLED']:
        from utils.scheduler import init_scheduler, shutdown_scheduler
        init_scheduler(app, app.qa_sender)  # type: ignore

        # Register shutdown handler
        import atexit
        atexit.register(shutdown_scheduler)

    return app


def setup_logging(app):
    """Configure application logging"""

    if not app.debug and not app.testing:
        # Create logs directory if it doesn't exist
        if not os.path.exists(app.config['LOG_FOLDER']):
            os.mkdir(app.config['LOG_FOLDER'])

        # Application log handler
        file_handler = RotatingFileHandler(
            app.config['APP_LOG_FILE'],
            maxBytes=10240000,  # 10MB
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

    app.logger.setLevel(logging.INFO)
    logging.getLogger('utils').setLevel(logging.INFO)
    app.logger.info('QA sender startup')


if __name__ == '__main__':
    app = create_app()

    # The scheduler runs in a background thread, keep the process alive
    try:
        while True:
            time.sleep(60)
    except (KeyboardInterrupt, SystemExit):
        app.logger.info('QA sender stopped')
