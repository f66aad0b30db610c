"""
Logging configuration for the SmartBin rewards backend.
"""
import os
import logging
import logging.handlers
from flask import has_request_context, request, g


class RequestFormatter(logging.Formatter):
    """
    Formatter that adds request-specific information to logs.
    """
    def format(self, record):
        if has_request_context():
            record.url = request.url
            record.remote_addr = request.remote_addr
            record.method = request.method
            identity = g.get('identity')
            record.user_id = identity.email if identity else 'Anonymous'
        else:
            record.url = None
            record.remote_addr = None
            record.method = None
            record.user_id = None

        return super().format(record)


def setup_logging(app=None):
    """Configure application logging"""
    logger = logging.getLogger()

    # Clear any existing handlers
    logger.handlers = []

    log_level = os.environ.get('LOG_LEVEL', 'INFO').upper()
    logger.setLevel(getattr(logging, log_level, logging.INFO))

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(RequestFormatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s | User: %(user_id)s'
    ))
    logger.addHandler(console_handler)

    # Optional file handler for permanent logging
    if os.environ.get('LOG_TO_FILE'):
        os.makedirs('logs', exist_ok=True)

        # 10 MB per file, max 5 files
        file_handler = logging.handlers.RotatingFileHandler(
            'logs/smartbin.log',
            maxBytes=10*1024*1024,
            backupCount=5
        )
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(RequestFormatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s | '
            'URL: %(url)s | IP: %(remote_addr)s | Method: %(method)s | User: %(user_id)s'
        ))
        logger.addHandler(file_handler)

    # SQLAlchemy is noisy at INFO
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)

    if app is not None:
        app.logger.setLevel(logger.level)

    logger.info("Logging configured successfully")
