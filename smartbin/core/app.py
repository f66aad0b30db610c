"""
Core application factory and configuration.
Consolidates app creation and initialization logic.
"""

import logging
from decimal import Decimal
from flask import Flask, current_app
from flask.json.provider import DefaultJSONProvider
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


# Database setup
class Base(DeclarativeBase):
    pass


db = SQLAlchemy(model_class=Base)
migrate = Migrate()
limiter = Limiter(key_func=get_remote_address, default_limits=[])


class SmartBinJSONProvider(DefaultJSONProvider):
    """JSON provider writing Decimal amounts as numbers, keys in insertion order"""
    sort_keys = False

    @staticmethod
    def default(o):
        if isinstance(o, Decimal):
            return int(o) if o == o.to_integral_value() else float(o)
        return DefaultJSONProvider.default(o)


class Services:
    """Process-wide service objects built once per application."""

    def __init__(self, store, ledger, auth, waste, redemption, admin):
        self.store = store
        self.ledger = ledger
        self.auth = auth
        self.waste = waste
        self.redemption = redemption
        self.admin = admin


def get_services():
    """Services of the current application"""
    return current_app.extensions['smartbin']


def create_app(config=None):
    """
    Application factory pattern for creating Flask application instances.

    Args:
        config: Configuration class, instance or None for the active default

    Returns:
        Flask application instance
    """
    app = Flask(__name__)

    _configure_app(app, config)
    _init_extensions(app)
    _setup_logging(app)
    _register_routes(app)
    _setup_error_handlers(app)
    _init_services(app)
    _init_database(app)

    return app


def _configure_app(app, config):
    """Configure the Flask application."""
    from ..config import active_config

    if config is None:
        config = active_config
    if isinstance(config, type):
        config = config()
    app.config.from_object(config)
    app.json = SmartBinJSONProvider(app)

    # Apply proxy fix for deployment
    app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)


def _init_extensions(app):
    """Initialize Flask extensions."""
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    CORS(app, resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}})


def _setup_logging(app):
    """Setup application logging."""
    if not app.testing:
        from ..logging_config import setup_logging
        setup_logging(app)
        app.logger.info('SmartBin application startup')


def _register_routes(app):
    """Register application routes and blueprints."""
    from ..api.routes import api_bp

    app.register_blueprint(api_bp, url_prefix='/api')


def _setup_error_handlers(app):
    """Setup error handlers."""
    from ..errors import register_error_handlers

    register_error_handlers(app, db)


def _init_services(app):
    """Build the store, ledger and gateways from configuration."""
    from ..ledger import Ledger, SQLAlchemyAccountStore
    from ..auth.auth import AuthService
    from ..gateways import WasteGateway, RedemptionGateway, AdminQuery

    store = SQLAlchemyAccountStore(db)
    ledger = Ledger(store)
    auth = AuthService(
        store,
        secret_key=app.config['SECRET_KEY'],
        algorithm=app.config['TOKEN_ALGORITHM'],
        expiry_seconds=app.config['TOKEN_EXPIRY_SECONDS'],
        password_min_length=app.config['PASSWORD_MIN_LENGTH'],
    )
    waste = WasteGateway(
        ledger,
        schedule=app.config['REWARD_SCHEDULE'],
        default_reward=app.config['DEFAULT_REWARD'],
        item_weight_kg=app.config['ITEM_WEIGHT_KG'],
    )
    redemption = RedemptionGateway(
        ledger,
        catalog=app.config['REWARD_CATALOG'],
        enforce_catalog=app.config['ENFORCE_REWARD_CATALOG'],
    )
    admin = AdminQuery(ledger)

    app.extensions['smartbin'] = Services(store, ledger, auth, waste, redemption, admin)


def _init_database(app):
    """Initialize database tables."""
    with app.app_context():
        # Import models to ensure they're registered
        from ..models import Account, EarnEvent, RedeemEvent  # noqa: F401

        db.create_all()

        _create_default_admin(app)


def _create_default_admin(app):
    """Create default admin account if one is configured and missing."""
    email = app.config.get('ADMIN_EMAIL')
    password = app.config.get('ADMIN_PASSWORD')
    if not email or not password:
        return

    auth = app.extensions['smartbin'].auth
    if auth.ensure_admin(email, password):
        logger.info(f'Default admin account {email} created')
