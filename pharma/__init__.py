from pathlib import Path

from flask import Flask, redirect, request
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from pharma.config import AppConfig
from pharma.logger import configure_logging, get_logger

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
csrf = CSRFProtect()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["2000 per day", "300 per hour"],
    storage_uri="memory://"
)

CONFIG_EXTENSION_KEY = 'pharma_config'


def create_app(config=None):
    """
    Application factory.

    Args:
        config (AppConfig, optional): Explicit configuration. Read from the
            environment when omitted.
    """
    if config is None:
        config = AppConfig.from_env()

    base_dir = Path(__file__).parent
    app = Flask(__name__,
                template_folder=str(base_dir / 'presentation' / 'templates'),
                static_folder=str(base_dir / 'presentation' / 'static'))

    configure_logging(config)
    logger = get_logger("pharma.app")
    logger.info("Initializing Flask application")

    app.config.update(config.flask_settings())
    app.extensions[CONFIG_EXTENSION_KEY] = config

    if config.database_url.startswith('sqlite:///'):
        Path(config.database_url[len('sqlite:///'):]).parent.mkdir(parents=True, exist_ok=True)

    if config.enable_https:
        logger.info("HTTPS enforcement enabled")
    else:
        logger.warning("HTTPS enforcement DISABLED - acceptable for development only")

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.login_message = 'Please log in to access this page.'
    login_manager.login_message_category = 'info'

    logger.debug("Extensions initialized")

    # Register models with SQLAlchemy
    from pharma.data import user, supplier, medicine, order  # noqa: F401

    from pharma.auth import auth
    from pharma.presentation.routes import init_app as init_routes

    app.register_blueprint(auth)
    init_routes(app)

    @app.before_request
    def enforce_https():
        """Redirect plain HTTP to HTTPS when enforcement is configured"""
        if app.config.get('ENABLE_HTTPS') and app.config.get('FORCE_HTTPS_REDIRECT'):
            if not request.is_secure and request.headers.get('X-Forwarded-Proto') != 'https':
                return redirect(request.url.replace('http://', 'https://', 1), code=301)
        return None

    @app.after_request
    def set_security_headers(response):
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Content-Security-Policy'] = (
            "default-src 'self'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data:;"
        )
        if app.config.get('ENABLE_HTTPS'):
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response

    logger.info("Flask application initialization complete")
    return app


def get_config(app=None) -> AppConfig:
    """Return the AppConfig the given (or current) app was built with."""
    if app is None:
        from flask import current_app
        app = current_app
    return app.extensions[CONFIG_EXTENSION_KEY]
