"""
Routes package for the pharmacy application
One blueprint per screen family, registered by init_app()
"""

from pharma.logger import get_logger

logger = get_logger("pharma.routes")


def init_app(app):
    """Register all route blueprints with the Flask app"""
    from pharma import csrf
    from pharma.presentation.routes.main import main
    from pharma.presentation.routes import medicines, suppliers, orders, api

    logger.debug("Initializing route blueprints")

    app.register_blueprint(main)
    app.register_blueprint(medicines.bp)
    app.register_blueprint(suppliers.bp)
    app.register_blueprint(orders.bp)

    # JSON clients authenticate with the session cookie and cannot carry a form token
    csrf.exempt(api.bp)
    app.register_blueprint(api.bp, url_prefix='/api')

    logger.debug("Route blueprints registered")
