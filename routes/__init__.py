"""
Flask route blueprints for ShopCheckout.

- health: Liveness probe
- shop: JSON API for catalog, cart, balance and checkout

Each blueprint is registered with the Flask app in create_app().
"""

from .health import health_bp
from .shop import shop_bp

__all__ = [
    "health_bp",
    "shop_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(health_bp)
    app.register_blueprint(shop_bp)
