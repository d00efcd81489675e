"""
ShopCheckout - Flask Application Entry Point.

This is a slim app factory that:
1. Loads configuration (.env + Config class)
2. Configures logging
3. Builds the catalog, the customer ledger and the checkout engine
4. Wraps them in a ShopSession stored in app.config
5. Registers route blueprints and error handlers

ARCHITECTURE:
    create_app()
    ├── Catalog          (CATALOG_PATH file or demo products)
    ├── BalanceLedger    (opening balance INITIAL_BALANCE)
    ├── CheckoutEngine   (CheckoutSettings from config, receipts logged)
    └── ShopSession      (cart + lock, used by the routes)

Nothing lives at module level: every app instance gets its own ledger and
cart, so tests can create as many apps as they need.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import CheckoutSettings
from core.clock import Clock, SystemClock
from logging_config import setup_logging, get_logger
from modules.catalog import Catalog, demo_catalog
from modules.output import LoggingSink
from routes import register_blueprints
from services.checkout_service import CheckoutEngine
from services.ledger import BalanceLedger
from services.shop_session import ShopSession


# Module logger (configured after setup_logging)
logger = get_logger(__name__)


def create_app(
    config_object: Union[str, type] = "config.Config",
    clock: Optional[Clock] = None
) -> Flask:
    """
    Application factory - creates and configures the Flask app.

    Args:
        config_object: Import path or class passed to app.config.from_object
        clock: Calendar used for expiry checks (default: SystemClock)

    Returns:
        Configured Flask application
    """
    load_dotenv(override=True)

    app = Flask(__name__)
    app.config.from_object(config_object)

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        log_level=log_level,
        log_dir=Path(app.config.get("LOG_DIR", "logs")),
        enable_file_logging=enable_file_logging
    )

    # Set Flask's logger to use our configured logger
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting ShopCheckout in {app.config.get('ENVIRONMENT')} mode")

    # =========================================================================
    # SHOP INITIALIZATION
    # =========================================================================

    clock = clock or SystemClock()

    catalog_path = app.config.get("CATALOG_PATH")
    if catalog_path:
        catalog = Catalog.from_file(catalog_path)
    else:
        catalog = demo_catalog(clock.today())

    settings = CheckoutSettings.from_config(app.config)
    ledger = BalanceLedger(app.config.get("INITIAL_BALANCE", "0"))
    sink = LoggingSink(get_logger("receipts"))
    engine = CheckoutEngine(settings, sink)

    app.config["OUTPUT_SINK"] = sink
    app.config["SHOP_SESSION"] = ShopSession(catalog, ledger, engine, clock)

    logger.info(
        f"Shop ready: {len(catalog)} products, shipping fee {settings.shipping_fee}, "
        f"opening balance {ledger.read()}"
    )

    register_blueprints(app)

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        kind = (e.name or "http_error").lower().replace(" ", "_")
        return jsonify({"kind": kind, "message": e.description, "details": {}}), e.code

    @app.errorhandler(500)
    def handle_server_error(e):
        logger.error(f"500 error: {e}", exc_info=True)
        return jsonify({"kind": "server_error", "message": "An unexpected error occurred", "details": {}}), 500

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    app.run(debug=debug_mode)
