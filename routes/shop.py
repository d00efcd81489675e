"""
Shop API routes (JSON).

Handles:
- GET    /api/products  - Catalog listing
- GET    /api/cart      - Current cart lines
- POST   /api/cart      - Add a product line
- DELETE /api/cart      - Discard the cart
- GET    /api/balance   - Current balance
- POST   /api/balance   - Top up the balance
- POST   /api/checkout  - Check out the cart

Failures are returned as {"kind", "message", "details"} so clients can
branch on the kind.
"""

from decimal import Decimal, InvalidOperation

import bleach
from flask import Blueprint, current_app, jsonify, request

from core.exceptions import CartError, CheckoutError, ShopCheckoutError, UnknownProductError
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

shop_bp = Blueprint("shop", __name__, url_prefix="/api")

# Constants
MAX_NAME_LENGTH = 200


def _sanitize_text(text, max_length: int = None) -> str:
    """Sanitize user input text."""
    if not text:
        return ""
    text = str(text).strip()
    text = bleach.clean(text, tags=[], strip=True)
    if max_length and len(text) > max_length:
        text = text[:max_length]
    return text


def _shop():
    return current_app.config["SHOP_SESSION"]


def _error_response(error: ShopCheckoutError, status: int):
    return jsonify({
        "kind": error.kind.value if error.kind else None,
        "message": error.message,
        "details": error.details,
    }), status


def _bad_request(message: str):
    return jsonify({"kind": "invalid_request", "message": message, "details": {}}), 400


@shop_bp.errorhandler(UnknownProductError)
def handle_unknown_product(e):
    return _error_response(e, 404)


@shop_bp.errorhandler(CartError)
@shop_bp.errorhandler(CheckoutError)
def handle_rejected(e):
    logger.info(f"Request rejected: {e}")
    return _error_response(e, 409)


@shop_bp.route("/products", methods=["GET"])
def products():
    return jsonify({"products": _shop().catalog.to_list()})


@shop_bp.route("/cart", methods=["GET"])
def view_cart():
    return jsonify(_shop().cart.to_dict())


@shop_bp.route("/cart", methods=["POST"])
def add_to_cart():
    """
    Add a product line.

    Body: {"product": "Cheese", "quantity": 2}
    """
    payload = request.get_json(silent=True) or {}
    name = _sanitize_text(payload.get("product"), MAX_NAME_LENGTH)
    quantity = payload.get("quantity")

    if not name:
        return _bad_request("Product name is required")

    try:
        line = _shop().add_to_cart(name, quantity)
    except ValueError as e:
        return _bad_request(str(e))

    return jsonify({"line": line.to_dict(), "cart": _shop().cart.to_dict()}), 201


@shop_bp.route("/cart", methods=["DELETE"])
def discard_cart():
    _shop().discard_cart()
    return jsonify(_shop().cart.to_dict())


@shop_bp.route("/balance", methods=["GET"])
def balance():
    return jsonify({"balance": str(_shop().ledger.read())})


@shop_bp.route("/balance", methods=["POST"])
def top_up():
    """
    Top up the customer balance.

    Body: {"amount": "100"}
    """
    payload = request.get_json(silent=True) or {}
    try:
        amount = Decimal(str(payload.get("amount")))
        new_balance = _shop().top_up(amount)
    except (InvalidOperation, ValueError) as e:
        return _bad_request(f"Invalid amount: {e}")

    return jsonify({"balance": str(new_balance)})


@shop_bp.route("/checkout", methods=["POST"])
def checkout():
    """
    Check out the current cart.

    Returns the CheckoutResult; 200 when completed, 409 when refused.
    """
    result = _shop().checkout()
    if result.succeeded:
        logger.info(f"Checkout completed, balance {result.balance}")
        return jsonify(result.to_dict())

    logger.info(f"Checkout failed: {result.error_message}")
    return jsonify(result.to_dict()), 409
