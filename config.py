"""
Configuration for ShopCheckout.

Values come from the environment, with a .env file loaded first. The
checkout engine never reads these classes directly: CheckoutSettings is
derived from them once and passed in.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Union

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
# This must happen before the Config class is defined
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    SESSION_COOKIE_NAME = "shop_checkout_session"
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"

    # Log files (only written in production)
    LOG_DIR = os.environ.get("LOG_DIR", str(BASE_DIR / "logs"))

    # ==========================================================================
    # Checkout Configuration
    # ==========================================================================
    # SHIPPING_FEE: flat surcharge added to every order, regardless of weight,
    #   item count or destination. One value per process.
    #
    # INITIAL_BALANCE: opening balance of the customer ledger.
    #
    # CHECKOUT_REVALIDATE: when "1", stock and expiry are checked again at
    #   checkout time. Default "0" checks them only when lines are added.
    # ==========================================================================
    SHIPPING_FEE = Decimal(os.environ.get("SHIPPING_FEE", "30"))
    INITIAL_BALANCE = Decimal(os.environ.get("INITIAL_BALANCE", "600"))
    CHECKOUT_REVALIDATE = os.environ.get("CHECKOUT_REVALIDATE", "0") == "1"


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    ENVIRONMENT = "production"
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    SHIPPING_FEE = Decimal("30")
    INITIAL_BALANCE = Decimal("600")
    CHECKOUT_REVALIDATE = False


@dataclass(frozen=True)
class CheckoutSettings:
    """
    Settings the checkout engine runs with.

    Attributes:
        shipping_fee: Flat fee added to every order
        revalidate: Re-check stock and expiry at checkout time
    """

    shipping_fee: Decimal = Decimal("30")
    revalidate: bool = False

    def __post_init__(self):
        fee = Decimal(str(self.shipping_fee))
        if not fee.is_finite() or fee < 0:
            raise ValueError(f"Shipping fee must be a finite, non-negative amount, got {fee}")
        object.__setattr__(self, "shipping_fee", fee)

    @classmethod
    def from_config(cls, config: Union[Mapping, type]) -> "CheckoutSettings":
        """
        Build settings from a Config class or a Flask app.config mapping.
        """
        if isinstance(config, Mapping):
            get = config.get
        else:
            def get(key, default=None):
                return getattr(config, key, default)

        return cls(
            shipping_fee=Decimal(str(get("SHIPPING_FEE", "30"))),
            revalidate=bool(get("CHECKOUT_REVALIDATE", False)),
        )
