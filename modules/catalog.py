"""
Product catalog used by the HTTP shop.

The catalog is either loaded from a JSON file (a list of Product.to_dict()
style entries, path taken from CATALOG_PATH) or built from the demo
products below. Demo expiry dates are relative to the day the catalog is
built, so expirable items stay purchasable except the deliberately expired
milk.
"""

import json
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Dict, Iterator, List, Union

from core.exceptions import UnknownProductError
from models.product import Product
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)


class Catalog:
    """Products indexed by name, in declaration order."""

    def __init__(self, products: List[Product]):
        self._products: Dict[str, Product] = {}
        for product in products:
            if product.name in self._products:
                raise ValueError(f"Duplicate product in catalog: {product.name}")
            self._products[product.name] = product

    def get(self, name: str) -> Product:
        """
        Look up a product by name.

        Raises:
            UnknownProductError: If no product has this name
        """
        try:
            return self._products[name]
        except KeyError:
            raise UnknownProductError(name) from None

    def __contains__(self, name: str) -> bool:
        return name in self._products

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products.values())

    def __len__(self) -> int:
        return len(self._products)

    def to_list(self) -> List[dict]:
        return [product.to_dict() for product in self._products.values()]

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Catalog":
        """Load a catalog from a JSON array of product entries."""
        with open(path, "r", encoding="utf-8") as f:
            entries = json.load(f)
        catalog = cls([Product.from_dict(entry) for entry in entries])
        logger.info(f"Loaded {len(catalog)} products from {path}")
        return catalog


def demo_catalog(today: date) -> Catalog:
    """Build the demo catalog with expiry dates relative to today."""
    return Catalog([
        Product("Cheese", Decimal("100"), 5, is_expirable=True, is_shippable=True,
                unit_weight=Decimal("0.2"), expiry_date=today + timedelta(days=14)),
        Product("Biscuits", Decimal("150"), 3, is_expirable=True, is_shippable=True,
                unit_weight=Decimal("0.7"), expiry_date=today + timedelta(days=30)),
        Product("Milk", Decimal("50"), 5, is_expirable=True, is_shippable=True,
                unit_weight=Decimal("1.0"), expiry_date=date(2020, 1, 1)),
        Product("Scratch Card", Decimal("50"), 10),
        Product("Chips", Decimal("20"), 3),
        Product("TV", Decimal("300"), 3, is_shippable=True, unit_weight=Decimal("5.0")),
        Product("Phone", Decimal("200"), 3, is_shippable=True, unit_weight=Decimal("0.4")),
        Product("Speaker", Decimal("150"), 2, is_shippable=True, unit_weight=Decimal("1.0")),
        Product("Laptop Bag", Decimal("200"), 5, is_shippable=True, unit_weight=Decimal("0.8")),
    ])
