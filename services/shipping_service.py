"""
Shipment builder.

Turns the shippable cart lines into a manifest:

    [CartLine(Cheese, 2), CartLine(Biscuits, 1)]
        -> ShipmentManifest(
               lines=(ShipmentLine("Cheese", 2, 0.4), ShipmentLine("Biscuits", 1, 0.7)),
               total_weight=1.1,
           )

No shippable lines means no manifest at all (None), which is different from
a manifest whose weight happens to be zero.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional

from models.cart import CartLine
from models.order import ShipmentLine, ShipmentManifest
from modules.output import OutputSink
from modules.receipt import format_manifest
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)


def build_manifest(lines: Iterable[CartLine]) -> Optional[ShipmentManifest]:
    """
    Build the manifest for shippable lines, preserving their order.

    Lines whose product is not shippable are skipped, so the whole cart may
    be passed in.

    Returns:
        ShipmentManifest, or None if no line ships
    """
    shipment_lines = tuple(
        ShipmentLine(
            name=line.product.name,
            quantity=line.quantity,
            total_weight=line.product.unit_weight * line.quantity,
        )
        for line in lines
        if line.product.is_shippable
    )
    if not shipment_lines:
        return None

    total_weight = sum((item.total_weight for item in shipment_lines), Decimal("0"))
    return ShipmentManifest(lines=shipment_lines, total_weight=total_weight)


class ShipmentBuilder:
    """
    Builds the manifest and writes the shipment notice to the output sink.

    Never fails; an empty input produces no output.
    """

    def __init__(self, sink: OutputSink):
        self._sink = sink

    def build(self, lines: Iterable[CartLine]) -> Optional[ShipmentManifest]:
        manifest = build_manifest(lines)
        if manifest is None:
            logger.debug("No shippable lines, skipping shipment notice")
            return None

        for text in format_manifest(manifest):
            self._sink.emit(text)

        logger.info(
            f"Shipment manifest built: {len(manifest.lines)} lines, "
            f"{manifest.total_weight}kg"
        )
        return manifest
