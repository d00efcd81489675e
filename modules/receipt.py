"""
Text layout for shipment notices and checkout receipts.

Shipment notice:
    ** Shipment notice **
    2x Cheese     0.4kg
    Total package weight 0.4kg

Checkout receipt:
    ** Checkout receipt **
    2x Cheese 200
    ----------------------
    Subtotal 200
    Shipping 30
    Amount 230
    Customer Remaining Balance 370
"""

from typing import List

from models.order import Order, ShipmentManifest

SHIPMENT_HEADER = "** Shipment notice **"
RECEIPT_HEADER = "** Checkout receipt **"
RECEIPT_SEPARATOR = "----------------------"


def format_manifest(manifest: ShipmentManifest) -> List[str]:
    """Render a non-empty shipment manifest."""
    lines = [SHIPMENT_HEADER]
    for item in manifest.lines:
        lines.append(f"{item.quantity}x {item.name}     {item.total_weight}kg")
    lines.append(f"Total package weight {manifest.total_weight}kg")
    return lines


def format_receipt(order: Order) -> List[str]:
    """Render the receipt for a completed order."""
    lines = ["", RECEIPT_HEADER]
    for item in order.receipt_lines:
        lines.append(f"{item.quantity}x {item.name} {item.line_total}")
    lines.extend([
        RECEIPT_SEPARATOR,
        f"Subtotal {order.subtotal}",
        f"Shipping {order.shipping_fee}",
        f"Amount {order.total}",
        f"Customer Remaining Balance {order.remaining_balance}",
    ])
    return lines
