"""
CSV export of the product list and of order snapshots.
Version: 1.0.0
"""
import csv
import io
from typing import Iterable

from autoparts_hub.core.constants.orders import CSV_ORDER_HEADERS, CSV_PRODUCT_HEADERS
from autoparts_hub.schemas.catalog import Product
from autoparts_hub.schemas.orders import OrderSnapshot
from autoparts_hub.utils.pricing import format_percent, format_price


def products_to_csv(products: Iterable[Product]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_PRODUCT_HEADERS)
    for p in products:
        writer.writerow([
            p.code,
            p.description,
            p.category,
            p.subcategory,
            p.brand,
            "" if p.list_price is None else f"{p.list_price:.2f}",
        ])
    return buffer.getvalue()


def order_to_csv(snapshot: OrderSnapshot) -> str:
    """One row per line plus a closing TOTAL row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_ORDER_HEADERS)
    for line in snapshot.lines:
        writer.writerow([
            line.product.code,
            line.product.description,
            line.quantity,
            format_percent(line.markup),
            format_price(line.unit_price),
            format_price(line.line_subtotal),
        ])
    writer.writerow(["", "", "", "", "TOTAL", format_price(snapshot.total)])
    return buffer.getvalue()
