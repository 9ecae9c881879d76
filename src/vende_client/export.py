"""CSV export of product listings."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from datetime import date

from .models import Product

CSV_HEADER = ["ID", "Nombre", "Precio Unitario", "Estado", "Categoría"]


def products_to_csv(products: Iterable[Product]) -> str:
    """Render products as CSV text with a header row."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for p in products:
        writer.writerow([p.id, p.name, p.unit_price, str(p.status), str(p.category)])
    return buf.getvalue()


def export_filename(today: date | None = None) -> str:
    day = today if today is not None else date.today()
    return f"productos-{day.isoformat()}.csv"
