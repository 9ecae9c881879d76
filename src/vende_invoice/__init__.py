"""Vende invoice totals calculation."""

from .calculator import (
    calculate_invoice,
    calculate_invoice_totals,
    calculate_line_item,
    calculate_line_items,
    line_item_from_product,
    round2,
)
from .exceptions import VALIDATION_ERROR, InvoiceValidationError
from .models import (
    DocumentType,
    InvoiceLineItem,
    InvoiceStatus,
    InvoiceSummary,
    InvoiceTotals,
    LineItemInput,
)
from .summary import (
    InvoiceStats,
    generate_invoice_number,
    invoice_stats,
    overdue_invoices,
    recent_invoices,
)

__all__ = [
    "DocumentType",
    "InvoiceLineItem",
    "InvoiceStats",
    "InvoiceStatus",
    "InvoiceSummary",
    "InvoiceTotals",
    "InvoiceValidationError",
    "LineItemInput",
    "VALIDATION_ERROR",
    "calculate_invoice",
    "calculate_invoice_totals",
    "calculate_line_item",
    "calculate_line_items",
    "generate_invoice_number",
    "invoice_stats",
    "line_item_from_product",
    "overdue_invoices",
    "recent_invoices",
    "round2",
]
