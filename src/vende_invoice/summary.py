"""Invoice listing helpers: statistics, overdue and recent invoices, numbering."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal

from .models import ZERO, InvoiceStatus, InvoiceSummary


@dataclass
class InvoiceStats:
    """Counts per status and aggregated amounts."""

    total: int = 0
    draft: int = 0
    sent: int = 0
    paid: int = 0
    overdue: int = 0
    cancelled: int = 0
    total_amount: Decimal = ZERO
    paid_amount: Decimal = ZERO
    pending_amount: Decimal = ZERO


def invoice_stats(invoices: Iterable[InvoiceSummary]) -> InvoiceStats:
    stats = InvoiceStats()
    for inv in invoices:
        stats.total += 1
        counter = inv.status.lower()
        setattr(stats, counter, getattr(stats, counter) + 1)
        stats.total_amount += inv.total
        if inv.status == InvoiceStatus.PAID:
            stats.paid_amount += inv.total
        elif inv.status in (InvoiceStatus.SENT, InvoiceStatus.OVERDUE):
            stats.pending_amount += inv.total
    return stats


def overdue_invoices(
    invoices: Iterable[InvoiceSummary], today: date | None = None
) -> list[InvoiceSummary]:
    """Sent invoices whose due date has passed."""
    day = today if today is not None else date.today()
    return [
        inv
        for inv in invoices
        if inv.status == InvoiceStatus.SENT and inv.due_date is not None and inv.due_date < day
    ]


def recent_invoices(invoices: Iterable[InvoiceSummary], limit: int = 10) -> list[InvoiceSummary]:
    """Newest first by creation time."""
    return sorted(invoices, key=lambda inv: inv.created_at, reverse=True)[:limit]


def generate_invoice_number(series: str, now: datetime | None = None) -> str:
    """Return ``SERIES-YYYY-NNNN`` where NNNN are the last digits of the epoch millis.

    The number is only a client-side suggestion. It is not guaranteed unique;
    the invoices service assigns the final number.
    """
    moment = now if now is not None else datetime.now(timezone.utc)
    millis = int(moment.timestamp() * 1000)
    return f"{series}-{moment.year}-{str(millis)[-4:]}"
