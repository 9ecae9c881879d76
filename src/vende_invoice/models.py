"""Invoice data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import StrEnum
from typing import Any

ZERO = Decimal("0.00")

Number = int | float | str | Decimal


class InvoiceStatus(StrEnum):
    DRAFT = "DRAFT"
    SENT = "SENT"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"


class DocumentType(StrEnum):
    INVOICE = "INVOICE"
    SIMPLIFIED_INVOICE = "SIMPLIFIED_INVOICE"
    CREDIT_NOTE = "CREDIT_NOTE"
    DEBIT_NOTE = "DEBIT_NOTE"
    QUOTE = "QUOTE"
    DELIVERY_NOTE = "DELIVERY_NOTE"


@dataclass(frozen=True)
class LineItemInput:
    """One billed line before totals are computed."""

    quantity: Number
    unit_price: Number
    tax_rate_percent: Number
    discount_percent: Number = 0
    product_id: str = ""
    product_name: str = ""
    description: str | None = None
    unit_type: str = "UNIT"
    tax_type: str = "IVA_GENERAL"


@dataclass(frozen=True)
class InvoiceLineItem:
    """A line item with its derived monetary fields (2 decimal places)."""

    quantity: Decimal
    unit_price: Decimal
    discount_percent: Decimal
    tax_rate_percent: Decimal
    subtotal: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    total: Decimal
    product_id: str = ""
    product_name: str = ""
    description: str | None = None
    unit_type: str = "UNIT"
    tax_type: str = "IVA_GENERAL"

    def to_dict(self) -> dict[str, Any]:
        return {
            "productId": self.product_id,
            "productName": self.product_name,
            "description": self.description,
            "quantity": float(self.quantity),
            "unitPrice": float(self.unit_price),
            "unitType": self.unit_type,
            "taxType": self.tax_type,
            "taxRate": float(self.tax_rate_percent),
            "discount": float(self.discount_percent),
            "subtotal": float(self.subtotal),
            "taxAmount": float(self.tax_amount),
            "total": float(self.total),
        }


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal = ZERO
    total_tax: Decimal = ZERO
    total_discount: Decimal = ZERO
    total: Decimal = ZERO

    def to_dict(self) -> dict[str, float]:
        return {
            "subtotal": float(self.subtotal),
            "totalTax": float(self.total_tax),
            "totalDiscount": float(self.total_discount),
            "total": float(self.total),
        }


def _status(value: Any) -> InvoiceStatus:
    try:
        return InvoiceStatus(value)
    except ValueError:
        return InvoiceStatus.DRAFT


@dataclass
class InvoiceSummary:
    """The subset of an invoice needed for listings and statistics."""

    id: str
    status: InvoiceStatus
    total: Decimal = ZERO
    number: str = ""
    client_id: str = ""
    due_date: date | None = None
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InvoiceSummary:
        due = data.get("dueDate")
        return cls(
            id=data["id"],
            status=_status(data.get("status")),
            total=Decimal(str(data.get("total", 0))),
            number=data.get("number", ""),
            client_id=data.get("clientId", ""),
            due_date=date.fromisoformat(due[:10]) if due else None,
            created_at=data.get("createdAt", ""),
        )
