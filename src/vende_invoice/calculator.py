"""Invoice line item and totals calculation.

Amounts are computed with :class:`decimal.Decimal` and rounded half-up to
cents. The order is fixed because it changes results by cents on multi-line
invoices:

1. ``raw = quantity * unit_price``
2. ``subtotal = round2(raw - raw * discount_percent / 100)``
3. ``tax_amount = round2(subtotal * tax_rate_percent / 100)``
4. ``total = round2(subtotal + tax_amount)``

Invoice totals are plain sums of the already rounded per-line values.
Arithmetic runs in a local context wide enough to keep every amount exact.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

from .exceptions import InvoiceValidationError
from .models import ZERO, InvoiceLineItem, InvoiceTotals, LineItemInput, Number

CENT = Decimal("0.01")
HUNDRED = Decimal(100)

# Largest accepted input, in coefficient digits plus exponent magnitude.
MAX_DIGITS = 100


def round2(value: Decimal) -> Decimal:
    """Round to two decimal places, half-up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _to_decimal(value: Number, field: str, line_index: int | None) -> Decimal:
    if isinstance(value, bool):
        raise InvoiceValidationError(field, f"{field} must be a number", line_index=line_index)
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as e:
        raise InvoiceValidationError(
            field, f"{field} must be a number, got {value!r}", line_index=line_index
        ) from e
    if not result.is_finite():
        raise InvoiceValidationError(field, f"{field} must be finite", line_index=line_index)
    if _digits(result) > MAX_DIGITS:
        raise InvoiceValidationError(
            field, f"{field} exceeds {MAX_DIGITS} digits", line_index=line_index
        )
    return result


def _digits(value: Decimal) -> int:
    _, digits, exponent = value.as_tuple()
    return len(digits) + abs(exponent)


def _precision(values: Iterable[Decimal]) -> int:
    # Enough for exact products, sums and quantization of the given operands.
    return 28 + sum(_digits(v) for v in values)


def _validated(item: LineItemInput, line_index: int | None) -> tuple[Decimal, Decimal, Decimal, Decimal]:
    quantity = _to_decimal(item.quantity, "quantity", line_index)
    unit_price = _to_decimal(item.unit_price, "unit_price", line_index)
    discount = _to_decimal(item.discount_percent, "discount_percent", line_index)
    tax_rate = _to_decimal(item.tax_rate_percent, "tax_rate_percent", line_index)

    if quantity < 0:
        raise InvoiceValidationError(
            "quantity", f"quantity must be >= 0, got {quantity}", line_index=line_index
        )
    if unit_price < 0:
        raise InvoiceValidationError(
            "unit_price", f"unit_price must be >= 0, got {unit_price}", line_index=line_index
        )
    if discount < 0 or discount > HUNDRED:
        raise InvoiceValidationError(
            "discount_percent",
            f"discount_percent must be within [0, 100], got {discount}",
            line_index=line_index,
        )
    if tax_rate < 0:
        raise InvoiceValidationError(
            "tax_rate_percent", f"tax_rate_percent must be >= 0, got {tax_rate}", line_index=line_index
        )
    return quantity, unit_price, discount, tax_rate


def _compute(item: LineItemInput, values: tuple[Decimal, Decimal, Decimal, Decimal]) -> InvoiceLineItem:
    quantity, unit_price, discount, tax_rate = values
    with localcontext() as ctx:
        ctx.prec = _precision(values)
        raw = quantity * unit_price
        discount_raw = raw * discount / HUNDRED
        subtotal = round2(raw - discount_raw)
        tax_amount = round2(subtotal * tax_rate / HUNDRED)
        discount_amount = round2(discount_raw)
        total = round2(subtotal + tax_amount)
    return InvoiceLineItem(
        quantity=quantity,
        unit_price=unit_price,
        discount_percent=discount,
        tax_rate_percent=tax_rate,
        subtotal=subtotal,
        discount_amount=discount_amount,
        tax_amount=tax_amount,
        total=total,
        product_id=item.product_id,
        product_name=item.product_name,
        description=item.description,
        unit_type=item.unit_type,
        tax_type=item.tax_type,
    )


def calculate_line_item(item: LineItemInput) -> InvoiceLineItem:
    """Compute the monetary fields of a single line."""
    return _compute(item, _validated(item, None))


def calculate_line_items(items: Iterable[LineItemInput]) -> list[InvoiceLineItem]:
    """Compute every line. All lines are validated before any is computed."""
    items = list(items)
    values = [_validated(item, i) for i, item in enumerate(items)]
    return [_compute(item, v) for item, v in zip(items, values)]


def calculate_invoice_totals(lines: Sequence[InvoiceLineItem]) -> InvoiceTotals:
    """Sum already rounded per-line values."""
    widest = max(
        (
            _digits(amount)
            for line in lines
            for amount in (line.subtotal, line.tax_amount, line.discount_amount, line.total)
        ),
        default=0,
    )
    with localcontext() as ctx:
        ctx.prec = 28 + widest + len(str(len(lines)))
        return InvoiceTotals(
            subtotal=sum((line.subtotal for line in lines), ZERO),
            total_tax=sum((line.tax_amount for line in lines), ZERO),
            total_discount=sum((line.discount_amount for line in lines), ZERO),
            total=sum((line.total for line in lines), ZERO),
        )


def calculate_invoice(items: Iterable[LineItemInput]) -> tuple[list[InvoiceLineItem], InvoiceTotals]:
    lines = calculate_line_items(items)
    return lines, calculate_invoice_totals(lines)


def line_item_from_product(product: Any, quantity: Number = 1) -> LineItemInput:
    """Build a line item from a product-like object, without discount."""
    return LineItemInput(
        quantity=quantity,
        unit_price=Decimal(str(product.unit_price)),
        tax_rate_percent=Decimal(str(product.tax_rate)),
        discount_percent=0,
        product_id=product.id,
        product_name=product.name,
        description=product.description or None,
        unit_type=str(product.unit_type),
        tax_type=str(product.tax_type),
    )
