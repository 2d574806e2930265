"""
Vendor payout computation.

Pure functions over order lines: no database access, no settings lookup.
The caller passes the commission rate explicitly.
"""

from dataclasses import dataclass
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal
from typing import Any, Iterable, List

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def quantize_money(amount) -> Decimal:
    """Round a money amount to 2 places, half up."""
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass
class PayoutEntry:
    """Computed share of one vendor in an order."""

    vendor_id: Any
    gross_amount: Decimal
    commission: Decimal
    net_amount: Decimal
    status: str = "pending"


def _line_value(line, name):
    if isinstance(line, dict):
        return line[name]
    return getattr(line, name)


def commission_for(amount: Decimal, commission_rate: Decimal) -> Decimal:
    return quantize_money(Decimal(amount) * Decimal(commission_rate) / HUNDRED)


def compute_payouts(order_lines: Iterable, commission_rate) -> List[PayoutEntry]:
    """
    Group order lines by vendor and split each vendor's gross into commission and net.

    Lines are dicts or objects exposing ``vendor_id``, ``unit_price`` and ``quantity``.
    Vendors appear in the order they are first seen. The commissions always add
    up to the commission on the order total, so the nets add up to
    ``total - total_commission`` exactly. Each vendor starts from its exact share
    truncated to the cent; the cents still owed go one at a time to the vendors
    with the largest truncated remainder, ties to the vendor seen first. No
    commission is ever negative or more than a cent away from its exact share.

    Example:
        >>> compute_payouts([{"vendor_id": 1, "unit_price": Decimal("100"), "quantity": 2}], Decimal("1.0"))
        [PayoutEntry(vendor_id=1, gross_amount=Decimal('200.00'), commission=Decimal('2.00'), net_amount=Decimal('198.00'), status='pending')]
    """
    rate = Decimal(str(commission_rate))
    if rate < 0 or rate > HUNDRED:
        raise ValueError(f"Commission rate must be between 0 and 100, got {rate}")

    gross_by_vendor = {}
    for line in order_lines:
        quantity = int(_line_value(line, "quantity"))
        if quantity < 1:
            raise ValueError("Order line quantity must be positive")
        vendor_id = _line_value(line, "vendor_id")
        subtotal = Decimal(_line_value(line, "unit_price")) * quantity
        gross_by_vendor[vendor_id] = gross_by_vendor.get(vendor_id, Decimal("0")) + subtotal

    if not gross_by_vendor:
        return []

    entries = []
    remainders = []
    for vendor_id, gross in gross_by_vendor.items():
        gross = quantize_money(gross)
        exact = gross * rate / HUNDRED
        floor = exact.quantize(CENT, rounding=ROUND_DOWN)
        entries.append(
            PayoutEntry(vendor_id=vendor_id, gross_amount=gross, commission=floor, net_amount=Decimal("0"))
        )
        remainders.append(exact - floor)

    total = sum((entry.gross_amount for entry in entries), Decimal("0"))
    owed = commission_for(total, rate) - sum((entry.commission for entry in entries), Decimal("0"))
    cents_owed = int(owed / CENT)

    # sorted() is stable, so equal remainders keep first-seen order
    ranked = sorted(range(len(entries)), key=lambda index: remainders[index], reverse=True)
    for index in ranked[:cents_owed]:
        entries[index].commission += CENT

    for entry in entries:
        entry.net_amount = entry.gross_amount - entry.commission

    return entries
