# Overview: Invoice reconciliation; derives totals, outstanding balance and payment status.

"""
Invoice Reconciliation Service

WHY: An invoice's settlement state is never stored. It is recomputed from
the invoice amount, its payments and its credit notes every time it is read,
so it can never drift from the underlying records.

DESIGN:
- Pure functions over store records; no store access here
- Money stays Decimal until the serializer turns it into a JSON number
- outstanding = invoice_amount - total_paid - total_credited, never clamped;
  a negative value means the vendor was overpaid
- Status precedence (first match wins): paid, partial, overdue, pending.
  A fully credited invoice past its due date is therefore "paid", and
  "overdue" only applies to invoices with no payments at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable

from ..serializers import credit_note_to_dict, invoice_to_dict, money, payment_to_dict


# =============================================================================
# PAYMENT STATUS (CONSTANTS)
# =============================================================================

PAYMENT_STATUS_PAID = "paid"
PAYMENT_STATUS_PARTIAL = "partial"
PAYMENT_STATUS_OVERDUE = "overdue"
PAYMENT_STATUS_PENDING = "pending"

PAYMENT_STATUSES = (
    PAYMENT_STATUS_PAID,
    PAYMENT_STATUS_PARTIAL,
    PAYMENT_STATUS_OVERDUE,
    PAYMENT_STATUS_PENDING,
)

ZERO = Decimal("0")


@dataclass(frozen=True)
class Reconciliation:
    total_paid: Decimal
    total_credited: Decimal
    outstanding: Decimal
    status: str


def derive_payment_status(
    outstanding: Decimal,
    total_paid: Decimal,
    due_date: date | None,
    today: date,
) -> str:
    """
    Map an invoice's balance to exactly one payment status.

    Args:
        outstanding: invoice amount minus payments minus credits (may be negative)
        total_paid: sum of payments
        due_date: invoice due date, if any
        today: the date "overdue" is measured against

    Returns:
        One of PAYMENT_STATUSES
    """
    if outstanding <= ZERO:
        return PAYMENT_STATUS_PAID
    if total_paid > ZERO:
        return PAYMENT_STATUS_PARTIAL
    if due_date is not None and due_date < today:
        return PAYMENT_STATUS_OVERDUE
    return PAYMENT_STATUS_PENDING


def reconcile_amounts(
    invoice_amount: Decimal,
    payment_amounts: Iterable[Decimal],
    credit_amounts: Iterable[Decimal],
    due_date: date | None,
    today: date,
) -> Reconciliation:
    total_paid = sum(payment_amounts, ZERO)
    total_credited = sum(credit_amounts, ZERO)
    outstanding = (invoice_amount or ZERO) - total_paid - total_credited
    return Reconciliation(
        total_paid=total_paid,
        total_credited=total_credited,
        outstanding=outstanding,
        status=derive_payment_status(outstanding, total_paid, due_date, today),
    )


def reconcile(
    invoice: dict,
    payments: list[dict],
    credit_notes: list[dict],
    *,
    today: date,
    vendor: dict | None = None,
) -> dict:
    """
    Build the reconciled, caller-facing view of one invoice.

    Args:
        invoice: invoice record
        payments: every payment record referencing the invoice
        credit_notes: every credit note record referencing the invoice
        today: reference date for the overdue check
        vendor: owning vendor record, for the vendor* display fields

    Returns:
        The invoice's fields plus paymentStatus, paymentAmount, totalCredits,
        outstanding, payments[] and creditNotes[]
    """
    result = reconcile_amounts(
        invoice.get("invoice_amount"),
        (p.get("payment_amount") or ZERO for p in payments),
        (c.get("credit_amount") or ZERO for c in credit_notes),
        invoice.get("due_date"),
        today,
    )

    data = invoice_to_dict(invoice, vendor)
    data.update({
        "paymentStatus": result.status,
        "paymentAmount": money(result.total_paid),
        "totalCredits": money(result.total_credited),
        "outstanding": money(result.outstanding),
        "payments": [payment_to_dict(p) for p in payments],
        "creditNotes": [credit_note_to_dict(c) for c in credit_notes],
    })
    if vendor is not None:
        data["vendorContactPerson"] = vendor.get("contact_person")
    return data
