# Overview: Service-layer operations for invoices, payments and credit notes.

"""
Invoice Service

WHY: Vendors bill the store through invoices and are settled through
payments (money out) and credit notes (returns that reduce what is owed).

DESIGN:
- Invoices are keyed by (vendor_id, invoice_number). Posting the same pair
  again updates the existing invoice instead of creating a duplicate.
- Payments are always appended. Several payments on the same date against
  the same invoice are legitimate (split cheques, part cash) and are never
  merged.
- Credit note numbers are unique across all invoices.
- Each call is one store operation; nothing here spans a transaction.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date

from ..schemas import CreditNoteInput, InvoiceInput, PaymentInput
from ..stores.base import RecordStore
from ..validation import NotFoundError
from vendorhub.time_utils import today as server_today
from .reconciliation_service import reconcile


ACTION_CREATED = "created"
ACTION_UPDATED = "updated"


class InvoiceNotFoundError(NotFoundError):
    """Raised when an invoice is not found."""
    pass


class PaymentNotFoundError(NotFoundError):
    pass


class CreditNoteNotFoundError(NotFoundError):
    pass


# =============================================================================
# INVOICES
# =============================================================================

def upsert_invoice(store: RecordStore, data: InvoiceInput) -> tuple[dict, str]:
    """
    Create an invoice, or update the one with the same vendor and number.

    Args:
        store: Active record store
        data: Validated invoice fields

    Returns:
        (invoice record, "created" | "updated")

    Raises:
        NotFoundError: If the vendor does not exist
    """
    stamp = server_today()
    existing = store.find_invoice(data.vendor_id, data.invoice_number)

    if existing is not None:
        invoice = store.update_invoice(existing["id"], {
            "invoice_date": data.invoice_date,
            "invoice_amount": data.invoice_amount,
            "total_items": data.total_items,
            "due_date": data.due_date,
            "last_updated": stamp,
        })
        if invoice is None:
            raise InvoiceNotFoundError(f"Invoice {existing['id']} not found")
        return invoice, ACTION_UPDATED

    fields = data.to_fields()
    fields["date_added"] = stamp
    fields["last_updated"] = stamp
    return store.add_invoice(fields), ACTION_CREATED


def delete_invoice(store: RecordStore, invoice_id: int) -> None:
    """Delete an invoice together with its payments and credit notes."""
    if not store.delete_invoice(invoice_id):
        raise InvoiceNotFoundError(f"Invoice {invoice_id} not found")


def get_complete_invoice(store: RecordStore, invoice_id: int, *, today: date | None = None) -> dict:
    """Reconciled view of a single invoice."""
    invoice = store.get_invoice(invoice_id)
    if invoice is None:
        raise InvoiceNotFoundError(f"Invoice {invoice_id} not found")
    return reconcile(
        invoice,
        store.list_payments(invoice_id),
        store.list_credit_notes(invoice_id),
        today=today or server_today(),
        vendor=store.get_vendor(invoice["vendor_id"]),
    )


def list_complete_invoices(store: RecordStore, *, today: date | None = None) -> list[dict]:
    """
    Reconciled view of every invoice, newest invoice date first.

    Payments and credit notes are fetched once and grouped by invoice.
    """
    today = today or server_today()
    invoices = store.list_invoices()
    if not invoices:
        return []

    vendors = {v["id"]: v for v in store.list_vendors()}
    payments_by_invoice: dict[int, list[dict]] = defaultdict(list)
    for payment in store.list_payments():
        payments_by_invoice[payment["invoice_id"]].append(payment)
    credits_by_invoice: dict[int, list[dict]] = defaultdict(list)
    for credit_note in store.list_credit_notes():
        credits_by_invoice[credit_note["invoice_id"]].append(credit_note)

    invoices.sort(key=lambda i: (i["invoice_date"] or date.min, i["id"]), reverse=True)
    return [
        reconcile(
            invoice,
            payments_by_invoice.get(invoice["id"], []),
            credits_by_invoice.get(invoice["id"], []),
            today=today,
            vendor=vendors.get(invoice["vendor_id"]),
        )
        for invoice in invoices
    ]


# =============================================================================
# PAYMENTS & CREDIT NOTES
# =============================================================================

def record_payment(store: RecordStore, data: PaymentInput) -> dict:
    """
    Append a payment to an invoice.

    Raises:
        NotFoundError: If the invoice does not exist
    """
    return store.add_payment(data.to_fields())


def delete_payment(store: RecordStore, payment_id: int) -> None:
    if not store.delete_payment(payment_id):
        raise PaymentNotFoundError(f"Payment {payment_id} not found")


def record_credit_note(store: RecordStore, data: CreditNoteInput) -> dict:
    """
    Append a credit note to an invoice.

    Raises:
        NotFoundError: If the invoice does not exist
        ConflictError: If the credit note number is already used
    """
    fields = data.to_fields()
    fields["credit_date"] = fields.get("credit_date") or server_today()
    return store.add_credit_note(fields)


def delete_credit_note(store: RecordStore, credit_note_id: int) -> None:
    if not store.delete_credit_note(credit_note_id):
        raise CreditNoteNotFoundError(f"Credit note {credit_note_id} not found")
