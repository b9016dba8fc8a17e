# Overview: Record store interface shared by the memory, file and SQL backends.

"""
Record Store

A store holds six collections: vendors, brands, issues, invoices, payments
and credit notes. Records cross the store boundary as plain dicts keyed by
storage field names (see COLLECTIONS); money is Decimal and dates are
datetime.date. Callers never see backend objects.

Each backend enforces the same rules:
- brands/issues/invoices must reference an existing vendor (NotFoundError)
- payments/credit notes must reference an existing invoice (NotFoundError)
- (vendor_id, invoice_number) is unique
- crn_number is globally unique (ConflictError)
- deleting a vendor removes its brands, issues and invoices; deleting an
  invoice removes its payments and credit notes
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime


# collection -> {field: kind}; kind is "int", "text", "money" or "date"
COLLECTIONS: dict[str, dict[str, str]] = {
    "vendors": {
        "id": "int",
        "name": "text",
        "contact_person": "text",
        "phone": "text",
        "email": "text",
        "payment_terms": "text",
        "visit_frequency": "text",
        "last_visit": "date",
        "next_visit": "date",
        "has_display": "text",
        "display_rent": "money",
        "terms_conditions": "text",
        "remarks": "text",
        "status": "text",
        "date_added": "date",
    },
    "brands": {
        "id": "int",
        "vendor_id": "int",
        "name": "text",
        "sku": "text",
        "category": "text",
        "date_added": "date",
    },
    "issues": {
        "id": "int",
        "vendor_id": "int",
        "product_name": "text",
        "issue_type": "text",
        "quantity": "int",
        "date_found": "date",
        "estimated_loss": "money",
        "description": "text",
        "status": "text",
        "resolved_date": "date",
        "date_added": "date",
    },
    "invoices": {
        "id": "int",
        "vendor_id": "int",
        "invoice_number": "text",
        "invoice_date": "date",
        "invoice_amount": "money",
        "total_items": "int",
        "due_date": "date",
        "date_added": "date",
        "last_updated": "date",
    },
    "payments": {
        "id": "int",
        "invoice_id": "int",
        "payment_date": "date",
        "payment_amount": "money",
        "payment_method": "text",
        "cheque_number": "text",
        "cheque_date": "date",
        "payment_notes": "text",
    },
    "credit_notes": {
        "id": "int",
        "invoice_id": "int",
        "crn_number": "text",
        "credit_date": "date",
        "credit_amount": "money",
        "items_returned": "int",
        "return_reason": "text",
        "description": "text",
    },
}


class RecordStore(ABC):
    """Abstract record store. `name` identifies the backend in API responses."""

    name = "abstract"

    # -- lifecycle ---------------------------------------------------------

    def init_schema(self) -> None:
        """Prepare the backing storage (tables, file). No-op by default."""

    def check_connection(self) -> dict:
        """Return a small dict describing the backend; raise StorageError if unreachable."""
        return {"storage": self.name}

    @abstractmethod
    def last_saved(self) -> datetime:
        """Time of the last mutation (or of this read, for backends that do not track it)."""

    @abstractmethod
    def counts(self) -> dict[str, int]:
        """Row count per collection."""

    # -- vendors -----------------------------------------------------------

    @abstractmethod
    def list_vendors(self) -> list[dict]: ...

    @abstractmethod
    def get_vendor(self, vendor_id: int) -> dict | None: ...

    @abstractmethod
    def add_vendor(self, fields: dict) -> dict: ...

    @abstractmethod
    def delete_vendor(self, vendor_id: int) -> bool:
        """Delete a vendor and everything that references it. False if absent."""

    # -- brands ------------------------------------------------------------

    @abstractmethod
    def list_brands(self) -> list[dict]: ...

    @abstractmethod
    def add_brand(self, fields: dict) -> dict: ...

    @abstractmethod
    def delete_brand(self, brand_id: int) -> bool: ...

    # -- issues ------------------------------------------------------------

    @abstractmethod
    def list_issues(self) -> list[dict]: ...

    @abstractmethod
    def get_issue(self, issue_id: int) -> dict | None: ...

    @abstractmethod
    def add_issue(self, fields: dict) -> dict: ...

    @abstractmethod
    def update_issue(self, issue_id: int, changes: dict) -> dict | None:
        """Apply changes to an issue. None if absent."""

    # -- invoices ----------------------------------------------------------

    @abstractmethod
    def list_invoices(self) -> list[dict]: ...

    @abstractmethod
    def get_invoice(self, invoice_id: int) -> dict | None: ...

    @abstractmethod
    def find_invoice(self, vendor_id: int, invoice_number: str) -> dict | None: ...

    @abstractmethod
    def add_invoice(self, fields: dict) -> dict: ...

    @abstractmethod
    def update_invoice(self, invoice_id: int, changes: dict) -> dict | None: ...

    @abstractmethod
    def delete_invoice(self, invoice_id: int) -> bool: ...

    # -- payments / credit notes -------------------------------------------

    @abstractmethod
    def list_payments(self, invoice_id: int | None = None) -> list[dict]: ...

    @abstractmethod
    def add_payment(self, fields: dict) -> dict: ...

    @abstractmethod
    def delete_payment(self, payment_id: int) -> bool: ...

    @abstractmethod
    def list_credit_notes(self, invoice_id: int | None = None) -> list[dict]: ...

    @abstractmethod
    def add_credit_note(self, fields: dict) -> dict: ...

    @abstractmethod
    def delete_credit_note(self, credit_note_id: int) -> bool: ...
