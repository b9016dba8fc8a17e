# Overview: Volatile record store; the dataset lives in this object for the life of the app.

from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import datetime

from ..validation import ConflictError, NotFoundError
from vendorhub.time_utils import utcnow
from .base import COLLECTIONS, RecordStore


def empty_dataset() -> dict:
    return {
        **{name: [] for name in COLLECTIONS},
        "next_ids": {name: 0 for name in COLLECTIONS},
        "last_saved": utcnow(),
    }


class MemoryStore(RecordStore):
    """
    In-process dataset.

    One instance is created per application and handed to services
    explicitly. A lock serialises mutations so a threaded server never
    observes a half-applied change.
    """

    name = "memory"

    def __init__(self, dataset: dict | None = None):
        self._data = dataset if dataset is not None else empty_dataset()
        self._lock = threading.RLock()

    # -- hooks for persistent subclasses -----------------------------------

    def _checkpoint(self):
        return None

    def _restore(self, checkpoint) -> None:
        pass

    def _persist(self) -> None:
        pass

    @contextmanager
    def _mutation(self):
        with self._lock:
            checkpoint = self._checkpoint()
            try:
                yield self._data
                self._data["last_saved"] = utcnow()
                self._persist()
            except Exception:
                self._restore(checkpoint)
                raise

    # -- helpers -----------------------------------------------------------

    def _next_id(self, collection: str) -> int:
        self._data["next_ids"][collection] += 1
        return self._data["next_ids"][collection]

    def _insert(self, collection: str, fields: dict) -> dict:
        record = {key: None for key in COLLECTIONS[collection]}
        record.update({k: v for k, v in fields.items() if k in COLLECTIONS[collection]})
        record["id"] = self._next_id(collection)
        self._data[collection].append(record)
        return dict(record)

    def _find(self, collection: str, record_id: int) -> dict | None:
        for record in self._data[collection]:
            if record["id"] == record_id:
                return record
        return None

    def _remove(self, collection: str, record_id: int) -> bool:
        rows = self._data[collection]
        kept = [r for r in rows if r["id"] != record_id]
        if len(kept) == len(rows):
            return False
        self._data[collection] = kept
        return True

    def _delete(self, collection: str, record_id: int) -> bool:
        # Missing ids are not a change: no stamp, no write
        with self._lock:
            if self._find(collection, record_id) is None:
                return False
            with self._mutation():
                self._remove(collection, record_id)
            return True

    def _update(self, collection: str, record_id: int, changes: dict) -> dict | None:
        with self._lock:
            if self._find(collection, record_id) is None:
                return None
            with self._mutation():
                record = self._find(collection, record_id)
                record.update({k: v for k, v in changes.items() if k in COLLECTIONS[collection] and k != "id"})
                return dict(record)

    def _require_vendor(self, vendor_id: int) -> None:
        if self._find("vendors", vendor_id) is None:
            raise NotFoundError(f"Vendor {vendor_id} not found")

    def _require_invoice(self, invoice_id: int) -> None:
        if self._find("invoices", invoice_id) is None:
            raise NotFoundError(f"Invoice {invoice_id} not found")

    def _drop_invoices(self, invoice_ids: set[int]) -> None:
        data = self._data
        data["invoices"] = [i for i in data["invoices"] if i["id"] not in invoice_ids]
        data["payments"] = [p for p in data["payments"] if p["invoice_id"] not in invoice_ids]
        data["credit_notes"] = [c for c in data["credit_notes"] if c["invoice_id"] not in invoice_ids]

    def _list(self, collection: str, **filters) -> list[dict]:
        with self._lock:
            return [
                dict(r) for r in self._data[collection]
                if all(r.get(k) == v for k, v in filters.items() if v is not None)
            ]

    # -- lifecycle ---------------------------------------------------------

    def last_saved(self) -> datetime:
        return self._data["last_saved"]

    def counts(self) -> dict[str, int]:
        with self._lock:
            return {name: len(self._data[name]) for name in COLLECTIONS}

    # -- vendors -----------------------------------------------------------

    def list_vendors(self) -> list[dict]:
        return self._list("vendors")

    def get_vendor(self, vendor_id: int) -> dict | None:
        with self._lock:
            record = self._find("vendors", vendor_id)
            return dict(record) if record else None

    def add_vendor(self, fields: dict) -> dict:
        with self._mutation():
            return self._insert("vendors", fields)

    def delete_vendor(self, vendor_id: int) -> bool:
        with self._lock:
            if self._find("vendors", vendor_id) is None:
                return False
            with self._mutation() as data:
                self._remove("vendors", vendor_id)
                data["brands"] = [b for b in data["brands"] if b["vendor_id"] != vendor_id]
                data["issues"] = [i for i in data["issues"] if i["vendor_id"] != vendor_id]
                self._drop_invoices({i["id"] for i in data["invoices"] if i["vendor_id"] == vendor_id})
            return True

    # -- brands ------------------------------------------------------------

    def list_brands(self) -> list[dict]:
        return self._list("brands")

    def add_brand(self, fields: dict) -> dict:
        with self._mutation():
            self._require_vendor(fields["vendor_id"])
            return self._insert("brands", fields)

    def delete_brand(self, brand_id: int) -> bool:
        return self._delete("brands", brand_id)

    # -- issues ------------------------------------------------------------

    def list_issues(self) -> list[dict]:
        return self._list("issues")

    def get_issue(self, issue_id: int) -> dict | None:
        with self._lock:
            record = self._find("issues", issue_id)
            return dict(record) if record else None

    def add_issue(self, fields: dict) -> dict:
        with self._mutation():
            self._require_vendor(fields["vendor_id"])
            return self._insert("issues", fields)

    def update_issue(self, issue_id: int, changes: dict) -> dict | None:
        return self._update("issues", issue_id, changes)

    # -- invoices ----------------------------------------------------------

    def list_invoices(self) -> list[dict]:
        return self._list("invoices")

    def get_invoice(self, invoice_id: int) -> dict | None:
        with self._lock:
            record = self._find("invoices", invoice_id)
            return dict(record) if record else None

    def find_invoice(self, vendor_id: int, invoice_number: str) -> dict | None:
        matches = self._list("invoices", vendor_id=vendor_id, invoice_number=invoice_number)
        return matches[0] if matches else None

    def add_invoice(self, fields: dict) -> dict:
        with self._mutation():
            self._require_vendor(fields["vendor_id"])
            for existing in self._data["invoices"]:
                if (existing["vendor_id"], existing["invoice_number"]) == (fields["vendor_id"], fields["invoice_number"]):
                    raise ConflictError(
                        f"Invoice {fields['invoice_number']} already exists for vendor {fields['vendor_id']}"
                    )
            return self._insert("invoices", fields)

    def update_invoice(self, invoice_id: int, changes: dict) -> dict | None:
        return self._update("invoices", invoice_id, changes)

    def delete_invoice(self, invoice_id: int) -> bool:
        with self._lock:
            if self._find("invoices", invoice_id) is None:
                return False
            with self._mutation():
                self._drop_invoices({invoice_id})
            return True

    # -- payments / credit notes -------------------------------------------

    def list_payments(self, invoice_id: int | None = None) -> list[dict]:
        return self._list("payments", invoice_id=invoice_id)

    def add_payment(self, fields: dict) -> dict:
        with self._mutation():
            self._require_invoice(fields["invoice_id"])
            return self._insert("payments", fields)

    def delete_payment(self, payment_id: int) -> bool:
        return self._delete("payments", payment_id)

    def list_credit_notes(self, invoice_id: int | None = None) -> list[dict]:
        return self._list("credit_notes", invoice_id=invoice_id)

    def add_credit_note(self, fields: dict) -> dict:
        with self._mutation():
            self._require_invoice(fields["invoice_id"])
            if any(c["crn_number"] == fields["crn_number"] for c in self._data["credit_notes"]):
                raise ConflictError(f"Credit note {fields['crn_number']} already exists")
            return self._insert("credit_notes", fields)

    def delete_credit_note(self, credit_note_id: int) -> bool:
        return self._delete("credit_notes", credit_note_id)
