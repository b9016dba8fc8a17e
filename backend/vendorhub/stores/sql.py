# Overview: Relational record store backed by Flask-SQLAlchemy (PostgreSQL in production).

from __future__ import annotations

import logging
from datetime import datetime
from functools import wraps

from sqlalchemy import func, text
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from ..extensions import db
from ..models import Brand, CreditNote, Invoice, InvoicePayment, Issue, Vendor
from ..validation import ConflictError, NotFoundError, StorageError
from vendorhub.time_utils import utcnow
from .base import COLLECTIONS, RecordStore


logger = logging.getLogger(__name__)

_MODELS = {
    "vendors": Vendor,
    "brands": Brand,
    "issues": Issue,
    "invoices": Invoice,
    "payments": InvoicePayment,
    "credit_notes": CreditNote,
}

# Hints logged when the database cannot be reached, keyed by a fragment of the driver error
CONNECTION_HINTS = (
    ("connection refused", "Make sure PostgreSQL is running and listening on the configured host/port."),
    ("could not translate host name", "The database host name could not be resolved; check DATABASE_URL."),
    ("timeout expired", "Connection timed out; check firewall and network settings."),
    ("password authentication failed", "Authentication failed; check the database user and password."),
    ("does not exist", "The database does not exist; create it first."),
)


def connection_hint(message: str) -> str | None:
    lowered = message.lower()
    for fragment, hint in CONNECTION_HINTS:
        if fragment in lowered:
            return hint
    return None


def _storage_errors(fn):
    """Roll back and re-raise SQLAlchemy failures as StorageError."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StorageError(str(getattr(exc, "orig", None) or exc)) from exc
    return wrapper


class SqlStore(RecordStore):
    """
    Each write is committed on its own. Cascades are applied through the ORM
    relationships so they hold on SQLite as well as PostgreSQL.
    """

    name = "sql"

    @_storage_errors
    def init_schema(self) -> None:
        db.create_all()

    def check_connection(self) -> dict:
        try:
            db.session.execute(text("SELECT 1"))
        except OperationalError as exc:
            db.session.rollback()
            message = str(exc.orig or exc)
            logger.error("Database connection failed: %s", message)
            hint = connection_hint(message)
            if hint:
                logger.error("Hint: %s", hint)
            raise StorageError(f"Database connection failed: {message}") from exc
        engine = db.engine
        return {
            "storage": self.name,
            "dialect": engine.dialect.name,
            "database": engine.url.database,
            "server_time": utcnow().isoformat(),
        }

    def last_saved(self) -> datetime:
        return utcnow()

    @_storage_errors
    def counts(self) -> dict[str, int]:
        return {
            name: db.session.query(func.count(model.id)).scalar()
            for name, model in _MODELS.items()
        }

    # -- helpers -----------------------------------------------------------

    def _get(self, model, record_id: int):
        return db.session.get(model, record_id)

    def _insert(self, collection: str, fields: dict) -> dict:
        model = _MODELS[collection]
        row = model(**{k: v for k, v in fields.items() if k in COLLECTIONS[collection] and k != "id"})
        db.session.add(row)
        db.session.commit()
        return row.to_record()

    def _delete(self, model, record_id: int) -> bool:
        row = self._get(model, record_id)
        if row is None:
            return False
        db.session.delete(row)
        db.session.commit()
        return True

    def _update(self, collection: str, record_id: int, changes: dict) -> dict | None:
        row = self._get(_MODELS[collection], record_id)
        if row is None:
            return None
        for key, value in changes.items():
            if key in COLLECTIONS[collection] and key != "id":
                setattr(row, key, value)
        db.session.commit()
        return row.to_record()

    def _require(self, model, record_id: int, label: str) -> None:
        if self._get(model, record_id) is None:
            raise NotFoundError(f"{label} {record_id} not found")

    # -- vendors -----------------------------------------------------------

    @_storage_errors
    def list_vendors(self) -> list[dict]:
        return [v.to_record() for v in db.session.query(Vendor).order_by(Vendor.id).all()]

    @_storage_errors
    def get_vendor(self, vendor_id: int) -> dict | None:
        row = self._get(Vendor, vendor_id)
        return row.to_record() if row else None

    @_storage_errors
    def add_vendor(self, fields: dict) -> dict:
        return self._insert("vendors", fields)

    @_storage_errors
    def delete_vendor(self, vendor_id: int) -> bool:
        return self._delete(Vendor, vendor_id)

    # -- brands ------------------------------------------------------------

    @_storage_errors
    def list_brands(self) -> list[dict]:
        return [b.to_record() for b in db.session.query(Brand).order_by(Brand.id).all()]

    @_storage_errors
    def add_brand(self, fields: dict) -> dict:
        self._require(Vendor, fields["vendor_id"], "Vendor")
        return self._insert("brands", fields)

    @_storage_errors
    def delete_brand(self, brand_id: int) -> bool:
        return self._delete(Brand, brand_id)

    # -- issues ------------------------------------------------------------

    @_storage_errors
    def list_issues(self) -> list[dict]:
        return [i.to_record() for i in db.session.query(Issue).order_by(Issue.id).all()]

    @_storage_errors
    def get_issue(self, issue_id: int) -> dict | None:
        row = self._get(Issue, issue_id)
        return row.to_record() if row else None

    @_storage_errors
    def add_issue(self, fields: dict) -> dict:
        self._require(Vendor, fields["vendor_id"], "Vendor")
        return self._insert("issues", fields)

    @_storage_errors
    def update_issue(self, issue_id: int, changes: dict) -> dict | None:
        return self._update("issues", issue_id, changes)

    # -- invoices ----------------------------------------------------------

    @_storage_errors
    def list_invoices(self) -> list[dict]:
        return [i.to_record() for i in db.session.query(Invoice).order_by(Invoice.id).all()]

    @_storage_errors
    def get_invoice(self, invoice_id: int) -> dict | None:
        row = self._get(Invoice, invoice_id)
        return row.to_record() if row else None

    @_storage_errors
    def find_invoice(self, vendor_id: int, invoice_number: str) -> dict | None:
        row = db.session.query(Invoice).filter_by(vendor_id=vendor_id, invoice_number=invoice_number).first()
        return row.to_record() if row else None

    @_storage_errors
    def add_invoice(self, fields: dict) -> dict:
        self._require(Vendor, fields["vendor_id"], "Vendor")
        if self.find_invoice(fields["vendor_id"], fields["invoice_number"]) is not None:
            raise ConflictError(
                f"Invoice {fields['invoice_number']} already exists for vendor {fields['vendor_id']}"
            )
        return self._insert("invoices", fields)

    @_storage_errors
    def update_invoice(self, invoice_id: int, changes: dict) -> dict | None:
        return self._update("invoices", invoice_id, changes)

    @_storage_errors
    def delete_invoice(self, invoice_id: int) -> bool:
        return self._delete(Invoice, invoice_id)

    # -- payments / credit notes -------------------------------------------

    @_storage_errors
    def list_payments(self, invoice_id: int | None = None) -> list[dict]:
        query = db.session.query(InvoicePayment)
        if invoice_id is not None:
            query = query.filter_by(invoice_id=invoice_id)
        return [p.to_record() for p in query.order_by(InvoicePayment.id).all()]

    @_storage_errors
    def add_payment(self, fields: dict) -> dict:
        self._require(Invoice, fields["invoice_id"], "Invoice")
        return self._insert("payments", fields)

    @_storage_errors
    def delete_payment(self, payment_id: int) -> bool:
        return self._delete(InvoicePayment, payment_id)

    @_storage_errors
    def list_credit_notes(self, invoice_id: int | None = None) -> list[dict]:
        query = db.session.query(CreditNote)
        if invoice_id is not None:
            query = query.filter_by(invoice_id=invoice_id)
        return [c.to_record() for c in query.order_by(CreditNote.id).all()]

    @_storage_errors
    def add_credit_note(self, fields: dict) -> dict:
        self._require(Invoice, fields["invoice_id"], "Invoice")
        existing = db.session.query(CreditNote).filter_by(crn_number=fields["crn_number"]).first()
        if existing is not None:
            raise ConflictError(f"Credit note {fields['crn_number']} already exists")
        return self._insert("credit_notes", fields)

    @_storage_errors
    def delete_credit_note(self, credit_note_id: int) -> bool:
        return self._delete(CreditNote, credit_note_id)
