from __future__ import annotations

from ..extensions import db
from vendorhub.time_utils import today, utcnow
from .vendors import BigId


class Invoice(db.Model):
    """
    Vendor invoice.

    Payment status and outstanding balance are never stored here; they are
    derived from the payments and credit notes at read time.
    """
    __tablename__ = "invoices"
    __table_args__ = (
        db.UniqueConstraint("vendor_id", "invoice_number", name="uq_invoices_vendor_number"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(BigId, primary_key=True)
    vendor_id = db.Column(BigId, db.ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True)
    invoice_number = db.Column(db.String(100), nullable=False)
    invoice_date = db.Column(db.Date, nullable=False)
    invoice_amount = db.Column(db.Numeric(12, 2), nullable=False)
    total_items = db.Column(db.Integer, nullable=False, default=0)
    due_date = db.Column(db.Date, nullable=True)
    date_added = db.Column(db.Date, nullable=False, default=today)
    last_updated = db.Column(db.Date, nullable=False, default=today)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    vendor = db.relationship("Vendor", back_populates="invoices")
    payments = db.relationship(
        "InvoicePayment", back_populates="invoice", cascade="all, delete-orphan"
    )
    credit_notes = db.relationship(
        "CreditNote", back_populates="invoice", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Invoice id={self.id} number={self.invoice_number!r} vendor_id={self.vendor_id}>"

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "vendor_id": self.vendor_id,
            "invoice_number": self.invoice_number,
            "invoice_date": self.invoice_date,
            "invoice_amount": self.invoice_amount,
            "total_items": self.total_items,
            "due_date": self.due_date,
            "date_added": self.date_added,
            "last_updated": self.last_updated,
        }


class InvoicePayment(db.Model):
    """One settlement against an invoice. Several per day are allowed."""
    __tablename__ = "invoice_payments"
    __table_args__ = (
        db.CheckConstraint(
            "payment_method IN ('cheque', 'cash', 'online', 'card', '')", name="ck_invoice_payments_method"
        ),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(BigId, primary_key=True)
    invoice_id = db.Column(BigId, db.ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    payment_date = db.Column(db.Date, nullable=False)
    payment_amount = db.Column(db.Numeric(12, 2), nullable=False)
    payment_method = db.Column(db.String(50), nullable=False, default="")
    cheque_number = db.Column(db.String(100), nullable=True)
    cheque_date = db.Column(db.Date, nullable=True)
    payment_notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    invoice = db.relationship("Invoice", back_populates="payments")

    def __repr__(self) -> str:
        return f"<InvoicePayment id={self.id} invoice_id={self.invoice_id} amount={self.payment_amount}>"

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "invoice_id": self.invoice_id,
            "payment_date": self.payment_date,
            "payment_amount": self.payment_amount,
            "payment_method": self.payment_method,
            "cheque_number": self.cheque_number,
            "cheque_date": self.cheque_date,
            "payment_notes": self.payment_notes,
        }


class CreditNote(db.Model):
    """Vendor-issued reduction of an invoice (returns). crn_number is globally unique."""
    __tablename__ = "credit_notes"
    __table_args__ = (
        db.UniqueConstraint("crn_number", name="uq_credit_notes_crn_number"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(BigId, primary_key=True)
    invoice_id = db.Column(BigId, db.ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    crn_number = db.Column(db.String(100), nullable=False)
    credit_date = db.Column(db.Date, nullable=False, default=today)
    credit_amount = db.Column(db.Numeric(12, 2), nullable=False)
    items_returned = db.Column(db.Integer, nullable=False, default=0)
    return_reason = db.Column(db.Text, nullable=True)
    description = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    invoice = db.relationship("Invoice", back_populates="credit_notes")

    def __repr__(self) -> str:
        return f"<CreditNote id={self.id} crn={self.crn_number!r} invoice_id={self.invoice_id}>"

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "invoice_id": self.invoice_id,
            "crn_number": self.crn_number,
            "credit_date": self.credit_date,
            "credit_amount": self.credit_amount,
            "items_returned": self.items_returned,
            "return_reason": self.return_reason,
            "description": self.description,
        }
