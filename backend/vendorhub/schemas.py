# Overview: Typed input structs for every write operation; payloads are whitelisted and coerced here.

"""
Request payload schemas.

Every write endpoint builds one of these frozen dataclasses from the JSON
body before touching a store. Keys are the camelCase names clients send;
attributes are the storage field names. Unknown keys are rejected rather
than silently merged onto a record.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date
from decimal import Decimal
from typing import Any, ClassVar

from .validation import (
    MAX_SMALL_AMOUNT,
    ValidationError,
    reject_unknown_fields,
    to_amount,
    to_choice,
    to_date,
    to_int,
    to_text,
)


PAYMENT_TERMS = ("advance", "credit", "mixed")
VISIT_FREQUENCIES = ("daily", "weekly", "biweekly", "monthly")
DISPLAY_FLAGS = ("yes", "no")
BRAND_CATEGORIES = (
    "groceries", "dairy", "beverages", "snacks", "personal_care",
    "household", "bakery", "frozen", "other",
)
ISSUE_TYPES = (
    "expired", "damaged", "defective", "wrong_delivery",
    "poor_quality", "short_delivery", "other",
)
ISSUE_STATUS_PENDING = "pending"
ISSUE_STATUS_RESOLVED = "resolved"
ISSUE_STATUSES = (ISSUE_STATUS_PENDING, ISSUE_STATUS_RESOLVED)
# "" is the unspecified method
PAYMENT_METHODS = ("cheque", "cash", "online", "card", "")


class _Schema:
    # camelCase request key -> storage attribute
    KEYS: ClassVar[dict[str, str]] = {}

    @classmethod
    def _read(cls, payload: Any) -> dict:
        data = reject_unknown_fields(payload, cls.KEYS)
        return {cls.KEYS[k]: v for k, v in data.items()}

    def to_fields(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class VendorInput(_Schema):
    name: str
    contact_person: str | None = None
    phone: str | None = None
    email: str | None = None
    payment_terms: str = "advance"
    visit_frequency: str = "weekly"
    last_visit: date | None = None
    next_visit: date | None = None
    has_display: str = "no"
    display_rent: Decimal = Decimal("0.00")
    terms_conditions: str | None = None
    remarks: str | None = None
    status: str = "active"

    KEYS: ClassVar[dict[str, str]] = {
        "name": "name",
        "contactPerson": "contact_person",
        "phone": "phone",
        "email": "email",
        "paymentTerms": "payment_terms",
        "visitFrequency": "visit_frequency",
        "lastVisit": "last_visit",
        "nextVisit": "next_visit",
        "hasDisplay": "has_display",
        "displayRent": "display_rent",
        "termsConditions": "terms_conditions",
        "remarks": "remarks",
        "status": "status",
    }

    @classmethod
    def from_payload(cls, payload: Any) -> "VendorInput":
        d = cls._read(payload)
        return cls(
            name=to_text("name", d.get("name"), required=True, max_length=255),
            contact_person=to_text("contactPerson", d.get("contact_person"), max_length=255),
            phone=to_text("phone", d.get("phone"), max_length=50),
            email=to_text("email", d.get("email"), max_length=255),
            payment_terms=to_choice("paymentTerms", d.get("payment_terms"), PAYMENT_TERMS, default="advance"),
            visit_frequency=to_choice("visitFrequency", d.get("visit_frequency"), VISIT_FREQUENCIES, default="weekly"),
            last_visit=to_date("lastVisit", d.get("last_visit")),
            next_visit=to_date("nextVisit", d.get("next_visit")),
            has_display=to_choice("hasDisplay", d.get("has_display"), DISPLAY_FLAGS, default="no"),
            display_rent=to_amount(
                "displayRent", d.get("display_rent"), default=Decimal("0.00"), maximum=MAX_SMALL_AMOUNT
            ),
            terms_conditions=to_text("termsConditions", d.get("terms_conditions")),
            remarks=to_text("remarks", d.get("remarks")),
            status=to_text("status", d.get("status"), max_length=50) or "active",
        )


@dataclass(frozen=True)
class BrandInput(_Schema):
    vendor_id: int
    name: str
    sku: str | None = None
    category: str = "groceries"

    KEYS: ClassVar[dict[str, str]] = {
        "vendorId": "vendor_id",
        "name": "name",
        "sku": "sku",
        "category": "category",
    }

    @classmethod
    def from_payload(cls, payload: Any) -> "BrandInput":
        d = cls._read(payload)
        vendor_id = to_int("vendorId", d.get("vendor_id"))
        if vendor_id is None:
            raise ValidationError("vendorId is required")
        return cls(
            vendor_id=vendor_id,
            name=to_text("name", d.get("name"), required=True, max_length=255),
            sku=to_text("sku", d.get("sku"), max_length=100),
            category=to_choice("category", d.get("category"), BRAND_CATEGORIES, default="groceries"),
        )


@dataclass(frozen=True)
class IssueInput(_Schema):
    """New issues always start out pending; status is not accepted on create."""

    vendor_id: int
    product_name: str
    issue_type: str
    quantity: int = 1
    date_found: date | None = None
    estimated_loss: Decimal = Decimal("0.00")
    description: str | None = None

    KEYS: ClassVar[dict[str, str]] = {
        "vendorId": "vendor_id",
        "productName": "product_name",
        "issueType": "issue_type",
        "quantity": "quantity",
        "dateFound": "date_found",
        "estimatedLoss": "estimated_loss",
        "description": "description",
    }

    @classmethod
    def from_payload(cls, payload: Any) -> "IssueInput":
        d = cls._read(payload)
        vendor_id = to_int("vendorId", d.get("vendor_id"))
        if vendor_id is None:
            raise ValidationError("vendorId is required")
        issue_type = to_choice("issueType", d.get("issue_type"), ISSUE_TYPES)
        if issue_type is None:
            raise ValidationError("issueType is required")
        return cls(
            vendor_id=vendor_id,
            product_name=to_text("productName", d.get("product_name"), required=True, max_length=255),
            issue_type=issue_type,
            quantity=to_int("quantity", d.get("quantity"), default=1, minimum=0),
            date_found=to_date("dateFound", d.get("date_found")),
            estimated_loss=to_amount(
                "estimatedLoss", d.get("estimated_loss"), default=Decimal("0.00"), maximum=MAX_SMALL_AMOUNT
            ),
            description=to_text("description", d.get("description")),
        )


@dataclass(frozen=True)
class IssueUpdate(_Schema):
    """Partial update: only the keys present in the payload end up in `changes`."""

    changes: dict

    KEYS: ClassVar[dict[str, str]] = {
        "status": "status",
        "productName": "product_name",
        "issueType": "issue_type",
        "quantity": "quantity",
        "dateFound": "date_found",
        "estimatedLoss": "estimated_loss",
        "description": "description",
    }

    @classmethod
    def from_payload(cls, payload: Any) -> "IssueUpdate":
        d = cls._read(payload)
        changes: dict = {}
        if "status" in d:
            changes["status"] = to_choice("status", d["status"], ISSUE_STATUSES) or ISSUE_STATUS_PENDING
        if "product_name" in d:
            changes["product_name"] = to_text("productName", d["product_name"], required=True, max_length=255)
        if "issue_type" in d:
            issue_type = to_choice("issueType", d["issue_type"], ISSUE_TYPES)
            if issue_type is None:
                raise ValidationError("issueType is required")
            changes["issue_type"] = issue_type
        if "quantity" in d:
            changes["quantity"] = to_int("quantity", d["quantity"], default=1, minimum=0)
        if "date_found" in d:
            changes["date_found"] = to_date("dateFound", d["date_found"], required=True)
        if "estimated_loss" in d:
            changes["estimated_loss"] = to_amount(
                "estimatedLoss", d["estimated_loss"], default=Decimal("0.00"), maximum=MAX_SMALL_AMOUNT
            )
        if "description" in d:
            changes["description"] = to_text("description", d["description"])
        return cls(changes=changes)

    def to_fields(self) -> dict:
        return dict(self.changes)


@dataclass(frozen=True)
class InvoiceInput(_Schema):
    vendor_id: int
    invoice_number: str
    invoice_date: date
    invoice_amount: Decimal
    total_items: int = 0
    due_date: date | None = None

    KEYS: ClassVar[dict[str, str]] = {
        "vendorId": "vendor_id",
        "invoiceNumber": "invoice_number",
        "invoiceDate": "invoice_date",
        "invoiceAmount": "invoice_amount",
        "totalItems": "total_items",
        "dueDate": "due_date",
    }

    @classmethod
    def from_payload(cls, payload: Any) -> "InvoiceInput":
        d = cls._read(payload)
        vendor_id = to_int("vendorId", d.get("vendor_id"))
        if vendor_id is None:
            raise ValidationError("vendorId is required")
        amount = to_amount("invoiceAmount", d.get("invoice_amount"), required=True)
        if amount < 0:
            raise ValidationError("invoiceAmount must be >= 0")
        return cls(
            vendor_id=vendor_id,
            invoice_number=to_text("invoiceNumber", d.get("invoice_number"), required=True, max_length=100),
            invoice_date=to_date("invoiceDate", d.get("invoice_date"), required=True),
            invoice_amount=amount,
            total_items=to_int("totalItems", d.get("total_items"), default=0, minimum=0),
            due_date=to_date("dueDate", d.get("due_date")),
        )


@dataclass(frozen=True)
class PaymentInput(_Schema):
    invoice_id: int
    payment_date: date
    payment_amount: Decimal
    payment_method: str = ""
    cheque_number: str | None = None
    cheque_date: date | None = None
    payment_notes: str = ""

    KEYS: ClassVar[dict[str, str]] = {
        "invoiceId": "invoice_id",
        "paymentDate": "payment_date",
        "paymentAmount": "payment_amount",
        "paymentMethod": "payment_method",
        "chequeNumber": "cheque_number",
        "chequeDate": "cheque_date",
        "notes": "payment_notes",
    }

    @classmethod
    def from_payload(cls, payload: Any) -> "PaymentInput":
        d = cls._read(payload)
        invoice_id = to_int("invoiceId", d.get("invoice_id"))
        if invoice_id is None:
            raise ValidationError("invoiceId is required")
        amount = to_amount("paymentAmount", d.get("payment_amount"), required=True)
        if amount <= 0:
            raise ValidationError("paymentAmount must be positive")
        return cls(
            invoice_id=invoice_id,
            payment_date=to_date("paymentDate", d.get("payment_date"), required=True),
            payment_amount=amount,
            payment_method=to_choice("paymentMethod", d.get("payment_method"), PAYMENT_METHODS, default=""),
            cheque_number=to_text("chequeNumber", d.get("cheque_number"), max_length=100),
            cheque_date=to_date("chequeDate", d.get("cheque_date")),
            payment_notes=to_text("notes", d.get("payment_notes")) or "",
        )


@dataclass(frozen=True)
class CreditNoteInput(_Schema):
    invoice_id: int
    crn_number: str
    credit_amount: Decimal
    credit_date: date | None = None
    items_returned: int = 0
    return_reason: str = ""
    description: str = ""

    KEYS: ClassVar[dict[str, str]] = {
        "invoiceId": "invoice_id",
        "crnNumber": "crn_number",
        "creditDate": "credit_date",
        "creditAmount": "credit_amount",
        "itemsReturned": "items_returned",
        "returnReason": "return_reason",
        "description": "description",
    }

    @classmethod
    def from_payload(cls, payload: Any) -> "CreditNoteInput":
        d = cls._read(payload)
        invoice_id = to_int("invoiceId", d.get("invoice_id"))
        if invoice_id is None:
            raise ValidationError("invoiceId is required")
        amount = to_amount("creditAmount", d.get("credit_amount"), required=True)
        if amount <= 0:
            raise ValidationError("creditAmount must be positive")
        return cls(
            invoice_id=invoice_id,
            crn_number=to_text("crnNumber", d.get("crn_number"), required=True, max_length=100),
            credit_amount=amount,
            credit_date=to_date("creditDate", d.get("credit_date")),
            items_returned=to_int("itemsReturned", d.get("items_returned"), default=0, minimum=0),
            return_reason=to_text("returnReason", d.get("return_reason")) or "",
            description=to_text("description", d.get("description")) or "",
        )
