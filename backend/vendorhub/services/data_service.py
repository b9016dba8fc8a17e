# Overview: Whole-dataset operations: snapshot, backup document, row counts and demo seeding.

from __future__ import annotations

from datetime import date
from decimal import Decimal

from flask import current_app

from ..serializers import brand_to_dict, invoice_to_dict, issue_to_dict, vendor_to_dict
from ..stores.base import RecordStore
from vendorhub.time_utils import to_utc_z, today, utcnow


def _name_key(record: dict | None) -> str:
    return ((record or {}).get("name") or "").lower()


def build_snapshot(store: RecordStore) -> dict:
    """
    Every record of every entity type.

    Ordering:
    - vendors by name
    - brands by vendor name, then brand name
    - issues pending first, then most recently found
    - invoices most recent invoice date first
    """
    vendors = store.list_vendors()
    by_id = {v["id"]: v for v in vendors}

    brands = sorted(
        store.list_brands(),
        key=lambda b: (_name_key(by_id.get(b["vendor_id"])), _name_key(b), b["id"]),
    )
    issues = sorted(
        store.list_issues(),
        key=lambda i: (i["status"] != "pending", -(i["date_found"] or date.min).toordinal(), -i["id"]),
    )
    invoices = sorted(
        store.list_invoices(),
        key=lambda i: (i["invoice_date"] or date.min, i["id"]),
        reverse=True,
    )

    return {
        "vendors": [vendor_to_dict(v) for v in sorted(vendors, key=lambda v: (_name_key(v), v["id"]))],
        "brands": [brand_to_dict(b, by_id.get(b["vendor_id"])) for b in brands],
        "issues": [issue_to_dict(i, by_id.get(i["vendor_id"])) for i in issues],
        "invoices": [invoice_to_dict(i, by_id.get(i["vendor_id"])) for i in invoices],
        "lastSaved": to_utc_z(store.last_saved()),
        "version": current_app.config.get("API_VERSION", "3.0"),
        "storage": store.name,
    }


def build_backup(store: RecordStore) -> dict:
    backup = build_snapshot(store)
    backup["backupCreated"] = to_utc_z(utcnow())
    return backup


def backup_filename() -> str:
    return f"backup_{today().isoformat()}.json"


def row_counts(store: RecordStore) -> dict:
    counts = store.counts()
    return {
        "vendors": counts["vendors"],
        "brands": counts["brands"],
        "issues": counts["issues"],
        "invoices": counts["invoices"],
        "payments": counts["payments"],
        "creditNotes": counts["credit_notes"],
    }


# =============================================================================
# DEMO DATA
# =============================================================================

DEMO_VENDORS = [
    {
        "name": "Fresh Farms Co.",
        "contact_person": "John Miller",
        "email": "john@freshfarms.com",
        "phone": "+1-555-0123",
        "payment_terms": "credit",
        "visit_frequency": "weekly",
        "brands": [{"name": "Farm Fresh", "sku": "FF-001", "category": "groceries"}],
        "issues": [{
            "product_name": "Tomatoes 1kg",
            "issue_type": "short_delivery",
            "quantity": 4,
            "estimated_loss": Decimal("12.00"),
            "description": "Order #123 was delivered 2 days late and short by 4 crates",
        }],
    },
    {
        "name": "Dairy Delights",
        "contact_person": "Mary Jones",
        "email": "mary@dairydelights.com",
        "phone": "+1-555-0456",
        "payment_terms": "advance",
        "visit_frequency": "daily",
        "has_display": "yes",
        "display_rent": Decimal("1500.00"),
        "brands": [{"name": "Creamy Choice", "sku": "DD-010", "category": "dairy"}],
        "issues": [],
    },
]


def seed_demo_data(store: RecordStore) -> bool:
    """
    Load a couple of sample vendors with brands and issues.

    Returns:
        False (and does nothing) when the store already has vendors
    """
    if store.counts()["vendors"]:
        return False

    stamp = today()
    for sample in DEMO_VENDORS:
        fields = {k: v for k, v in sample.items() if k not in ("brands", "issues")}
        fields.setdefault("payment_terms", "advance")
        fields.setdefault("visit_frequency", "weekly")
        fields.setdefault("has_display", "no")
        fields.setdefault("display_rent", Decimal("0.00"))
        fields.setdefault("status", "active")
        fields["date_added"] = stamp
        vendor = store.add_vendor(fields)

        for brand in sample["brands"]:
            store.add_brand({**brand, "vendor_id": vendor["id"], "date_added": stamp})
        for issue in sample["issues"]:
            store.add_issue({
                **issue,
                "vendor_id": vendor["id"],
                "status": "pending",
                "resolved_date": None,
                "date_found": stamp,
                "date_added": stamp,
            })
    return True
