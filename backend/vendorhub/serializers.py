# Overview: Caller-facing JSON shapes for store records (camelCase, ISO dates, numeric money).

from __future__ import annotations

from datetime import date
from decimal import Decimal


def iso_date(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


def money(value: Decimal | None) -> float:
    return float(value) if value is not None else 0.0


def vendor_to_dict(vendor: dict) -> dict:
    return {
        "id": vendor["id"],
        "name": vendor["name"],
        "contactPerson": vendor.get("contact_person"),
        "phone": vendor.get("phone"),
        "email": vendor.get("email"),
        "paymentTerms": vendor.get("payment_terms"),
        "visitFrequency": vendor.get("visit_frequency"),
        "lastVisit": iso_date(vendor.get("last_visit")),
        "nextVisit": iso_date(vendor.get("next_visit")),
        "hasDisplay": vendor.get("has_display"),
        "displayRent": money(vendor.get("display_rent")),
        "termsConditions": vendor.get("terms_conditions"),
        "remarks": vendor.get("remarks"),
        "status": vendor.get("status"),
        "dateAdded": iso_date(vendor.get("date_added")),
    }


def brand_to_dict(brand: dict, vendor: dict | None = None) -> dict:
    data = {
        "id": brand["id"],
        "vendorId": brand["vendor_id"],
        "name": brand["name"],
        "sku": brand.get("sku"),
        "category": brand.get("category"),
        "dateAdded": iso_date(brand.get("date_added")),
    }
    if vendor is not None:
        data["vendorName"] = vendor.get("name")
    return data


def issue_to_dict(issue: dict, vendor: dict | None = None) -> dict:
    data = {
        "id": issue["id"],
        "vendorId": issue["vendor_id"],
        "productName": issue["product_name"],
        "issueType": issue.get("issue_type"),
        "quantity": issue.get("quantity"),
        "dateFound": iso_date(issue.get("date_found")),
        "estimatedLoss": money(issue.get("estimated_loss")),
        "description": issue.get("description"),
        "status": issue.get("status"),
        "resolvedDate": iso_date(issue.get("resolved_date")),
        "dateAdded": iso_date(issue.get("date_added")),
    }
    if vendor is not None:
        data["vendorName"] = vendor.get("name")
        data["vendorPhone"] = vendor.get("phone")
    return data


def invoice_to_dict(invoice: dict, vendor: dict | None = None) -> dict:
    data = {
        "id": invoice["id"],
        "vendorId": invoice["vendor_id"],
        "invoiceNumber": invoice["invoice_number"],
        "invoiceDate": iso_date(invoice.get("invoice_date")),
        "invoiceAmount": money(invoice.get("invoice_amount")),
        "totalItems": invoice.get("total_items") or 0,
        "dueDate": iso_date(invoice.get("due_date")),
        "dateAdded": iso_date(invoice.get("date_added")),
        "lastUpdated": iso_date(invoice.get("last_updated")),
    }
    if vendor is not None:
        data["vendorName"] = vendor.get("name")
        data["vendorPhone"] = vendor.get("phone")
    return data


def payment_to_dict(payment: dict) -> dict:
    return {
        "id": payment["id"],
        "invoiceId": payment["invoice_id"],
        "paymentDate": iso_date(payment.get("payment_date")),
        "paymentAmount": money(payment.get("payment_amount")),
        "paymentMethod": payment.get("payment_method") or "",
        "chequeNumber": payment.get("cheque_number") or "",
        "chequeDate": iso_date(payment.get("cheque_date")) or "",
        "notes": payment.get("payment_notes") or "",
    }


def credit_note_to_dict(credit_note: dict) -> dict:
    return {
        "id": credit_note["id"],
        "invoiceId": credit_note["invoice_id"],
        "crnNumber": credit_note["crn_number"],
        "creditDate": iso_date(credit_note.get("credit_date")),
        "creditAmount": money(credit_note.get("credit_amount")),
        "itemsReturned": credit_note.get("items_returned") or 0,
        "returnReason": credit_note.get("return_reason") or "",
        "description": credit_note.get("description") or "",
    }
