# Overview: Flask API routes for invoices and the reconciled invoice view.

"""
Invoice Routes

POST   /api/invoices            create or update an invoice by (vendorId, invoiceNumber)
DELETE /api/invoices/<id>       delete an invoice with its payments and credit notes
GET    /api/invoices-complete   every invoice with payments, credit notes,
                                outstanding balance and payment status
"""

from flask import Blueprint, request, jsonify, current_app

from ..schemas import InvoiceInput
from ..serializers import invoice_to_dict
from ..services import invoice_service
from ..stores import get_store
from ..validation import ConflictError, NotFoundError, ValidationError
from ..services.invoice_service import ACTION_CREATED, InvoiceNotFoundError


invoices_bp = Blueprint("invoices", __name__)


@invoices_bp.post("/api/invoices")
def upsert_invoice_route():
    """
    Add or update an invoice.

    Request body:
    {
        "vendorId": 1,                  // required
        "invoiceNumber": "INV-001",     // required, unique per vendor
        "invoiceDate": "YYYY-MM-DD",    // required
        "invoiceAmount": 1000,          // required
        "totalItems": 20,
        "dueDate": "YYYY-MM-DD"         // optional, "" means none
    }

    Returns:
        201: {success: true, invoice: Invoice, action: "created"}
        200: {success: true, invoice: Invoice, action: "updated"}
        400: Invalid input
        404: Vendor not found
    """
    store = get_store()
    try:
        data = InvoiceInput.from_payload(request.get_json(silent=True))
        invoice, action = invoice_service.upsert_invoice(store, data)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ConflictError as e:
        return jsonify({"error": str(e)}), 409

    current_app.logger.info("Invoice %s %s", data.invoice_number, action)
    body = {
        "success": True,
        "invoice": invoice_to_dict(invoice, store.get_vendor(invoice["vendor_id"])),
        "action": action,
    }
    return jsonify(body), 201 if action == ACTION_CREATED else 200


@invoices_bp.delete("/api/invoices/<int:invoice_id>")
def delete_invoice_route(invoice_id: int):
    try:
        invoice_service.delete_invoice(get_store(), invoice_id)
    except InvoiceNotFoundError:
        return jsonify({"error": "Invoice not found"}), 404

    current_app.logger.info("Invoice deleted. ID: %s", invoice_id)
    return jsonify({"success": True})


@invoices_bp.get("/api/invoices-complete")
def list_complete_invoices_route():
    """
    Reconciled invoices, newest invoice date first.

    Each invoice carries paymentStatus (paid | partial | overdue | pending),
    paymentAmount, totalCredits, outstanding (negative when overpaid),
    payments[] and creditNotes[].
    """
    invoices = invoice_service.list_complete_invoices(get_store())
    return jsonify({"success": True, "invoices": invoices})
