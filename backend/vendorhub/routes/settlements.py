# Overview: Flask API routes for payments and credit notes recorded against invoices.

"""
Settlement Routes

POST   /api/payments            record a payment (always a new row)
DELETE /api/payments/<id>       remove a payment entered by mistake
POST   /api/credit-notes        record a credit note (crnNumber must be unique)
DELETE /api/credit-notes/<id>   remove a credit note

Both POST responses include the invoice re-reconciled after the write.
"""

from flask import Blueprint, request, jsonify, current_app

from ..schemas import CreditNoteInput, PaymentInput
from ..serializers import credit_note_to_dict, payment_to_dict
from ..services import invoice_service
from ..stores import get_store
from ..validation import ConflictError, NotFoundError, ValidationError
from ..services.invoice_service import CreditNoteNotFoundError, PaymentNotFoundError


settlements_bp = Blueprint("settlements", __name__)


@settlements_bp.post("/api/payments")
def record_payment_route():
    """
    Record a payment against an invoice.

    Request body:
    {
        "invoiceId": 1,                 // required
        "paymentAmount": 300,           // required, > 0
        "paymentDate": "YYYY-MM-DD",    // required
        "paymentMethod": "cheque",      // cheque | cash | online | card | ""
        "chequeNumber": "...",
        "chequeDate": "YYYY-MM-DD",
        "notes": "..."
    }

    Returns:
        201: {success: true, action: "created", payment: Payment, invoice: ReconciledInvoice}
        400: Invalid input
        404: Invoice not found
    """
    store = get_store()
    try:
        data = PaymentInput.from_payload(request.get_json(silent=True))
        payment = invoice_service.record_payment(store, data)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404

    current_app.logger.info("Payment recorded for invoice ID: %s", data.invoice_id)
    return jsonify({
        "success": True,
        "action": "created",
        "payment": payment_to_dict(payment),
        "invoice": invoice_service.get_complete_invoice(store, data.invoice_id),
    }), 201


@settlements_bp.delete("/api/payments/<int:payment_id>")
def delete_payment_route(payment_id: int):
    try:
        invoice_service.delete_payment(get_store(), payment_id)
    except PaymentNotFoundError:
        return jsonify({"error": "Payment not found"}), 404

    current_app.logger.info("Payment deleted. ID: %s", payment_id)
    return jsonify({"success": True})


@settlements_bp.post("/api/credit-notes")
def record_credit_note_route():
    """
    Record a credit note against an invoice.

    Request body:
    {
        "invoiceId": 1,                 // required
        "crnNumber": "CRN-001",         // required, globally unique
        "creditAmount": 150,            // required, > 0
        "creditDate": "YYYY-MM-DD",     // defaults to today
        "itemsReturned": 3,
        "returnReason": "...",
        "description": "..."
    }

    Returns:
        201: {success: true, creditNote: CreditNote, invoice: ReconciledInvoice}
        400: Invalid input
        404: Invoice not found
        409: Credit note number already used
    """
    store = get_store()
    try:
        data = CreditNoteInput.from_payload(request.get_json(silent=True))
        credit_note = invoice_service.record_credit_note(store, data)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ConflictError as e:
        return jsonify({"error": str(e)}), 409

    current_app.logger.info("Credit note created. ID: %s", credit_note["id"])
    return jsonify({
        "success": True,
        "creditNote": credit_note_to_dict(credit_note),
        "invoice": invoice_service.get_complete_invoice(store, data.invoice_id),
    }), 201


@settlements_bp.delete("/api/credit-notes/<int:credit_note_id>")
def delete_credit_note_route(credit_note_id: int):
    try:
        invoice_service.delete_credit_note(get_store(), credit_note_id)
    except CreditNoteNotFoundError:
        return jsonify({"error": "Credit note not found"}), 404

    current_app.logger.info("Credit note deleted. ID: %s", credit_note_id)
    return jsonify({"success": True})
