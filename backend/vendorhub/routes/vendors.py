# Overview: Flask API routes for vendor operations; parses input and returns JSON responses.

"""
Vendor Routes

POST   /api/vendors        create a vendor
DELETE /api/vendors/<id>   delete a vendor with its brands, issues and invoices
"""

from flask import Blueprint, request, jsonify, current_app

from ..schemas import VendorInput
from ..serializers import vendor_to_dict
from ..services import vendor_service
from ..stores import get_store
from ..validation import ValidationError
from ..services.vendor_service import VendorNotFoundError


vendors_bp = Blueprint("vendors", __name__, url_prefix="/api/vendors")


@vendors_bp.post("")
def create_vendor_route():
    """
    Create a new vendor.

    Request body:
    {
        "name": "Vendor Name",          // required
        "contactPerson": "...",
        "phone": "...",
        "email": "...",
        "paymentTerms": "advance",      // advance | credit | mixed
        "visitFrequency": "weekly",     // daily | weekly | biweekly | monthly
        "lastVisit": "YYYY-MM-DD",
        "nextVisit": "YYYY-MM-DD",
        "hasDisplay": "no",             // yes | no
        "displayRent": 0,
        "termsConditions": "...",
        "remarks": "...",
        "status": "active"
    }

    Returns:
        201: {success: true, vendor: Vendor}
        400: Invalid input
    """
    try:
        data = VendorInput.from_payload(request.get_json(silent=True))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    vendor = vendor_service.create_vendor(get_store(), data)
    current_app.logger.info("Vendor added. ID: %s", vendor["id"])
    return jsonify({"success": True, "vendor": vendor_to_dict(vendor)}), 201


@vendors_bp.delete("/<int:vendor_id>")
def delete_vendor_route(vendor_id: int):
    """
    Delete a vendor. Its brands, issues and invoices (with their payments and
    credit notes) are deleted too.

    Returns:
        200: {success: true}
        404: Vendor not found
    """
    try:
        vendor_service.delete_vendor(get_store(), vendor_id)
    except VendorNotFoundError:
        return jsonify({"error": "Vendor not found"}), 404

    current_app.logger.info("Vendor deleted. ID: %s", vendor_id)
    return jsonify({"success": True})
