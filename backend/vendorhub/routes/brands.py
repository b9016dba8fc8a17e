# Overview: Flask API routes for brand operations; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, current_app

from ..schemas import BrandInput
from ..serializers import brand_to_dict
from ..services import vendor_service
from ..stores import get_store
from ..validation import NotFoundError, ValidationError
from ..services.vendor_service import BrandNotFoundError


brands_bp = Blueprint("brands", __name__, url_prefix="/api/brands")


@brands_bp.post("")
def create_brand_route():
    """
    Create a brand for a vendor.

    Request body:
    {
        "vendorId": 1,            // required
        "name": "Brand Name",     // required
        "sku": "...",
        "category": "groceries"   // groceries | dairy | beverages | snacks | personal_care
                                  // | household | bakery | frozen | other
    }

    Returns:
        201: {success: true, brand: Brand}
        400: Invalid input
        404: Vendor not found
    """
    store = get_store()
    try:
        data = BrandInput.from_payload(request.get_json(silent=True))
        brand = vendor_service.create_brand(store, data)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404

    current_app.logger.info("Brand added. ID: %s", brand["id"])
    return jsonify({"success": True, "brand": brand_to_dict(brand, store.get_vendor(brand["vendor_id"]))}), 201


@brands_bp.delete("/<int:brand_id>")
def delete_brand_route(brand_id: int):
    try:
        vendor_service.delete_brand(get_store(), brand_id)
    except BrandNotFoundError:
        return jsonify({"error": "Brand not found"}), 404

    current_app.logger.info("Brand deleted. ID: %s", brand_id)
    return jsonify({"success": True})
