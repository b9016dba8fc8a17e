# Overview: Flask API routes for vendor issues; parses input and returns JSON responses.

"""
Issue Routes

POST /api/issues        log an issue (always created as pending)
PUT  /api/issues/<id>   update an issue; status "resolved" stamps resolvedDate
"""

from flask import Blueprint, request, jsonify, current_app

from ..schemas import IssueInput, IssueUpdate
from ..serializers import issue_to_dict
from ..services import issue_service
from ..stores import get_store
from ..validation import NotFoundError, ValidationError
from ..services.issue_service import IssueNotFoundError


issues_bp = Blueprint("issues", __name__, url_prefix="/api/issues")


@issues_bp.post("")
def create_issue_route():
    """
    Log a new issue against a vendor.

    Request body:
    {
        "vendorId": 1,                 // required
        "productName": "...",          // required
        "issueType": "damaged",        // required: expired | damaged | defective | wrong_delivery
                                       //   | poor_quality | short_delivery | other
        "quantity": 1,
        "dateFound": "YYYY-MM-DD",     // defaults to today
        "estimatedLoss": 0,
        "description": "..."
    }

    Returns:
        201: {success: true, issue: Issue}
        400: Invalid input
        404: Vendor not found
    """
    store = get_store()
    try:
        data = IssueInput.from_payload(request.get_json(silent=True))
        issue = issue_service.create_issue(store, data)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404

    current_app.logger.info("Issue added. ID: %s", issue["id"])
    return jsonify({"success": True, "issue": issue_to_dict(issue, store.get_vendor(issue["vendor_id"]))}), 201


@issues_bp.put("/<int:issue_id>")
def update_issue_route(issue_id: int):
    """
    Update an issue.

    Request body (all fields optional):
    {
        "status": "resolved",          // pending | resolved
        "productName": "...",
        "issueType": "...",
        "quantity": 2,
        "dateFound": "YYYY-MM-DD",
        "estimatedLoss": 10.5,
        "description": "..."
    }

    Returns:
        200: {success: true, issue: Issue}
        400: Invalid input
        404: Issue not found
    """
    store = get_store()
    try:
        data = IssueUpdate.from_payload(request.get_json(silent=True))
        issue = issue_service.update_issue(store, issue_id, data)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except IssueNotFoundError:
        return jsonify({"error": "Issue not found"}), 404

    current_app.logger.info("Issue updated. ID: %s", issue_id)
    return jsonify({"success": True, "issue": issue_to_dict(issue, store.get_vendor(issue["vendor_id"]))})
