# Overview: Flask API routes for whole-dataset reads: snapshot and downloadable backup.

import json

from flask import Blueprint, Response, jsonify

from ..services import data_service
from ..stores import get_store


data_bp = Blueprint("data", __name__, url_prefix="/api")


@data_bp.get("/data")
def get_data_route():
    """
    Every vendor, brand, issue and invoice in one document.

    Returns:
        {vendors, brands, issues, invoices, lastSaved, version, storage}
    """
    return jsonify(data_service.build_snapshot(get_store()))


@data_bp.get("/backup")
def backup_route():
    """Snapshot plus backupCreated, served as a JSON file download."""
    backup = data_service.build_backup(get_store())
    return Response(
        json.dumps(backup, indent=2),
        mimetype="application/json",
        headers={
            "Content-Disposition": f'attachment; filename="{data_service.backup_filename()}"',
        },
    )
