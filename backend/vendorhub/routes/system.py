# backend/vendorhub/routes/system.py
"""
System health and API index endpoints.
"""

import time
from flask import Blueprint, current_app, jsonify

from ..services import data_service
from ..stores import get_store
from vendorhub.time_utils import to_utc_z, utcnow

system_bp = Blueprint("system", __name__)

ENDPOINTS = {
    "data": "/api/data",
    "vendors": "/api/vendors",
    "brands": "/api/brands",
    "issues": "/api/issues",
    "invoices": "/api/invoices",
    "invoicesComplete": "/api/invoices-complete",
    "payments": "/api/payments",
    "creditNotes": "/api/credit-notes",
    "backup": "/api/backup",
    "health": "/health",
}


@system_bp.get("/health")
def health_route():
    """
    Liveness probe with a row count per collection.

    Returns:
        200: {status: "healthy", timestamp, storage, latency_ms, database: {...counts}}
        500: {status: "unhealthy", error}
    """
    store = get_store()
    start_time = time.time()
    try:
        counts = data_service.row_counts(store)
    except Exception as e:
        current_app.logger.exception("Health check failed")
        return jsonify({"status": "unhealthy", "error": str(e)}), 500

    elapsed_ms = (time.time() - start_time) * 1000
    return jsonify({
        "status": "healthy",
        "timestamp": to_utc_z(utcnow()),
        "storage": store.name,
        "latency_ms": round(elapsed_ms, 2),
        "database": counts,
    })


@system_bp.get("/")
@system_bp.get("/api/info")
def info_route():
    return jsonify({
        "message": "Supermart Vendor Management API",
        "version": current_app.config.get("API_VERSION"),
        "storage": get_store().name,
        "endpoints": ENDPOINTS,
    })
