# backend/salesdash/routes/system.py
"""System health endpoint."""

import time
from flask import Blueprint, current_app, jsonify

from ..services.storage_service import SqlKeyValueStore

system_bp = Blueprint("system", __name__)


def check_store_health() -> dict:
    """
    Check that the key-value table can be read.

    Returns dict with status and details.
    """
    start_time = time.time()
    try:
        keys = SqlKeyValueStore().keys()
        elapsed_ms = (time.time() - start_time) * 1000
        return {
            "status": "healthy",
            "latency_ms": round(elapsed_ms, 2),
            "details": {"keys": keys},
        }
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Store health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Database error",
        }


@system_bp.get("/health")
def health():
    store = check_store_health()
    code = 200 if store["status"] == "healthy" else 503
    return jsonify({"status": store["status"], "store": store}), code
