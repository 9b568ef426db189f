# waitlist/api/health.py

from flask import Blueprint, jsonify, current_app
from waitlist.store import get_store, StoreError

bp = Blueprint('health', __name__)

@bp.route('/health', methods=['GET'])
def health_route():
    """
    Liveness plus a cheap store round-trip.

    Always answers 200 so the deployment check can tell "app up, store
    down" apart from "app down"; the store state is in the body.
    """
    try:
        get_store().top_referrers(1)
        store_status = "connected"
    except StoreError as e:
        current_app.logger.error(f"Health check store error: {e.message}")
        store_status = "unavailable"

    return jsonify({
        "status": "ok",
        "store": {"status": store_status},
    }), 200
