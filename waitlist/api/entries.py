# waitlist/api/entries.py
# (Public waitlist routes: join, status and leaderboard.)

from flask import Blueprint, request, jsonify, current_app
from werkzeug.exceptions import MethodNotAllowed
from waitlist.services.entries import (
    join_waitlist,
    get_entry_status,
    get_leaderboard,
    parse_limit,
)

bp = Blueprint('entries', __name__)

@bp.before_request
def reject_head():
    """Each route answers exactly one method; HEAD is not implied by GET."""
    if request.method == 'HEAD':
        allowed = sorted((request.url_rule.methods if request.url_rule else set()) - {'HEAD'})
        raise MethodNotAllowed(valid_methods=allowed)

@bp.route('/join', methods=['POST'])
def join_route():
    """
    Adds an email to the waitlist, optionally credited to a referral code.

    Body: {"email": str, "referralCode": str | null}

    Response:
        200: {"position": int, "referralCode": str} (new or existing entry)
        400: Invalid email
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        data = {}

    result = join_waitlist(data.get('email'), data.get('referralCode'))
    return jsonify(result), 200

@bp.route('/status', methods=['GET'])
def status_route():
    """Returns position and referral stats for ?email=."""
    result = get_entry_status(request.args.get('email'))
    return jsonify(result), 200

@bp.route('/leaderboard', methods=['GET'])
def leaderboard_route():
    limit = parse_limit(
        request.args.get('limit'),
        default=current_app.config['LEADERBOARD_DEFAULT_LIMIT'],
        maximum=current_app.config['LEADERBOARD_MAX_LIMIT'],
    )
    result = get_leaderboard(limit)
    return jsonify(result), 200
