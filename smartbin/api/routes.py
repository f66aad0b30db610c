"""
JSON API routes.

Every endpoint answers ``{"status": "ok", ...}`` on success; failures are
raised as SmartBinError subclasses and rendered by the handlers in
``smartbin.errors``.
"""

from flask import Blueprint, current_app, g, jsonify, request

from ..auth import require_admin_if_configured, require_token
from ..core.app import get_services, limiter
from ..errors import InvalidRequest
from ..gateways.dashboard import summarize
from ..models.events import CATEGORY_MAX_LENGTH
from ..utils.database import check_database_health
from ..utils.validation import sanitize_text

api_bp = Blueprint('api', __name__)


def _login_rate_limit():
    return current_app.config['LOGIN_RATE_LIMIT']


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidRequest("Request body must be a JSON object")
    return data


@api_bp.route('/register', methods=['POST'])
@limiter.limit(_login_rate_limit)
def register():
    data = _json_body()
    get_services().auth.register(data.get('name'), data.get('email'), data.get('password'))
    return jsonify({'status': 'ok'})


@api_bp.route('/login', methods=['POST'])
@limiter.limit(_login_rate_limit)
def login():
    data = _json_body()
    token, role = get_services().auth.login(data.get('email'), data.get('password'))
    return jsonify({'status': 'ok', 'token': token, 'role': role})


@api_bp.route('/dashboard', methods=['GET'])
@require_token
def dashboard():
    user = get_services().ledger.snapshot(g.identity.email)
    return jsonify({'status': 'ok', 'user': user})


@api_bp.route('/dashboard/summary', methods=['GET'])
@require_token
def dashboard_summary():
    user = get_services().ledger.snapshot(g.identity.email)
    return jsonify({'status': 'ok', **summarize(user)})


@api_bp.route('/add-waste', methods=['POST'])
@require_token
def add_waste():
    data = _json_body()
    category = data.get('wasteCategory') or data.get('wasteType')
    if category is not None and not isinstance(category, str):
        raise InvalidRequest("wasteCategory must be a string")
    category = (sanitize_text(category, max_length=CATEGORY_MAX_LENGTH)
                or current_app.config['DEFAULT_WASTE_CATEGORY'])

    reward = get_services().waste.submit_waste(
        g.identity,
        category,
        location=sanitize_text(data.get('location'), max_length=1000),
    )
    return jsonify({'status': 'ok', 'rewardAdded': reward})


@api_bp.route('/redeem', methods=['POST'])
@require_token
def redeem():
    data = _json_body()
    result = get_services().redemption.redeem(
        g.identity,
        data.get('item'),
        data.get('cost'),
        data.get('type'),
    )
    return jsonify({'status': 'ok', **result})


@api_bp.route('/rewards', methods=['GET'])
def rewards():
    return jsonify({'status': 'ok', 'rewards': get_services().redemption.catalog_items()})


@api_bp.route('/admin/users', methods=['GET'])
@require_admin_if_configured
def admin_users():
    return jsonify({'status': 'ok', 'users': get_services().admin.list_users()})


@api_bp.route('/admin/stats', methods=['GET'])
@require_admin_if_configured
def admin_stats():
    return jsonify({'status': 'ok', 'stats': get_services().admin.stats()})


@api_bp.route('/health', methods=['GET'])
@limiter.exempt
def health():
    healthy, message = check_database_health()
    return jsonify({
        'status': 'ok' if healthy else 'error',
        'database': 'healthy' if healthy else 'unhealthy',
        'message': message,
    })
