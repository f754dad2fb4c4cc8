"""Google reviews lookup routes.

GET returns normalized reviews for a place (or the demo place when the
integration is not configured); POST searches for a place_id.
"""

from flask import Blueprint, current_app, jsonify, request

from reviewboard.errors import ReviewboardError, ValidationError
from reviewboard.routes.helpers import error_response, get_places_client
from reviewboard.services.filters import parse_bool
from reviewboard.services.google_places import INTEGRATION_NOTES, normalize_google_reviews

google_reviews_bp = Blueprint('google_reviews', __name__)


@google_reviews_bp.route('', methods=['GET'])
def get_google_reviews():
    """Get Google reviews for a place.

    Query params:
    - placeId: Google place id (required unless in demo mode)
    - demo: 'true' to return the bundled demo place
    """
    client = get_places_client()

    try:
        demo = parse_bool(request.args.get('demo'), 'demo') or False
    except ValidationError as e:
        return error_response(e.message, e.status_code)

    if demo or not client.is_configured:
        place = client.demo_place()
        return jsonify({
            'status': 'success',
            'source': 'demo_mode',
            'google_place': place.to_dict(),
            'normalized_reviews': [r.to_dict() for r in normalize_google_reviews(place)],
            'integration_notes': INTEGRATION_NOTES,
        }), 200

    place_id = (request.args.get('placeId') or '').strip()
    if not place_id:
        return error_response(
            'Place ID is required. Get place ID from Google Places Search API first.', 400
        )

    try:
        place = client.fetch_place(place_id)
    except ReviewboardError as e:
        current_app.logger.warning(f'Google reviews lookup for {place_id} failed: {e.message}')
        return error_response(e.message, e.status_code)

    return jsonify({
        'status': 'success',
        'google_place': place.to_dict(),
        'normalized_reviews': [r.to_dict() for r in normalize_google_reviews(place)],
    }), 200


@google_reviews_bp.route('', methods=['POST'])
def search_place():
    """Find candidate places (and their place_id) by name and address."""
    client = get_places_client()
    if not client.is_configured:
        return error_response('Google Places API not configured', 503)

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return error_response('Invalid request body', 400)

    name = data.get('name') or ''
    address = data.get('address') or ''
    if not isinstance(name, str) or not isinstance(address, str) or not (name.strip() or address.strip()):
        return error_response('Name or address is required', 400)

    try:
        candidates = client.find_place(name.strip(), address.strip())
    except ReviewboardError as e:
        current_app.logger.warning(f'Place search failed: {e.message}')
        return error_response(e.message, e.status_code)

    return jsonify({'status': 'success', 'candidates': candidates}), 200
