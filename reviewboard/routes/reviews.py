"""Review listing and moderation routes (Hostaway reviews)."""

from flask import Blueprint, current_app, jsonify, request

from reviewboard.errors import ReviewboardError, ValidationError
from reviewboard.routes.helpers import error_response, get_review_provider
from reviewboard.services.filters import ReviewFilter, apply_filters, parse_bool
from reviewboard.services.statistics import calculate_property_stats, calculate_review_stats

reviews_bp = Blueprint('reviews', __name__)


@reviews_bp.route('/hostaway', methods=['GET'])
def get_hostaway_reviews():
    """Get reviews with optional filtering and stats.

    Query params:
    - includeStats: 'true' to add stats and propertyStats
    - propertyId, channel, approved, minRating, maxRating, search: filters
    """
    try:
        include_stats = parse_bool(request.args.get('includeStats'), 'includeStats') or False
        review_filter = ReviewFilter.from_query_args(request.args)
    except ValidationError as e:
        return error_response(e.message, e.status_code)

    try:
        reviews = get_review_provider().fetch_reviews()
    except ReviewboardError as e:
        current_app.logger.error(f'Error fetching Hostaway reviews: {e.message}')
        return error_response('Failed to fetch reviews', 500)

    reviews = apply_filters(reviews, review_filter)

    response = {
        'status': 'success',
        'result': [review.to_dict() for review in reviews],
    }

    if include_stats:
        response['stats'] = calculate_review_stats(reviews).to_dict()
        response['propertyStats'] = [s.to_dict() for s in calculate_property_stats(reviews)]

    return jsonify(response), 200


@reviews_bp.route('/hostaway', methods=['PATCH'])
def update_review_approval():
    """Approve or reject a review for public display.

    The bundled data set has no write path, so the change is acknowledged
    and logged only.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return error_response('Invalid request body', 400)

    review_id = data.get('reviewId')
    approved = data.get('approved')

    # bool is a subclass of int; a boolean id is still a malformed body
    if not isinstance(review_id, int) or isinstance(review_id, bool) or not isinstance(approved, bool):
        return error_response('Invalid request body', 400)

    action = 'approved' if approved else 'rejected'
    current_app.logger.info(f'Review {review_id} marked as {action}')

    return jsonify({
        'status': 'success',
        'message': f'Review {review_id} {action} successfully',
    }), 200
