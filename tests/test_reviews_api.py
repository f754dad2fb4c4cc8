"""
Tests for the review listing and moderation endpoints.
"""

import json

import pytest

from conftest import make_review
from reviewboard import create_app
from reviewboard.errors import ReviewProviderError
from reviewboard.services.review_provider import MockReviewProvider


class TestHealth:

    def test_root_health(self, client):
        resp = client.get('/health')
        assert resp.status_code == 200
        assert resp.get_json()['status'] == 'ok'

    def test_unknown_route_is_json(self, client):
        resp = client.get('/api/does-not-exist')
        assert resp.status_code == 404
        assert resp.get_json()['status'] == 'error'


class TestListReviews:
    """Tests for GET /api/reviews/hostaway"""

    def test_list_all(self, client):
        resp = client.get('/api/reviews/hostaway')

        assert resp.status_code == 200
        data = resp.get_json()
        assert data['status'] == 'success'
        assert len(data['result']) == 14
        assert 'stats' not in data
        assert 'propertyStats' not in data
        assert data['result'][0]['id'] == 7453

    def test_sorted_newest_first(self, client):
        data = client.get('/api/reviews/hostaway').get_json()
        dates = [r['submittedAt'] for r in data['result']]
        assert dates == sorted(dates, reverse=True)

    def test_include_stats(self, client):
        data = client.get('/api/reviews/hostaway?includeStats=true').get_json()
        stats = data['stats']

        assert stats['totalReviews'] == 14
        assert stats['approvedReviews'] == 10
        assert stats['pendingReviews'] == 4
        assert stats['channelDistribution'] == {
            'Airbnb': 6, 'Booking.com': 3, 'Direct': 2, 'Google': 2, 'Vrbo': 1,
        }
        assert [p['listingId'] for p in data['propertyStats']] == [1001, 1002, 1003, 1004]

        shoreditch = data['propertyStats'][0]
        assert shoreditch['listingName'] == '2B N1 A - 29 Shoreditch Heights'
        assert shoreditch['totalReviews'] == 4
        assert [r['id'] for r in shoreditch['recentReviews']] == [7453, 7454, 7455]

    def test_stats_follow_filters(self, client):
        data = client.get('/api/reviews/hostaway?includeStats=true&approved=true').get_json()

        assert data['stats']['totalReviews'] == 10
        assert data['stats']['pendingReviews'] == 0
        assert all(r['approved'] for r in data['result'])

    def test_property_page_query(self, client):
        data = client.get('/api/reviews/hostaway?propertyId=1003&approved=true').get_json()
        assert [r['id'] for r in data['result']] == [7471, 7472]

    @pytest.mark.parametrize('channel', ['google', 'GOOGLE', 'Google'])
    def test_channel_filter_case_insensitive(self, client, channel):
        data = client.get(f'/api/reviews/hostaway?channel={channel}').get_json()
        assert [r['id'] for r in data['result']] == [7462, 7472]

    def test_rating_bounds(self, client):
        data = client.get('/api/reviews/hostaway?minRating=8&maxRating=9').get_json()
        assert data['result']
        assert all(8 <= r['rating'] <= 9 for r in data['result'])

    def test_min_above_max_is_empty(self, client):
        resp = client.get('/api/reviews/hostaway?minRating=9&maxRating=3')
        assert resp.status_code == 200
        assert resp.get_json()['result'] == []

    def test_search(self, client):
        data = client.get('/api/reviews/hostaway?search=SHOREDITCH').get_json()
        assert {r['listingId'] for r in data['result']} == {1001}
        assert len(data['result']) == 4

    @pytest.mark.parametrize('query', [
        'approved=maybe',
        'propertyId=abc',
        'minRating=0',
        'maxRating=eleven',
        'includeStats=sometimes',
    ])
    def test_invalid_params(self, client, query):
        resp = client.get(f'/api/reviews/hostaway?{query}')

        assert resp.status_code == 400
        assert resp.get_json()['status'] == 'error'
        assert resp.get_json()['message']

    def test_provider_failure(self, stub_provider_app):
        app, provider = stub_provider_app(error=ReviewProviderError('boom'))
        resp = app.test_client().get('/api/reviews/hostaway?includeStats=true')

        assert resp.status_code == 500
        assert resp.get_json() == {'status': 'error', 'message': 'Failed to fetch reviews'}
        assert provider.calls == 1

    def test_example_end_to_end(self, stub_provider_app, example_reviews):
        app, _ = stub_provider_app(reviews=example_reviews)
        data = app.test_client().get('/api/reviews/hostaway?includeStats=true').get_json()

        assert data['stats']['totalReviews'] == 3
        assert data['stats']['averageRating'] == 9.0
        assert data['stats']['approvedReviews'] == 2
        assert data['stats']['pendingReviews'] == 1
        assert data['stats']['channelDistribution'] == {'Airbnb': 2, 'Google': 1}

        filtered = app.test_client().get('/api/reviews/hostaway?minRating=9').get_json()
        assert [r['id'] for r in filtered['result']] == [2, 3]

    @pytest.mark.parametrize('overrides', [
        {'submittedAt': 'yesterday'},
        {'approved': 'false'},
        {'rating': None},
    ])
    def test_malformed_record_is_provider_failure(self, settings, tmp_path, overrides):
        record = make_review(id=9).to_dict()
        record.update(overrides)
        path = tmp_path / 'reviews.json'
        path.write_text(json.dumps([record]))
        app = create_app('testing', settings=settings, review_provider=MockReviewProvider(path))

        resp = app.test_client().get('/api/reviews/hostaway?includeStats=true')

        assert resp.status_code == 500
        assert resp.get_json() == {'status': 'error', 'message': 'Failed to fetch reviews'}

    def test_empty_provider(self, stub_provider_app):
        app, _ = stub_provider_app(reviews=[])
        data = app.test_client().get('/api/reviews/hostaway?includeStats=true').get_json()

        assert data['result'] == []
        assert data['stats']['averageRating'] == 0
        assert data['propertyStats'] == []

    def test_review_wire_shape(self, stub_provider_app):
        app, _ = stub_provider_app(reviews=[make_review(id=42)])
        review = app.test_client().get('/api/reviews/hostaway').get_json()['result'][0]

        assert set(review) == {
            'id', 'type', 'status', 'rating', 'publicReview', 'reviewCategory',
            'submittedAt', 'guestName', 'listingName', 'listingId', 'channel', 'approved',
        }


class TestModerateReview:
    """Tests for PATCH /api/reviews/hostaway"""

    def test_approve(self, client):
        resp = client.patch('/api/reviews/hostaway', json={'reviewId': 7, 'approved': True})

        assert resp.status_code == 200
        assert resp.get_json() == {'status': 'success', 'message': 'Review 7 approved successfully'}

    def test_reject(self, client):
        resp = client.patch('/api/reviews/hostaway', json={'reviewId': 7455, 'approved': False})

        assert resp.status_code == 200
        assert resp.get_json()['message'] == 'Review 7455 rejected successfully'

    @pytest.mark.parametrize('body', [
        {'reviewId': 'x', 'approved': True},
        {'reviewId': 7, 'approved': 'true'},
        {'reviewId': True, 'approved': True},
        {'reviewId': 7},
        {'approved': False},
        [7, True],
    ])
    def test_invalid_body(self, client, body):
        resp = client.patch('/api/reviews/hostaway', json=body)

        assert resp.status_code == 400
        assert resp.get_json() == {'status': 'error', 'message': 'Invalid request body'}

    def test_non_json_body(self, client):
        resp = client.patch('/api/reviews/hostaway', data='reviewId=7', content_type='text/plain')
        assert resp.status_code == 400

    def test_method_not_allowed(self, client):
        resp = client.delete('/api/reviews/hostaway')
        assert resp.status_code == 405
        assert resp.get_json()['status'] == 'error'
