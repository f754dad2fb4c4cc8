"""Shared helpers for route handlers."""

from flask import current_app, jsonify


def error_response(message, status_code):
    return jsonify({'status': 'error', 'message': message}), status_code


def get_review_provider():
    return current_app.extensions['reviewboard']['review_provider']


def get_places_client():
    return current_app.extensions['reviewboard']['places_client']
