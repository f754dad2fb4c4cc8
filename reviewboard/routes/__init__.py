"""Routes package for the reviews dashboard."""


def register_routes(app):
    """Register all route blueprints with the application."""
    from .reviews import reviews_bp
    from .google_reviews import google_reviews_bp

    app.register_blueprint(reviews_bp, url_prefix='/api/reviews')
    app.register_blueprint(google_reviews_bp, url_prefix='/api/google-reviews')
