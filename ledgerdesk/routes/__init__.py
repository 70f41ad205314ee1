"""
Routes package initialization.
Registers all blueprint modules for the LedgerDesk application.
"""

import logging
from flask import Blueprint, render_template

from .book_routes import book_bp
from .fee_routes import fee_bp
from .api_routes import api_bp

logger = logging.getLogger(__name__)

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    """Dashboard with record counts and the running fee total"""
    from ..services import book_service, fee_service
    return render_template(
        'index.html',
        book_count=book_service.count_books(),
        fee_count=fee_service.count_fees(),
        fee_total=fee_service.total_fees(),
    )


def register_blueprints(app):
    """Register all blueprints with the Flask application."""
    app.register_blueprint(main_bp)
    app.register_blueprint(book_bp, url_prefix='/books')
    app.register_blueprint(fee_bp, url_prefix='/fees')
    app.register_blueprint(api_bp, url_prefix='/api')
    logger.debug("All blueprints registered successfully")


__all__ = ['book_bp', 'fee_bp', 'api_bp', 'main_bp', 'register_blueprints']
