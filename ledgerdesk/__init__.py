"""
Flask application factory for LedgerDesk.

Kuzu is the sole data store; it is opened lazily on the first query.
"""

import os
import logging
from urllib.parse import urlparse
from flask import Flask, request, jsonify, redirect, url_for, flash, render_template
from flask_wtf.csrf import CSRFProtect, CSRFError
from config import Config

logger = logging.getLogger(__name__)

csrf = CSRFProtect()


def _configure_logging(app):
    """Configure Python logging level from LOG_LEVEL (config or env)."""
    log_level_name = str(app.config.get('LOG_LEVEL') or os.getenv('LOG_LEVEL', 'INFO')).upper()
    log_level = getattr(logging, log_level_name, logging.INFO)
    if not logging.getLogger().handlers:
        logging.basicConfig(format='%(asctime)s %(levelname)s [%(name)s] %(message)s')
    logging.getLogger().setLevel(log_level)
    app.logger.setLevel(log_level)
    # werkzeug request lines are noisy below WARNING outside debug runs
    if not app.debug:
        logging.getLogger('werkzeug').setLevel(max(log_level, logging.WARNING))


def _wants_json():
    return request.path.startswith('/api/') or request.is_json


def _same_host_referrer():
    """Referrer URL when it points back at this host, else None."""
    referrer = request.referrer
    if referrer and urlparse(referrer).netloc == request.host:
        return referrer
    return None


def create_app(config_object=None, **overrides):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)
    app.config.update(overrides)

    _configure_logging(app)

    if not app.config.get('SECRET_KEY'):
        raise RuntimeError("SECRET_KEY must be set in environment or config")

    # Point the storage layer at this app's database and drop cached services
    from .utils.safe_kuzu_manager import reset_safe_kuzu_manager
    from .services import reset_all_services
    reset_safe_kuzu_manager(app.config['KUZU_DB_PATH'])
    reset_all_services()

    csrf.init_app(app)

    @app.context_processor
    def inject_site_name():
        """Make site name available in all templates."""
        return dict(site_name=app.config.get('SITE_NAME', 'LedgerDesk'))

    from .template_filters.money_filters import money_filter, localtime_filter
    app.add_template_filter(money_filter, 'money')
    app.add_template_filter(localtime_filter, 'localtime')

    @app.errorhandler(CSRFError)
    def handle_csrf_error(e):
        """Handle CSRF errors with user-friendly messages."""
        if _wants_json():
            return jsonify({
                'error': 'CSRF token missing or invalid',
                'message': 'Please refresh the page and try again.'
            }), 400
        flash('Security token expired. Please try again.', 'error')
        return redirect(_same_host_referrer() or url_for('main.index'))

    @app.errorhandler(404)
    def handle_not_found(e):
        if _wants_json():
            return jsonify({'error': 'Not found'}), 404
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def handle_server_error(e):
        app.logger.error(f"Unhandled error on {request.path}: {e}")
        if _wants_json():
            return jsonify({'error': 'Internal server error'}), 500
        return render_template('errors/500.html'), 500

    from .routes import register_blueprints
    register_blueprints(app)

    app.logger.info(f"{app.config.get('SITE_NAME', 'LedgerDesk')} ready (database: {app.config['KUZU_DB_PATH']})")
    return app
