"""
Trip Store Backend - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask, jsonify, send_from_directory
from markupsafe import Markup, escape
from werkzeug.exceptions import MethodNotAllowed, NotFound, RequestEntityTooLarge

from tripstore import messages
from tripstore.config import Config, load_service_account, validate_config
from tripstore.exceptions import ApiError
from tripstore.extensions import SERVICES_KEY, Services, db, jwt

logger = logging.getLogger(__name__)


def create_app(config_class=Config, services=None):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)
        services: Optional mapping overriding any of ``store``, ``blobs``,
            ``mailer`` or ``telegram`` (used by tests)

    Returns:
        Configured Flask application instance

    Raises:
        ConfigError: if required settings are missing
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    validate_config(app.config)

    # Initialize extensions
    db.init_app(app)
    jwt.init_app(app)

    # Register blueprints
    from tripstore.api import api_bp
    from tripstore.admin import admin_bp

    app.register_blueprint(api_bp, url_prefix='/api')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')

    app.extensions[SERVICES_KEY] = _build_services(app, services or {})

    if app.config['BLOB_STORE'] == 'local':
        @app.route('/uploads/<path:filename>')
        def uploaded_file(filename):
            return send_from_directory(app.config['UPLOAD_FOLDER'], filename)

    @app.template_filter('nl2br')
    def nl2br_filter(value):
        """Escape text and turn newlines into <br> tags."""
        lines = str(value).replace('\r\n', '\n').split('\n')
        return Markup('<br>\n').join(escape(line) for line in lines)

    _register_error_handlers(app)

    if app.config['DOCUMENT_STORE'] == 'sql':
        uri = app.config['SQLALCHEMY_DATABASE_URI']
        if uri.startswith('sqlite:///') and ':memory:' not in uri:
            os.makedirs(os.path.dirname(uri[len('sqlite:///'):]) or '.', exist_ok=True)
        with app.app_context():
            db.create_all()

    logger.info('App ready (store=%s, blobs=%s)', app.config['DOCUMENT_STORE'], app.config['BLOB_STORE'])
    return app


def _build_services(app, overrides):
    """Construct the external clients once, at startup."""
    from tripstore.services import (
        FirestoreDocumentStore, LocalBlobStore, Mailer, SqlDocumentStore, TelegramNotifier,
        build_firestore_client, build_gcs_store,
    )

    config = app.config
    account = None
    if 'store' not in overrides or 'blobs' not in overrides:
        account = load_service_account(config.get('FIREBASE_CONFIG'))

    store = overrides.get('store')
    if store is None:
        if config['DOCUMENT_STORE'] == 'firestore':
            store = FirestoreDocumentStore(build_firestore_client(account))
        else:
            store = SqlDocumentStore()

    blobs = overrides.get('blobs')
    if blobs is None:
        if config['BLOB_STORE'] == 'gcs':
            blobs = build_gcs_store(config['FIREBASE_STORAGE_BUCKET'], account)
        else:
            blobs = LocalBlobStore(config['UPLOAD_FOLDER'])

    mailer = overrides.get('mailer') or Mailer(config.get('RESEND_API_KEY'), config.get('MAIL_SENDER'))
    telegram = overrides.get('telegram') or TelegramNotifier(
        config.get('TELEGRAM_BOT_TOKEN'),
        config.get('TELEGRAM_CHAT_ID'),
        api_url=config['TELEGRAM_API_URL'],
        timeout=config['TELEGRAM_TIMEOUT'],
    )
    return Services(store=store, blobs=blobs, mailer=mailer, telegram=telegram)


def _register_error_handlers(app):
    """JSON bodies for every error the API can return."""

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return jsonify(success=False, message=error.message), error.status_code

    @app.errorhandler(NotFound)
    def handle_not_found(error):
        return jsonify(success=False, message=messages.NOT_FOUND), 404

    @app.errorhandler(MethodNotAllowed)
    def handle_method_not_allowed(error):
        return jsonify(success=False, message=messages.METHOD_NOT_ALLOWED), 405

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(error):
        return jsonify(success=False, message=messages.REQUEST_TOO_LARGE), 413

    @app.errorhandler(500)
    def handle_server_error(error):
        logger.error('Unhandled server error: %s', error)
        return jsonify(success=False, message=messages.SERVER_ERROR), 500
