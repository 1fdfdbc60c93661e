"""
Admin Routes

Review, update, delete and respond to orders, inquiries and suggestions.
"""

import logging

from flask import current_app, g, jsonify, render_template
from flask_jwt_extended import set_access_cookies, unset_jwt_cookies

from tripstore import messages
from tripstore.admin import admin_bp
from tripstore.admin.decorators import admin_required
from tripstore.admin.session import check_credentials, issue_token
from tripstore.exceptions import AuthenticationError, ServiceError, UpstreamError
from tripstore.extensions import get_services
from tripstore.forms import request_fields, require_fields
from tripstore.models import ORDERS, INQUIRIES, SUGGESTIONS, INQUIRY_REPLIED

logger = logging.getLogger(__name__)


@admin_bp.route('/login', methods=['POST'])
def admin_login():
    """Check the admin credentials and set the session cookie."""
    fields = require_fields(request_fields(), ('username', 'password'), messages.CREDENTIALS_REQUIRED)

    if not check_credentials(fields['username'], fields['password']):
        logger.warning('Failed admin login for %r', fields['username'])
        raise AuthenticationError(messages.INVALID_CREDENTIALS)

    token = issue_token(fields['username'])
    response = jsonify(success=True)
    max_age = int(current_app.config['JWT_ACCESS_TOKEN_EXPIRES'].total_seconds())
    set_access_cookies(response, token, max_age=max_age)
    logger.info('Admin %s logged in', fields['username'])
    return response


@admin_bp.route('/logout', methods=['POST'])
@admin_required
def admin_logout():
    # No server-side revocation: the client just drops the cookie.
    response = jsonify(success=True)
    unset_jwt_cookies(response)
    return response


def _list_collection(collection):
    try:
        data = get_services().store.list(collection)
    except ServiceError as exc:
        logger.exception('Listing %s failed: %s', collection, exc)
        raise UpstreamError(messages.DATABASE_ERROR) from exc
    return jsonify(success=True, data=data)


@admin_bp.route('/orders')
@admin_required
def list_orders():
    return _list_collection(ORDERS)


@admin_bp.route('/inquiries')
@admin_required
def list_inquiries():
    return _list_collection(INQUIRIES)


@admin_bp.route('/suggestions')
@admin_required
def list_suggestions():
    return _list_collection(SUGGESTIONS)


@admin_bp.route('/update-status', methods=['POST'])
@admin_required
def update_status():
    """Overwrite an order's status; any string is accepted."""
    fields = require_fields(request_fields(), ('id', 'status'), messages.STATUS_FIELDS_REQUIRED)

    try:
        get_services().store.update(ORDERS, str(fields['id']), {'status': fields['status']})
    except ServiceError as exc:
        logger.exception('Status update of order %s failed: %s', fields['id'], exc)
        raise UpstreamError(messages.UPDATE_FAILED) from exc

    logger.info('Admin %s set order %s status to %r', g.admin['username'], fields['id'], fields['status'])
    return jsonify(success=True)


def _delete_document(collection, missing_message):
    fields = require_fields(request_fields(), ('id',), missing_message)

    try:
        get_services().store.delete(collection, str(fields['id']))
    except ServiceError as exc:
        logger.exception('Delete of %s/%s failed: %s', collection, fields['id'], exc)
        raise UpstreamError(messages.DELETE_FAILED) from exc

    logger.info('Admin %s deleted %s/%s', g.admin['username'], collection, fields['id'])
    return jsonify(success=True)


@admin_bp.route('/delete-order', methods=['DELETE'])
@admin_required
def delete_order():
    return _delete_document(ORDERS, messages.ORDER_ID_REQUIRED)


@admin_bp.route('/delete-inquiry', methods=['DELETE'])
@admin_required
def delete_inquiry():
    return _delete_document(INQUIRIES, messages.INQUIRY_ID_REQUIRED)


@admin_bp.route('/delete-suggestion', methods=['DELETE'])
@admin_required
def delete_suggestion():
    return _delete_document(SUGGESTIONS, messages.SUGGESTION_ID_REQUIRED)


@admin_bp.route('/reply-inquiry', methods=['POST'])
@admin_required
def reply_inquiry():
    """Email the reply to the sender, then mark the inquiry as replied.

    The status only changes once the email was accepted by the provider.
    """
    fields = require_fields(request_fields(), ('inquiryId', 'email', 'message', 'reply'),
                            messages.ALL_FIELDS_REQUIRED)
    services = get_services()

    try:
        html = render_template('email/inquiry_reply.html',
                               message=fields['message'], reply=fields['reply'])
        services.mailer.send(fields['email'], messages.REPLY_SUBJECT, html,
                             current_app.config['SUPPORT_SENDER_NAME'])
        services.store.update(INQUIRIES, str(fields['inquiryId']), {'status': INQUIRY_REPLIED})
    except ServiceError as exc:
        logger.exception('Reply to inquiry %s failed: %s', fields['inquiryId'], exc)
        raise UpstreamError(messages.REPLY_FAILED) from exc

    logger.info('Admin %s replied to inquiry %s', g.admin['username'], fields['inquiryId'])
    return jsonify(success=True)


@admin_bp.route('/send-message', methods=['POST'])
@admin_required
def send_message():
    fields = require_fields(request_fields(), ('email', 'subject', 'message'), messages.ALL_FIELDS_REQUIRED)

    try:
        html = render_template('email/admin_message.html',
                               subject=fields['subject'], message=fields['message'])
        get_services().mailer.send(fields['email'], fields['subject'], html,
                                   current_app.config['SUPPORT_SENDER_NAME'])
    except ServiceError as exc:
        logger.exception('Message to %s failed: %s', fields['email'], exc)
        raise UpstreamError(messages.MESSAGE_FAILED) from exc

    return jsonify(success=True)
