"""
Public API Routes

Each handler validates, optionally uploads, writes one document and then
notifies operators best-effort.
"""

import logging
from datetime import datetime, timezone

from flask import current_app, jsonify, request

from tripstore import messages
from tripstore.api import api_bp
from tripstore.exceptions import ServiceError, UpstreamError, ValidationError
from tripstore.extensions import get_services
from tripstore.forms import request_fields, require_fields
from tripstore.models import (
    ORDERS, INQUIRIES, SUGGESTIONS, build_order, build_inquiry, build_suggestion, is_present,
)
from tripstore.services import notifications, upload_screenshot

logger = logging.getLogger(__name__)

ORDER_REQUIRED = ('name', 'playerId', 'email', 'transactionId', 'totalAmount')


@api_bp.route('/health')
def health():
    return jsonify(success=True, time=datetime.now(timezone.utc).isoformat())


@api_bp.route('/order', methods=['POST'])
def create_order():
    """Accept a purchase order with an optional payment screenshot."""
    fields = require_fields(request_fields(), ORDER_REQUIRED, messages.ALL_FIELDS_REQUIRED)
    if not (is_present(fields.get('ucAmount')) or is_present(fields.get('bundle'))):
        raise ValidationError(messages.ALL_FIELDS_REQUIRED)

    services = get_services()
    try:
        screenshot_url = upload_screenshot(services.blobs, request.files.get('screenshot'),
                                           current_app.config['SCREENSHOT_MAX_BYTES'])
        order = build_order(fields, screenshot_url)
        order_id = services.store.add(ORDERS, order)
    except ServiceError as exc:
        logger.exception('Order submission failed: %s', exc)
        raise UpstreamError(messages.ORDER_SAVE_FAILED) from exc

    logger.info('Order %s created (%s, total=%s)', order_id, order['type'], order['totalAmount'])
    notifications.order_created(order_id, order)
    return jsonify(success=True, id=order_id)


@api_bp.route('/inquiry', methods=['POST'])
def create_inquiry():
    fields = require_fields(request_fields(), ('email', 'message'), messages.INQUIRY_FIELDS_REQUIRED)

    inquiry = build_inquiry(fields)
    try:
        inquiry_id = get_services().store.add(INQUIRIES, inquiry)
    except ServiceError as exc:
        logger.exception('Inquiry submission failed: %s', exc)
        raise UpstreamError(messages.INQUIRY_SAVE_FAILED) from exc

    logger.info('Inquiry %s created', inquiry_id)
    notifications.inquiry_created(inquiry_id, inquiry)
    return jsonify(success=True, id=inquiry_id)


@api_bp.route('/suggestion', methods=['POST'])
def create_suggestion():
    fields = require_fields(request_fields(), ('name', 'contact', 'message'), messages.ALL_FIELDS_REQUIRED)

    suggestion = build_suggestion(fields)
    try:
        suggestion_id = get_services().store.add(SUGGESTIONS, suggestion)
    except ServiceError as exc:
        logger.exception('Suggestion submission failed: %s', exc)
        raise UpstreamError(messages.SUGGESTION_SAVE_FAILED) from exc

    logger.info('Suggestion %s created', suggestion_id)
    notifications.suggestion_created(suggestion_id, suggestion)
    return jsonify(success=True, id=suggestion_id)
