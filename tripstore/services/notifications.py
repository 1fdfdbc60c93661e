"""
Operator Notifications

Best-effort alerts sent after a record has been written: a Telegram message
and, when an operator address is configured, an email. Failures are logged
and never reach the caller.
"""

import logging

from flask import current_app, render_template
from markupsafe import escape

from tripstore import messages
from tripstore.config import notification_recipient
from tripstore.exceptions import ServiceError
from tripstore.extensions import get_services

logger = logging.getLogger(__name__)


def notify_operators(chat_text, subject, template, sender_name, **context):
    """Send the chat alert then the operator email, swallowing failures."""
    services = get_services()

    try:
        services.telegram.send(chat_text)
    except ServiceError as exc:
        logger.warning('Telegram notify failed: %s', exc)

    recipient = notification_recipient(current_app.config)
    if not recipient:
        return
    if not services.mailer.configured:
        logger.debug('Mailer not configured, operator email for "%s" skipped', subject)
        return

    try:
        html = render_template(template, **context)
        services.mailer.send(recipient, subject, html, sender_name)
    except ServiceError as exc:
        logger.warning('Operator email "%s" failed: %s', subject, exc)


def order_created(order_id, order):
    chat_text = (
        f"🧾 طلب جديد\n"
        f"الاسم: {escape(order['name'])}\n"
        f"البريد: {escape(order['email'])}\n"
        f"النوع: {order['type']}\n"
        f"الإجمالي: {escape(order['totalAmount'])}\n"
        f"ID: {order_id}"
    )
    notify_operators(chat_text, messages.NEW_ORDER_SUBJECT, 'email/new_order.html',
                     current_app.config['STORE_SENDER_NAME'],
                     order_id=order_id, order=order)


def inquiry_created(inquiry_id, inquiry):
    chat_text = (
        f"📩 استفسار جديد\n"
        f"البريد: {escape(inquiry['email'])}\n"
        f"ID: {inquiry_id}\n\n"
        f"{escape(inquiry['message'])}"
    )
    notify_operators(chat_text, messages.NEW_INQUIRY_SUBJECT, 'email/new_inquiry.html',
                     current_app.config['SUPPORT_SENDER_NAME'],
                     inquiry_id=inquiry_id, inquiry=inquiry)


def suggestion_created(suggestion_id, suggestion):
    chat_text = (
        f"💡 اقتراح جديد\n"
        f"الاسم: {escape(suggestion['name'])}\n"
        f"تواصل: {escape(suggestion['contact'])}\n"
        f"ID: {suggestion_id}\n\n"
        f"{escape(suggestion['message'])}"
    )
    notify_operators(chat_text, messages.NEW_SUGGESTION_SUBJECT, 'email/new_suggestion.html',
                     current_app.config['SUGGESTION_SENDER_NAME'],
                     suggestion_id=suggestion_id, suggestion=suggestion)
