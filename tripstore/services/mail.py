"""
Transactional Email Service

Sends HTML email through Resend.
"""

import logging

import resend

from tripstore.exceptions import MailError

logger = logging.getLogger(__name__)


class Mailer:
    """Resend client bound to one API key and sender address."""

    def __init__(self, api_key, sender_address):
        self.api_key = (api_key or '').strip()
        self.sender_address = sender_address
        if self.api_key:
            # resend reads a module-level key
            resend.api_key = self.api_key

    @property
    def configured(self):
        return bool(self.api_key and self.sender_address)

    def send(self, to, subject, html, sender_name):
        if not self.configured:
            raise MailError('Resend API key or sender address is not configured.')

        payload = {
            'from': f'{sender_name} <{self.sender_address}>',
            'to': [to],
            'subject': subject,
            'html': html,
        }

        try:
            response = resend.Emails.send(payload)
        except Exception as exc:
            raise MailError(str(exc)) from exc

        if not isinstance(response, dict) or not response.get('id'):
            raise MailError(f'Unexpected Resend response: {response!r}')

        logger.info('Email "%s" sent to %s (id=%s)', subject, to, response['id'])
        return response['id']
