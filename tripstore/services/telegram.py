"""
Telegram Bot Notifier

Posts plain operator alerts to one fixed chat.
"""

import logging

import requests

from tripstore.exceptions import NotifyError

logger = logging.getLogger(__name__)


class TelegramNotifier:

    def __init__(self, token, chat_id, api_url='https://api.telegram.org', timeout=10):
        self.token = token
        self.chat_id = chat_id
        self.api_url = api_url.rstrip('/')
        self.timeout = timeout

    @property
    def configured(self):
        return bool(self.token and self.chat_id)

    def send(self, text):
        """Post ``text`` (Telegram HTML mode); no-op when not configured."""
        if not self.configured:
            logger.debug('Telegram not configured, message dropped')
            return False

        url = f'{self.api_url}/bot{self.token}/sendMessage'
        payload = {
            'chat_id': str(self.chat_id),
            'text': str(text),
            'parse_mode': 'HTML',
        }

        try:
            resp = requests.post(url, data=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise NotifyError(f'Telegram request failed: {exc}') from exc

        if resp.status_code != 200:
            raise NotifyError(f'Telegram error {resp.status_code}: {resp.text[:200]}')
        return True
