import io
import re
import threading
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
import requests
from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as google_auth_exceptions
from google.cloud import firestore
from werkzeug.datastructures import FileStorage

from tripstore.exceptions import MailError, NotifyError, StorageError, StoreError, ValidationError
from tripstore.services import (
    FirestoreDocumentStore, GcsBlobStore, LocalBlobStore, Mailer, TelegramNotifier,
    screenshot_extension, screenshot_object_name, upload_screenshot,
)
from tripstore.services import mail as mail_module


# --- screenshot naming ---

@pytest.mark.parametrize('filename, expected', [
    ('proof.JPG', 'jpg'),
    ('transfer.jpeg', 'jpeg'),
    ('archive.tar.GZ', 'gz'),
    ('noextension', 'png'),
    ('', 'png'),
    (None, 'png'),
    ('weird.???', 'png'),
    ('x.p-n_g', 'png'),
    ('x.We$bP', 'webp'),
])
def test_screenshot_extension(filename, expected):
    assert screenshot_extension(filename) == expected


def test_screenshot_object_name():
    name = screenshot_object_name('jpg', now_ms=1760000000000)
    assert re.fullmatch(r'orders/1760000000000-[0-9a-f]{12}\.jpg', name)
    assert screenshot_object_name('jpg', now_ms=1) != screenshot_object_name('jpg', now_ms=1)


def test_upload_screenshot_without_file():
    blobs = MagicMock()
    assert upload_screenshot(blobs, None, 100) is None
    assert upload_screenshot(blobs, FileStorage(io.BytesIO(b''), filename=''), 100) is None
    blobs.save.assert_not_called()


def test_upload_screenshot_rejects_oversize():
    blobs = MagicMock()
    with pytest.raises(ValidationError):
        upload_screenshot(blobs, FileStorage(io.BytesIO(b'x' * 11), filename='a.png'), 10)
    blobs.save.assert_not_called()


def test_upload_screenshot_defaults_content_type():
    blobs = MagicMock()
    blobs.save.return_value = 'https://example/x'
    url = upload_screenshot(blobs, FileStorage(io.BytesIO(b'data'), filename='scan'), 100)
    assert url == 'https://example/x'
    path, data, content_type = blobs.save.call_args[0]
    assert path.endswith('.png')
    assert data == b'data'
    assert content_type == 'application/octet-stream'


# --- blob stores ---

def test_gcs_blob_store_uploads_public_object():
    client = MagicMock()
    client.bucket.return_value.name = 'trip-store.appspot.com'
    blob = client.bucket.return_value.blob.return_value

    store = GcsBlobStore(client, 'trip-store.appspot.com')
    url = store.save('orders/1-abc.jpg', b'img', 'image/jpeg')

    assert url == 'https://storage.googleapis.com/trip-store.appspot.com/orders/1-abc.jpg'
    assert blob.cache_control == 'public, max-age=31536000'
    blob.upload_from_string.assert_called_once_with(b'img', content_type='image/jpeg')
    blob.make_public.assert_called_once_with()


def test_gcs_blob_store_wraps_errors():
    client = MagicMock()
    client.bucket.return_value.blob.return_value.make_public.side_effect = \
        google_exceptions.Forbidden('uniform bucket-level access')
    with pytest.raises(StorageError):
        GcsBlobStore(client, 'b').save('orders/x.png', b'1', 'image/png')


def test_gcs_blob_store_wraps_transport_errors():
    client = MagicMock()
    client.bucket.return_value.blob.return_value.upload_from_string.side_effect = \
        requests.exceptions.ConnectionError('connection reset')
    with pytest.raises(StorageError):
        GcsBlobStore(client, 'b').save('orders/x.png', b'1', 'image/png')


def test_local_blob_store(tmp_path):
    store = LocalBlobStore(str(tmp_path), base_url='/uploads')
    url = store.save('orders/1-abc.png', b'img', 'image/png')
    assert url == '/uploads/orders/1-abc.png'
    assert (tmp_path / 'orders' / '1-abc.png').read_bytes() == b'img'


# --- firestore document store ---

def test_firestore_add_uses_server_timestamp():
    client = MagicMock()
    client.collection.return_value.add.return_value = (None, MagicMock(id='doc123'))

    doc_id = FirestoreDocumentStore(client).add('orders', {'name': 'Ali'})

    assert doc_id == 'doc123'
    client.collection.assert_called_with('orders')
    payload = client.collection.return_value.add.call_args[0][0]
    assert payload == {'name': 'Ali', 'created_at': firestore.SERVER_TIMESTAMP}


def test_firestore_list_orders_newest_first_and_serializes():
    client = MagicMock()
    snap = MagicMock(id='a')
    snap.to_dict.return_value = {'email': 'x@y.z', 'created_at': datetime(2026, 5, 1, tzinfo=timezone.utc)}
    query = client.collection.return_value.order_by.return_value
    query.stream.return_value = [snap]

    data = FirestoreDocumentStore(client).list('inquiries')

    client.collection.return_value.order_by.assert_called_once_with(
        'created_at', direction=firestore.Query.DESCENDING)
    assert data == [{'id': 'a', 'email': 'x@y.z', 'created_at': '2026-05-01T00:00:00+00:00'}]


def test_firestore_update_missing_document_is_ignored():
    client = MagicMock()
    client.collection.return_value.document.return_value.update.side_effect = \
        google_exceptions.NotFound('no document')
    FirestoreDocumentStore(client).update('orders', 'missing', {'status': 'paid'})


def test_firestore_errors_become_store_errors():
    client = MagicMock()
    client.collection.return_value.document.return_value.delete.side_effect = \
        google_exceptions.ServiceUnavailable('down')
    with pytest.raises(StoreError):
        FirestoreDocumentStore(client).delete('orders', 'x')


def test_firestore_retry_and_auth_errors_become_store_errors():
    client = MagicMock()
    client.collection.return_value.order_by.return_value.stream.side_effect = \
        google_exceptions.RetryError('deadline exceeded', cause=None)
    with pytest.raises(StoreError):
        FirestoreDocumentStore(client).list('orders')

    client.collection.return_value.add.side_effect = \
        google_auth_exceptions.TransportError('token refresh failed')
    with pytest.raises(StoreError):
        FirestoreDocumentStore(client).add('orders', {'name': 'Ali'})


# --- mailer ---

def test_mailer_sends_through_resend(monkeypatch):
    calls = []

    def fake_send(payload):
        calls.append(payload)
        return {'id': 'email-1'}
    monkeypatch.setattr(mail_module.resend.Emails, 'send', fake_send)

    mailer = Mailer('re_key', 'support@tripstore.test')
    assert mailer.send('u@example.com', 'Hi', '<p>x</p>', 'فريق الدعم') == 'email-1'
    assert calls == [{
        'from': 'فريق الدعم <support@tripstore.test>',
        'to': ['u@example.com'],
        'subject': 'Hi',
        'html': '<p>x</p>',
    }]


def test_mailer_without_key_fails():
    mailer = Mailer(None, 'support@tripstore.test')
    assert not mailer.configured
    with pytest.raises(MailError):
        mailer.send('u@example.com', 'Hi', '<p>x</p>', 'x')


def test_mailer_unexpected_response(monkeypatch):
    monkeypatch.setattr(mail_module.resend.Emails, 'send', lambda payload: {'error': 'rate limited'})
    with pytest.raises(MailError):
        Mailer('re_key', 'a@b.c').send('u@example.com', 'Hi', 'x', 'x')


# --- telegram ---

class _Response:
    def __init__(self, status_code, text='{}'):
        self.status_code = status_code
        self.text = text


def test_telegram_posts_html_message(monkeypatch):
    calls = []

    def fake_post(url, data=None, timeout=None):
        calls.append((url, data, timeout))
        return _Response(200)
    monkeypatch.setattr('tripstore.services.telegram.requests.post', fake_post)

    assert TelegramNotifier('TOKEN', 42, timeout=5).send('hello') is True
    assert calls == [(
        'https://api.telegram.org/botTOKEN/sendMessage',
        {'chat_id': '42', 'text': 'hello', 'parse_mode': 'HTML'},
        5,
    )]


def test_telegram_unconfigured_is_noop(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError('should not be called')
    monkeypatch.setattr('tripstore.services.telegram.requests.post', fail)
    assert TelegramNotifier(None, '42').send('hello') is False


def test_telegram_errors(monkeypatch):
    monkeypatch.setattr('tripstore.services.telegram.requests.post',
                        lambda *a, **kw: _Response(401, 'Unauthorized'))
    with pytest.raises(NotifyError):
        TelegramNotifier('TOKEN', '42').send('hello')

    def timeout(*args, **kwargs):
        raise requests.exceptions.Timeout('slow')
    monkeypatch.setattr('tripstore.services.telegram.requests.post', timeout)
    with pytest.raises(NotifyError):
        TelegramNotifier('TOKEN', '42').send('hello')


def test_mailer_key_survives_overlapping_sends(monkeypatch):
    """A send finishing must not clear the key another send is using."""
    monkeypatch.setattr(mail_module.resend, 'api_key', None)
    first_inside = threading.Event()
    second_inside = threading.Event()
    first_done = threading.Event()
    seen = {}

    def fake_send(payload):
        if payload['subject'] == 'first':
            first_inside.set()
            second_inside.wait(5)
            return {'id': 'email-1'}
        second_inside.set()
        first_done.wait(5)
        seen['second'] = mail_module.resend.api_key
        return {'id': 'email-2'}
    monkeypatch.setattr(mail_module.resend.Emails, 'send', fake_send)

    mailer = Mailer('re_key', 'support@tripstore.test')
    results = {}
    first = threading.Thread(target=lambda: results.update(first=mailer.send('a@x.io', 'first', 'x', 'n')))
    second = threading.Thread(target=lambda: results.update(second=mailer.send('b@x.io', 'second', 'x', 'n')))

    first.start()
    assert first_inside.wait(5)
    second.start()
    first.join(5)
    first_done.set()
    second.join(5)

    assert seen['second'] == 're_key'
    assert results == {'first': 'email-1', 'second': 'email-2'}
