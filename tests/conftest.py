import pytest

from tripstore import create_app
from tripstore.admin.session import issue_token
from tripstore.config import TestConfig
from tripstore.exceptions import MailError, NotifyError, StorageError
from tripstore.extensions import SERVICES_KEY
from tripstore.models import StoredDocument


class FakeBlobStore:
    def __init__(self):
        self.saved = []
        self.fail = False

    def save(self, path, data, content_type):
        if self.fail:
            raise StorageError('bucket unavailable')
        self.saved.append({'path': path, 'data': data, 'content_type': content_type})
        return f'https://storage.googleapis.com/test-bucket/{path}'


class FakeMailer:
    def __init__(self):
        self.sent = []
        self.fail = False
        self.configured = True

    def send(self, to, subject, html, sender_name):
        if self.fail:
            raise MailError('smtp down')
        self.sent.append({'to': to, 'subject': subject, 'html': html, 'sender_name': sender_name})
        return 'msg-1'


class FakeTelegram:
    def __init__(self):
        self.sent = []
        self.fail = False
        self.configured = True

    def send(self, text):
        if self.fail:
            raise NotifyError('telegram down')
        self.sent.append(text)
        return True


@pytest.fixture()
def blobs():
    return FakeBlobStore()


@pytest.fixture()
def mailer():
    return FakeMailer()


@pytest.fixture()
def telegram():
    return FakeTelegram()


@pytest.fixture()
def app(blobs, mailer, telegram):
    app = create_app(TestConfig, services={'blobs': blobs, 'mailer': mailer, 'telegram': telegram})
    with app.app_context():
        yield app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def store(app):
    return app.extensions[SERVICES_KEY].store


@pytest.fixture()
def admin_headers(app):
    return {'Authorization': f'Bearer {issue_token("admin")}'}


@pytest.fixture()
def document_count(app):
    def count(collection=None):
        query = StoredDocument.query
        if collection:
            query = query.filter_by(collection=collection)
        return query.count()
    return count
