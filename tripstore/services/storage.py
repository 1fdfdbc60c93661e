"""
Blob Storage Service

Uploads payment-proof screenshots and returns a public URL. Cloud Storage
is used in production; ``LocalBlobStore`` writes to the instance folder for
local development.
"""

import logging
import os
import re
import secrets
import time

from google.cloud import storage

from tripstore.exceptions import StorageError, ValidationError
from tripstore import messages
from tripstore.services.google import GOOGLE_ERRORS, build_credentials

logger = logging.getLogger(__name__)

CACHE_CONTROL = 'public, max-age=31536000'
DEFAULT_EXTENSION = 'png'
SCREENSHOT_PREFIX = 'orders/'

_UNSAFE_EXT_CHARS = re.compile(r'[^a-z0-9]')


class GcsBlobStore:
    """Cloud Storage bucket with publicly readable objects."""

    def __init__(self, client, bucket_name):
        self._bucket = client.bucket(bucket_name)

    @property
    def bucket_name(self):
        return self._bucket.name

    def public_url(self, path):
        return f'https://storage.googleapis.com/{self.bucket_name}/{path}'

    def save(self, path, data, content_type):
        blob = self._bucket.blob(path)
        blob.cache_control = CACHE_CONTROL
        try:
            blob.upload_from_string(data, content_type=content_type)
            blob.make_public()
        except GOOGLE_ERRORS as exc:
            raise StorageError(f'upload of {path} failed: {exc}') from exc
        return self.public_url(path)


class LocalBlobStore:
    """Filesystem folder served by the app under ``/uploads/``."""

    def __init__(self, root, base_url='/uploads/'):
        self.root = root
        self.base_url = base_url if base_url.endswith('/') else base_url + '/'

    def public_url(self, path):
        return self.base_url + path

    def save(self, path, data, content_type):
        target = os.path.join(self.root, *path.split('/'))
        try:
            os.makedirs(os.path.dirname(target), exist_ok=True)
            with open(target, 'wb') as fh:
                fh.write(data)
        except OSError as exc:
            raise StorageError(f'write of {path} failed: {exc}') from exc
        return self.public_url(path)


def build_gcs_store(bucket_name, service_account_info=None):
    credentials, project = build_credentials(service_account_info)
    client = storage.Client(project=project, credentials=credentials)
    return GcsBlobStore(client, bucket_name)


def screenshot_extension(filename):
    """Lowercased alphanumeric extension of ``filename``; 'png' otherwise."""
    if not filename or '.' not in filename:
        return DEFAULT_EXTENSION
    ext = _UNSAFE_EXT_CHARS.sub('', filename.rsplit('.', 1)[1].lower())
    return ext or DEFAULT_EXTENSION


def screenshot_object_name(ext, now_ms=None):
    """``orders/<epoch-millis>-<random hex>.<ext>``"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f'{SCREENSHOT_PREFIX}{now_ms}-{secrets.token_hex(6)}.{ext}'


def upload_screenshot(blobs, file, max_bytes):
    """Upload an optional werkzeug ``FileStorage``; returns the URL or None."""
    if file is None:
        return None

    data = file.read()
    if not file.filename and not data:
        # browsers send an empty part when no file was picked
        return None
    if len(data) > max_bytes:
        raise ValidationError(messages.SCREENSHOT_TOO_LARGE)

    path = screenshot_object_name(screenshot_extension(file.filename))
    content_type = file.mimetype or 'application/octet-stream'
    url = blobs.save(path, data, content_type)
    logger.info('Stored screenshot %s (%d bytes)', path, len(data))
    return url
