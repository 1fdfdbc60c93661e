"""
Google Cloud credentials shared by the Firestore and Cloud Storage clients.
"""

import os

import requests
from google.api_core import exceptions as google_exceptions
from google.auth import default as google_auth_default
from google.auth import exceptions as google_auth_exceptions
from google.oauth2 import service_account

SCOPES = ['https://www.googleapis.com/auth/cloud-platform']

# API errors (incl. RetryError), credential refresh and HTTP transport failures
GOOGLE_ERRORS = (
    google_exceptions.GoogleAPIError,
    google_auth_exceptions.GoogleAuthError,
    requests.exceptions.RequestException,
)


def build_credentials(service_account_info=None):
    """Return ``(credentials, project_id)``.

    Order: explicit service-account JSON (FIREBASE_CONFIG), then the file
    named by GOOGLE_APPLICATION_CREDENTIALS, then application default
    credentials.
    """
    if service_account_info:
        creds = service_account.Credentials.from_service_account_info(service_account_info, scopes=SCOPES)
        return creds, service_account_info.get('project_id')

    key_path = os.environ.get('GOOGLE_APPLICATION_CREDENTIALS')
    if key_path and os.path.exists(key_path):
        creds = service_account.Credentials.from_service_account_file(key_path, scopes=SCOPES)
        return creds, creds.project_id

    return google_auth_default(scopes=SCOPES)
