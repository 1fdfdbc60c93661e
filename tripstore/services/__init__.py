"""
Services Package

Exports all services for easy importing.
"""

from tripstore.services.documents import FirestoreDocumentStore, SqlDocumentStore, build_firestore_client
from tripstore.services.storage import (
    GcsBlobStore, LocalBlobStore, build_gcs_store,
    screenshot_extension, screenshot_object_name, upload_screenshot,
)
from tripstore.services.mail import Mailer
from tripstore.services.telegram import TelegramNotifier

__all__ = [
    'FirestoreDocumentStore',
    'SqlDocumentStore',
    'build_firestore_client',
    'GcsBlobStore',
    'LocalBlobStore',
    'build_gcs_store',
    'screenshot_extension',
    'screenshot_object_name',
    'upload_screenshot',
    'Mailer',
    'TelegramNotifier',
]
