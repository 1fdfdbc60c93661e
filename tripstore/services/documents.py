"""
Document Store Service

Add / list / update / delete against the ``orders``, ``inquiries`` and
``suggestions`` collections. Two backends share the same interface:
Cloud Firestore for production and a single SQL table for local runs.
"""

import logging
from datetime import datetime, timezone
from uuid import uuid4

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore
from sqlalchemy.exc import SQLAlchemyError

from tripstore.exceptions import StoreError
from tripstore.extensions import db
from tripstore.models import StoredDocument
from tripstore.services.google import GOOGLE_ERRORS, build_credentials

logger = logging.getLogger(__name__)

CREATED_AT = 'created_at'


def _utcnow():
    return datetime.now(timezone.utc)


def _as_utc(value):
    # SQLite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def serialize_document(doc_id, data):
    """Flatten a stored document into API output, id first."""
    out = {'id': doc_id}
    for key, value in (data or {}).items():
        out[key] = value.isoformat() if isinstance(value, datetime) else value
    return out


class FirestoreDocumentStore:
    """Cloud Firestore backend."""

    def __init__(self, client):
        self._client = client

    def add(self, collection, data):
        payload = dict(data)
        payload[CREATED_AT] = firestore.SERVER_TIMESTAMP
        try:
            _, ref = self._client.collection(collection).add(payload)
        except GOOGLE_ERRORS as exc:
            raise StoreError(f'add to {collection} failed: {exc}') from exc
        return ref.id

    def list(self, collection):
        query = self._client.collection(collection).order_by(
            CREATED_AT, direction=firestore.Query.DESCENDING)
        try:
            return [serialize_document(snap.id, snap.to_dict()) for snap in query.stream()]
        except GOOGLE_ERRORS as exc:
            raise StoreError(f'list {collection} failed: {exc}') from exc

    def update(self, collection, doc_id, fields):
        try:
            self._client.collection(collection).document(doc_id).update(fields)
        except google_exceptions.NotFound:
            logger.info('Update of missing document %s/%s ignored', collection, doc_id)
        except GOOGLE_ERRORS as exc:
            raise StoreError(f'update {collection}/{doc_id} failed: {exc}') from exc

    def delete(self, collection, doc_id):
        try:
            self._client.collection(collection).document(doc_id).delete()
        except GOOGLE_ERRORS as exc:
            raise StoreError(f'delete {collection}/{doc_id} failed: {exc}') from exc


class SqlDocumentStore:
    """Flask-SQLAlchemy backend storing every document in one table."""

    def add(self, collection, data):
        doc = StoredDocument(
            doc_id=uuid4().hex,
            collection=collection,
            data=dict(data),
            created_at=_utcnow(),
        )
        try:
            db.session.add(doc)
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StoreError(f'add to {collection} failed: {exc}') from exc
        return doc.doc_id

    def list(self, collection):
        try:
            rows = (StoredDocument.query
                    .filter_by(collection=collection)
                    .order_by(StoredDocument.created_at.desc(), StoredDocument.seq.desc())
                    .all())
        except SQLAlchemyError as exc:
            raise StoreError(f'list {collection} failed: {exc}') from exc
        return [serialize_document(row.doc_id, {**row.data, CREATED_AT: _as_utc(row.created_at)})
                for row in rows]

    def update(self, collection, doc_id, fields):
        try:
            doc = StoredDocument.query.filter_by(collection=collection, doc_id=doc_id).first()
            if doc is None:
                logger.info('Update of missing document %s/%s ignored', collection, doc_id)
                return
            # JSON columns only track reassignment
            doc.data = {**doc.data, **fields}
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StoreError(f'update {collection}/{doc_id} failed: {exc}') from exc

    def delete(self, collection, doc_id):
        try:
            StoredDocument.query.filter_by(collection=collection, doc_id=doc_id).delete()
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StoreError(f'delete {collection}/{doc_id} failed: {exc}') from exc


def build_firestore_client(service_account_info=None):
    """Firestore client from service-account JSON, or default credentials."""
    credentials, project = build_credentials(service_account_info)
    return firestore.Client(project=project, credentials=credentials)
