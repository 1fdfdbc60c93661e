"""
Stored Document Model

Backing table for the SQL document store: one row per document, any
collection, JSON body.
"""

from tripstore.extensions import db


class StoredDocument(db.Model):
    """A schemaless record in a named collection"""
    __tablename__ = 'documents'

    seq = db.Column(db.Integer, primary_key=True, autoincrement=True)
    doc_id = db.Column(db.String(32), unique=True, nullable=False, index=True)
    collection = db.Column(db.String(64), nullable=False, index=True)
    data = db.Column(db.JSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f'<StoredDocument {self.collection}/{self.doc_id}>'
