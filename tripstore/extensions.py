"""
Flask Extensions

The document store, blob store and notifiers are built once by the
application factory and kept in ``app.extensions``; request handlers reach
them through ``get_services()``.
"""

from dataclasses import dataclass
from typing import Any

from flask import current_app
from flask_jwt_extended import JWTManager
from flask_sqlalchemy import SQLAlchemy

# Database instance (SQL document store backend)
db = SQLAlchemy()

# Admin session tokens
jwt = JWTManager()

SERVICES_KEY = 'tripstore.services'


@dataclass
class Services:
    """External collaborators used by the request handlers."""
    store: Any
    blobs: Any
    mailer: Any
    telegram: Any


def get_services() -> Services:
    return current_app.extensions[SERVICES_KEY]
