"""
Public API Blueprint

Order, inquiry and suggestion intake plus the health check.
"""

from flask import Blueprint

api_bp = Blueprint('api', __name__)

from tripstore.api import routes  # noqa: E402, F401
