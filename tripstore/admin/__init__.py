"""
Admin Blueprint

Admin access is token-based: a signed, 7-day session token carried in the
``admin_token`` cookie or an ``Authorization: Bearer`` header. Nothing is
stored server-side, so a token stays valid until it expires.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from tripstore.admin import routes  # noqa: E402, F401
