"""
Admin Decorator

Rejections (missing, malformed, tampered or expired token) are answered by
the JWT error loaders registered in ``tripstore.admin.session``.
"""

from functools import wraps

from flask import g, jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from tripstore import messages

ADMIN_ROLE = 'admin'


def admin_required(f):
    """Decorator to ensure the request carries a valid admin session token.

    The decoded identity is exposed to the view as ``g.admin``.
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()
        claims = get_jwt()
        if claims.get('role') != ADMIN_ROLE:
            return jsonify(success=False, message=messages.UNAUTHORIZED), 403
        g.admin = {'role': claims['role'], 'username': get_jwt_identity()}
        return f(*args, **kwargs)
    return wrapper
