"""
Admin session tokens.

Issues Flask-JWT-Extended access tokens for the configured admin account and
maps every token failure onto the same 403 response.
"""

import hmac

from flask import current_app, jsonify
from flask_jwt_extended import create_access_token

from tripstore import messages
from tripstore.admin.decorators import ADMIN_ROLE
from tripstore.extensions import jwt


def check_credentials(username, password):
    """Exact, case-sensitive match against the configured credentials."""
    config = current_app.config
    return (hmac.compare_digest(_utf8(username), _utf8(config['ADMIN_USERNAME']))
            and hmac.compare_digest(_utf8(password), _utf8(config['ADMIN_PASSWORD'])))


def _utf8(value):
    return str(value).encode('utf-8')


def issue_token(username, expires_delta=None):
    """Signed admin token; expiry defaults to JWT_ACCESS_TOKEN_EXPIRES (7 days)."""
    kwargs = {'additional_claims': {'role': ADMIN_ROLE}}
    if expires_delta is not None:
        kwargs['expires_delta'] = expires_delta
    return create_access_token(identity=str(username), **kwargs)


def _unauthorized():
    return jsonify(success=False, message=messages.UNAUTHORIZED), 403


@jwt.unauthorized_loader
def _missing_token(reason):
    return _unauthorized()


@jwt.invalid_token_loader
def _invalid_token(reason):
    return _unauthorized()


@jwt.expired_token_loader
def _expired_token(jwt_header, jwt_payload):
    return _unauthorized()


@jwt.token_verification_failed_loader
def _verification_failed(jwt_header, jwt_payload):
    return _unauthorized()
