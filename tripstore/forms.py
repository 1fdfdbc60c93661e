"""
Request field helpers shared by the public and admin blueprints.
"""

from flask import request

from tripstore.exceptions import ValidationError
from tripstore.models import is_present


def request_fields():
    """Merge JSON body and form fields (JSON wins). The query string is ignored."""
    fields = {}
    for source in (request.get_json(silent=True), request.form):
        if not hasattr(source, 'keys'):
            continue
        for key in source.keys():
            if key not in fields:
                fields[key] = source.get(key)
    return fields


def require_fields(fields, names, message):
    """Raise ValidationError with ``message`` if any of ``names`` is missing."""
    if not all(is_present(fields.get(name)) for name in names):
        raise ValidationError(message)
    return fields
