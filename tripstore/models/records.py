"""
Record Definitions

Collection names, initial statuses and the builders that turn validated
request fields into the documents written to the store.
"""

ORDERS = 'orders'
INQUIRIES = 'inquiries'
SUGGESTIONS = 'suggestions'

COLLECTIONS = (ORDERS, INQUIRIES, SUGGESTIONS)

ORDER_UNPAID = 'unpaid'
INQUIRY_PENDING = 'pending'
INQUIRY_REPLIED = 'replied'

ORDER_TYPE_UC = 'UC'
ORDER_TYPE_BUNDLE = 'Bundle'


def is_present(value):
    """True for a supplied, non-blank field value."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


def order_type(uc_amount):
    """'UC' when a UC amount was supplied, otherwise 'Bundle'."""
    return ORDER_TYPE_UC if is_present(uc_amount) else ORDER_TYPE_BUNDLE


def build_order(fields, screenshot_url=None):
    uc_amount = fields.get('ucAmount')
    bundle = fields.get('bundle')
    return {
        'name': fields['name'],
        'playerId': fields['playerId'],
        'email': fields['email'],
        'type': order_type(uc_amount),
        'ucAmount': uc_amount if is_present(uc_amount) else None,
        'bundle': bundle if is_present(bundle) else None,
        'totalAmount': fields['totalAmount'],
        'transactionId': fields['transactionId'],
        'screenshotUrl': screenshot_url or None,
        'status': ORDER_UNPAID,
    }


def build_inquiry(fields):
    return {
        'email': fields['email'],
        'message': fields['message'],
        'status': INQUIRY_PENDING,
    }


def build_suggestion(fields):
    return {
        'name': fields['name'],
        'contact': fields['contact'],
        'message': fields['message'],
    }
