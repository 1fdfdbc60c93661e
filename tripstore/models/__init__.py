"""
Models Package

Exports the SQL document table and the record helpers.
"""

from tripstore.models.document import StoredDocument
from tripstore.models.records import (
    ORDERS, INQUIRIES, SUGGESTIONS, COLLECTIONS,
    ORDER_UNPAID, INQUIRY_PENDING, INQUIRY_REPLIED,
    build_order, build_inquiry, build_suggestion, order_type, is_present,
)

__all__ = [
    'StoredDocument',
    'ORDERS', 'INQUIRIES', 'SUGGESTIONS', 'COLLECTIONS',
    'ORDER_UNPAID', 'INQUIRY_PENDING', 'INQUIRY_REPLIED',
    'build_order', 'build_inquiry', 'build_suggestion', 'order_type', 'is_present',
]
