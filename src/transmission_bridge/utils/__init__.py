"""Utilities package"""

from .payload import clean_request_data, clean_result_data

__all__ = (
    'clean_request_data',
    'clean_result_data',
)
