"""Cleanup of RPC request arguments and RPC results"""

from typing import Any


def _is_empty(value: Any) -> bool:
    """Check whether a value counts as empty: '', None, False, 0, empty list or dict"""
    if value is None or value is False:
        return True
    if isinstance(value, str | list | tuple | dict):
        return len(value) == 0
    if isinstance(value, int | float):
        return value == 0
    return False


def _is_zero(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool) and value == 0


def _is_digits(key: str) -> bool:
    return key.isascii() and key.isdigit()


def clean_request_data(data: Any) -> dict[str, Any] | None:
    """Remove empty fields from request arguments

    Nested dicts are cleaned recursively. Numeric zero is kept, every other empty
    value ('', None, False, [], {}) is dropped together with its key. Lists and
    other leaf values are passed through as they are.

    Args:
        data: Request arguments

    Returns:
        Cleaned arguments, or None if there is nothing left to send
    """
    if not isinstance(data, dict) or not data:
        return None

    cleaned: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            value = clean_request_data(value)
        if _is_empty(value) and not _is_zero(value):
            continue
        cleaned[key] = value

    return cleaned or None


def clean_result_data(data: Any) -> Any:
    """Clean up an RPC result

    Minus signs in keys are replaced with underscores ('files-wanted' becomes
    'files_wanted'). A dict with any all-digit key is an array encoded as an
    object and is returned as a list of its values. Empty values are dropped
    after cleaning, numeric zero included.

    Args:
        data: Decoded JSON value

    Returns:
        Cleaned dict, or list when the input was a list or an array-like dict.
        Scalars are returned unchanged.
    """
    if isinstance(data, list):
        items = (clean_result_data(item) for item in data)
        return [item for item in items if not _is_empty(item)]

    if not isinstance(data, dict):
        return data

    cleaned: dict[str, Any] = {}
    as_list = False
    for key, value in data.items():
        value = clean_result_data(value)
        key = str(key).replace('-', '_')
        if _is_digits(key):
            as_list = True
        if _is_empty(value):
            continue
        cleaned[key] = value

    if as_list:
        return list(cleaned.values())
    return cleaned
