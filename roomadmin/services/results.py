"""Uniform error capture for data-access calls."""
import functools
import logging

from roomadmin.store.base import StoreError

logger = logging.getLogger(__name__)


def store_call(action):
    """
    Wrap a store operation so it returns ``(data, error)`` instead of raising.

    ``error`` is the store's message when the call failed, otherwise None.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs), None
            except StoreError as e:
                logger.error(f"Error {action}: {e}")
                return None, str(e)

        return wrapper

    return decorator
