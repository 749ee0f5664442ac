"""Authentication helpers for user data streams."""

from .listen_key import API_KEY_HEADER, ListenKeyClient

__all__ = ["API_KEY_HEADER", "ListenKeyClient"]
