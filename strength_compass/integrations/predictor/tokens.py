"""Client-side auth token storage.

The bearer token lives under a single well-known key. Storage is an
injected object so each session (and each test) owns its own instance.
"""

from __future__ import annotations

from strength_compass.core.constants import AUTH_TOKEN_KEY


class TokenStore:
    """In-memory key/value storage holding the API auth token."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    @property
    def token(self) -> str | None:
        return self.get_item(AUTH_TOKEN_KEY)

    @token.setter
    def token(self, value: str) -> None:
        self.set_item(AUTH_TOKEN_KEY, value)

    def clear_token(self) -> None:
        self.remove_item(AUTH_TOKEN_KEY)
