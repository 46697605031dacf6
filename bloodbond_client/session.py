# bloodbond_client/session.py
"""
Persisted sign-in state for the API client.

The token and the signed-in user's profile are kept together as one JSON
blob. A session is loaded on startup, re-checked against the server with
`verify`, and removed on sign-out or on any failed verification.
"""
import json
import logging
import os
from pathlib import Path

import requests

logger = logging.getLogger(__name__)

DEFAULT_SESSION_PATH = Path.home() / '.bloodbond' / 'session.json'


class SessionStore:
    def __init__(self, path=None):
        self.path = Path(path or os.environ.get('BLOODBOND_SESSION_FILE') or DEFAULT_SESSION_PATH)
        self._data = None

    @property
    def token(self):
        return (self._data or {}).get('token')

    @property
    def user(self):
        return (self._data or {}).get('user')

    def load(self):
        """Read the stored session, or None when there is none or it is unreadable."""
        try:
            raw = self.path.read_text(encoding='utf-8')
        except FileNotFoundError:
            self._data = None
            return None

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding unreadable session file %s", self.path)
            self.clear()
            return None

        if not isinstance(data, dict) or not data.get('token'):
            self.clear()
            return None

        self._data = {'token': data['token'], 'user': data.get('user')}
        return self._data

    def save(self, token, user):
        self._data = {'token': token, 'user': user}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._data), encoding='utf-8')
        return self._data

    def clear(self):
        self._data = None
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass

    def verify(self, client):
        """
        Re-validate the stored token against the server.

        On success the stored profile is replaced with the server's copy and
        returned. Any failure clears the session and returns None.
        """
        from .api import ApiError

        if self._data is None and self.load() is None:
            return None

        try:
            body = client.me()
        except (ApiError, requests.RequestException) as e:
            logger.info("Session verification failed: %s", e)
            self.clear()
            return None

        user = body.get('user')
        if not user:
            self.clear()
            return None

        self.save(self.token, user)
        return user
