import json
import logging

from .errors import LogServiceError, NetworkError


logger = logging.getLogger(__name__)

TOKEN_KEY = 'token'
USER_KEY = 'user'


class Session:
    """The stored authentication token and the cached profile of the logged-in user."""

    def __init__(self, storage):
        self.storage = storage

    @property
    def token(self):
        return self.storage.get_item(TOKEN_KEY)

    @property
    def user(self):
        stored = self.storage.get_item(USER_KEY)
        if not stored:
            return None
        try:
            return json.loads(stored)
        except ValueError:
            return None

    def start(self, token, user):
        self.storage.set_item(TOKEN_KEY, token)
        self.storage.set_item(USER_KEY, json.dumps(user))

    def clear(self):
        self.storage.remove_item(TOKEN_KEY)
        self.storage.remove_item(USER_KEY)


class AuthService:
    """Logs users in and out against the `/auth` endpoints."""

    def __init__(self, api, session):
        self.api = api
        self.session = session

    def _authenticate(self, path, payload):
        try:
            data = self.api.request('POST', path, payload)
        except NetworkError as e:
            raise NetworkError(f'Unable to reach the server. Make sure the backend is running ({e.message})') from e
        if not isinstance(data, dict) or not data.get('token') or not isinstance(data.get('user'), dict):
            raise NetworkError('The server sent an unexpected authentication response.')
        self.session.start(data['token'], data['user'])
        logger.info('Logged in as %s', data['user'].get('email'))
        return data['user']

    def login(self, email, password):
        return self._authenticate('/auth/login', {'email': email, 'password': password})

    def register(self, username, email, password):
        return self._authenticate('/auth/register', {'username': username, 'email': email, 'password': password})

    def logout(self):
        """Revoke the token on the server when it can be reached, then forget the session."""
        if self.session.token:
            try:
                self.api.request('POST', '/auth/logout')
            except LogServiceError as e:
                logger.warning('Could not revoke the token on the server: %s', e.message)
        self.session.clear()

    def current_user(self):
        return self.session.user
