"""Tests for the client session and AuthService."""
from unittest.mock import MagicMock

import pytest

from learning_log.client.auth import TOKEN_KEY, AuthService, Session
from learning_log.client.errors import NetworkError, UnauthorizedError
from learning_log.client.http import ApiClient


USER = {'id': 1, 'username': 'learner', 'email': 'learner@example.com'}


@pytest.fixture
def session(storage):
    return Session(storage)


@pytest.fixture
def api():
    return MagicMock(spec=ApiClient)


@pytest.fixture
def auth(api, session):
    return AuthService(api, session)


def test_login_starts_the_session(auth, api, session):
    api.request.return_value = {'token': 'abc123', 'user': USER}
    assert auth.login('learner@example.com', 'secret') == USER
    api.request.assert_called_once_with('POST', '/auth/login', {'email': 'learner@example.com', 'password': 'secret'})
    assert session.token == 'abc123'
    assert auth.current_user() == USER


def test_register_starts_the_session(auth, api, session):
    api.request.return_value = {'token': 'abc123', 'user': USER}
    auth.register('learner', 'learner@example.com', 'secret')
    assert api.request.call_args.args[1] == '/auth/register'
    assert session.token == 'abc123'


@pytest.mark.parametrize('data', [None, [], {'user': USER}, {'token': 'abc123'}, {'token': 'abc123', 'user': 'x'}])
def test_unexpected_login_response(auth, api, session, data):
    api.request.return_value = data
    with pytest.raises(NetworkError) as e:
        auth.login('learner@example.com', 'secret')
    assert e.value.message == 'The server sent an unexpected authentication response.'
    assert session.token is None
    assert session.user is None


def test_login_unreachable(auth, api, session):
    api.request.side_effect = NetworkError('Connection refused')
    with pytest.raises(NetworkError) as e:
        auth.login('learner@example.com', 'secret')
    assert 'Unable to reach the server' in e.value.message
    assert session.token is None


def test_login_rejected(auth, api):
    api.request.side_effect = UnauthorizedError('Invalid email or password.')
    with pytest.raises(UnauthorizedError):
        auth.login('learner@example.com', 'wrong')


def test_logout_revokes_the_token(auth, api, session):
    session.start('abc123', USER)
    auth.logout()
    api.request.assert_called_once_with('POST', '/auth/logout')
    assert session.token is None
    assert session.user is None


def test_logout_without_session(auth, api, session):
    auth.logout()
    api.request.assert_not_called()
    assert session.token is None


@pytest.mark.parametrize('error', [NetworkError('Connection refused'), UnauthorizedError('expired')])
def test_logout_forgets_the_session_when_revoking_fails(auth, api, session, storage, error, caplog):
    session.start('abc123', USER)
    api.request.side_effect = error
    auth.logout()
    assert storage.get_item(TOKEN_KEY) is None
    assert session.user is None
    assert 'Could not revoke the token on the server' in caplog.text
