"""Pytest configuration and fixtures."""
import json
from unittest.mock import MagicMock

import pytest
import requests

from learning_log import create_app, database
from learning_log.client.local import LocalStore
from learning_log.client.storage import Storage
from learning_log.models import User


# --------
# Backend
# --------

@pytest.fixture
def app():
    flask_app = create_app('learning_log.config.TestingConfig')
    with flask_app.app_context():
        database.create_all()
        yield flask_app
        database.session.remove()
        database.drop_all()


@pytest.fixture
def test_client(app):
    return app.test_client()


@pytest.fixture
def auth_app(app):
    app.config['AUTH_REQUIRED'] = True
    return app


@pytest.fixture
def default_user(app):
    user = User(username='learner', email='learner@example.com', password_plaintext='FlaskIsAwesome123')
    database.session.add(user)
    database.session.commit()
    return user


@pytest.fixture
def auth_headers(auth_app, default_user):
    token = default_user.generate_auth_token()
    database.session.add(default_user)
    database.session.commit()
    return {'Authorization': f'Bearer {token}'}


# -------
# Client
# -------

@pytest.fixture
def storage(tmp_path):
    return Storage(str(tmp_path / 'storage.json'))


@pytest.fixture
def local_store(storage):
    return LocalStore(storage)


def build_response(status_code=200, json_data=None):
    """Build a stand-in for a `requests.Response`."""
    response = MagicMock()
    response.status_code = status_code
    response.content = json.dumps(json_data).encode() if json_data is not None else b''
    response.json.return_value = json_data
    return response


class FlaskHttp:
    """Routes `requests.Session.request` calls to a Flask test client."""

    def __init__(self, test_client, base_url='http://testserver/api'):
        self.test_client = test_client
        self.base_url = base_url
        self.reachable = True

    def request(self, method, url, json=None, headers=None, timeout=None):
        if not self.reachable:
            raise requests.exceptions.ConnectionError('Connection refused')
        path = '/api' + url[len(self.base_url):]
        flask_response = self.test_client.open(path, method=method, json=json, headers=headers)
        response = MagicMock()
        response.status_code = flask_response.status_code
        response.content = flask_response.data
        response.json.side_effect = lambda: flask_response.get_json()
        return response


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def flask_http(test_client):
    return FlaskHttp(test_client)
