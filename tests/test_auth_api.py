"""Tests for the /api/auth endpoints."""
from datetime import datetime, timedelta

from learning_log import database
from learning_log.models import User


def test_register(test_client):
    response = test_client.post('/api/auth/register', json={'username': 'learner',
                                                            'email': 'learner@example.com',
                                                            'password': 'FlaskIsAwesome123'})
    assert response.status_code == 200
    data = response.get_json()
    assert data['token']
    assert data['user']['username'] == 'learner'
    assert data['user']['email'] == 'learner@example.com'
    assert 'password' not in data['user']
    assert User.query.filter_by(email='learner@example.com').first() is not None


def test_register_duplicate_email(test_client, default_user):
    response = test_client.post('/api/auth/register', json={'username': 'again',
                                                            'email': default_user.email,
                                                            'password': 'Password123'})
    assert response.status_code == 400
    assert 'already exists' in response.get_json()['description']


def test_register_missing_fields(test_client):
    response = test_client.post('/api/auth/register', json={'email': 'learner@example.com'})
    assert response.status_code == 400
    data = response.get_json()
    assert 'username' in data['errors']['json']
    assert 'password' in data['errors']['json']


def test_register_invalid_email(test_client):
    response = test_client.post('/api/auth/register', json={'username': 'learner',
                                                            'email': 'not-an-email',
                                                            'password': 'Password123'})
    assert response.status_code == 400


def test_login(test_client, default_user):
    response = test_client.post('/api/auth/login', json={'email': 'learner@example.com',
                                                         'password': 'FlaskIsAwesome123'})
    assert response.status_code == 200
    data = response.get_json()
    assert data['token'] == default_user.auth_token
    assert data['user']['id'] == default_user.id


def test_login_wrong_password(test_client, default_user):
    response = test_client.post('/api/auth/login', json={'email': 'learner@example.com',
                                                         'password': 'WrongPassword'})
    assert response.status_code == 401
    assert response.get_json()['description'] == 'Invalid email or password.'


def test_login_unknown_user(test_client):
    response = test_client.post('/api/auth/login', json={'email': 'nobody@example.com',
                                                         'password': 'Password123'})
    assert response.status_code == 401


def test_login_missing_fields(test_client):
    response = test_client.post('/api/auth/login', json={'email': 'learner@example.com'})
    assert response.status_code == 400


def test_token_grants_access_to_logs(test_client, auth_app, default_user):
    token = test_client.post('/api/auth/login', json={'email': 'learner@example.com',
                                                      'password': 'FlaskIsAwesome123'}).get_json()['token']
    response = test_client.get('/api/logs', headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 200


def test_expired_token_is_rejected(test_client, auth_headers, default_user):
    default_user.auth_token_expiration = datetime.utcnow() - timedelta(minutes=1)
    database.session.add(default_user)
    database.session.commit()

    response = test_client.get('/api/logs', headers=auth_headers)
    assert response.status_code == 401


def test_logout_revokes_the_token(test_client, auth_headers):
    response = test_client.post('/api/auth/logout', headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json() == {'message': 'Logged out'}

    response = test_client.get('/api/logs', headers=auth_headers)
    assert response.status_code == 401


def test_logout_without_token(test_client):
    response = test_client.post('/api/auth/logout')
    assert response.status_code == 401
    assert response.get_json()['code'] == 401
