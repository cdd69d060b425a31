from flask import abort, current_app
from werkzeug.exceptions import Forbidden, Unauthorized

from learning_log import token_auth
from learning_log.models import User


@token_auth.verify_token
def verify_token(auth_token):
    return User.verify_auth_token(auth_token)


@token_auth.error_handler
def token_auth_error(status=401):
    error = (Forbidden if status == 403 else Unauthorized)()
    return {
        'code': error.code,
        'name': error.name,
        'description': error.description,
    }, error.code


def current_owner_id():
    """
    Return the ID of the user that owns the entries of this request.

    Routes protected with `@authenticate(token_auth, optional=True)` reach
    this with or without a valid token. While authentication is disabled
    entries have no owner (None); once enabled, a request without a valid
    token is rejected with 401.
    """
    if not current_app.config['AUTH_REQUIRED']:
        return None

    user = token_auth.current_user()
    if user is None:
        abort(401)
    return user.id
