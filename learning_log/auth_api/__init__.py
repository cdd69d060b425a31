"""
The 'auth_api' blueprint handles the API for managing users.
Specifically, this Blueprint allows for new users to register and for
users to log in to retrieve the authentication token that protects
the learning log entries.
"""
from flask import Blueprint


auth_api_blueprint = Blueprint('auth_api', __name__)

from . import authentication, routes
