from apifairy import authenticate, body, other_responses, response
from flask import abort, current_app
from sqlalchemy.exc import IntegrityError

from learning_log import database, token_auth
from learning_log.models import User
from learning_log.schemas import LoginSchema, MessageSchema, NewUserSchema, TokenSchema

from . import auth_api_blueprint


# -------
# Schemas
# -------

new_user_schema = NewUserSchema()
login_schema = LoginSchema()
token_schema = TokenSchema()
message_schema = MessageSchema()


# ----------------
# Helper Functions
# ----------------

def issue_token(user):
    token = user.generate_auth_token(current_app.config['AUTH_TOKEN_LIFETIME_MINUTES'])
    database.session.add(user)
    database.session.commit()
    return dict(token=token, user=user)


# ------
# Routes
# ------

@auth_api_blueprint.route('/register', methods=['POST'])
@body(new_user_schema)
@response(token_schema)
@other_responses({400: 'Bad Request'})
def register(kwargs):
    """Register a new user"""
    if User.query.filter_by(email=kwargs['email']).first() is not None:
        abort(400, 'A user with this email address already exists.')

    try:
        new_user = User(username=kwargs['username'],
                        email=kwargs['email'],
                        password_plaintext=kwargs['password'])
        database.session.add(new_user)
        database.session.commit()
    except IntegrityError:
        database.session.rollback()
        abort(400, 'A user with this email address already exists.')

    current_app.logger.info(f'Registered new user: {new_user.email}')
    return issue_token(new_user)


@auth_api_blueprint.route('/login', methods=['POST'])
@body(login_schema)
@response(token_schema)
@other_responses({400: 'Bad Request', 401: 'Invalid email or password'})
def login(kwargs):
    """Log in and get an authentication token"""
    user = User.query.filter_by(email=kwargs['email']).first()
    if user is None or not user.is_password_correct(kwargs['password']):
        current_app.logger.info(f"Failed login attempt for: {kwargs['email']}")
        abort(401, 'Invalid email or password.')

    current_app.logger.info(f'Logged in user: {user.email}')
    return issue_token(user)


@auth_api_blueprint.route('/logout', methods=['POST'])
@authenticate(token_auth)
@response(message_schema)
@other_responses({401: 'Unauthorized'})
def logout():
    """Revoke the authentication token"""
    user = token_auth.current_user()
    user.revoke_auth_token()
    database.session.add(user)
    database.session.commit()
    current_app.logger.info(f'Logged out user: {user.email}')
    return dict(message='Logged out')
