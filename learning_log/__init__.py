"""
Welcome to the documentation for the Learning Log API!

## Introduction

The Learning Log API is an API (Application Programming Interface) for keeping a **learning log**: a journal of
dated entries recording what was learned each day.

## Key Functionality

The Learning Log API has the following functionality:

1. Work with learning log entries:
  * Create a new entry (title, content, tags, date and an optional image)
  * Update an entry
  * Delete an entry
  * View all entries, newest first
2. User management (when authentication is enabled):
  * Register new users
  * Log in to retrieve an authentication token
  * Log out, revoking the authentication token

The `learning_log.client` package contains the command-line client, which keeps working against a local snapshot
of the entries whenever this API cannot be reached.

## Key Modules

The project utilizes the following modules:

* **Flask**: micro-framework for web application development which includes the following dependencies:
  * **click**: package for creating command-line interfaces (CLI)
  * **Werkzeug**: set of utilities for creating a Python application that can talk to a WSGI server
* **APIFairy**: API framework for Flask which includes the following dependencies:
  * **Flask-Marshmallow** - Flask extension for using Marshmallow (object serialization/deserialization library)
  * **Flask-HTTPAuth** - Flask extension for HTTP authentication
  * **apispec** - API specification generator that supports the OpenAPI specification
* **Flask-SQLAlchemy** and **Flask-Migrate**: database access and schema migrations
* **requests**: HTTP library used by the client
* **pytest**: framework for testing Python projects
"""
import logging
import os
from logging.handlers import RotatingFileHandler

from apifairy import APIFairy
from click import echo
from flask import Flask, json
from flask.logging import default_handler
from flask_httpauth import HTTPTokenAuth
from flask_marshmallow import Marshmallow
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData
from werkzeug.exceptions import HTTPException


# -------------
# Configuration
# -------------

# Create a naming convention for the database tables
convention = {
    "ix": 'ix_%(column_0_label)s',
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}
metadata = MetaData(naming_convention=convention)

# Create the instances of the Flask extensions in the global scope,
# but without any arguments passed in. These instances are not
# attached to the Flask application at this point.
apifairy = APIFairy()
ma = Marshmallow()
database = SQLAlchemy(metadata=metadata)
db_migration = Migrate()
token_auth = HTTPTokenAuth()


# ----------------------------
# Application Factory Function
# ----------------------------

def create_app(config_type=None):
    # Create the Flask application
    app = Flask(__name__)

    # Configure the Flask application
    if config_type is None:
        config_type = os.getenv('CONFIG_TYPE', default='learning_log.config.DevelopmentConfig')
    app.config.from_object(config_type)

    initialize_extensions(app)
    register_blueprints(app)
    configure_logging(app)
    register_error_handlers(app)
    register_cli_commands(app)
    return app


# ----------------
# Helper Functions
# ----------------

def initialize_extensions(app):
    # Since the application instance is now created, pass it to each Flask
    # extension instance to bind it to the Flask application instance (app)
    apifairy.init_app(app)
    ma.init_app(app)
    database.init_app(app)
    db_migration.init_app(app, database, render_as_batch=True)


def register_blueprints(app):
    # Import the blueprints
    from learning_log.auth_api import auth_api_blueprint
    from learning_log.logs_api import logs_api_blueprint

    # Since the application instance is now created, register each Blueprint
    # with the Flask application instance (app)
    app.register_blueprint(logs_api_blueprint, url_prefix='/api/logs')
    app.register_blueprint(auth_api_blueprint, url_prefix='/api/auth')


def configure_logging(app):
    if app.config['LOG_TO_STDOUT']:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(logging.INFO)
        app.logger.addHandler(stream_handler)
    else:
        os.makedirs(app.instance_path, exist_ok=True)
        file_handler = RotatingFileHandler(os.path.join(app.instance_path, 'learning-log-api.log'),
                                           maxBytes=16384,
                                           backupCount=20)
        file_formatter = logging.Formatter('%(asctime)s %(levelname)s %(threadName)s-%(thread)d: %(message)s [in %(filename)s:%(lineno)d]')
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

    # Remove the default logger configured by Flask
    app.logger.removeHandler(default_handler)
    app.logger.setLevel(logging.INFO)


def register_error_handlers(app):
    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        """Return JSON instead of HTML for HTTP errors."""
        # Start with the correct headers and status code from the error
        response = e.get_response()
        # Replace the body with JSON
        response.data = json.dumps({
            'code': e.code,
            'name': e.name,
            'description': e.description,
        })
        response.content_type = 'application/json'
        return response

    @apifairy.error_handler
    def handle_validation_error(status_code, messages):
        """Return request validation errors in the same shape as the HTTP errors."""
        return {
            'code': status_code,
            'name': 'Validation Error',
            'description': _describe_validation_errors(messages),
            'errors': messages,
        }, status_code


def _describe_validation_errors(messages):
    # APIFairy groups the field errors by request location ('json', 'query', ...)
    details = []
    for fields in messages.values():
        if not isinstance(fields, dict):
            details.append(str(fields))
            continue
        for field, errors in fields.items():
            details.append(f"{field}: {' '.join(map(str, errors)) if isinstance(errors, list) else errors}")
    return '; '.join(details) or 'The request payload is invalid.'


def register_cli_commands(app):
    @app.cli.command('init_db')
    def initialize_database():
        """Initialize the database."""
        database.drop_all()
        database.create_all()
        echo('Initializing the database!')

    @app.cli.command('fill_db')
    def fill_database():
        """Fill the database with initial data."""
        from datetime import date

        from learning_log.models import Entry, User

        # Add a default user to the database
        new_users = [
            User(username='learner', email='learner@example.com', password_plaintext='LearningEveryDay123'),
        ]
        for user in new_users:
            database.session.add(user)
        database.session.flush()

        # Add a default set of learning log entries to the database
        owner_id = new_users[0].id if app.config['AUTH_REQUIRED'] else None
        new_entries = [
            Entry(title='Flask blueprints', content='Blueprints group related routes and register them with a prefix.',
                  tags=['flask', 'python'], date=date(2024, 1, 1), user_id=owner_id),
            Entry(title='Marshmallow schemas', content='Schemas validate request bodies and serialize responses.',
                  tags=['marshmallow'], date=date(2024, 1, 2), user_id=owner_id),
            Entry(title='Rotating log files', content='RotatingFileHandler caps the log size with backups.',
                  tags=['logging'], date=date(2024, 1, 3), user_id=owner_id),
        ]
        for entry in new_entries:
            database.session.add(entry)

        database.session.commit()
        echo(f'Filled the database with {len(new_users)} users and {len(new_entries)} entries!')
