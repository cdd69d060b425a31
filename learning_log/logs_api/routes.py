from apifairy import authenticate, body, other_responses, response
from flask import abort, current_app

from learning_log import database, token_auth
from learning_log.auth_api.authentication import current_owner_id
from learning_log.models import Entry
from learning_log.schemas import EntrySchema, MessageSchema, NewEntrySchema, UpdateEntrySchema

from . import logs_api_blueprint


# -------
# Schemas
# -------

new_entry_schema = NewEntrySchema()
update_entry_schema = UpdateEntrySchema()
entry_schema = EntrySchema()
entries_schema = EntrySchema(many=True)
message_schema = MessageSchema()


# ----------------
# Helper Functions
# ----------------

def owned_entries():
    """Query for the entries visible to the current user."""
    owner_id = current_owner_id()
    query = Entry.query
    if current_app.config['AUTH_REQUIRED']:
        query = query.filter_by(user_id=owner_id)
    return query


def get_owned_entry_or_404(index):
    entry = owned_entries().filter_by(id=index).first()
    if entry is None:
        abort(404, 'Log not found')
    return entry


# ------
# Routes
# ------

@logs_api_blueprint.route('', methods=['GET'])
@authenticate(token_auth, optional=True)
@response(entries_schema)
@other_responses({401: 'Unauthorized'})
def list_logs():
    """Return all learning log entries, newest first"""
    return owned_entries().order_by(Entry.date.desc(), Entry.created_on.desc()).all()


@logs_api_blueprint.route('', methods=['POST'])
@authenticate(token_auth, optional=True)
@body(new_entry_schema)
@response(entry_schema, 201)
@other_responses({400: 'Bad Request', 401: 'Unauthorized'})
def create_log(kwargs):
    """Create a new learning log entry"""
    new_entry = Entry(user_id=current_owner_id(), **kwargs)
    database.session.add(new_entry)
    database.session.commit()
    return new_entry


@logs_api_blueprint.route('/<int:index>', methods=['PUT'])
@authenticate(token_auth, optional=True)
@body(update_entry_schema)
@response(entry_schema)
@other_responses({400: 'Bad Request', 401: 'Unauthorized', 404: 'Log not found'})
def update_log(kwargs, index):
    """Update a learning log entry; tags and date left out keep their value"""
    entry = get_owned_entry_or_404(index)
    entry.update(**kwargs)
    database.session.add(entry)
    database.session.commit()
    return entry


@logs_api_blueprint.route('/<int:index>', methods=['DELETE'])
@authenticate(token_auth, optional=True)
@response(message_schema)
@other_responses({401: 'Unauthorized', 404: 'Log not found'})
def delete_log(index):
    """Delete a learning log entry"""
    entry = get_owned_entry_or_404(index)
    database.session.delete(entry)
    database.session.commit()
    current_app.logger.info(f'Deleted learning log entry: {index}')
    return dict(message='Log deleted')
