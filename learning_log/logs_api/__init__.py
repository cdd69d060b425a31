"""
The 'logs_api' blueprint handles the API for managing learning log entries.
Specifically, this blueprint allows for entries to be listed, added, edited,
and deleted.
"""
from flask import Blueprint


logs_api_blueprint = Blueprint('logs_api', __name__)

from . import routes
