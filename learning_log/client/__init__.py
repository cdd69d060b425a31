"""
Client for the Learning Log API.

The client keeps an in-memory list of entries, writes to the remote API while
it is reachable, and falls back to a snapshot stored on this machine when it
is not. See `learning_log.client.controller.SyncController`.
"""
from .controller import SyncController, SyncMode
from .entries import Entry, EntryForm, is_local_id, parse_tags, sort_by_date
from .errors import (LogServiceError, NetworkError, NotFoundError, RequestTimeoutError, StorageError,
                     UnauthorizedError, ValidationError)

__all__ = [
    'Entry', 'EntryForm', 'LogServiceError', 'NetworkError', 'NotFoundError', 'RequestTimeoutError',
    'StorageError', 'SyncController', 'SyncMode', 'UnauthorizedError', 'ValidationError', 'is_local_id',
    'parse_tags', 'sort_by_date',
]
