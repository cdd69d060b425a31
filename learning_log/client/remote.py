import logging

import marshmallow

from .entries import entries_schema, entry_schema, is_local_id
from .errors import MalformedResponseError, NotFoundError


logger = logging.getLogger(__name__)

LOGS_PATH = '/logs'


class RemoteStore:
    """Entries kept by the Learning Log API."""

    def __init__(self, api):
        self.api = api

    @staticmethod
    def _load(schema, data):
        try:
            return schema.load(data)
        except marshmallow.ValidationError as e:
            raise MalformedResponseError('The server sent malformed entries.') from e

    @staticmethod
    def _entry_path(entry_id):
        # Locally issued identifiers mean nothing to the server
        if is_local_id(entry_id):
            raise NotFoundError(f'Entry {entry_id} only exists on this machine.')
        return f'{LOGS_PATH}/{entry_id}'

    def list(self):
        return self._load(entries_schema, self.api.request('GET', LOGS_PATH) or [])

    def create(self, form):
        return self._load(entry_schema, self.api.request('POST', LOGS_PATH, form.to_payload()))

    def update(self, entry_id, form):
        return self._load(entry_schema, self.api.request('PUT', self._entry_path(entry_id), form.to_payload()))

    def delete(self, entry_id):
        self.api.request('DELETE', self._entry_path(entry_id))
        logger.info('Deleted entry %s from the server', entry_id)
