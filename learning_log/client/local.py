import json
import logging
import time
from datetime import datetime

import marshmallow

from .entries import LOCAL_ID_PREFIX, Entry, entries_schema, parse_tags
from .errors import NotFoundError


logger = logging.getLogger(__name__)

STORAGE_KEY = 'learning_log_offline_data'


class LocalStore:
    """
    Entries kept on this machine while the API is unreachable.

    The whole list lives in a single storage slot and is rewritten on every
    change. Identifiers are time-based and start with ``local-``.
    """

    def __init__(self, storage):
        self.storage = storage

    def _read(self):
        stored = self.storage.get_item(STORAGE_KEY)
        if not stored:
            return []
        try:
            return entries_schema.load(json.loads(stored))
        except (ValueError, marshmallow.ValidationError) as e:
            logger.warning('Discarding unreadable local snapshot: %s', e)
            return []

    def _write(self, entries):
        self.storage.set_item(STORAGE_KEY, json.dumps(entries_schema.dump(entries)))

    @staticmethod
    def _new_id(entries):
        taken = {entry.id for entry in entries}
        stamp = int(time.time() * 1000)
        while f'{LOCAL_ID_PREFIX}{stamp}' in taken:
            stamp += 1
        return f'{LOCAL_ID_PREFIX}{stamp}'

    def list(self):
        return self._read()

    def create(self, form):
        entries = self._read()
        now = datetime.utcnow().isoformat()
        new_entry = Entry(id=self._new_id(entries),
                          title=form.title.strip(),
                          content=form.content,
                          tags=parse_tags(form.tags),
                          date=form.date,
                          image=form.image,
                          created_on=now,
                          last_edited_on=now)
        entries.insert(0, new_entry)
        self._write(entries)
        return new_entry

    def update(self, entry_id, form):
        entries = self._read()
        for entry in entries:
            if entry.id == entry_id:
                break
        else:
            raise NotFoundError('Log not found locally')

        entry.title = form.title.strip()
        entry.content = form.content
        entry.tags = parse_tags(form.tags)
        entry.date = form.date
        entry.image = form.image
        entry.last_edited_on = datetime.utcnow().isoformat()
        self._write(entries)
        return entry

    def delete(self, entry_id):
        """Remove the entry; unknown identifiers are ignored."""
        entries = self._read()
        remaining = [entry for entry in entries if entry.id != entry_id]
        if len(remaining) != len(entries):
            self._write(remaining)
