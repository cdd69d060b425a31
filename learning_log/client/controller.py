"""
Decides where each read and write of a learning log entry goes.

The controller starts out ONLINE and talks to the API. The first time a call
to the API fails for lack of connectivity it switches to OFFLINE and serves
the entries kept on this machine instead. Only a successful listing of the
remote entries (see `fetch_all` and `retry`) brings it back ONLINE.

Entries created while OFFLINE stay local: they are never uploaded, and their
``local-`` identifiers are never sent to the API.
"""
import enum
import logging

from .entries import is_local_id, sort_by_date
from .errors import LogServiceError, MalformedResponseError, NetworkError, RequestTimeoutError, UnauthorizedError


logger = logging.getLogger(__name__)


class SyncMode(enum.Enum):
    ONLINE = 'online'
    OFFLINE = 'offline'


class SyncController:

    def __init__(self, remote, local, session=None):
        self.remote = remote
        self.local = local
        self.session = session
        self.mode = SyncMode.ONLINE
        self.entries = []

    @property
    def is_offline(self):
        return self.mode is SyncMode.OFFLINE

    def _go_offline(self, reason):
        if not self.is_offline:
            logger.warning('Backend unavailable, switching to offline mode: %s', reason)
        self.mode = SyncMode.OFFLINE

    def _end_session(self):
        logger.warning('Credentials rejected by the server, ending the session')
        if self.session is not None:
            self.session.clear()

    def start(self):
        """Check whether the API answers and load the entries."""
        return self.fetch_all()

    def fetch_all(self):
        try:
            entries = self.remote.list()
        except UnauthorizedError:
            self._end_session()
            raise
        except LogServiceError as e:
            self._go_offline(e.message)
            entries = self.local.list()
        else:
            self.mode = SyncMode.ONLINE
        self.entries = sort_by_date(entries)
        return self.entries

    def retry(self):
        return self.fetch_all()

    def create(self, form):
        created = None
        if not self.is_offline:
            try:
                created = self.remote.create(form)
            except UnauthorizedError:
                self._end_session()
                raise
            except NetworkError as e:
                if isinstance(e, (RequestTimeoutError, MalformedResponseError)):
                    # The request may have reached the server and been stored there
                    logger.warning('The server may already have saved "%s" (%s); keeping a local copy that can '
                                   'show up as a duplicate once the server is reachable again.', form.title, e.message)
                self._go_offline(e.message)

        if created is None:
            created = self.local.create(form)

        self.fetch_all()
        return created

    def update(self, entry_id, form):
        if is_local_id(entry_id):
            updated = self.local.update(entry_id, form)
        elif self.is_offline:
            self.fetch_all()
            raise NetworkError('Connection lost. Cannot update a server entry while offline.')
        else:
            try:
                updated = self.remote.update(entry_id, form)
            except UnauthorizedError:
                self._end_session()
                raise
            except NetworkError as e:
                self._go_offline(e.message)
                self.fetch_all()
                raise NetworkError('Connection lost. Cannot update the server entry.') from e

        self.fetch_all()
        return updated

    def delete(self, entry_id):
        previous_entries = list(self.entries)
        self.entries = [entry for entry in self.entries if entry.id != entry_id]

        try:
            if is_local_id(entry_id):
                self.local.delete(entry_id)
            elif self.is_offline:
                raise NetworkError('Cannot delete a server entry while offline.')
            else:
                self.remote.delete(entry_id)
        except LogServiceError as e:
            logger.warning('Delete of %s failed, restoring the entries: %s', entry_id, e.message)
            self.entries = previous_entries
            if isinstance(e, UnauthorizedError):
                self._end_session()
            elif isinstance(e, NetworkError) and not is_local_id(entry_id):
                self._go_offline(e.message)
            raise

    def find(self, entry_id):
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None
