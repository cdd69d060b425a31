import json
import logging
import os

from .errors import StorageError


logger = logging.getLogger(__name__)


class Storage:
    """
    Named string slots persisted as one JSON file on this machine.

    Mirrors the get/set/remove interface of browser local storage: values are
    strings and callers encode their own data.
    """

    def __init__(self, path):
        self.path = path

    def _read(self):
        try:
            with open(self.path, encoding='utf-8') as handle:
                slots = json.load(handle)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning('Ignoring unreadable storage file %s: %s', self.path, e)
            return {}
        return slots if isinstance(slots, dict) else {}

    def _write(self, slots):
        directory = os.path.dirname(self.path)
        temp_path = f'{self.path}.tmp'
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(temp_path, 'w', encoding='utf-8') as handle:
                json.dump(slots, handle)
            os.replace(temp_path, self.path)
        except OSError as e:
            raise StorageError(f'Could not save to {self.path}: {e}') from e

    def get_item(self, key):
        return self._read().get(key)

    def set_item(self, key, value):
        slots = self._read()
        slots[key] = value
        self._write(slots)

    def remove_item(self, key):
        slots = self._read()
        if slots.pop(key, None) is not None:
            self._write(slots)
