from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from marshmallow import EXCLUDE, Schema, fields, post_load


LOCAL_ID_PREFIX = 'local-'


def is_local_id(entry_id) -> bool:
    """Return True when the identifier was issued by the local store."""
    return str(entry_id).startswith(LOCAL_ID_PREFIX)


def parse_tags(text) -> List[str]:
    """Split a comma-separated tag string, dropping blank tags."""
    if not text:
        return []
    if isinstance(text, str):
        text = text.split(',')
    return [tag.strip() for tag in text if tag.strip()]


def _date_key(entry):
    try:
        return date.fromisoformat(entry.date[:10])
    except (TypeError, ValueError):
        return date.min


def sort_by_date(entries) -> List['Entry']:
    """Return the entries ordered by date, newest first."""
    return sorted(entries, key=_date_key, reverse=True)


@dataclass
class Entry:
    """A learning log entry as seen by the client."""
    id: str
    title: str
    content: str
    date: str
    tags: List[str] = field(default_factory=list)
    image: Optional[str] = None
    created_on: Optional[str] = None
    last_edited_on: Optional[str] = None

    @property
    def is_local(self):
        return is_local_id(self.id)


@dataclass
class EntryForm:
    """What the user typed in when creating or editing an entry."""
    title: str
    content: str
    date: str
    tags: str = ''
    image: Optional[str] = None

    @classmethod
    def from_entry(cls, entry):
        return cls(title=entry.title,
                   content=entry.content,
                   date=entry.date[:10],
                   tags=', '.join(entry.tags),
                   image=entry.image)

    def to_payload(self):
        """Body sent to the API and stored locally, with the tags parsed into a list."""
        payload = {
            'title': self.title,
            'content': self.content,
            'tags': parse_tags(self.tags),
            'date': self.date,
        }
        if self.image is not None:
            payload['image'] = self.image
        return payload


# -------
# Schemas
# -------

class EntrySchema(Schema):
    """Schema for entries returned by the API and kept in the local snapshot."""

    class Meta:
        unknown = EXCLUDE

    id = fields.Raw(required=True)
    title = fields.String(required=True)
    content = fields.String(load_default='')
    tags = fields.List(fields.String(), load_default=list)
    date = fields.String(required=True)
    image = fields.String(allow_none=True, load_default=None)
    created_on = fields.String(allow_none=True, load_default=None)
    last_edited_on = fields.String(allow_none=True, load_default=None)

    @post_load
    def make_entry(self, data, **kwargs):
        data['id'] = str(data['id'])
        return Entry(**data)


entry_schema = EntrySchema()
entries_schema = EntrySchema(many=True)
