from learning_log.client.entries import Entry, EntryForm, entry_schema, is_local_id, parse_tags, sort_by_date


def make_entry(entry_id, entry_date, **kwargs):
    return Entry(id=entry_id, title=kwargs.pop('title', entry_id), content='', date=entry_date, **kwargs)


def test_parse_tags():
    assert parse_tags('flask, python ,, testing') == ['flask', 'python', 'testing']
    assert parse_tags(['a', ' ', 'b ']) == ['a', 'b']


def test_parse_empty_tags():
    assert parse_tags('') == []
    assert parse_tags(' , ,') == []
    assert parse_tags(None) == []


def test_is_local_id():
    assert is_local_id('local-1700000000000')
    assert not is_local_id('65a1b2c3')
    assert not is_local_id(12)


def test_sort_by_date_newest_first():
    entries = [make_entry('a', '2024-01-01'),
               make_entry('b', '2024-03-01T00:00:00.000Z'),
               make_entry('c', '2024-02-01')]
    assert [entry.id for entry in sort_by_date(entries)] == ['b', 'c', 'a']


def test_sort_by_date_is_stable():
    entries = [make_entry('first', '2024-01-01'), make_entry('second', '2024-01-01')]
    assert [entry.id for entry in sort_by_date(entries)] == ['first', 'second']


def test_form_payload():
    form = EntryForm(title='A', content='Body', date='2024-01-01', tags='x, ,y')
    assert form.to_payload() == {'title': 'A', 'content': 'Body', 'tags': ['x', 'y'], 'date': '2024-01-01'}


def test_form_payload_with_image():
    form = EntryForm(title='A', content='Body', date='2024-01-01', image='data:image/png;base64,AA==')
    assert form.to_payload()['image'] == 'data:image/png;base64,AA=='


def test_form_from_entry():
    entry = make_entry('1', '2024-01-01T00:00:00', title='A', tags=['x', 'y'])
    form = EntryForm.from_entry(entry)
    assert form.date == '2024-01-01'
    assert form.tags == 'x, y'


def test_load_server_entry():
    entry = entry_schema.load({'id': 7, 'title': 'A', 'content': 'B', 'tags': ['x'], 'date': '2024-01-01',
                               'image': None, 'user_id': None, 'created_on': '2024-01-01T10:00:00',
                               'last_edited_on': '2024-01-01T10:00:00'})
    assert entry.id == '7'
    assert entry.tags == ['x']
    assert not entry.is_local
