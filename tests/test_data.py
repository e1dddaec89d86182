from datetime import date, datetime

import pytest

from models import Course, Project, ValidationError, slugify
from utils.data import (
    PROJECT_FIELDS,
    as_bool,
    as_date,
    as_float,
    as_list,
    as_str,
    format_timestamp,
    parse_payload
)


@pytest.mark.parametrize('title, slug', [
    ('Hello World', 'hello-world'),
    ('  React & Three.js: A Guide ', '-react-threejs-a-guide-'),
    ('Multiple   spaces -- and dashes', 'multiple-spaces-and-dashes'),
    ('Ünïcödé Title', 'ncd-title'),
    ('', ''),
])
def test_slugify(title, slug):
    assert slugify(title) == slug


def test_as_str_strips_and_rejects_structures():
    assert as_str('  padded ') == 'padded'
    assert as_str(42) == '42'
    with pytest.raises(ValueError):
        as_str({'nested': True})
    with pytest.raises(ValueError):
        as_str(True)


@pytest.mark.parametrize('raw, expected', [
    (True, True), ('true', True), ('FALSE', False), ('1', True), (0, False),
])
def test_as_bool(raw, expected):
    assert as_bool(raw) is expected


def test_as_bool_rejects_words():
    with pytest.raises(ValueError):
        as_bool('yes please')


def test_as_list_accepts_comma_strings():
    assert as_list('react, flask ,, sql') == ['react', 'flask', 'sql']
    assert as_list(None) == []
    with pytest.raises(ValueError):
        as_list(12)


def test_as_date():
    assert as_date('2024-02-29') == date(2024, 2, 29)
    assert as_date('2024-02-29T10:30:00.000Z') == date(2024, 2, 29)
    assert as_date('') is None
    with pytest.raises(ValueError):
        as_date('someday')


def test_format_timestamp():
    assert format_timestamp(datetime(2024, 5, 1, 12, 0, 0)) == '2024-05-01T12:00:00Z'
    assert format_timestamp(None) is None


def test_parse_payload_ignores_unknown_keys():
    values = parse_payload({'title': ' Site ', 'owner': 'me', 'featured': 'true'}, PROJECT_FIELDS)
    assert values == {'title': 'Site', 'featured': True}


def test_parse_payload_collects_every_error():
    with pytest.raises(ValidationError) as excinfo:
        parse_payload({'featured': 'maybe', 'technologies': 5}, PROJECT_FIELDS)
    assert len(excinfo.value.errors) == 2


def test_parse_payload_requires_object():
    with pytest.raises(ValidationError):
        parse_payload(['not', 'a', 'dict'], PROJECT_FIELDS)


def test_model_defaults_apply_before_flush(app):
    with app.app_context():
        project = Project(title='x')
        assert project.status == 'completed'
        assert project.featured is False

        course = Course(title='x')
        assert course.instructor == 'Your Name'


def test_validation_lists_all_missing_fields(app):
    with app.app_context():
        with pytest.raises(ValidationError) as excinfo:
            Project().validate()
    assert 'Please add a project title' in excinfo.value.errors
    assert 'Please add a category' in excinfo.value.errors


@pytest.mark.parametrize('raw', [['web', 5], ['web', None], [['nested']], [{'name': 'web'}]])
def test_as_list_requires_text_entries(raw):
    with pytest.raises(ValueError, match='must be a list of text'):
        as_list(raw)


def test_as_list_drops_blank_entries():
    assert as_list([' web ', '', '  ']) == ['web']


@pytest.mark.parametrize('raw', ['nan', 'inf', '-Infinity', float('nan')])
def test_as_float_rejects_non_finite(raw):
    with pytest.raises(ValueError):
        as_float(raw)
