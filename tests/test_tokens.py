"""Tests for token validation."""

import pytest

from casemark.errors import TokenSchemaError
from casemark.tokens import (
    OtherToken,
    ParagraphToken,
    SectionToken,
    TableToken,
    load_section,
    load_sections,
    load_token,
    sections_json_schema,
)


def test_section_tagged_children() -> None:
    """Verify that child tokens are validated into their union members."""
    section = load_section({
        'name': 'case',
        'childrenTokens': [
            {'type': 'paragraph', 'text': 'Do some testing', 'raw': 'Do some testing\n'},
            {'type': 'table', 'header': ['key'], 'cells': [['value']], 'align': [None]},
            {'type': 'header', 'depth': 2, 'text': 'Nested'},
        ],
    })

    paragraph, table, other = section.children_tokens

    assert isinstance(paragraph, ParagraphToken)
    assert paragraph.text == 'Do some testing'
    assert isinstance(table, TableToken)
    assert table.cells == [['value']]
    assert isinstance(other, OtherToken)
    assert other.type == 'header'
    assert other.model_dump() == {'type': 'header', 'depth': 2, 'text': 'Nested'}


def test_section_by_field_name() -> None:
    """Verify that sections may be populated by Python field names."""
    section = SectionToken(name='case', children_tokens=[{'type': 'paragraph', 'text': 'x'}])

    assert section.children_tokens == [ParagraphToken(text='x')]


def test_load_section_passes_models() -> None:
    """Verify that validated sections are returned unchanged."""
    section = SectionToken(name='case')

    assert load_section(section) is section


def test_tokens_are_immutable() -> None:
    """Verify that tokens can not be modified after validation."""
    token = ParagraphToken(text='text')

    with pytest.raises(ValueError, match=r'frozen'):
        token.text = 'other'


@pytest.mark.parametrize('data, pattern', (
    pytest.param(
        {'childrenTokens': [{'type': 'paragraph'}]},
        r'text: Field required',
        id='missing text',
    ),
    pytest.param(
        {'childrenTokens': [{'type': 'table', 'header': ['a', 'b'], 'cells': [['1', '2'], ['3']]}]},
        r'Row 2 has 1 cells, expected 2',
        id='short row',
    ),
    pytest.param(
        ['not a section'],
        r'^Invalid token tree',
        id='not a mapping',
    ),
))
def test_load_sections_rejects(data: object, pattern: str) -> None:
    """Verify that invalid token trees raise a schema error."""
    with pytest.raises(TokenSchemaError, match=pattern) as error:
        load_sections(data)

    assert error.value.context['element'] == data


def test_load_sections_single_mapping() -> None:
    """Verify that a single section mapping is wrapped into a list."""
    sections = load_sections({'name': 'only'})

    assert sections == [SectionToken(name='only')]


def test_sections_json_schema() -> None:
    """Verify that the token tree schema uses tokenizer field names."""
    schema = sections_json_schema()

    assert schema['type'] == 'array'
    assert 'childrenTokens' in schema['$defs']['SectionToken']['properties']


def test_numbers_are_kept_as_text() -> None:
    """Verify that unquoted YAML numbers are accepted as text."""
    section = load_section({'childrenTokens': [
        {'type': 'paragraph', 'text': 42},
        {'type': 'table', 'header': ['id', 2024], 'cells': [[1, 2.5]]},
    ]})

    paragraph, table = section.children_tokens

    assert paragraph.text == '42'
    assert table.header == ['id', '2024']
    assert table.cells == [['1', '2.5']]


def test_booleans_are_rejected() -> None:
    """Verify that unquoted YAML booleans must be quoted."""
    with pytest.raises(TokenSchemaError, match=r'Invalid token tree'):
        load_section({'childrenTokens': [{'type': 'table', 'header': ['on'], 'cells': [[True]]}]})


def test_load_token() -> None:
    """Verify validation of a single token of a known type."""
    token = ParagraphToken(text='text')

    assert load_token(ParagraphToken, token) is token
    assert load_token(TableToken, {'header': ['k'], 'cells': [['v']]}) == TableToken(
        header=['k'],
        cells=[['v']],
    )

    with pytest.raises(TokenSchemaError, match=r'Row 1 has 0 cells, expected 1'):
        load_token(TableToken, {'header': ['k'], 'cells': [[]]})
