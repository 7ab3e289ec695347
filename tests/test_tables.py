"""Tests for table handling."""

from typing import TYPE_CHECKING

import pytest

from casemark.tokens import TableToken

if TYPE_CHECKING:
    from casemark.core import TestcaseParser
    from casemark.testcase import Testcase


@pytest.mark.parametrize('header, cells, expected', (
    pytest.param(
        ['key'], [['value']],
        [{'key': 'value'}],
        id='single value',
    ),
    pytest.param(
        ['key'], [['value1'], ['value2']],
        [{'key': 'value1'}, {'key': 'value2'}],
        id='multiple values for the same key',
    ),
    pytest.param(
        ['key1', 'key2'], [['value11', 'value12']],
        [{'key1': 'value11', 'key2': 'value12'}],
        id='multiple keys',
    ),
    pytest.param(
        ['key1', 'key2'], [['value11', 'value12'], ['value21', 'value22']],
        [{'key1': 'value11', 'key2': 'value12'}, {'key1': 'value21', 'key2': 'value22'}],
        id='multiple keys and values',
    ),
    pytest.param(
        ['key'], [],
        [],
        id='header only',
    ),
))
def test_table_variables(header: list[str], cells: list[list[str]],
                         expected: list[dict[str, str]],
                         parser: 'TestcaseParser', testcase: 'Testcase') -> None:
    """Verify that every table row becomes one variables mapping."""
    parser._handle_table(testcase, TableToken(header=header, cells=cells))

    assert testcase.variables == expected


def test_table_keeps_header_order(parser: 'TestcaseParser', testcase: 'Testcase') -> None:
    """Verify that mapping keys follow the header order."""
    parser._handle_table(testcase, TableToken(
        header=['zeta', 'alpha', 'mu'],
        cells=[['1', '2', '3']],
    ))

    assert list(testcase.variables[0]) == ['zeta', 'alpha', 'mu']


def test_tables_are_appended(parser: 'TestcaseParser', testcase: 'Testcase') -> None:
    """Verify that a second table appends rows to existing variables."""
    parser._handle_table(testcase, TableToken(header=['user'], cells=[['alice']]))
    parser._handle_table(testcase, TableToken(header=['role'], cells=[['admin'], ['guest']]))

    assert testcase.variables == [
        {'user': 'alice'},
        {'role': 'admin'},
        {'role': 'guest'},
    ]


def test_table_section(parser: 'TestcaseParser') -> None:
    """Verify table handling through section parsing."""
    testcase = parser.parse({'childrenTokens': [{
        'type': 'table',
        'header': ['key'],
        'cells': [['value1'], ['value2']],
        'align': [None],
    }]})

    assert testcase.variables == [{'key': 'value1'}, {'key': 'value2'}]


def test_table_from_mapping(parser: 'TestcaseParser', testcase: 'Testcase') -> None:
    """Verify that the table handler accepts a raw tokenizer mapping."""
    parser._handle_table(testcase, {
        'type': 'table',
        'header': ['key1', 'key2'],
        'cells': [['value11', 'value12']],
    })

    assert testcase.variables == [{'key1': 'value11', 'key2': 'value12'}]
