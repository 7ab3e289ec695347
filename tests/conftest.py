"""Tests configurations and fixtures."""

import pytest

from casemark.core import TestcaseParser
from casemark.errors import ErrorHandler
from casemark.testcase import Testcase


@pytest.fixture
def errors() -> ErrorHandler:
    """Provide an empty error sink collecting parse errors."""
    return ErrorHandler()


@pytest.fixture
def parser(errors: ErrorHandler) -> TestcaseParser:
    """Provide a parser reporting to the `errors` fixture.

    Only `xfail` is accepted as an execution state, so tests do not
    depend on the set of builtin states.
    """
    return TestcaseParser(errors, is_valid_state=lambda name: name == 'xfail')


@pytest.fixture
def testcase() -> Testcase:
    """Provide an empty test case to be filled by handlers."""
    return Testcase.from_name('case')
