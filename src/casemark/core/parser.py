"""Test case section parser.

This module turns a section token (a name and its child tokens) into a
`Testcase`. Child tokens are dispatched by type:
- paragraphs hold either free-form instructions or decorators;
- tables hold variables, one mapping per row;
- any other token type is reported as unsupported and skipped.

Malformed content never interrupts parsing. Every issue is added to an
injected error handler and the partially filled test case is returned.
"""

from typing import TYPE_CHECKING, Any, Protocol

from casemark.decorators import DECORATOR_MARKER, DECORATOR_PATTERN, KEYWORDS
from casemark.errors import ErrorContext, ErrorHandler, UnsupportedDecoratorError, UnsupportedTokenError
from casemark.testcase import Testcase
from casemark.tokens import ParagraphToken, SectionToken, TableToken, load_section, load_sections, load_token

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

if TYPE_CHECKING:
    from casemark.errors import CaseError


class ErrorSink(Protocol):
    """Anything accepting parse errors one at a time."""

    def add(self, error: 'CaseError') -> None:
        ...  # pragma: no cover


class TestcaseParser:
    """Parser building test cases from section tokens.

    The parser holds only its collaborators and keeps no state between
    calls: each `parse` owns the test case it builds, so one instance may
    parse any number of sections.

    Attributes:
        errors: Sink receiving every non-fatal parse error.
        is_valid_state: Predicate recognizing execution state labels.
        factory: Constructor creating an empty test case from a section name.
    """

    __test__ = False

    def __init__(self, errors: ErrorSink | None = None,
                 is_valid_state: 'Callable[[str], bool] | None' = None,
                 factory: 'Callable[[str], Testcase] | None' = None) -> None:
        """Initialize the parser.

        Args:
            errors: Error sink. A fresh `ErrorHandler` is used if omitted.
            is_valid_state: Execution state predicate.
                Defaults to `Testcase.is_valid_state`.
            factory: Test case constructor. Defaults to `Testcase.from_name`.
        """
        self.errors = errors if errors is not None else ErrorHandler()
        self.is_valid_state = is_valid_state or Testcase.is_valid_state
        self.factory = factory or Testcase.from_name

    def parse(self, token: SectionToken | Any) -> Testcase:  # noqa: ANN401
        """Build a test case from a section token.

        Args:
            token: Section token, or its raw mapping from the tokenizer.

        Returns:
            The test case identified by the section name and filled by
            all supported child tokens.

        Raises:
            TokenSchemaError: If a raw mapping is not a valid section token.
        """
        section = load_section(token)
        testcase = self.factory(section.name)

        for position, child in enumerate(section.children_tokens):
            if isinstance(child, ParagraphToken):
                self._handle_paragraph(testcase, child)
            elif isinstance(child, TableToken):
                self._handle_table(testcase, child)
            else:
                self.errors.add(UnsupportedTokenError.from_token_type(
                    child.type,
                    context=ErrorContext(
                        section=section.name,
                        child_num=position,
                        element=child.model_dump(by_alias=True),
                    ),
                ))

        return testcase

    def parse_all(self, sections: 'Iterable[SectionToken | Any] | Any') -> tuple[Testcase, ...]:
        """Build test cases from every section of a document.

        All sections report to the same error sink.

        Args:
            sections: Section tokens or a raw token tree holding one
                section mapping or a list of them.

        Returns:
            Test cases in section order.

        Raises:
            TokenSchemaError: If the token tree is not valid.
        """
        return tuple(
            self.parse(section)
            for section in load_sections(sections)
        )

    def _handle_paragraph(self, testcase: Testcase,
                          token: ParagraphToken | Any) -> None:  # noqa: ANN401
        """Attach a paragraph to a test case.

        The token may be given as a raw mapping. A paragraph containing
        the decorator marker is split on it and every fragment, blank ones
        included, is handled as a decorator. Otherwise the whole text
        replaces the test case instructions.
        """
        token = load_token(ParagraphToken, token)

        if DECORATOR_MARKER in token.text:
            self._handle_decorators(testcase, token.text.split(DECORATOR_MARKER))
        else:
            testcase.instructions = token.text

    def _handle_decorators(self, testcase: Testcase, decorators: 'Iterable[str]') -> None:
        """Attach decorators to a test case.

        Each decorator is trimmed and handled on its own. Blank decorators
        are skipped, keyword decorators assign their value, a single word
        sets the execution state when it is a valid one. Anything else is
        reported as unsupported and leaves the test case untouched.
        """
        for decorator in decorators:
            value = decorator.strip()
            if not value:
                continue

            if matched := DECORATOR_PATTERN.match(value):
                keyword, argument = matched['keyword'], matched['value']

                if argument is not None and keyword in KEYWORDS:
                    setattr(testcase, KEYWORDS[keyword], argument)
                    continue

                if argument is None and self.is_valid_state(keyword):
                    testcase.state = keyword
                    continue

            self.errors.add(UnsupportedDecoratorError.from_decorator(
                value,
                context=ErrorContext(section=testcase.id),
            ))

    def _handle_table(self, testcase: Testcase,
                      token: TableToken | Any) -> None:  # noqa: ANN401
        """Append one variables mapping per table row.

        The token may be given as a raw mapping. Rows are never merged:
        a key repeated across rows yields as many mappings as there are rows.
        """
        token = load_token(TableToken, token)

        testcase.variables = [
            *(testcase.variables or ()),
            *(
                dict(zip(token.header, row, strict=True))
                for row in token.cells
            ),
        ]
