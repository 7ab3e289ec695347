"""Core exception hierarchy and the default error sink.

This module defines the error and warning types used to report
unsupported tokens, malformed decorators, and invalid token trees,
together with `ErrorHandler`, the sink collecting non-fatal parse
errors for later display.
"""

from os import linesep
from typing import TYPE_CHECKING, Any, TypedDict
from warnings import warn

from yaml import dump

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import Self

if TYPE_CHECKING:
    from pydantic import ValidationError

if TYPE_CHECKING:
    from casemark.settings import ParserSettings

SNIPPET_ELLIPSIS = f' ...{linesep}'
SNIPPET_INDENT = 2

FORMAT_REPLACER = '<runtime object>'
FORMAT_INDENT = 4

MAPPINGS = (dict,)
SCALARS = (str, bytes, int, float, bool)
SEQUENCES = (list, tuple, set)


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Name of the section (test case) where the error occurred.
    section: str | None

    #: Zero-based position of the child token within the section.
    child_num: int | None

    #: Underlying exception that triggered formatting.
    error: Exception | None

    #: Raw token data associated with the error.
    element: Any


class ErrorFormatter:
    """Utility class for formatting parse errors.

    Produces human-readable messages with an optional location
    and a YAML snippet of the offending token.
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location and data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        location = cls.get_location_string(context, indent=FORMAT_INDENT)
        snippet = cls.get_snippet_string(context, indent=FORMAT_INDENT * 2)

        if not location and not snippet:
            return message

        return f'{message}{linesep}{location}{snippet}'

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: str | int | None = None) -> str:
        """Format the section and child position.

        Args:
            context: Error context containing location metadata.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted location string, or an empty string if
            the context carries no location.
        """
        indent = cls._ensure_indent(indent)

        message = ''
        if (section := context.get('section')) is not None:
            message += f'{indent}in section "{section}"{linesep}'

        if (child_num := context.get('child_num')) is not None:
            child_num += 1
            message += f'{indent}on child {child_num}{linesep}'

        return message

    @classmethod
    def get_snippet_string(cls, context: ErrorContext, *,
                           indent: str | int | None = None) -> str:
        """Generate a formatted snippet of the offending token.

        Args:
            context: Error context containing token data.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted multi-line snippet string, or an empty string
            if no snippet data is available.
        """
        indent = cls._ensure_indent(indent)

        if not (element := context.get('element')):
            return ''

        snippet = f'{indent}{SNIPPET_ELLIPSIS}'
        snippet += cls._make_yaml(element, indent)
        snippet += linesep

        return snippet

    @classmethod
    def _filter_unsafe(cls, value: Any) -> Any:  # noqa: ANN401
        """Recursively sanitize values for safe YAML serialization.

        Args:
            value: Arbitrary value to sanitize.

        Returns:
            A YAML-safe representation of the value.
        """
        if value is None or isinstance(value, SCALARS):
            return value

        if isinstance(value, MAPPINGS):
            return {
                key: cls._filter_unsafe(item)
                for key, item in value.items()
            }

        if isinstance(value, SEQUENCES):
            return [
                cls._filter_unsafe(item)
                for item in value
            ]

        return FORMAT_REPLACER

    @classmethod
    def _make_yaml(cls, value: Any, indent: str = '') -> str:  # noqa: ANN401
        """Serialize a value to an indented YAML string."""
        data = dump(
            cls._filter_unsafe(value),
            indent=SNIPPET_INDENT,
            sort_keys=False,
            allow_unicode=True,
        )

        return cls._make_indent(data, indent)

    @staticmethod
    def _make_indent(value: str, indent: str) -> str:
        """Apply indentation to a multi-line string.

        Empty or whitespace-only lines are omitted.
        """
        if not indent:
            return value

        return linesep.join(
            f'{indent}{line}'
            for line in value.splitlines()
            if line.strip()
        )

    @staticmethod
    def _ensure_indent(indent: str | int | None = None) -> str:
        """Normalize indentation input."""
        if isinstance(indent, int) and indent > 0:
            return ' ' * indent

        if isinstance(indent, str):
            return indent

        return ''


class ParseWarning(UserWarning):
    """Warning emitted for every non-fatal parse error when enabled."""


class CaseError(Exception, ErrorFormatter):
    """Base exception for all casemark errors.

    All custom exceptions raised or reported by the library inherit
    from this class to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Error context with location and token data.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """String represenatation."""
        return self.format(self.message, self.context)

    def __eq__(self, other: object) -> bool:
        """Compare errors by type and message."""
        if not isinstance(other, CaseError):
            return NotImplemented

        return type(self) is type(other) and self.message == other.message

    __hash__ = Exception.__hash__


class UnsupportedTokenError(CaseError):
    """Reported when a section contains a child token of unsupported type."""

    @classmethod
    def from_token_type(cls, token_type: str, *,
                        context: ErrorContext | None = None) -> 'Self':
        """Create an error for an unsupported child token type.

        Args:
            token_type: Declared type of the child token.
            context: Error context with location and token data.

        Returns:
            An initialized error instance.
        """
        return cls(f'"{token_type}" is not supported in test cases', context=context)


class UnsupportedDecoratorError(CaseError):
    """Reported when a decorator matches none of the supported shapes."""

    @classmethod
    def from_decorator(cls, decorator: str, *,
                       context: ErrorContext | None = None) -> 'Self':
        """Create an error for a trimmed decorator string."""
        return cls(f'"{decorator}" is not a supported decorator.', context=context)


class TokenSchemaError(CaseError):
    """Error raised when a token tree does not match the token schema.

    Unlike other errors, it is raised rather than reported: a malformed
    token tree is a tokenizer contract violation, not document content.
    """

    @classmethod
    def from_pydantic_error(cls, error: 'ValidationError', *,
                            data: Any = None) -> 'Self':  # noqa: ANN401
        """Create a schema error from a Pydantic validation failure.

        The message points at the first failing location.

        Args:
            error: ValidationError raised by Pydantic.
            data: Raw token tree that failed validation.

        Returns:
            TokenSchemaError representing the validation failure.
        """
        error_context = ErrorContext(error=error, element=data)

        for item in error.errors(include_url=False, include_input=False):
            location = '.'.join(str(key) for key in item['loc'])
            message = item.get('msg') or 'Validation error'
            if location:
                message = f'{location}: {message}'
            return cls(f'Invalid token tree{linesep}{' ' * FORMAT_INDENT}{message}',
                       context=error_context)

        return cls('Invalid token tree', context=error_context)


class CaseSyntaxError(CaseError):
    """Aggregate error raised on demand for all reported parse errors."""

    def __init__(self, message: str, *,
                 errors: 'tuple[CaseError, ...]' = ()) -> None:
        """Initialize an aggregate error.

        Args:
            message: Human-readable error description.
            errors: Reported errors in order of occurrence.
        """
        self.errors = errors

        super().__init__(message)

    def __str__(self) -> str:
        """String represenatation including every reported error."""
        return linesep.join((
            self.message,
            *(str(error) for error in self.errors),
        ))


class ErrorHandler:
    """Default error sink accumulating non-fatal parse errors.

    The parser never raises on malformed content. Instead, each issue
    is added here and parsing continues. Callers decide whether the
    collected errors are fatal by calling `raise_for_errors`.

    Attributes:
        emit_warnings: If True, every added error is also emitted as
            a `ParseWarning`.
    """

    def __init__(self, *, emit_warnings: bool = False) -> None:
        """Initialize an empty error sink."""
        self.emit_warnings = emit_warnings
        self.errors: list[CaseError] = []

    @classmethod
    def from_settings(cls, settings: 'ParserSettings') -> 'Self':
        """Create an error sink configured by runtime settings."""
        return cls(emit_warnings=settings.emit_warnings)

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> 'Iterator[CaseError]':
        return iter(self.errors)

    def add(self, error: CaseError) -> None:
        """Record an error.

        Args:
            error: Error to record.
        """
        self.errors.append(error)

        if self.emit_warnings:
            warn(str(error), category=ParseWarning, stacklevel=2)

    def clear(self) -> None:
        """Forget all recorded errors."""
        self.errors = []

    def raise_for_errors(self) -> None:
        """Raise an aggregate error if anything was recorded.

        Raises:
            CaseSyntaxError: If at least one error was recorded.
        """
        if not self.errors:
            return

        count = len(self.errors)
        raise CaseSyntaxError(
            f'{count} parse error{'s' if count > 1 else ''} reported',
            errors=tuple(self.errors),
        )
