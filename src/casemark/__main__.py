"""CLI utilities for casemark.

Token trees are read from YAML or JSON files, as dumped by the
markdown tokenizer, and parsed into test cases printed as JSON.
"""

from json import dumps
from pathlib import Path
from typing import TYPE_CHECKING

from click import BadParameter, File, argument, echo, get_current_context, group, option
from yaml import YAMLError, safe_load

from casemark.core import TestcaseParser
from casemark.errors import ErrorHandler, TokenSchemaError
from casemark.settings import ParserSettings
from casemark.tokens import load_sections, sections_json_schema

if TYPE_CHECKING:
    from typing import TextIO


@group(help='Command-line utilities for casemark test cases.')
def cli() -> None:
    """Root CLI group for casemark tools."""
    return None


@cli.command(
    name='schema',
    help='Print the JSON Schema of accepted token trees to standard output.',
)
def print_schema() -> None:
    """Generate and print the token tree JSON Schema."""
    schema = {
        **sections_json_schema(),
        'title': 'casemark',
        'description': 'JSON Schema for casemark token trees',
    }

    echo(dumps(schema, ensure_ascii=False, sort_keys=True, indent=4))


@cli.command(
    name='parse',
    help=(
        'Parse a YAML or JSON token tree into test cases. '
        'Test cases are printed as JSON, parse errors go to standard error.'
    ),
)
@option(
    '--strict/--relaxed',
    default=lambda: ParserSettings().strict,
    help='Exit with a non-zero status if any parse error was reported.',
)
@option(
    '--warnings/--no-warnings',
    'emit_warnings',
    default=lambda: ParserSettings().emit_warnings,
    help=(
        'Emit a Python warning for every parse error '
        'instead of listing errors on standard error.'
    ),
)
@argument(
    'source',
    type=File('rt', encoding='utf-8'),
)
def parse_file(source: 'TextIO', strict: bool, emit_warnings: bool) -> None:
    """Parse a token tree file.

    Args:
        source: Opened token tree file.
        strict: Whether reported errors fail the run.
        emit_warnings: Whether reported errors are emitted as warnings.
    """
    settings = ParserSettings(strict=strict, emit_warnings=emit_warnings)

    try:
        sections = load_sections(safe_load(source))

    except UnicodeDecodeError as base:
        raise BadParameter(f'Invalid encoding: {base}', param_hint='SOURCE') from base

    except YAMLError as base:
        raise BadParameter(f'Invalid YAML: {base}', param_hint='SOURCE') from base

    except TokenSchemaError as base:
        raise BadParameter(base.message, param_hint='SOURCE') from base

    errors = ErrorHandler.from_settings(settings)
    testcases = TestcaseParser(errors).parse_all(sections)

    echo(dumps(
        [
            testcase.model_dump(by_alias=True, exclude_none=True)
            for testcase in testcases
        ],
        ensure_ascii=False,
        indent=4,
    ))

    if not settings.emit_warnings:
        for error in errors:
            echo(f'{Path(source.name).name}: {error}', err=True)

    if settings.strict and len(errors):
        get_current_context().exit(1)


if __name__ == '__main__':
    cli()
