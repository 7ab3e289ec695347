"""Token models for tokenizer output.

The markdown tokenizer is an external collaborator. Its output is
validated into a small tagged union before parsing: paragraphs, tables,
and every other token type, which is kept only to be reported as
unsupported inside a test case section.
"""

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import ConfigDict, Discriminator, Field, Tag, TypeAdapter, ValidationError, model_validator

from casemark.errors import TokenSchemaError
from casemark.models import SchemaModel

PARAGRAPH = 'paragraph'
TABLE = 'table'
OTHER = 'other'


class ParagraphToken(SchemaModel):
    """Paragraph of inline text."""

    type: Literal['paragraph'] = PARAGRAPH

    text: str = Field(
        title='Paragraph text',
        description='Raw inline text of the paragraph, markers included.',
    )


class TableToken(SchemaModel):
    """Table with a header row and any number of body rows."""

    type: Literal['table'] = TABLE

    header: list[str] = Field(
        title='Header cells',
        description='Column names in display order.',
    )

    cells: list[list[str]] = Field(
        default_factory=list,
        title='Body rows',
        description='Rows of cells, each with exactly one cell per header column.',
    )

    @model_validator(mode='after')
    def check_row_widths(self) -> 'TableToken':
        """Ensure that every row has one cell per header column."""
        width = len(self.header)
        for position, row in enumerate(self.cells):
            if len(row) != width:
                raise ValueError(
                    f'Row {position + 1} has {len(row)} cells, expected {width}',
                )

        return self


class OtherToken(SchemaModel):
    """Any token type not handled inside a test case section.

    Extra fields are preserved so that the token can be shown
    in error reports.
    """

    model_config = ConfigDict(extra='allow')

    type: str = Field(
        title='Token type',
        description='Type declared by the tokenizer, for example `header` or `list`.',
    )


def _token_tag(value: Any) -> str:  # noqa: ANN401
    """Select the union member for raw or already validated token data."""
    if isinstance(value, Mapping):
        token_type = value.get('type')
    else:
        token_type = getattr(value, 'type', None)

    if token_type in (PARAGRAPH, TABLE):
        return token_type

    return OTHER


#: A child token of a test case section.
Token = Annotated[
    Annotated[ParagraphToken, Tag(PARAGRAPH)]
    | Annotated[TableToken, Tag(TABLE)]
    | Annotated[OtherToken, Tag(OTHER)],
    Discriminator(_token_tag),
]


class SectionToken(SchemaModel):
    """Top-level token describing one test case."""

    name: str = Field(
        default='',
        title='Section name',
        description='Heading text of the section, used as the test case identifier.',
    )

    children_tokens: list[Token] = Field(
        default_factory=list,
        alias='childrenTokens',
        title='Child tokens',
        description='Tokens following the section heading, in document order.',
    )


_SECTIONS = TypeAdapter(list[SectionToken])


def load_token[T: SchemaModel](model: type[T], data: Any) -> T:  # noqa: ANN401
    """Validate a raw token of a known type.

    Args:
        model: Token model to validate against.
        data: Token mapping, or an already validated token.

    Returns:
        A validated token.

    Raises:
        TokenSchemaError: If the data does not describe such a token.
    """
    try:
        return model.model_validate(data)

    except ValidationError as base:
        raise TokenSchemaError.from_pydantic_error(base, data=data) from base


def load_section(data: Any) -> SectionToken:  # noqa: ANN401
    """Validate a raw section mapping.

    Args:
        data: Section token as produced by the tokenizer.

    Returns:
        A validated section token.

    Raises:
        TokenSchemaError: If the data does not describe a section token.
    """
    if isinstance(data, SectionToken):
        return data

    try:
        return SectionToken.model_validate(data)

    except ValidationError as base:
        raise TokenSchemaError.from_pydantic_error(base, data=data) from base


def load_sections(data: Any) -> list[SectionToken]:  # noqa: ANN401
    """Validate a raw token tree holding one or more sections.

    Args:
        data: A single section mapping or a list of them.

    Returns:
        Validated section tokens in input order.

    Raises:
        TokenSchemaError: If the data does not describe section tokens.
    """
    items = [data] if isinstance(data, Mapping) else data

    try:
        return _SECTIONS.validate_python(items)

    except ValidationError as base:
        raise TokenSchemaError.from_pydantic_error(base, data=data) from base


def sections_json_schema() -> dict[str, Any]:
    """Build the JSON Schema of a token tree accepted by `load_sections`."""
    return _SECTIONS.json_schema(by_alias=True)
