"""Test case record built from a document section.

A `Testcase` is created per section with the section name as its
identifier and is then filled in place by the parser handlers.
Every field besides the identifier is optional.
"""

from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from typing import Self


class State(StrEnum):
    """Execution states recognized as decorators."""

    #: The test case is expected to fail.
    XFAIL = 'xfail'
    #: The test case must not be executed.
    SKIP = 'skip'


class Testcase(BaseModel):
    """Mutable record describing a single test case.

    Unlike token models, a test case is built incrementally: each
    handler assigns the fields it recognizes, and a later assignment
    overwrites an earlier one.
    """

    __test__ = False

    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid',
    )

    id: str = Field(
        title='Identifier',
        description='Name of the section the test case was built from.',
    )

    instructions: str | None = Field(
        default=None,
        title='Instructions',
        description='Text of the last paragraph without decorators.',
    )

    bug: str | None = Field(
        default=None,
        title='Bug reference',
        description='Identifier following a `bug` decorator.',
    )

    user_story: str | None = Field(
        default=None,
        serialization_alias='userStory',
        title='User story reference',
        description='Identifier following a `story` decorator.',
    )

    state: str | None = Field(
        default=None,
        title='Execution state',
        description='Execution state label, for example `xfail`.',
    )

    variables: list[dict[str, str]] | None = Field(
        default=None,
        title='Variables',
        description='One mapping per table row, keyed by the table header.',
    )

    @classmethod
    def from_name(cls, name: str) -> 'Self':
        """Create an empty test case identified by a section name."""
        return cls(id=name)

    @staticmethod
    def is_valid_state(name: str) -> bool:
        """Check whether a label is a recognized execution state."""
        return name in {state.value for state in State}
