"""Base Pydantic models for token and test case structures.

This module defines the foundational model classes used across the
package. Token models are immutable and strictly validated, while
settings models tolerate unrelated environment variables.
"""

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for tokenizer output.

    Design principles enforced by this model:
        - Immutability: tokens cannot be modified after creation, so one
          token tree may be parsed any number of times with the same result.
        - Name population: fields may be populated either by their Python
          name or by the camel-case alias emitted by the tokenizer.

    Unknown fields produced by the tokenizer (raw source, alignment and
    so on) are ignored. Numbers written unquoted in a hand-made YAML
    tree are kept as text, while booleans (`yes`, `no`) must be quoted.
    """

    model_config = ConfigDict(
        frozen=True,
        extra='ignore',
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    Design principles enforced by this model:
        - Immutability: resolved settings cannot be modified after creation.
        - Tolerant schema handling: unknown or extra fields are ignored.
          This allows the surrounding environment to contain unrelated
          variables without breaking configuration resolution.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )
