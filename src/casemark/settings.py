"""Runtime settings resolved from the environment."""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from casemark.models import SettingsModel


class ParserSettings(SettingsModel):
    """Settings controlling how parse errors are surfaced.

    Values are read from `CASEMARK_*` environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix='CASEMARK_',
    )

    strict: bool = Field(
        default=False,
        title='Strict mode',
        description=(
            'Treat any reported parse error as a failure of the whole run.'
        ),
    )

    emit_warnings: bool = Field(
        default=False,
        title='Emit warnings',
        description=(
            'Emit a `ParseWarning` for every error added to the error handler.'
        ),
    )
