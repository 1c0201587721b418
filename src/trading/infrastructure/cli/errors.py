"""Maps domain error kinds to CLI exit codes (the HTTP-status equivalents)."""

from __future__ import annotations

import click

from trading.domain.exceptions import (
    BUSINESS_RULE,
    CONCURRENCY,
    INTEGRITY,
    NOT_FOUND,
    DomainException,
    error_kind,
)

EXIT_CODES = {
    BUSINESS_RULE: 1,  # 400
    NOT_FOUND: 4,  # 404
    INTEGRITY: 5,  # 500
    CONCURRENCY: 9,  # 409, retryable
}


def cli_error(exc: DomainException) -> click.ClickException:
    error = click.ClickException(str(exc))
    error.exit_code = EXIT_CODES[error_kind(exc)]
    return error
