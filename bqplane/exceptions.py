"""
Custom exceptions for BigQuery transfers.
"""


class TransferError(Exception):
    """Base exception for all transfer-related errors."""

    pass


class ConfigurationError(TransferError, ValueError):
    """Raised when transfer settings are invalid."""

    pass


class ValidationError(TransferError, ValueError):
    """Raised when a data address is missing a required property."""

    pass


class AuthenticationFailure(TransferError):
    """Raised when credentials cannot be loaded or derived."""

    pass


class QueryExecutionFailure(TransferError):
    """Raised when a source query job terminates with an error."""

    pass


class WriteExecutionFailure(TransferError):
    """Raised when a DML insert job terminates with an error."""

    pass


class SchemaDecodeError(TransferError):
    """Raised when a schema payload is malformed or uses an unknown type tag."""

    pass


class DuplicateSchemaError(TransferError):
    """Raised when a second schema part arrives for the same transfer."""

    pass


class RowIntegrityError(TransferError):
    """Raised when a row carries a column that is not part of the schema."""

    pass


class RowInsertWarning(UserWarning):
    """
    Per-row streaming insert failure.

    Never raised by the sink; instances are logged and collected so the
    transfer can still succeed.
    """

    def __init__(self, row_name: str, errors: list) -> None:
        self.row_name = row_name
        self.errors = errors
        super().__init__(f"Streaming insert of {row_name} reported errors: {errors}")
