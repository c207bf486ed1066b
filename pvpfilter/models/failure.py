"""
Failure classification for catalog operations.

Every failure a user can see is one of these kinds. Handlers raise a
KnownError subclass; the API layer turns it into a JSON body carrying the
kind, a message and an optional suggestion.

Unparsable stat values are never failures. They are treated as non-numeric
by sorting and band checks.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    MALFORMED_IMPORT = "malformed_import"

    # Resource failures
    NOT_FOUND = "not_found"

    # Service failures
    STORE_UNAVAILABLE = "store_unavailable"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    detail: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a response body."""
        return FailureDetail(kind=self.kind, detail=self.message, suggestion=self.suggestion)


class StoreUnavailableError(KnownError):
    """The card store could not be reached for a load or save."""

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        super().__init__(
            kind=FailureKind.STORE_UNAVAILABLE,
            message=f"Could not {operation} cards: {reason}",
            suggestion="Check the database connection and try again.",
            status_code=503,
        )


class MalformedImportError(KnownError):
    """An import payload was rejected before touching the catalog."""

    def __init__(self, reason: str):
        super().__init__(
            kind=FailureKind.MALFORMED_IMPORT,
            message=f"Import rejected: {reason}",
            suggestion="Import a file previously produced by export.",
        )


class CardNotFoundError(KnownError):
    """No card with the given id exists in the catalog."""

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"Card '{card_id}' not found",
            status_code=404,
        )


class UnknownPresetError(KnownError):
    """Raised for a round preset id outside the fixed preset table."""

    def __init__(self, preset_id: str, valid: list[str]):
        self.preset_id = preset_id
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=f"Unknown round preset '{preset_id}'. Valid: {', '.join(valid)}",
        )


class InvalidSortColumnError(KnownError):
    """Raised when sorting by a column the catalog does not have."""

    def __init__(self, column: str, valid: list[str]):
        self.column = column
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=f"Cannot sort by '{column}'. Valid: {', '.join(valid)}",
        )


class InvalidFilterFieldError(KnownError):
    """Raised when toggling a filter field that does not exist."""

    def __init__(self, field_name: str, valid: list[str]):
        self.field_name = field_name
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=f"Unknown filter field '{field_name}'. Valid: {', '.join(valid)}",
        )
