# lexi/exceptions.py
# Error taxonomy: InputValidationError (bad input, caught before any AI call),
# ServiceError (Gemini unreachable or refused) and ResponseShapeError (answered,
# but unusable). Each message is safe to show the user; status_code is the HTTP reply.

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class LexiError(Exception):
    """Base exception for all Lexi failures."""

    message: str
    details: Optional[dict] = field(default_factory=dict)

    status_code = 500

    def __post_init__(self):
        if self.details is None:
            self.details = {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "detail": self.message,
            "details": self.details,
        }


# --- INPUT VALIDATION ---
@dataclass
class InputValidationError(LexiError):
    status_code = 400


@dataclass
class MissingFieldsError(InputValidationError):
    """Raised when a generation form is submitted before it is complete."""

    status_code = 422

    @property
    def missing(self) -> list[str]:
        return list(self.details.get("missing", []))


@dataclass
class FileTooLargeError(InputValidationError):
    status_code = 413


@dataclass
class UnsupportedFileTypeError(InputValidationError):
    status_code = 415


@dataclass
class UnknownTemplateError(InputValidationError):
    status_code = 404


# --- TRANSPORT ---
@dataclass
class ServiceError(LexiError):
    """The AI service failed (network error, non-2xx response)."""

    status_code = 502


@dataclass
class ServiceNotConfiguredError(ServiceError):
    status_code = 503


# --- RESPONSE SHAPE ---
@dataclass
class ResponseShapeError(LexiError):
    status_code = 502


@dataclass
class AnalysisParseError(ResponseShapeError):
    """The analysis response could not be turned into an AnalysisResult."""

    raw_text: str = ""


@dataclass
class EmptyResponseError(ResponseShapeError):
    pass


# --- FLOW STATE ---
@dataclass
class FlowStateError(LexiError):
    """An operation was attempted in a state that does not allow it."""

    status_code = 409
