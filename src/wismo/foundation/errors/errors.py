"""Standardized error handling for tools.

Provides error codes and structured error responses for caller feedback.
Uses Pydantic for validation and serialization.
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING, Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field

if TYPE_CHECKING:
    from pydantic import ValidationError


class ErrorCode(StrEnum):
    """Standard error codes for tool failures.

    Used for programmatic error handling and to tell dispatcher rejections
    apart from backend failures.
    """
    INVALID_PARAMS = "INVALID_PARAMS"
    UNKNOWN_TOOL = "UNKNOWN_TOOL"
    NOT_FOUND = "NOT_FOUND"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    PARSE_ERROR = "PARSE_ERROR"
    UNKNOWN = "UNKNOWN"


# Flattened pattern -> code mapping, checked in insertion order
_PATTERN_CODES: dict[str, ErrorCode] = {
    "timeout": ErrorCode.TIMEOUT,
    "connect": ErrorCode.NETWORK_ERROR,
    "network": ErrorCode.NETWORK_ERROR,
    "protocol": ErrorCode.NETWORK_ERROR,
    "json": ErrorCode.PARSE_ERROR,
    "decode": ErrorCode.PARSE_ERROR,
    "parse": ErrorCode.PARSE_ERROR,
    "validation": ErrorCode.PARSE_ERROR,
}
_PATTERN_KEYS = tuple(_PATTERN_CODES.keys())


@lru_cache(maxsize=256)
def _classify_cached(exc_key: str) -> ErrorCode:
    """Cached classification by exception signature."""
    haystack = exc_key.lower()
    for pattern in _PATTERN_KEYS:
        if pattern in haystack:
            return _PATTERN_CODES[pattern]
    return ErrorCode.EXTERNAL_SERVICE_ERROR


def classify_exception(exc: BaseException) -> ErrorCode:
    """Map exception to error code via pattern matching on name/message."""
    return _classify_cached(f"{type(exc).__name__} {exc}")


def format_validation_error(exc: ValidationError, *, tool_name: str | None = None) -> str:
    """Render a pydantic ValidationError as one line per offending field."""
    issues = "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in exc.errors()
    )
    prefix = f"Invalid parameters for '{tool_name}'" if tool_name else "Invalid parameters"
    return f"{prefix}: {issues}"


class ToolError(BaseModel):
    """Structured refusal produced by the dispatcher.

    Attributes:
        tool_name: Name of the tool that was asked for
        message: Human-readable error message
        code: Machine-readable error code for programmatic handling
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, validate_default=True)

    tool_name: Annotated[str, Field(min_length=1, description="Name of the tool that produced the error")]
    message: Annotated[str, Field(min_length=1, description="Human-readable error message")]
    code: ErrorCode = Field(default=ErrorCode.UNKNOWN, description="Machine-readable error classification")

    @computed_field
    @property
    def is_rejection(self) -> bool:
        """Whether the dispatcher refused the call before any backend traffic."""
        return self.code in (ErrorCode.INVALID_PARAMS, ErrorCode.UNKNOWN_TOOL)

    @classmethod
    def create(cls, tool_name: str, message: str, code: ErrorCode = ErrorCode.UNKNOWN) -> Self:
        """Factory method for construction."""
        return cls(tool_name=tool_name, message=message, code=code)


class ValidationIssue(BaseModel):
    """One offending location in a validated payload."""

    model_config = ConfigDict(frozen=True)

    path: str
    expected: str
    actual: str

    def __str__(self) -> str:
        return f"{self.path or '<root>'}: expected {self.expected}, got {self.actual}"


class SchemaValidationError(ValueError):
    """Raised when a payload does not match the declared domain shape.

    Never a silent coercion: every issue names the field path and the
    expected versus actual shape.
    """

    def __init__(self, schema: str, issues: list[ValidationIssue]) -> None:
        self.schema = schema
        self.issues = issues
        super().__init__(f"{schema} failed validation: " + "; ".join(map(str, issues)))

    @property
    def paths(self) -> list[str]:
        return [issue.path for issue in self.issues]
