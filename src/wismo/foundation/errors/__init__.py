"""Unified error handling for wismo.

- ErrorCode: Standard error codes for tool failures
- ToolError: Structured dispatcher refusals
- SchemaValidationError/ValidationIssue: Domain payload validation failures
- Result/Ok/Err: Monadic error handling for backend outcomes
"""

from typing import Any, Union

from .errors import (
    ErrorCode,
    SchemaValidationError,
    ToolError,
    ValidationIssue,
    classify_exception,
    format_validation_error,
)
from .result import Err, Ok, Result

# JSON type aliases - Any in the recursive slots
JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Union[JsonPrimitive, list[Any], dict[str, Any]]
JsonDict = dict[str, Any]

__all__ = [
    "ErrorCode", "ToolError", "classify_exception", "format_validation_error",
    "SchemaValidationError", "ValidationIssue",
    "Result", "Ok", "Err",
    "JsonPrimitive", "JsonValue", "JsonDict",
]
