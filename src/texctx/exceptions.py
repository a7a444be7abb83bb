#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the texctx library.

This module defines specialized exception classes for the error conditions
that can occur while parsing LaTeX into a syntax tree and while rewriting math
environments. Structural absence (no enclosing environment, no sibling, no
ancestor of a requested kind) is never an exception: lookups return ``None``
or an empty sequence instead.

Exception Hierarchy
-------------------
- TexCtxError (base exception)

  - ValidationError (parameter/option validation)
    - UnknownStyleError (math style name not in the style registry)

  - ParsingError (LaTeX source could not be turned into a syntax tree)

  - TransformError (math environment conversion failures)
    - StaleEditError (document changed since the edit was computed)

"""

from typing import Any, Iterable


class TexCtxError(Exception):
    """Base exception class for all texctx-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(TexCtxError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class UnknownStyleError(ValidationError):
    """Exception raised when a math style name is not registered.

    Raised before any text is computed, so a rejected conversion never
    touches the document.

    Parameters
    ----------
    style_name : str
        The requested style name
    available : iterable of str, optional
        Names of the registered styles, used in the generated message

    """

    def __init__(self, style_name: str, available: Iterable[str] | None = None):
        """Initialize the unknown style error."""
        available_names = sorted(available or [])
        message = f"Unknown math style: '{style_name}'"
        if available_names:
            message += f". Available styles: {', '.join(available_names)}"
        super().__init__(message, parameter_name="style", parameter_value=style_name)
        self.style_name = style_name
        self.available = available_names


class ParsingError(TexCtxError):
    """Exception raised when LaTeX source cannot be parsed into a syntax tree.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        Stage of parsing where the failure occurred
    original_error : Exception, optional
        The underlying parser exception

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class TransformError(TexCtxError):
    """Exception raised when a math environment conversion fails.

    Parameters
    ----------
    message : str
        Description of the transform failure
    transform_name : str, optional
        Name of the transform that failed
    original_error : Exception, optional
        The underlying exception that caused the transform failure

    """

    retryable: bool = False

    def __init__(self, message: str, transform_name: str | None = None, original_error: Exception | None = None):
        """Initialize the transform error."""
        super().__init__(message, original_error)
        self.transform_name = transform_name


class StaleEditError(TransformError):
    """Exception raised when an edit no longer matches the live document.

    The document was modified after the edit offsets were computed. Nothing
    has been written; the caller should reparse the current text and compute
    the edit again.

    Parameters
    ----------
    message : str
        Description of the mismatch
    expected_text : str, optional
        Text the edit expected to replace
    actual_text : str, optional
        Text currently found in the document at the edit range

    """

    retryable = True

    def __init__(self, message: str, expected_text: str | None = None, actual_text: str | None = None):
        """Initialize the stale edit error."""
        super().__init__(message, transform_name="math-toggle")
        self.expected_text = expected_text
        self.actual_text = actual_text


__all__ = [
    "TexCtxError",
    "ValidationError",
    "UnknownStyleError",
    "ParsingError",
    "TransformError",
    "StaleEditError",
]
