"""Structured errors for library panel operations."""

from enum import Enum


class ErrorCode(str, Enum):
    MALFORMED_REFERENCE = "malformed_reference"
    DANGLING_REFERENCE = "dangling_reference"
    STORE_FAILURE = "store_failure"
    VALIDATION_FAILURE = "validation_failure"


class LibraryPanelError(Exception):
    """Base class for all library panel errors."""

    code: ErrorCode = ErrorCode.VALIDATION_FAILURE

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class MalformedReferenceError(LibraryPanelError):
    """A library panel reference is missing its uid or name."""

    code = ErrorCode.MALFORMED_REFERENCE


class DanglingReferenceError(LibraryPanelError):
    """A dashboard references a library panel that is not connected to it."""

    code = ErrorCode.DANGLING_REFERENCE


class StoreFailureError(LibraryPanelError):
    """The reference store could not be read or written."""

    code = ErrorCode.STORE_FAILURE


class ValidationFailureError(LibraryPanelError):
    """An operation was invoked on a dashboard missing required identifiers."""

    code = ErrorCode.VALIDATION_FAILURE
