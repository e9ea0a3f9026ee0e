"""
Exception hierarchy for Scripture Search.

All search-specific exceptions inherit from ScriptureSearchException.
Each component has its own exception class for targeted error handling.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ErrorSeverity(Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ProcessingError:
    """Structured error record for per-document search diagnostics."""

    source: str
    error_type: str
    message: str
    severity: ErrorSeverity
    traceback_str: Optional[str] = None
    context: dict = field(default_factory=dict)

    @classmethod
    def from_exception(
        cls,
        source: str,
        error_type: str,
        exception: Exception,
        severity: ErrorSeverity,
        context: Optional[dict] = None,
    ) -> ProcessingError:
        tb = (
            traceback.format_exc()
            if severity == ErrorSeverity.CRITICAL
            else None
        )
        return cls(
            source=source,
            error_type=error_type,
            message=str(exception),
            severity=severity,
            traceback_str=tb,
            context=context or {},
        )


class ScriptureSearchException(Exception):
    """Base exception for Scripture Search."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__


class InvalidQueryError(ScriptureSearchException):
    """Raised when a query is empty or blank."""


class DocumentNotFoundError(ScriptureSearchException):
    """Raised when a document cannot be loaded for a citation lookup."""

    def __init__(self, document_id: str, message: Optional[str] = None):
        super().__init__(message or f"Document not found: {document_id}")
        self.document_id = document_id


class DocumentLoadError(ScriptureSearchException):
    """Raised when a document source fails for a reason other than not-found."""


class ExtractionError(ScriptureSearchException):
    """Raised when document markup cannot be walked."""


class ConfigurationError(ScriptureSearchException):
    """Raised for missing or invalid configuration."""
