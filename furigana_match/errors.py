"""
Error handling system for Furigana Match.

This module provides centralized error definitions and actionable error
messages for content loading, persistence and export. None of these
errors is fatal: the game degrades and keeps running.
"""

import logging
from enum import Enum
from typing import List, Optional, Dict, Any
from dataclasses import dataclass


class ErrorSeverity(Enum):
    """Error severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors that can occur while playing."""
    INPUT_VALIDATION = "input_validation"
    CONTENT_LOAD = "content_load"
    STORAGE = "storage"
    ENGINE = "engine"
    EXPORT = "export"


@dataclass
class ProcessingError:
    """Represents an error with context and guidance."""
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    details: str
    suggested_actions: List[str]
    error_code: str
    context: Dict[str, Any] = None

    def __post_init__(self):
        if self.context is None:
            self.context = {}


class FuriganaMatchError(Exception):
    """Base exception for Furigana Match errors."""

    def __init__(self, processing_error: ProcessingError):
        self.processing_error = processing_error
        super().__init__(processing_error.message)


class WordSourceError(FuriganaMatchError):
    """Raised when a word source cannot produce word pairs."""
    pass


class StorageError(FuriganaMatchError):
    """Raised when the key-value store cannot be read or written."""
    pass


class EmptyWordListError(FuriganaMatchError):
    """Raised when a game is started without any word pairs."""

    def __init__(self, details: str = "A match game needs at least one word pair"):
        super().__init__(ProcessingError(
            category=ErrorCategory.ENGINE,
            severity=ErrorSeverity.ERROR,
            message="Cannot start a game with an empty word list",
            details=details,
            suggested_actions=["Load a word list before starting the game"],
            error_code="ENGINE_001"
        ))


class ExportError(FuriganaMatchError):
    """Raised when Anki export fails."""
    pass


class ErrorHandler:
    """
    Centralized error handling and reporting system.

    Collects errors and warnings, logs them with their codes, and builds
    ProcessingError records with user guidance for each failure path.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.errors: List[ProcessingError] = []
        self.warnings: List[ProcessingError] = []

    def add_error(self, error: ProcessingError) -> None:
        """Add an error to the collection."""
        if error.severity in [ErrorSeverity.ERROR, ErrorSeverity.CRITICAL]:
            self.errors.append(error)
        elif error.severity == ErrorSeverity.WARNING:
            self.warnings.append(error)

        log_level = {
            ErrorSeverity.INFO: logging.INFO,
            ErrorSeverity.WARNING: logging.WARNING,
            ErrorSeverity.ERROR: logging.ERROR,
            ErrorSeverity.CRITICAL: logging.CRITICAL
        }[error.severity]

        self.logger.log(log_level, f"[{error.error_code}] {error.message}")
        if error.details:
            self.logger.log(log_level, f"Details: {error.details}")

    def has_errors(self) -> bool:
        """Check if any errors have been recorded."""
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        """Check if any warnings have been recorded."""
        return len(self.warnings) > 0

    def get_error_summary(self) -> Dict[str, Any]:
        """Get a summary of all errors and warnings."""
        return {
            'error_count': len(self.errors),
            'warning_count': len(self.warnings),
            'errors': [self._format_error_for_summary(e) for e in self.errors],
            'warnings': [self._format_error_for_summary(e) for e in self.warnings]
        }

    def _format_error_for_summary(self, error: ProcessingError) -> Dict[str, Any]:
        """Format error for summary display."""
        return {
            'code': error.error_code,
            'category': error.category.value,
            'severity': error.severity.value,
            'message': error.message,
            'suggested_actions': error.suggested_actions
        }

    def clear_errors(self) -> None:
        """Clear all recorded errors and warnings."""
        self.errors.clear()
        self.warnings.clear()

    def handle_content_load_error(self, error: Optional[Exception] = None,
                                  context: Dict[str, Any] = None) -> ProcessingError:
        """Handle a failed or empty word list load."""
        if error is None:
            return ProcessingError(
                category=ErrorCategory.CONTENT_LOAD,
                severity=ErrorSeverity.ERROR,
                message="No words were loaded",
                details="The word source returned an empty list",
                suggested_actions=[
                    "Go back to the menu and try again",
                    "Pick a different level or conjugation form"
                ],
                error_code="LOAD_001",
                context=context
            )

        error_str = str(error).lower()

        if 'quota' in error_str or 'rate' in error_str or '429' in error_str:
            return ProcessingError(
                category=ErrorCategory.CONTENT_LOAD,
                severity=ErrorSeverity.ERROR,
                message="Word generation quota exceeded",
                details=f"API quota or rate limit exceeded: {error}",
                suggested_actions=[
                    "Wait a few minutes before trying again",
                    "Play a review round in the meantime"
                ],
                error_code="LOAD_002",
                context=context
            )

        return ProcessingError(
            category=ErrorCategory.CONTENT_LOAD,
            severity=ErrorSeverity.ERROR,
            message="Could not load words",
            details=f"Word source failed: {error}",
            suggested_actions=[
                "Check your internet connection",
                "Verify the GEMINI_API_KEY environment variable",
                "Go back to the menu and try again"
            ],
            error_code="LOAD_003",
            context=context
        )

    def handle_storage_error(self, error: Exception, operation: str,
                             context: Dict[str, Any] = None) -> ProcessingError:
        """Handle a key-value store failure. Storage is best-effort, so this is a warning."""
        if isinstance(error, StorageError):
            error.processing_error.context.update({'operation': operation, **(context or {})})
            return error.processing_error

        error_str = str(error).lower()

        if 'permission' in error_str or 'denied' in error_str:
            return ProcessingError(
                category=ErrorCategory.STORAGE,
                severity=ErrorSeverity.WARNING,
                message=f"Storage not writable during {operation}",
                details=f"Permission problem: {error}",
                suggested_actions=[
                    "Check permissions on the data directory",
                    "Use --store to point at a writable file"
                ],
                error_code="STORE_001",
                context=context
            )

        if isinstance(error, ValueError):
            return ProcessingError(
                category=ErrorCategory.STORAGE,
                severity=ErrorSeverity.WARNING,
                message=f"Stored data is corrupted ({operation})",
                details=f"Could not decode stored data: {error}",
                suggested_actions=[
                    "Delete the store file to start fresh"
                ],
                error_code="STORE_002",
                context=context
            )

        return ProcessingError(
            category=ErrorCategory.STORAGE,
            severity=ErrorSeverity.WARNING,
            message=f"Failed to {operation}",
            details=f"Storage error: {error}",
            suggested_actions=[
                "Progress tracking continues in memory only"
            ],
            error_code="STORE_003",
            context=context
        )

    def handle_export_error(self, error: Exception, context: Dict[str, Any] = None) -> ProcessingError:
        """Handle Anki review deck export errors."""
        if isinstance(error, ExportError):
            error.processing_error.context.update(context or {})
            return error.processing_error

        error_str = str(error).lower()

        if 'permission' in error_str or 'access' in error_str:
            return ProcessingError(
                category=ErrorCategory.EXPORT,
                severity=ErrorSeverity.ERROR,
                message="Output location not writable",
                details=f"Cannot write Anki package: {error}",
                suggested_actions=[
                    "Choose a different output path",
                    "Check directory permissions"
                ],
                error_code="EXPORT_001",
                context=context
            )

        return ProcessingError(
            category=ErrorCategory.EXPORT,
            severity=ErrorSeverity.ERROR,
            message="Anki export failed",
            details=f"Failed to write review deck: {error}",
            suggested_actions=[
                "Try exporting again",
                "Run with --verbose for details"
            ],
            error_code="EXPORT_002",
            context=context
        )


# Global error handler instance
error_handler = ErrorHandler()
