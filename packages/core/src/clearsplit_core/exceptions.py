"""Custom exceptions for the Clearsplit engine.

This module provides a small hierarchy of exception classes for consistent
error handling across the engine and its collaborators. All exceptions
inherit from ClearsplitError, making it easy to catch all application
errors in one place.

Core computations never raise for input-shape problems: non-numeric
values are coerced to zero and unknown frequencies fall back to monthly.
Only the collaborator paths (import, persistence, configuration) raise.

Example:
    try:
        document = import_document(payload, passphrase="secret")
    except MalformedImportError as e:
        # Document unchanged, surface the failure to the user
        logger.warning("import_rejected", reason=e.message)
"""

from typing import Any, Optional


class ClearsplitError(Exception):
    """Base exception for all Clearsplit errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        recoverable: Whether the error is potentially recoverable.

    Example:
        >>> raise ClearsplitError("Something went wrong", details={"code": 500})
        ClearsplitError: Something went wrong
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize ClearsplitError.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context about the error.
            recoverable: Whether the error is potentially recoverable through
                retry or user correction. Defaults to False.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation of the error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable!r})"
        )


class MalformedImportError(ClearsplitError):
    """Error raised when an imported document cannot be accepted.

    Covers JSON parse failures, de-obfuscation failures (wrong passphrase
    or corrupt payload) and payloads that are not a document object. The
    import path fails closed: the caller must leave the current document
    untouched when this is raised.

    Attributes:
        stage: The import stage that failed ("decode", "parse", "validate").
        source: Optional file name or identifier of the payload.

    Example:
        >>> raise MalformedImportError(
        ...     "Import failed. Check password and file.",
        ...     stage="parse",
        ...     source="financial-organizer-2025-01-01.json",
        ... )
        MalformedImportError: Import failed. Check password and file.
    """

    def __init__(
        self,
        message: str,
        *,
        stage: Optional[str] = None,
        source: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize MalformedImportError.

        Args:
            message: Human-readable error description.
            stage: Which step of the import failed.
            source: The file name or identifier being imported.
            details: Optional dictionary with additional context.
            recoverable: Whether the user can retry (e.g. with the right
                passphrase). Defaults to True.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.stage = stage
        self.source = source

        if stage:
            self.details["stage"] = stage
        if source:
            self.details["source"] = source


class StorageError(ClearsplitError):
    """Error raised when a persistence backend cannot read or write.

    Attributes:
        operation: The storage operation that failed ("load" or "save").
        location: Path or key of the storage location.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: Optional[str] = None,
        location: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize StorageError.

        Args:
            message: Human-readable error description.
            operation: The storage operation being attempted.
            location: The file path or key involved.
            details: Optional dictionary with additional context.
            recoverable: Whether the operation can be retried. Defaults to
                True since most storage failures are transient.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.operation = operation
        self.location = location

        if operation:
            self.details["operation"] = operation
        if location:
            self.details["location"] = location


class ConfigurationError(ClearsplitError):
    """Error raised when configuration is invalid or missing.

    Configuration errors are typically fatal and require the user to fix
    their environment or .env file.

    Attributes:
        config_key: The configuration key that is problematic.
        expected: Description of the expected value or format.
        actual: The actual value found (if any).

    Example:
        >>> raise ConfigurationError(
        ...     "File storage requires a path",
        ...     config_key="CLEARSPLIT_STORAGE_PATH",
        ...     expected="Path to a writable JSON file",
        ... )
        ConfigurationError: File storage requires a path
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize ConfigurationError.

        Args:
            message: Human-readable error description.
            config_key: The name of the configuration key that is problematic.
            expected: Description of what value was expected.
            actual: The actual value found (avoid including secrets).
            details: Optional dictionary with additional context.
            recoverable: Whether the error can be fixed at runtime.
                Defaults to False.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.config_key = config_key
        self.expected = expected
        self.actual = actual

        if config_key:
            self.details["config_key"] = config_key
        if expected:
            self.details["expected"] = expected
        if actual is not None:
            self.details["actual"] = actual


__all__ = [
    "ClearsplitError",
    "MalformedImportError",
    "StorageError",
    "ConfigurationError",
]
