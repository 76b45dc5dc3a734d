"""
Custom exception classes for the notedex CLI tool.

This module defines custom exception classes for different types of errors.
None of them may subclass ValueError: pydantic validators must re-raise them as-is.
"""

from typing import Any, Optional


class NotedexError(Exception):
    """
    Base exception class for all notedex-specific errors.
    """

    def __init__(self, message: str, exit_code: int = 1):
        """
        Initialize the exception.

        Args:
            message: Error message.
            exit_code: Exit code to use when this exception causes program termination.
        """
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)


class ConfigurationError(NotedexError):
    """
    Exception raised for configuration-related errors.
    """

    def __init__(
        self, message: str, config_file: Optional[str] = None, exit_code: int = 2
    ):
        """
        Initialize the exception.

        Args:
            message: Error message.
            config_file: Path to the configuration file that caused the error.
            exit_code: Exit code to use when this exception causes program termination.
        """
        self.config_file = config_file
        if config_file:
            message = f"{message} (config file: {config_file})"
        super().__init__(message, exit_code)


class ParseError(NotedexError):
    """
    Exception raised when a note has no usable metadata block.
    """

    def __init__(
        self, message: str, file_path: Optional[str] = None, exit_code: int = 3
    ):
        """
        Initialize the exception.

        Args:
            message: Error message.
            file_path: Path to the file that caused the error.
            exit_code: Exit code to use when this exception causes program termination.
        """
        self.file_path = file_path
        if file_path:
            message = f"{message} (file: {file_path})"
        super().__init__(message, exit_code)


class DateParseError(NotedexError):
    """
    Exception raised when a date value matches none of the accepted encodings.
    """

    def __init__(self, message: str, value: Any = None, exit_code: int = 4):
        self.value = value
        if value is not None:
            message = f"{message} (value: {value!r})"
        super().__init__(message, exit_code)


class TagFormatError(NotedexError):
    """
    Exception raised when a tag field is neither a string nor a list of strings.
    """

    def __init__(self, message: str, value: Any = None, exit_code: int = 5):
        self.value = value
        if value is not None:
            message = f"{message} (value: {value!r})"
        super().__init__(message, exit_code)


class SerializationError(NotedexError):
    """
    Exception raised when a document cannot be encoded.

    This indicates a programming error: a validly constructed document always
    serializes.
    """

    def __init__(self, message: str, exit_code: int = 6):
        super().__init__(message, exit_code)


class IngestError(NotedexError):
    """
    Exception raised for errors during note ingestion.
    """

    def __init__(
        self, message: str, file_path: Optional[str] = None, exit_code: int = 7
    ):
        """
        Initialize the exception.

        Args:
            message: Error message.
            file_path: Path to the file that caused the error.
            exit_code: Exit code to use when this exception causes program termination.
        """
        self.file_path = file_path
        if file_path:
            message = f"{message} (file: {file_path})"
        super().__init__(message, exit_code)


class SearchClientError(NotedexError):
    """
    Exception raised for errors talking to the search service.
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        response: Optional[Any] = None,
        exit_code: int = 8,
    ):
        """
        Initialize the exception.

        Args:
            message: Error message.
            status: HTTP status code returned by the search service, if any.
            response: Response body returned by the search service, if any.
            exit_code: Exit code to use when this exception causes program termination.
        """
        self.status = status
        self.response = response
        if status is not None:
            message = f"{message} (status: {status})"
        if response:
            message = f"{message} (response: {response})"
        super().__init__(message, exit_code)
