class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class DataAccessError(DomainError):
    """Raised when the database rejects or fails an operation."""


class FileOperationError(DomainError):
    """Raised for file-level import/export failures."""


class ImportFileNotFoundError(FileOperationError):
    """The import path does not exist."""


class NotARegularFileError(FileOperationError):
    """The import path exists but is a directory or special file."""


class WrongExtensionError(FileOperationError):
    """The import path does not end in .csv."""


class EmptyFileError(FileOperationError):
    """The import file has zero bytes."""


class FileTooLargeError(FileOperationError):
    """The import file exceeds the maximum accepted size."""
