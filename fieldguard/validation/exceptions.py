class ValidatorError(Exception):
    """Base exception for fatal validator errors.

    Ordinary input failures are never raised; they are recorded in the
    validator's error map.
    """


class UnknownFieldError(ValidatorError):
    """Raised when a field name is not present in the input."""


class ConfigurationError(ValidatorError):
    """Raised when the validator is misconfigured or misused."""


class UnknownCategoryError(ConfigurationError):
    """Raised when a file category is not defined in the category table."""


class DestinationError(ConfigurationError):
    """Raised when a move destination is not an existing writable directory."""


class FileChainError(ConfigurationError):
    """Raised when a file rule runs without an active file descriptor."""


class StorageError(ValidatorError):
    """Raised when the uniqueness backend fails."""


class ImageDimensionsError(Exception):
    """Raised when image dimensions cannot be read.

    ``kind`` names the error message to record for the field.
    """

    def __init__(self, kind: str) -> None:
        super().__init__(kind)
        self.kind = kind


class FileMoveError(Exception):
    """Raised when moving the temp file to its destination fails."""
