"""Domain errors raised by services and translated to HTTP responses in main."""


class NuanceVaultError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PracticeValidationError(NuanceVaultError):
    """Malformed practice event; rejected before any persistence attempt."""

    status_code = 400


class ProgressStorageError(NuanceVaultError):
    """The progress record could not be read or written."""

    status_code = 500
