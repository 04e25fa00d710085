"""
Error types raised by the service principal scripts
"""


class ServicePrincipalError(Exception):
    """Base class for every error raised by these scripts"""


class ConfigError(ServicePrincipalError):
    pass


class EmptyInputError(ServicePrincipalError):
    """No display names were supplied for a batch"""


class InputFileError(ServicePrincipalError):
    """The batch input file is missing or cannot be read"""


class ProviderError(ServicePrincipalError):
    """
    A call to the identity provider failed.
    Carries the provider's message and, when the provider returned one, its error code.
    """

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self):
        if self.code:
            return f"{self.code}: {self.message}"
        return self.message

    @classmethod
    def from_exception(cls, exc: Exception) -> "ProviderError":
        """
        Normalise a Graph ODataError (or anything else) into a ProviderError
        """
        if isinstance(exc, ProviderError):
            return exc

        # ODataError exposes the service payload as exc.error (MainError)
        main_error = getattr(exc, "error", None)
        code = getattr(main_error, "code", None)
        message = getattr(main_error, "message", None)
        if not message:
            message = str(exc) or type(exc).__name__
        return cls(message, code=code)


class AssignmentError(ServicePrincipalError):
    """
    Default role assignment failed for one or more principals.
    failed_names lists the display names the role could not be attached to.
    """

    def __init__(self, message: str, failed_names=None):
        super().__init__(message)
        self.failed_names = list(failed_names or [])
