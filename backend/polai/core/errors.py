"""Policy analysis exceptions."""


class PolicyAnalysisError(Exception):
    """Base exception for policy analysis related errors."""

    pass


class InvalidInputError(PolicyAnalysisError):
    """Exception raised for a missing or malformed URL, text or batch request."""

    pass


class FetchError(PolicyAnalysisError):
    """Exception raised when a policy document could not be fetched."""

    pass


class ProviderError(PolicyAnalysisError):
    """Exception raised when an external analysis provider fails."""

    pass


class ProviderNotConfiguredError(ProviderError):
    """Exception raised when a provider is selected but has no API key."""

    pass


class ResponseParseError(ProviderError):
    """Exception raised when a provider response contains no usable JSON object."""

    pass


class AllChunksFailedError(ProviderError):
    """Exception raised when every chunk of a chunked analysis failed."""

    def __init__(self, message: str = "All chunk analyses failed") -> None:
        super().__init__(message)
