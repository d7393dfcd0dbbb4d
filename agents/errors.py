"""Named failures of the generation pipeline.

Every stage raises one of these; the orchestrator turns each into a fallback
transition and none of them ever reaches the caller.
"""
from typing import Optional


class GenerationError(Exception):
    kind = "GenerationError"


class ProviderUnavailable(GenerationError):
    """No credential is configured for the provider."""
    kind = "ProviderUnavailable"


class ProviderHTTPError(GenerationError):
    """Provider answered with a non-2xx status or could not be reached."""
    kind = "ProviderHTTPError"

    def __init__(self, message: str, status_code: Optional[int] = None,
                 rate_limited: bool = False):
        super().__init__(message)
        self.status_code = status_code
        self.rate_limited = rate_limited


class ProviderTimeout(ProviderHTTPError):
    kind = "ProviderTimeout"

    def __init__(self, message: str):
        super().__init__(message, status_code=None, rate_limited=False)


class ProviderEmptyResponse(GenerationError):
    """2xx response without any usable text."""
    kind = "ProviderEmptyResponse"


class NoJsonObjectFound(GenerationError):
    kind = "NoJsonObjectFound"


class UnparsableJson(GenerationError):
    kind = "UnparsableJson"


class InvalidSchema(GenerationError):
    """Parsed object cannot be reconciled into a well-formed itinerary."""
    kind = "InvalidSchema"
