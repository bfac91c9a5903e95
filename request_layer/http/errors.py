"""Exception types for the request layer."""

from request_layer.http.models import ApiError


class RequestLayerError(Exception):
    """Base class for request layer exceptions."""


class EnvelopeError(RequestLayerError):
    """Raised when a response body does not have the expected envelope.

    The pipeline catches it and routes the carried error through the
    error interceptors, like any transport failure.

    Attributes:
        error: Normalized error describing the malformed payload.
    """

    def __init__(self, error: ApiError) -> None:
        super().__init__(error.message)
        self.error = error
