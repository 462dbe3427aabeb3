class PollutantSourceError(Exception):
    """Base class for failures of an upstream pollutant data source."""


class UpstreamError(PollutantSourceError):
    """The provider could not be reached or answered with a non-success status.

    ``status_code`` is ``None`` when no HTTP response was received at all
    (connection failure, timeout).
    """

    def __init__(self, status_code: int | None, body: str, source: str | None = None):
        self.status_code = status_code
        self.body = body
        self.source = source
        label = source or "upstream"
        if status_code is None:
            super().__init__(f"{label} request failed: {body}")
        else:
            super().__init__(f"{label} error {status_code}: {body}")


class MalformedProviderResponse(PollutantSourceError):
    """The provider answered successfully but the payload has an unexpected shape."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        super().__init__(f"{source or 'upstream'} returned a malformed response: {message}")
