"""Error taxonomy for the extraction pipeline.

NetworkError and ParseError are raised inside phases and handled there;
nothing in this package lets them escape ContentPipeline.extract().
"""


class PipelineError(Exception):
    """Base class for pipeline errors."""


class NetworkError(PipelineError):
    """A page fetch failed after all retry attempts (timeout, non-2xx, transport)."""

    def __init__(
        self,
        url: str,
        message: str,
        *,
        status_code: int | None = None,
        attempts: int = 0,
    ) -> None:
        super().__init__(f"{message} ({url})")
        self.url = url
        self.status_code = status_code
        self.attempts = attempts


class ParseError(PipelineError):
    """Structured data embedded in a page could not be decoded."""
