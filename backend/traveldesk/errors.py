"""Error taxonomy shared by the search and conversation services."""


class TravelDeskError(Exception):
    """Base class for all service errors."""

    status_code = 500


class ValidationError(TravelDeskError):
    """Caller sent an unusable request; fix the input, no server retry."""

    status_code = 400


class UpstreamGenerationError(TravelDeskError):
    """The generative-text service failed; the whole request fails."""

    status_code = 500


class ImageFetchError(TravelDeskError):
    """Preview metadata for one URL could not be fetched or parsed.

    Never reaches the caller: image enrichment logs it and drops the image.
    """

    def __init__(self, url: str, reason: str):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class ConfigurationError(TravelDeskError):
    """Startup configuration is incomplete; the process must not start."""
