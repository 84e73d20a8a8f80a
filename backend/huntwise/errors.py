"""
Error taxonomy for the prediction service.

Only InputValidationError ever reaches a client (as HTTP 400). Provider
failures are absorbed at the adapter boundary and replaced by defaults.
"""


class InputValidationError(ValueError):
    """Malformed ZIP code or date."""


class ProviderUnavailable(RuntimeError):
    """An upstream signal source failed, timed out, or returned junk."""

    def __init__(self, provider: str, detail: str):
        super().__init__(f"{provider}: {detail}")
        self.provider = provider
        self.detail = detail


class LocationUnavailable(ProviderUnavailable):
    """ZIP code could not be resolved to a place."""

    def __init__(self, postal_code: str, detail: str):
        super().__init__("geocode", f"{postal_code}: {detail}")
        self.postal_code = postal_code
