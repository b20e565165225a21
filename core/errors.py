class VehicleQueryError(Exception):
    """Base class for vehicle query failures."""


class SourceUnavailable(VehicleQueryError):
    """A listing source could not deliver usable records."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class InvalidPagination(VehicleQueryError, ValueError):
    """Page or page size below 1. Callers must clamp before paginating."""
