"""
Domain Errors - Exception hierarchy for the forecast accuracy engine and service.
"""


class OutlookError(Exception):
    """Base class for all domain errors."""


class InvalidHourIndex(OutlookError):
    """Hour index outside the range allowed by its declared convention."""

    def __init__(self, hour_index: object, convention: str):
        self.hour_index = hour_index
        self.convention = convention
        super().__init__(f"Hour index {hour_index!r} is not valid for convention '{convention}'")


class ConventionMismatch(OutlookError):
    """Samples meant for one series declare different hour conventions."""


class InvalidSelection(OutlookError):
    """Requested hour selection is empty or out of range."""


class ScenarioNotFound(OutlookError):
    """Requested (or derived) scenario does not exist."""


class NoScenarioData(OutlookError):
    """Scenario exists but has no rows to derive a date window from."""


class UnknownSource(OutlookError):
    """Series declares a data source that was not wired into the service."""


class ViewNotFound(OutlookError):
    """No accuracy view with the requested name."""
