"""Exception taxonomy for the analytics pipeline."""

from __future__ import annotations


class ServiceAnalyticsError(Exception):
    """Base class for pipeline errors."""


class ConfigError(ServiceAnalyticsError, ValueError):
    """An environment setting could not be interpreted."""


class MissingMandatorySourceError(ServiceAnalyticsError, FileNotFoundError):
    """A required single-file input is absent. Fatal for the run."""

    def __init__(self, path: object) -> None:
        super().__init__(f"Mandatory input file not found: {path}")
        self.path = path


class UnresolvableSourceDateError(ServiceAnalyticsError, ValueError):
    """A source name carries no recognizable YYYYMMDD date. The source is skipped."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Could not extract date from source name: {name}")
        self.name = name
