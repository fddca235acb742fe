"""Domain errors raised by PackTrack."""


class PackTrackError(Exception):
    """Base class for all PackTrack errors."""


class CatalogError(PackTrackError):
    """Raised when a package catalog definition is invalid."""


class CsvImportError(PackTrackError):
    """Raised when an uploaded CSV file cannot be imported."""


class RecordSubmissionError(PackTrackError):
    """Raised when the remote store rejects a new record."""


class NothingToExportError(PackTrackError):
    """Raised when an export is requested for an empty record set."""
