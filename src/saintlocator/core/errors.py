class DocumentSourceError(Exception):
    """Raised when a document source cannot be read."""


class InvalidExportError(Exception):
    """Raised when an export does not follow the expected collection layout."""


class ExportError(Exception):
    """Raised for export/IO related failures."""
