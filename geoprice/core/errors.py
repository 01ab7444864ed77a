from typing import Iterable, Sequence


class GeoPriceError(Exception):
    """Base class for every error raised by the pipeline."""


class DatasetLoadError(GeoPriceError):
    """A file could not be turned into a record snapshot. The load is aborted."""


class SchemaError(DatasetLoadError):
    def __init__(self, missing: Iterable[str], required: Sequence[str]):
        self.missing = tuple(missing)
        self.required = tuple(required)
        super().__init__(
            f"Invalid CSV format. Missing required columns: {', '.join(self.missing)}. "
            f"Required columns are: {', '.join(self.required)}"
        )


class CsvParseError(DatasetLoadError):
    """The file is not readable as UTF-8 CSV (bad encoding, oversized field)."""
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Error parsing CSV: {detail}")


class EmptyDatasetError(DatasetLoadError):
    def __init__(self, message: str = "No valid properties found in the CSV file."):
        super().__init__(message)


class InsufficientDataError(GeoPriceError):
    """Statistics or insights were requested over an empty or absent record set."""


class InsightGenerationError(GeoPriceError):
    """
    The text-generation backend failed. The message never carries provider
    detail; the underlying exception (if any) is chained as __cause__.
    """
    def __init__(self, message: str = "Error generating insights"):
        super().__init__(message)


class InsightsPendingError(GeoPriceError):
    """An insight request is already in flight for this session."""
