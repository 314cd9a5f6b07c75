"""Custom exception hierarchy for the report engine."""


class ReportEngineError(Exception):
    """Base exception for all report engine errors."""


class ConfigurationError(ReportEngineError):
    """Error in system configuration."""


class StorageError(ReportEngineError):
    """Error reading from or writing to a store."""


class PersistenceError(StorageError):
    """A write was not confirmed by the store."""


class GenerationError(ReportEngineError):
    """Error during text generation."""


class RenderError(ReportEngineError):
    """Error producing a render artifact for a report."""
