"""Machine-readable failure codes carried by report outcomes."""


class ErrorCode:
    NO_SOURCES_FOUND = "NO_SOURCES_FOUND"
    SELECTION_FAILED = "SELECTION_FAILED"
    GENERATION_FAILED = "GENERATION_FAILED"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"
