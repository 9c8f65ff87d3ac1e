# domain errors - both kinds degrade to a visible, non-fatal state


class AnalysisUnavailable(Exception):
    """the analysis provider call failed; the entry is saved without analysis"""


class PersistenceFailure(Exception):
    """a local storage read or write failed; in-memory state is kept"""

    def __init__(self, key: str, operation: str, cause: Exception | None = None):
        self.key = key
        self.operation = operation
        self.cause = cause
        super().__init__(f"storage {operation} failed for key '{key}': {cause}")
