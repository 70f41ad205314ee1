"""Exceptions shared by the LedgerDesk service and storage layers."""


class LedgerDeskError(Exception):
    """Base class for application errors."""


class RecordNotFoundError(LedgerDeskError):
    """Raised when a record looked up by key does not exist."""
    def __init__(self, kind: str, key: str):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} not found: {key}")


class DuplicateRecordError(LedgerDeskError):
    """Raised when attempting to create a record whose unique key is already stored."""
    def __init__(self, kind: str, key: str, message: str = "Record already exists"):
        self.kind = kind
        self.key = key
        self.message = message
        super().__init__(self.message)
