"""Exceptions raised by the scheduling engine."""


class CadenceError(Exception):
    """Base class for all engine errors."""

    kind = "error"


class ValidationError(CadenceError):
    """Raised when caller input is malformed."""

    kind = "validation"


class InvalidRange(ValidationError):
    """Raised when a date range is reversed, oversized or unparseable."""

    pass


class NotFoundError(CadenceError):
    """Raised when a referenced record does not exist."""

    kind = "not_found"
    entity = "Record"

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"{self.entity} not found: {record_id}")


class TemplateNotFound(NotFoundError):
    entity = "Template"


class TaskNotFound(NotFoundError):
    entity = "Task"


class BundleNotFound(NotFoundError):
    entity = "Bundle"


class StoreError(CadenceError):
    """Raised when an underlying store read or write fails."""

    kind = "store"


class DuplicateOccurrence(StoreError):
    """Raised by a store that refuses a second record for an occurrence key."""

    def __init__(self, key: tuple[str, str]):
        self.key = key
        super().__init__(f"Occurrence already exists: {key[0]} @ {key[1]}")
