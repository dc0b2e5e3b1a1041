"""Service-level error types."""


class DataAccessError(RuntimeError):
    """Raised when the backend rejects or fails a request."""


class NotFoundError(LookupError):
    """Raised when a record does not exist for the current owner."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class SetupIncompleteError(RuntimeError):
    """Raised when a feeding is logged before any pet or food exists."""
