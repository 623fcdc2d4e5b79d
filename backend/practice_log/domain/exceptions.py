"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class StoreConnectionError(Exception):
    """Raised when the record store is unreachable or rejects the connection.

    Covers refused connections, bad credentials and connect/ping timeouts.
    The connector resets itself so a later call can retry.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotConnectedError(Exception):
    """Raised when a repository is requested before the store is connected."""

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"Record store is not connected; call connect() before using {resource}")


class InvalidIdentifierError(Exception):
    """Raised when a caller-supplied record id cannot be parsed."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid record id: {value!r}")


class RecordValidationError(Exception):
    """Raised when a query or mutation names something the store cannot serve."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")
