class TrackerError(Exception):
    """Base class for errors raised below the issues route."""

    pass


class StoreError(TrackerError):
    """Raised when the issue store cannot complete an operation."""

    pass


class InvalidFilterError(TrackerError):
    """Raised when a query filter value cannot be converted to its field type."""

    def __init__(self, field: str, value: str):
        super().__init__(f"invalid value {value!r} for filter {field!r}")
        self.field = field
        self.value = value
