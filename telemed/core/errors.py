"""Infrastructure and service-level exceptions.

Validation problems are never raised: they are reported through
``ValidationResult``.  Everything here aborts the current operation.
"""


class StoreError(Exception):
    """The record store could not be reached or rejected the query."""


class InvalidRecordId(StoreError):
    """A record id is not a well-formed UUID."""

    def __init__(self, record_id: object) -> None:
        super().__init__(f"Invalid record id: {record_id!r}")
        self.record_id = record_id


class RecordNotFound(Exception):
    """No record exists for the given id."""

    def __init__(self, table: str, record_id: object) -> None:
        super().__init__(f"No record in {table} with id={record_id}")
        self.table = table
        self.record_id = record_id


class RequestLimitError(Exception):
    """Too many become-doctor applications were submitted for one email."""

    def __init__(self, email: str, limit: int) -> None:
        super().__init__(
            f"Exceeded the limit of requests per one email ({limit})"
        )
        self.email = email
        self.limit = limit
