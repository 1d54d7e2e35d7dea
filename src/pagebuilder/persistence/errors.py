"""Persistence errors."""


class PersistenceError(Exception):
    """A save or load could not be completed."""

    pass


class RecordNotFound(PersistenceError):
    """No stored record has the requested id."""

    def __init__(self, record_id: str, kind: str = "Project") -> None:
        super().__init__(f"{kind} '{record_id}' not found")
        self.record_id = record_id
        self.kind = kind
