"""
Persistence Adapter Protocols

The editor only needs two calls from a store: put a serialized forest
somewhere and get it back by id. Template access is a separate capability
that not every adapter has.
"""

from typing import Protocol, runtime_checkable

from .records import TemplateRecord


@runtime_checkable
class PersistenceAdapter(Protocol):
    """Stores serialized forests under opaque record ids."""

    def save(self, serialized: str, *, name: str = "Untitled", description: str | None = None) -> str:
        """
        Store a serialized forest.

        Returns:
            Record id to pass to :meth:`load`
        """
        ...

    def load(self, record_id: str) -> str:
        """
        Fetch a serialized forest.

        Raises:
            RecordNotFound: If no record has this id
        """
        ...


@runtime_checkable
class TemplateProvider(Protocol):
    """Serves reusable starting forests."""

    def list_templates(self) -> list[TemplateRecord]:
        ...

    def get_template(self, template_id: str) -> TemplateRecord:
        ...
