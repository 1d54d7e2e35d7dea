"""In-process project and template store."""

from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..core import (
    SaveRequest,
    Settings,
    TemplateRequest,
    ValidationError,
    dumps,
    get_logger,
    get_settings,
    parse_forest_json,
)
from ..core.id import new_project_id, new_template_id
from .errors import RecordNotFound
from .records import ProjectRecord, TemplateRecord
from .templates import BUILTIN_TEMPLATES

logger = get_logger(__name__)


class MemoryAdapter:
    """
    Projects and templates held in dictionaries.

    Behaves like the REST backend: projects list most recently updated
    first, templates in creation order, and a fresh store is seeded with the
    built-in templates.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        templates: Iterable[dict[str, Any]] | None = BUILTIN_TEMPLATES,
        project_id_factory: Callable[[], str] = new_project_id,
        template_id_factory: Callable[[], str] = new_template_id,
    ) -> None:
        self.settings = settings or get_settings()
        self._new_project_id = project_id_factory
        self._new_template_id = template_id_factory

        # Insertion order doubles as recency order for projects
        self._projects: dict[str, ProjectRecord] = {}
        self._templates: dict[str, TemplateRecord] = {}

        for template in templates or ():
            self.create_template(
                dumps(template["components"]),
                name=template["name"],
                description=template.get("description"),
                thumbnail=template.get("thumbnail"),
            )

    # ========================================================================
    # Adapter protocol
    # ========================================================================

    def save(self, serialized: str, *, name: str = "Untitled", description: str | None = None) -> str:
        """
        Store a forest as a new project.

        Raises:
            ValidationError: If the name is blank or the forest is not a JSON array
        """
        request = _validated(SaveRequest, name=name, description=description)
        self._check_forest(serialized)

        record = ProjectRecord(
            id=self._new_project_id(),
            name=request.name,
            description=request.description,
            components=serialized,
        )
        self._projects[record.id] = record
        logger.info("project_saved", record_id=record.id, size=len(serialized))
        return record.id

    def load(self, record_id: str) -> str:
        return self.get_project(record_id).components

    # ========================================================================
    # Projects
    # ========================================================================

    def list_projects(self) -> list[ProjectRecord]:
        """Most recently updated first."""
        return list(reversed(self._projects.values()))

    def get_project(self, record_id: str) -> ProjectRecord:
        record = self._projects.get(record_id)
        if record is None:
            raise RecordNotFound(record_id)
        return record

    def update(
        self,
        record_id: str,
        *,
        serialized: str | None = None,
        name: str | None = None,
        description: str | None = None,
    ) -> ProjectRecord:
        """Replace the given fields of a project; omitted fields keep their value."""
        existing = self.get_project(record_id)

        changes: dict[str, Any] = {"updated_at": datetime.now(timezone.utc)}
        if name is not None or description is not None:
            request = _validated(
                SaveRequest,
                name=existing.name if name is None else name,
                description=existing.description if description is None else description,
            )
            changes["name"] = request.name
            changes["description"] = request.description
        if serialized is not None:
            self._check_forest(serialized)
            changes["components"] = serialized

        updated = existing.model_copy(update=changes)
        del self._projects[record_id]
        self._projects[record_id] = updated
        logger.info("project_updated", record_id=record_id, fields=sorted(changes))
        return updated

    def delete(self, record_id: str) -> None:
        if self._projects.pop(record_id, None) is None:
            raise RecordNotFound(record_id)
        logger.info("project_deleted", record_id=record_id)

    # ========================================================================
    # Templates
    # ========================================================================

    def list_templates(self) -> list[TemplateRecord]:
        return list(self._templates.values())

    def get_template(self, template_id: str) -> TemplateRecord:
        template = self._templates.get(template_id)
        if template is None:
            raise RecordNotFound(template_id, "Template")
        return template

    def create_template(
        self,
        serialized: str,
        *,
        name: str,
        description: str | None = None,
        thumbnail: str | None = None,
    ) -> TemplateRecord:
        request = _validated(TemplateRequest, name=name, description=description, thumbnail=thumbnail)
        self._check_forest(serialized)

        template = TemplateRecord(
            id=self._new_template_id(),
            name=request.name,
            description=request.description,
            components=serialized,
            thumbnail=request.thumbnail,
        )
        self._templates[template.id] = template
        logger.debug("template_created", template_id=template.id, name=template.name)
        return template

    def _check_forest(self, serialized: str) -> None:
        parse_forest_json(
            serialized, self.settings.max_forest_size, self.settings.max_tree_depth, self.settings.max_prop_depth
        )


def _validated(model, **fields):
    try:
        return model(**fields)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid request: {e}") from e
